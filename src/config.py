"""Settings read from the environment."""

import os
from collections import namedtuple

from errors import ConfigurationError

Config = namedtuple('Config', 'spreadsheet_id credentials_file ssm_parameter max_retries log_level')

DEFAULT_MAX_RETRIES = 3
DEFAULT_LOG_LEVEL = 'INFO'


def load_config(environ=None):
    if environ is None:
        environ = os.environ

    raw_retries = environ.get('SHEETCRUD_MAX_RETRIES', str(DEFAULT_MAX_RETRIES))
    try:
        max_retries = int(raw_retries)
    except ValueError:
        raise ConfigurationError(f'SHEETCRUD_MAX_RETRIES must be an integer, got {raw_retries!r}') from None
    if max_retries < 1:
        raise ConfigurationError(f'SHEETCRUD_MAX_RETRIES must be at least 1, got {max_retries}')

    return Config(
        spreadsheet_id=environ.get('SHEETCRUD_SPREADSHEET_ID') or None,
        credentials_file=environ.get('SHEETCRUD_CREDENTIALS_FILE') or None,
        ssm_parameter=environ.get('SHEETCRUD_SSM_PARAMETER') or None,
        max_retries=max_retries,
        log_level=environ.get('LOG_LEVEL', DEFAULT_LOG_LEVEL).upper(),
    )
