from time import sleep
from functools import wraps
import logging
import os

from googleapiclient.errors import HttpError


# setup logger
def resolve_level(name):
    return getattr(logging, str(name).upper(), logging.INFO)


logger = logging.getLogger('sheetcrud')
logger.setLevel(resolve_level(os.environ.get('LOG_LEVEL', 'INFO')))
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s [%(name)s] %(message)s'))
logger.addHandler(handler)


# Sheets API responses worth retrying with exponential backoff
RETRYABLE_STATUSES = (429, 500, 502, 503)
DEFAULT_ATTEMPTS = 3
INITIAL_BACKOFF = 1


def with_backoff(attempts=DEFAULT_ATTEMPTS):
    attempts = max(attempts, 1)

    def backoff(func):
        @wraps(func)
        def try_request(*args, **kwargs):
            delay = INITIAL_BACKOFF
            for attempt in range(1, attempts + 1):
                try:
                    return func(*args, **kwargs)
                except HttpError as e:
                    if e.resp.status not in RETRYABLE_STATUSES or attempt >= attempts:
                        raise
                    logger.info(f'Got HTTP {e.resp.status}, retrying request in {delay} seconds.')
                sleep(delay)
                delay *= 2
        return try_request
    return backoff


def execute_with_backoff(request, attempts=DEFAULT_ATTEMPTS):
    return with_backoff(attempts)(request.execute)()
