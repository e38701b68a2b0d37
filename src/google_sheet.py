import json
from googleapiclient.discovery import build
from google.oauth2.service_account import Credentials
import boto3
from a1_range import validate_range
from column_remap import validate_values
from errors import ConfigurationError
from utils import logger


SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
    'https://www.googleapis.com/auth/drive',
]


def credentials_from_file(path):
    return Credentials.from_service_account_file(path, scopes=SCOPES)


def credentials_from_ssm(parameter_name, ssm_client=None):
    if ssm_client is None:
        ssm_client = boto3.client('ssm')
    parameter = ssm_client.get_parameter(Name=parameter_name, WithDecryption=True)
    info = json.loads(parameter['Parameter']['Value'])
    return Credentials.from_service_account_info(info, scopes=SCOPES)


def load_credentials(config):
    if config.credentials_file:
        logger.debug(f'Loading service account from {config.credentials_file}')
        return credentials_from_file(config.credentials_file)
    if config.ssm_parameter:
        logger.debug(f'Loading service account from SSM parameter {config.ssm_parameter}')
        return credentials_from_ssm(config.ssm_parameter)
    raise ConfigurationError('Set SHEETCRUD_CREDENTIALS_FILE or SHEETCRUD_SSM_PARAMETER to authenticate.')


def build_sheets_client(credentials):
    return build('sheets', 'v4', credentials=credentials, cache_discovery=False)


class SheetRequestBatch:
    """Structural requests sent together in one spreadsheets.batchUpdate call."""

    def __init__(self, service, spreadsheet_id):
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.requests = []

    def add(self, request):
        self.requests.append(request)

    def new_update_request(self, sheet_id, fields=None, **new_properties):
        if fields is None:
            fields = ','.join(new_properties.keys())
        self.add({
            'updateSheetProperties': {
                'properties': {
                    'sheetId': sheet_id,
                    **new_properties
                },
                'fields': fields
            }
        })

    def new_delete_request(self, sheet_id):
        self.add({
            'deleteSheet': {
                'sheetId': sheet_id,
            }
        })

    def execute(self):
        if not self.requests:
            return []
        logger.debug(self.requests)
        response = self.service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={'requests': self.requests},
        ).execute()
        return response.get('replies', [])


class ValueUpdateBatch:
    """Cell values for several ranges written in one values.batchUpdate call."""

    def __init__(self, service, spreadsheet_id, value_input_option='RAW'):
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.value_input_option = value_input_option
        self.data = []

    def set_range(self, range_name, values, major_dimension='ROWS'):
        validate_range(range_name)
        validate_values(values)
        self.data.append({
            'majorDimension': major_dimension,
            'range': range_name,
            'values': values,
        })

    def execute(self):
        if not self.data:
            return {}
        logger.debug(self.data)
        return self.service.spreadsheets().values().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={
                'valueInputOption': self.value_input_option,
                'data': self.data
            }
        ).execute()
