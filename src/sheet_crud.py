"""CRUD-style helpers on top of the Google Sheets v4 client.

Every method validates its range text before talking to the API, so
malformed input fails without a network round trip. API failures surface as
SheetOperationError carrying the HttpError as its cause.
"""

from googleapiclient.errors import HttpError

from a1_range import parse, validate_range
from column_remap import build_column_index_map, remap_rows, split_table, validate_values
from errors import RangeNotRectangular, SheetNotFound, SheetOperationError
from google_sheet import SheetRequestBatch, ValueUpdateBatch
from utils import DEFAULT_ATTEMPTS, execute_with_backoff, logger


def grid_range(sheet_id, range_text):
    """Translate a bounded A1 range into the API's 0-based, end-exclusive GridRange."""
    address = parse(range_text)
    if not address.is_fully_bounded:
        raise RangeNotRectangular(range_text)
    return {
        'sheetId': sheet_id,
        'startRowIndex': address.start_row - 1,
        'endRowIndex': address.end_row,
        'startColumnIndex': address.start_column - 1,
        'endColumnIndex': address.end_column,
    }


class SheetOperations:

    def __init__(self, service, spreadsheet_id, max_retries=DEFAULT_ATTEMPTS):
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.max_retries = max_retries

    def _values(self):
        return self.service.spreadsheets().values()

    def _batch(self):
        return SheetRequestBatch(self.service, self.spreadsheet_id)

    def _execute(self, request, action):
        try:
            return execute_with_backoff(request, self.max_retries)
        except HttpError as e:
            logger.error(f'Failed to {action}: {e}')
            raise SheetOperationError(f'Failed to {action}: {e}', status=e.resp.status) from e

    # values

    def append_to(self, range_name, values, value_input_option='RAW'):
        validate_range(range_name)
        validate_values(values)
        logger.debug(f'Appending {len(values)} rows to {range_name}')
        request = self._values().append(
            spreadsheetId=self.spreadsheet_id,
            range=range_name,
            valueInputOption=value_input_option,
            insertDataOption='INSERT_ROWS',
            body={'values': values},
        )
        result = self._execute(request, 'append data')
        return result.get('updates', {}).get('updatedRows', 0)

    def insert_into(self, range_name, values, insert_as='RAW'):
        return self.append_to(range_name, values, insert_as)

    def read_from(self, range_name):
        validate_range(range_name)
        request = self._values().get(spreadsheetId=self.spreadsheet_id, range=range_name)
        response = self._execute(request, 'read data')
        return response.get('values', [])

    def update_range(self, range_name, values, value_input_option='RAW'):
        validate_range(range_name)
        validate_values(values)
        request = self._values().update(
            spreadsheetId=self.spreadsheet_id,
            range=range_name,
            valueInputOption=value_input_option,
            body={'values': values},
        )
        result = self._execute(request, 'update range')
        return result.get('updatedCells', 0)

    def clear_range(self, range_name):
        validate_range(range_name)
        request = self._values().clear(spreadsheetId=self.spreadsheet_id, range=range_name, body={})
        response = self._execute(request, 'clear range')
        return response.get('clearedRange') is not None

    def batch_update_values(self, data, value_input_option='RAW'):
        """Write ``{range: values}`` in a single request; returns the updated cell count."""
        batch = ValueUpdateBatch(self.service, self.spreadsheet_id, value_input_option)
        for range_name, values in data.items():
            batch.set_range(range_name, values)
        result = self._execute(batch, 'batch update values')
        return result.get('totalUpdatedCells', 0)

    def get_columns(self, range_name):
        """Map the header labels in the first row of ``range_name`` to column letters."""
        validate_range(range_name)
        request = self._values().get(spreadsheetId=self.spreadsheet_id, range=range_name)
        rows = self._execute(request, 'get columns').get('values', [])
        return build_column_index_map(rows[0] if rows else [])

    def insert_into_columns(self, range_name, values, insert_as='RAW'):
        """Append ``values[1:]`` under the destination headers named by ``values[0]``.

        The destination header row is read from ``range_name``; input columns
        whose label is not found there are dropped.
        """
        validate_range(range_name)
        header_row, data_rows = split_table(values)
        all_columns = self.get_columns(range_name)
        restructured = remap_rows(header_row, data_rows, all_columns)
        if not restructured:
            logger.debug(f'No data rows to insert into {range_name}')
            return 0
        return self.insert_into(range_name, restructured, insert_as)

    def get_last_row_index(self, range_name):
        validate_range(range_name)
        request = self._values().get(spreadsheetId=self.spreadsheet_id, range=range_name)
        return len(self._execute(request, 'get last row index').get('values', []))

    # sheets

    def _sheet_properties(self):
        request = self.service.spreadsheets().get(spreadsheetId=self.spreadsheet_id, fields='sheets.properties')
        response = self._execute(request, 'get sheet ID')
        return [sheet['properties'] for sheet in response.get('sheets', [])]

    def get_sheet_id(self, sheet_name):
        for properties in self._sheet_properties():
            if properties.get('title') == sheet_name:
                return properties['sheetId']
        raise SheetNotFound(sheet_name)

    def _sheet_id_for(self, address):
        if address.sheet_name is not None:
            return self.get_sheet_id(address.sheet_name)
        # unqualified ranges refer to the first sheet
        sheets = self._sheet_properties()
        if not sheets:
            raise SheetNotFound(None)
        return sheets[0]['sheetId']

    def _grid_range(self, range_name):
        address = parse(range_name)
        if not address.is_fully_bounded:
            raise RangeNotRectangular(range_name)
        return grid_range(self._sheet_id_for(address), range_name)

    def batch_update(self, operations):
        batch = self._batch()
        for operation in operations:
            batch.add(operation)
        return self._execute(batch, 'perform batch update')

    def create_new_sheet(self, sheet_name):
        batch = self._batch()
        batch.add({'addSheet': {'properties': {'title': sheet_name}}})
        replies = self._execute(batch, 'create new sheet')
        return replies[0]['addSheet']['properties']['sheetId']

    def rename_sheet(self, old_sheet_name, new_sheet_name):
        batch = self._batch()
        batch.new_update_request(self.get_sheet_id(old_sheet_name), title=new_sheet_name)
        self._execute(batch, 'rename sheet')
        return True

    def delete_sheet(self, sheet_name):
        batch = self._batch()
        batch.new_delete_request(self.get_sheet_id(sheet_name))
        self._execute(batch, 'delete sheet')
        return True

    def duplicate_sheet(self, source_sheet_name, new_sheet_name):
        batch = self._batch()
        batch.add({
            'duplicateSheet': {
                'sourceSheetId': self.get_sheet_id(source_sheet_name),
                'newSheetName': new_sheet_name,
            }
        })
        replies = self._execute(batch, 'duplicate sheet')
        return replies[0]['duplicateSheet']['properties']['sheetId']

    def copy_sheet_to_another_spreadsheet(self, sheet_name, destination_spreadsheet_id):
        request = self.service.spreadsheets().sheets().copyTo(
            spreadsheetId=self.spreadsheet_id,
            sheetId=self.get_sheet_id(sheet_name),
            body={'destinationSpreadsheetId': destination_spreadsheet_id},
        )
        return self._execute(request, 'copy sheet')['sheetId']

    def _set_dimension_size(self, sheet_name, dimension, index, pixel_size, action):
        batch = self._batch()
        batch.add({
            'updateDimensionProperties': {
                'range': {
                    'sheetId': self.get_sheet_id(sheet_name),
                    'dimension': dimension,
                    'startIndex': index,
                    'endIndex': index + 1,
                },
                'properties': {'pixelSize': pixel_size},
                'fields': 'pixelSize',
            }
        })
        self._execute(batch, action)
        return True

    def set_column_width(self, sheet_name, column_index, width):
        return self._set_dimension_size(sheet_name, 'COLUMNS', column_index, width, 'set column width')

    def set_row_height(self, sheet_name, row_index, height):
        return self._set_dimension_size(sheet_name, 'ROWS', row_index, height, 'set row height')

    def set_frozen_rows(self, sheet_name, count):
        batch = self._batch()
        batch.new_update_request(
            self.get_sheet_id(sheet_name),
            fields='gridProperties.frozenRowCount',
            gridProperties={'frozenRowCount': count},
        )
        self._execute(batch, 'set frozen rows')
        return True

    def set_frozen_columns(self, sheet_name, count):
        batch = self._batch()
        batch.new_update_request(
            self.get_sheet_id(sheet_name),
            fields='gridProperties.frozenColumnCount',
            gridProperties={'frozenColumnCount': count},
        )
        self._execute(batch, 'set frozen columns')
        return True

    # ranges

    def _range_request(self, range_name, action, build_request):
        batch = self._batch()
        batch.add(build_request(self._grid_range(range_name)))
        return self._execute(batch, action)

    def format_range(self, range_name, cell_format):
        fields = 'userEnteredFormat(' + ','.join(cell_format.keys()) + ')'
        self._range_request(range_name, 'format range', lambda grid: {
            'repeatCell': {
                'range': grid,
                'cell': {'userEnteredFormat': cell_format},
                'fields': fields,
            }
        })

    def sort_range(self, range_name, sort_specs):
        self._range_request(range_name, 'sort range', lambda grid: {
            'sortRange': {'range': grid, 'sortSpecs': sort_specs}
        })
        return True

    def add_filter(self, range_name):
        self._range_request(range_name, 'add filter', lambda grid: {
            'setBasicFilter': {'filter': {'range': grid}}
        })
        return True

    def merge_cells(self, range_name, merge_type='MERGE_ALL'):
        self._range_request(range_name, 'merge cells', lambda grid: {
            'mergeCells': {'range': grid, 'mergeType': merge_type}
        })
        return True

    def unmerge_cells(self, range_name):
        self._range_request(range_name, 'unmerge cells', lambda grid: {
            'unmergeCells': {'range': grid}
        })
        return True

    def set_data_validation(self, range_name, rule):
        self._range_request(range_name, 'set data validation', lambda grid: {
            'setDataValidation': {'range': grid, 'rule': rule}
        })
        return True

    def add_named_range(self, name, range_name):
        replies = self._range_request(range_name, 'add named range', lambda grid: {
            'addNamedRange': {'namedRange': {'name': name, 'range': grid}}
        })
        return replies[0]['addNamedRange']['namedRange']['namedRangeId']

    def delete_named_range(self, named_range_id):
        batch = self._batch()
        batch.add({'deleteNamedRange': {'namedRangeId': named_range_id}})
        self._execute(batch, 'delete named range')
        return True
