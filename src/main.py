import argparse
import json
import sys
from config import load_config
from errors import ConfigurationError, SheetCrudError
from google_sheet import build_sheets_client, load_credentials
from sheet_crud import SheetOperations
from utils import logger, resolve_level


def main(argv=None):
    args = parse_args(argv)
    try:
        config = load_config()
        logger.setLevel(resolve_level(config.log_level))
        spreadsheet_id = args.spreadsheet_id or config.spreadsheet_id
        if not spreadsheet_id:
            raise ConfigurationError('No spreadsheet id given; pass --spreadsheet-id or set SHEETCRUD_SPREADSHEET_ID.')
        service = build_sheets_client(load_credentials(config))
        operations = SheetOperations(service, spreadsheet_id, max_retries=config.max_retries)
        result = args.handler(operations, args)
    except SheetCrudError as e:
        logger.error(str(e))
        return 1

    print(json.dumps(result))
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='sheetcrud', description='Read and write Google Sheets ranges.')
    parser.add_argument('--spreadsheet-id', help='defaults to $SHEETCRUD_SPREADSHEET_ID')
    commands = parser.add_subparsers(dest='command', required=True)

    read = commands.add_parser('read', help='print the values in a range')
    read.add_argument('range')
    read.set_defaults(handler=lambda ops, args: ops.read_from(args.range))

    append = commands.add_parser('append', help='append rows after the table in a range')
    append.add_argument('range')
    append.add_argument('values', type=json.loads, help='JSON list of rows')
    append.add_argument('--input-option', default='RAW', choices=('RAW', 'USER_ENTERED'))
    append.set_defaults(handler=lambda ops, args: ops.append_to(args.range, args.values, args.input_option))

    update = commands.add_parser('update', help='overwrite the cells of a range')
    update.add_argument('range')
    update.add_argument('values', type=json.loads, help='JSON list of rows')
    update.add_argument('--input-option', default='RAW', choices=('RAW', 'USER_ENTERED'))
    update.set_defaults(handler=lambda ops, args: ops.update_range(args.range, args.values, args.input_option))

    clear = commands.add_parser('clear', help='clear the values in a range')
    clear.add_argument('range')
    clear.set_defaults(handler=lambda ops, args: ops.clear_range(args.range))

    columns = commands.add_parser('columns', help='map header labels to column letters')
    columns.add_argument('range')
    columns.set_defaults(handler=lambda ops, args: ops.get_columns(args.range))

    insert_columns = commands.add_parser('insert-columns', help='append rows matched to headers by label')
    insert_columns.add_argument('range')
    insert_columns.add_argument('values', type=json.loads, help='JSON list of rows, headers first')
    insert_columns.set_defaults(handler=lambda ops, args: ops.insert_into_columns(args.range, args.values))

    create_sheet = commands.add_parser('create-sheet', help='add a sheet and print its id')
    create_sheet.add_argument('name')
    create_sheet.set_defaults(handler=lambda ops, args: ops.create_new_sheet(args.name))

    rename_sheet = commands.add_parser('rename-sheet')
    rename_sheet.add_argument('old_name')
    rename_sheet.add_argument('new_name')
    rename_sheet.set_defaults(handler=lambda ops, args: ops.rename_sheet(args.old_name, args.new_name))

    delete_sheet = commands.add_parser('delete-sheet')
    delete_sheet.add_argument('name')
    delete_sheet.set_defaults(handler=lambda ops, args: ops.delete_sheet(args.name))

    return parser.parse_args(argv)


if __name__ == '__main__':
    sys.exit(main())
