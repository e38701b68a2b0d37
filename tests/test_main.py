import json

from pytest import fixture

import google_sheet
import main as app
import mock_sheet

SPREADSHEET_ID = 'apple-3fd'


@fixture
def client(monkeypatch):
    client = mock_sheet.GSheetClient({'Master': [['Name', '', 'Age'], ['Alice', '', '30']]})
    monkeypatch.setattr(google_sheet, 'build', lambda *args, **kwargs: client)
    monkeypatch.setattr(app, 'load_credentials', lambda config: 'creds')
    monkeypatch.setenv('SHEETCRUD_SPREADSHEET_ID', SPREADSHEET_ID)
    monkeypatch.delenv('SHEETCRUD_MAX_RETRIES', raising=False)
    return client


def _output(capsys):
    return json.loads(capsys.readouterr().out)


def test_read(client, capsys):
    assert 0 == app.main(['read', 'Master!A1:C2'])
    assert [['Name', '', 'Age'], ['Alice', '', '30']] == _output(capsys)


def test_columns(client, capsys):
    assert 0 == app.main(['columns', 'Master!1:1'])
    assert {'Name': 'A', 'Age': 'C'} == _output(capsys)


def test_insert_columns(client, capsys):
    values = json.dumps([['Age', 'Name'], ['25', 'Carol']])
    assert 0 == app.main(['insert-columns', 'Master!A:C', values])
    assert 1 == _output(capsys)
    assert ['Carol', '', '25'] == client.store.grid('Master')[2]


def test_append_and_update(client, capsys):
    assert 0 == app.main(['append', 'Master!A:C', '[["Bob", "", "41"]]', '--input-option', 'USER_ENTERED'])
    assert 1 == _output(capsys)
    assert 0 == app.main(['update', 'Master!B1:B1', '[["Email"]]'])
    assert 1 == _output(capsys)
    assert ['Name', 'Email', 'Age'] == client.store.grid('Master')[0]


def test_sheet_commands(client, capsys):
    assert 0 == app.main(['create-sheet', 'Scratch'])
    sheet_id = _output(capsys)
    assert 0 == app.main(['rename-sheet', 'Scratch', 'Renamed'])
    assert _output(capsys) is True
    assert sheet_id == client.store.sheet('Renamed')['sheetId']
    assert 0 == app.main(['delete-sheet', 'Renamed'])
    assert ['Master'] == [s['title'] for s in client.store.sheets]


def test_spreadsheet_id_flag_wins(client, capsys):
    assert 0 == app.main(['--spreadsheet-id', 'other-id', 'clear', 'Master!A2:C2'])
    assert _output(capsys) is True
    assert 'other-id' == client.store.calls[-1][1]['spreadsheetId']


def test_invalid_range_exits_nonzero(client, capsys):
    assert 1 == app.main(['read', 'Master'])
    assert '' == capsys.readouterr().out


def test_missing_sheet_exits_nonzero(client):
    assert 1 == app.main(['delete-sheet', 'Nope'])


def test_missing_spreadsheet_id(client, monkeypatch):
    monkeypatch.delenv('SHEETCRUD_SPREADSHEET_ID')
    assert 1 == app.main(['read', 'Master!A1:A1'])
