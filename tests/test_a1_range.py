from pytest import mark, param, raises

from a1_range import (
    RangeAddress,
    column_index_to_letter,
    column_letter_to_index,
    extract_fully_bounded_rect,
    parse,
    validate_range,
)
from errors import InvalidColumnLetters, InvalidRangeFormat, RangeNotRectangular


@mark.parametrize('letters,expected', (
    ('A', 1),
    ('Z', 26),
    ('AA', 27),
    ('AZ', 52),
    ('BA', 53),
    ('ZZ', 702),
    ('AAA', 703),
    ('ab', 28),
))
def test_column_letter_to_index(letters, expected):
    assert expected == column_letter_to_index(letters)


@mark.parametrize('letters', ('', 'A1', '1', 'A-B', ' A', 'A\n', None))
def test_column_letter_to_index_rejects_non_letters(letters):
    with raises(InvalidColumnLetters):
        column_letter_to_index(letters)


def test_column_letters_round_trip():
    for index in range(1, 1001):
        assert index == column_letter_to_index(column_index_to_letter(index))


def test_column_index_to_letter():
    assert 'A' == column_index_to_letter(1)
    assert 'Z' == column_index_to_letter(26)
    assert 'AA' == column_index_to_letter(27)
    assert 'ALL' == column_index_to_letter(1000)


def test_column_index_to_letter_rejects_zero():
    with raises(ValueError):
        column_index_to_letter(0)


def test_parse_fully_bounded_range():
    address = parse('Sheet1!A1:D5')
    assert RangeAddress('Sheet1', 1, 4, 1, 5) == address
    assert address.is_fully_bounded


def test_parse_open_column_range():
    address = parse('Sheet1!A:C')
    assert RangeAddress('Sheet1', start_column=1, end_column=3) == address
    assert address.start_row is None and address.end_row is None
    assert not address.is_fully_bounded


def test_parse_open_row_range():
    address = parse('Sheet1!1:1')
    assert RangeAddress('Sheet1', start_row=1, end_row=1) == address
    assert not address.has_columns


@mark.parametrize('text,expected', (
    ('B2:AA10', RangeAddress(None, 2, 27, 2, 10)),
    ('A:C', RangeAddress(None, start_column=1, end_column=3)),
    ('3:7', RangeAddress(None, start_row=3, end_row=7)),
    ('My Data!A1:B2', RangeAddress('My Data', 1, 2, 1, 2)),
    ("'Bob''s Sheet'!C:D", RangeAddress("Bob's Sheet", start_column=3, end_column=4)),
    ("'Q1!Data'!A1:B2", RangeAddress('Q1!Data', 1, 2, 1, 2)),
))
def test_parse_accepted_shapes(text, expected):
    assert expected == parse(text)


def test_parse_keeps_reversed_bounds():
    assert RangeAddress(None, 4, 1, 5, 1) == parse('D5:A1')


@mark.parametrize('text', (
    '',
    'not a range',
    'Sheet1!',
    '!A1:B2',
    "''!A1:B2",
    'Sheet1!A1',
    'Sheet1!A1:B',
    'Sheet1!A1B2',
    'Sheet1!a1:b2',
    'Sheet1!A0:B2',
    'Sheet1!A1-B2',
    'Sheet1!Other!A1:B2',
    'A1::B2',
    'Sheet1!A1:D5\n',
    'A:C\n',
    param(None, id='none'),
))
def test_parse_rejects_malformed(text):
    with raises(InvalidRangeFormat) as excinfo:
        parse(text)
    assert repr(text) in str(excinfo.value)


def test_validate_range():
    validate_range('Sheet1!A:C')
    with raises(InvalidRangeFormat):
        validate_range('Sheet1')


def test_extract_fully_bounded_rect():
    assert (1, 1, 4, 5) == extract_fully_bounded_rect('Sheet1!A1:D5')
    assert (2, 3, 28, 40) == extract_fully_bounded_rect('B3:AB40')


@mark.parametrize('text', ('Sheet1!A:C', 'Sheet1!1:1', 'A:C'))
def test_extract_fully_bounded_rect_rejects_open_ranges(text):
    with raises(RangeNotRectangular):
        extract_fully_bounded_rect(text)


def test_extract_fully_bounded_rect_rejects_garbage():
    with raises(InvalidRangeFormat):
        extract_fully_bounded_rect('nope')
