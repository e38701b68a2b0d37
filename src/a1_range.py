"""Parsing and validation of A1-style range strings.

Accepted shapes, with or without a ``SheetName!`` prefix:

    A1:D5   fully bounded
    A:C     open column range
    1:1     open row range

Columns and rows are 1-based and inclusive throughout.
"""

import re
from collections import namedtuple

from errors import InvalidColumnLetters, InvalidRangeFormat, RangeNotRectangular

_ROW = r'[1-9][0-9]*'
_RANGE_PATTERN = re.compile(rf"""
    (?:(?P<sheet>'(?:[^']|'')+'|[^!]+)!)?
    (?:
        (?P<start_col>[A-Z]+)(?P<start_row>{_ROW}):(?P<end_col>[A-Z]+)(?P<end_row>{_ROW})
      | (?P<open_start_col>[A-Z]+):(?P<open_end_col>[A-Z]+)
      | (?P<open_start_row>{_ROW}):(?P<open_end_row>{_ROW})
    )
""", re.VERBOSE)
_LETTERS_PATTERN = re.compile(r'[A-Za-z]+')


class RangeAddress(namedtuple(
        'RangeAddress',
        'sheet_name start_column end_column start_row end_row',
        defaults=(None, None, None, None, None))):
    __slots__ = ()

    @property
    def has_columns(self):
        return self.start_column is not None and self.end_column is not None

    @property
    def has_rows(self):
        return self.start_row is not None and self.end_row is not None

    @property
    def is_fully_bounded(self):
        return self.has_columns and self.has_rows


def parse(range_text):
    """Parse ``range_text`` into a RangeAddress.

    Does not check that the named sheet exists.
    """
    if not isinstance(range_text, str):
        raise InvalidRangeFormat(range_text)
    match = _RANGE_PATTERN.fullmatch(range_text)
    if match is None:
        raise InvalidRangeFormat(range_text)

    parts = match.groupdict()
    sheet_name = _unquote_sheet_name(parts['sheet'])
    if sheet_name == '':
        raise InvalidRangeFormat(range_text)
    if parts['start_col'] is not None:
        return RangeAddress(
            sheet_name,
            start_column=column_letter_to_index(parts['start_col']),
            end_column=column_letter_to_index(parts['end_col']),
            start_row=int(parts['start_row']),
            end_row=int(parts['end_row']),
        )
    if parts['open_start_col'] is not None:
        return RangeAddress(
            sheet_name,
            start_column=column_letter_to_index(parts['open_start_col']),
            end_column=column_letter_to_index(parts['open_end_col']),
        )
    return RangeAddress(
        sheet_name,
        start_row=int(parts['open_start_row']),
        end_row=int(parts['open_end_row']),
    )


def validate_range(range_text):
    parse(range_text)


def _unquote_sheet_name(name):
    if name is None:
        return None
    if len(name) >= 2 and name.startswith("'") and name.endswith("'"):
        name = name[1:-1].replace("''", "'")
    return name


def column_letter_to_index(letters):
    """Convert column letters to a 1-based index (A -> 1, AA -> 27)."""
    if not isinstance(letters, str) or not _LETTERS_PATTERN.fullmatch(letters):
        raise InvalidColumnLetters(letters)
    index = 0
    for char in letters.upper():
        index = index * 26 + (ord(char) - ord('A') + 1)
    return index


def column_index_to_letter(index):
    """Convert a 1-based column index to column letters (27 -> AA)."""
    if index < 1:
        raise ValueError(f'Column index must be positive: {index}')
    chunks = []
    current = index
    while current > 0:
        current -= 1
        chunks.append(chr(ord('A') + current % 26))
        current //= 26
    return ''.join(reversed(chunks))


def extract_fully_bounded_rect(range_text):
    """Return ``(start_col, start_row, end_col, end_row)`` for an A1:D5 style range."""
    address = parse(range_text)
    if not address.is_fully_bounded:
        raise RangeNotRectangular(range_text)
    return address.start_column, address.start_row, address.end_column, address.end_row
