"""Reorder an input table's columns to match a destination header row."""

from a1_range import column_index_to_letter, column_letter_to_index
from errors import EmptyOrMalformedInput


def validate_values(values):
    if not values or not isinstance(values[0], (list, tuple)):
        raise EmptyOrMalformedInput(values)


def split_table(values):
    validate_values(values)
    return list(values[0]), [list(row) for row in values[1:]]


def build_column_index_map(header_row):
    """Map each non-empty header label to the letters of its column.

    When a label repeats, the first occurrence keeps its column and later
    ones are ignored.
    """
    column_map = {}
    for position, header in enumerate(header_row):
        if header == '' or header in column_map:
            continue
        column_map[header] = column_index_to_letter(position + 1)
    return column_map


def remap_rows(header_row, data_rows, target_map):
    """Lay out ``data_rows`` in the destination columns given by ``target_map``.

    Output rows are as wide as the right-most column in ``target_map``. Input
    columns whose header is missing from ``target_map`` are dropped.
    """
    offsets = {
        header: column_letter_to_index(letters) - 1
        for header, letters in target_map.items()
    }
    width = max(offsets.values(), default=-1) + 1

    remapped = []
    for row in data_rows:
        new_row = [''] * width
        for position, header in enumerate(header_row):
            if header in offsets:
                new_row[offsets[header]] = row[position] if position < len(row) else ''
        remapped.append(new_row)
    return remapped
