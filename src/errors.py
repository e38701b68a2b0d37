"""Exceptions raised by sheetcrud.

Validation errors also subclass ValueError so callers that only care about
bad input can catch that instead.
"""


class SheetCrudError(Exception):
    pass


class InvalidRangeFormat(SheetCrudError, ValueError):
    def __init__(self, range_text):
        super().__init__(f'Invalid range format: {range_text!r}')
        self.range_text = range_text


class InvalidColumnLetters(SheetCrudError, ValueError):
    def __init__(self, letters):
        super().__init__(f'Invalid column letters: {letters!r}')
        self.letters = letters


class RangeNotRectangular(SheetCrudError, ValueError):
    def __init__(self, range_text):
        super().__init__(f'Range is not fully bounded: {range_text!r}')
        self.range_text = range_text


class EmptyOrMalformedInput(SheetCrudError, ValueError):
    def __init__(self, values):
        super().__init__(f'Invalid values format. Expected 2D array, got {values!r}')
        self.values = values


class SheetNotFound(SheetCrudError, LookupError):
    def __init__(self, sheet_name):
        super().__init__(f'Sheet not found: {sheet_name!r}')
        self.sheet_name = sheet_name


class SheetOperationError(SheetCrudError):
    """The Sheets API rejected a request.

    The original HttpError is kept as ``__cause__``; ``status`` is its HTTP
    status code when the response carried one.
    """

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class ConfigurationError(SheetCrudError):
    pass
