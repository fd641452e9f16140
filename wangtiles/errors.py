class WangTilesError(Exception):
    """Base exception for all wangtiles errors."""

    pass


class InvalidArgument(WangTilesError, ValueError):
    """An edge index, tile code, size or colour outside its valid range."""

    pass


class ConstraintExhausted(WangTilesError):
    """No candidate tile satisfies the neighbour constraints of a cell."""

    def __init__(self, row, col, message=None):
        self.row = row
        self.col = col
        if message is None:
            message = f"no compatible tile for cell ({row}, {col})"
        super().__init__(message)


class OutputError(WangTilesError, OSError):
    """The output file could not be created or written."""

    pass
