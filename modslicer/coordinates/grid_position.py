"""
Atlas grid coordinates.

A texture atlas is a 16x16 grid of 16x16 pixel cells. Each cell is addressed by
a single byte with the row in the high nibble and the column in the low nibble,
so sorting positions sorts cells in row-major order. The text form used in
mapping files is the same byte written as two hex digits (row, then column).
"""

import string
from functools import total_ordering

from modslicer.errors import InvalidDigitsError, InvalidFormatError

# Constants
GRID_SIZE = 16  # Cells per atlas row and column
CELL_SIZE = 16  # Pixels per cell side

_HEX_DIGITS = frozenset(string.hexdigits)


@total_ordering
class GridPosition:
    """
    A (column, row) cell position in a 16x16 atlas grid.
    """

    __slots__ = ("_value",)

    def __init__(self, value):
        """
        Initialize from the packed byte value.

        Args:
            value: Integer in [0, 256), row in the high nibble, column in the low nibble
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Grid position value must be an int, got {value!r}")
        if not 0 <= value < GRID_SIZE * GRID_SIZE:
            raise ValueError(f"Grid position value out of range: {value}")
        self._value = value

    @classmethod
    def from_position(cls, column, row):
        """
        Build a position from a column and a row.

        Args:
            column: Column index in [0, 16)
            row: Row index in [0, 16)

        Returns:
            GridPosition for that cell
        """
        for label, index in (("column", column), ("row", row)):
            if not isinstance(index, int) or not 0 <= index < GRID_SIZE:
                raise ValueError(f"Grid {label} must be in [0, {GRID_SIZE}), got {index!r}")
        return cls((row << 4) | column)

    @classmethod
    def parse(cls, text):
        """
        Parse the two-hex-digit form, row digit first.

        Args:
            text: String such as "0f" or "A3"

        Returns:
            GridPosition for that cell

        Raises:
            InvalidFormatError: If the text is not exactly two characters
            InvalidDigitsError: If either character is not a hex digit
        """
        if len(text) != 2:
            raise InvalidFormatError(text)
        if not all(char in _HEX_DIGITS for char in text):
            raise InvalidDigitsError(text)
        return cls(int(text, 16))

    @classmethod
    def coerce(cls, value):
        """Accept an existing position or its text form (used by config validation)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"Grid position must be a 2-digit hex string, got {value!r}")

    @classmethod
    def all(cls):
        """Iterate over every cell of the grid in row-major order."""
        for value in range(GRID_SIZE * GRID_SIZE):
            yield cls(value)

    @property
    def value(self):
        return self._value

    @property
    def column(self):
        return self._value & 0xF

    @property
    def row(self):
        return self._value >> 4

    def format(self):
        """Return the two lowercase hex digits, row then column."""
        return f"{self.row:x}{self.column:x}"

    def pixel_box(self, cell_size=CELL_SIZE):
        """
        Get the pixel crop box of this cell.

        Args:
            cell_size: Side length of a cell in pixels

        Returns:
            Tuple of (left, top, right, bottom) as used by PIL's Image.crop
        """
        left = self.column * cell_size
        top = self.row * cell_size
        return left, top, left + cell_size, top + cell_size

    def __eq__(self, other):
        if not isinstance(other, GridPosition):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other):
        if not isinstance(other, GridPosition):
            return NotImplemented
        return self._value < other._value

    def __hash__(self):
        return hash(self._value)

    def __str__(self):
        return self.format()

    def __repr__(self):
        return f"GridPosition(column={self.column}, row={self.row})"
