import csv
import io
from typing import Optional

from .models import A1_PATTERN, CellReference, Grid


def csv_to_grid(csv_text: str) -> Grid:
    """Parse CSV text into a list of rows of string cells.

    Quoted fields may contain commas, doubled quotes and line breaks.
    Rows are not padded, so ragged rows stay ragged and lookups pad them.
    A quote inside an unquoted field is kept as a literal character.
    """
    # No single field can be longer than the whole text
    csv.field_size_limit(max(csv.field_size_limit(), len(csv_text)))
    reader = csv.reader(io.StringIO(csv_text, newline=""))
    return [row for row in reader]


def column_letters_to_number(letters: str) -> int:
    """Decode spreadsheet column letters (A=1, Z=26, AA=27)"""
    number = 0
    for letter in letters:
        number = number * 26 + (ord(letter) - ord("A") + 1)
    return number


def column_number_to_letters(number: int) -> str:
    """Encode a 1-based column number as spreadsheet letters"""
    if number < 1:
        raise ValueError(f"Column number must be positive, got {number}")

    letters = []
    while number > 0:
        number, remainder = divmod(number - 1, 26)
        letters.append(chr(ord("A") + remainder))
    return "".join(reversed(letters))


def parse_a1(a1: str) -> Optional[CellReference]:
    """Split an A1 reference like "C57" into a CellReference"""
    match = A1_PATTERN.fullmatch(a1)
    if not match:
        return None
    return CellReference(
        row=int(match.group(2)),
        column=column_letters_to_number(match.group(1)),
    )


def get_cell_rc(grid: Grid, row: int, column: int) -> str:
    """Return the trimmed cell at a 1-based row/column, or "" when out of bounds"""
    if row < 1 or column < 1 or row > len(grid):
        return ""
    cells = grid[row - 1]
    if column > len(cells):
        return ""
    return cells[column - 1].strip()


def get_cell_a1(grid: Grid, a1: str) -> str:
    reference = parse_a1(a1)
    if reference is None:
        return ""
    return get_cell_rc(grid, reference.row, reference.column)
