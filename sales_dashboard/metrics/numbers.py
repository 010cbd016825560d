import math
import re
import sys
from typing import Optional

from ..sheets.grid import get_cell_rc, parse_a1
from ..sheets.models import Grid

NUMBER_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
FORMATTING_CHARS = str.maketrans("", "", "$,")


def to_number(value: Optional[str]) -> Optional[float]:
    """Coerce a sheet cell such as "$1,234.50" into a float.

    Returns None for blank or non-numeric cells so that missing data
    is never confused with zero.
    """
    cleaned = (value or "").translate(FORMATTING_CHARS).strip()
    if not NUMBER_PATTERN.fullmatch(cleaned):
        return None

    number = float(cleaned)
    return number if math.isfinite(number) else None


def round2(number: float) -> float:
    """Round half up to cents, nudged by epsilon against float error"""
    return math.floor((number + sys.float_info.epsilon) * 100 + 0.5) / 100


def sum_range_same_column(grid: Grid, start_cell: str, end_cell: str) -> float:
    """Sum a vertical A1 range like C57:C64, blank cells counting as zero"""
    start = parse_a1(start_cell)
    end = parse_a1(end_cell)
    if start is None or end is None or start.column != end.column:
        return 0.0

    total = 0.0
    for row in range(start.row, end.row + 1):
        total += to_number(get_cell_rc(grid, row, start.column)) or 0.0
    return round2(total)
