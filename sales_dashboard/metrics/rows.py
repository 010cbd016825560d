import logging
from typing import Optional

from ..sheets.grid import get_cell_rc
from ..sheets.models import Grid
from .dates import parse_sheet_date_to_key

logger = logging.getLogger(__name__)


def normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def find_month_row(
    grid: Grid,
    month_name: str,
    start_row: int,
    end_row: int,
    label_column: int = 1,
) -> Optional[int]:
    """Find the row of the monthly table labelled with ``month_name``.

    The first match wins if a month is listed more than once.
    """
    target = normalize(month_name)
    for row in range(start_row, end_row + 1):
        if normalize(get_cell_rc(grid, row, label_column)) == target:
            return row
    return None


def find_current_week_row(
    grid: Grid,
    today_key: int,
    start_row: int,
    end_row: int,
    label_column: int = 1,
) -> Optional[int]:
    """Pick the row of the week in progress from week-ending dates.

    The in-progress week is the one with the earliest week-ending date on or
    after today. Once the whole table is in the past, the latest week-ending
    date before today is used instead. Rows without a readable date are skipped.
    """
    next_row: Optional[int] = None
    next_key: Optional[int] = None
    prev_row: Optional[int] = None
    prev_key: Optional[int] = None

    for row in range(start_row, end_row + 1):
        key = parse_sheet_date_to_key(get_cell_rc(grid, row, label_column))
        if key is None:
            continue

        if key >= today_key and (next_key is None or key < next_key):
            next_key, next_row = key, row

        if key <= today_key and (prev_key is None or key > prev_key):
            prev_key, prev_row = key, row

    if next_row is None and prev_row is not None:
        logger.debug(f"No upcoming week ending, falling back to row {prev_row}")
    return next_row if next_row is not None else prev_row
