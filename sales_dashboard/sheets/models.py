# sales_dashboard/sheets/models.py
import re
from dataclasses import dataclass
from typing import List

Grid = List[List[str]]

A1_PATTERN = re.compile(r"([A-Z]+)([0-9]+)")


@dataclass(frozen=True)
class CellReference:
    """A 1-based (row, column) address in a grid"""

    row: int
    column: int
