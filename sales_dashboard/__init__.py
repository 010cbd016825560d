"""Sales Dashboard - KPIs from a published sales sheet.

This package reads the CSV export of the sales tracking sheet and works out
the year-to-date, monthly and current-week figures the dashboard shows.
"""

__version__ = "0.1.0"

from .metrics.assembler import build_dashboard_metrics
from .metrics.layout import SheetLayout
from .sheets.client import CsvSheetClient


__all__ = [
    "CsvSheetClient",
    "SheetLayout",
    "build_dashboard_metrics",
]
