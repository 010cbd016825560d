from dataclasses import dataclass, replace

from ..sheets.grid import column_number_to_letters


@dataclass(frozen=True)
class ColumnPair:
    """Target and actual columns (1-based) of one tracked quantity"""

    target: int
    actual: int


@dataclass(frozen=True)
class SheetLayout:
    """Where each KPI lives in the dashboard sheet.

    The defaults describe the current sheet. The quote value columns
    (G target, I actual) are assumed and still need checking against a
    reference copy of the sheet.
    """

    sales_goal_cell: str = "C3"
    last_year_revenue_cell: str = "C6"
    conversion_rate_cell: str = "C16"

    ytd_actual_range: tuple[str, str] = ("C57", "C64")
    ytd_expected_range: tuple[str, str] = ("B57", "B64")

    monthly_start_row: int = 40
    monthly_end_row: int = 51
    weekly_start_row: int = 57
    weekly_end_row: int = 64

    label_column: int = 1
    revenue: ColumnPair = ColumnPair(target=2, actual=3)
    quotes_count: ColumnPair = ColumnPair(target=8, actual=10)
    quotes_value: ColumnPair = ColumnPair(target=7, actual=9)

    def __post_init__(self) -> None:
        for start, end in (
            (self.monthly_start_row, self.monthly_end_row),
            (self.weekly_start_row, self.weekly_end_row),
        ):
            if start < 1 or end < start:
                raise ValueError(f"Invalid row window {start}-{end}")

    @property
    def weekly_range_label(self) -> str:
        return f"{self.weekly_start_row}-{self.weekly_end_row}"

    def with_weekly_window(self, start_row: int, end_row: int) -> "SheetLayout":
        """Move the weekly table, and the YTD sums that read it, to new rows"""
        actual = column_number_to_letters(self.revenue.actual)
        target = column_number_to_letters(self.revenue.target)
        return replace(
            self,
            weekly_start_row=start_row,
            weekly_end_row=end_row,
            ytd_actual_range=(f"{actual}{start_row}", f"{actual}{end_row}"),
            ytd_expected_range=(f"{target}{start_row}", f"{target}{end_row}"),
        )


DEFAULT_LAYOUT = SheetLayout()
