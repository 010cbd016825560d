import logging
from datetime import datetime, timezone
from typing import Optional

from ..sheets.grid import get_cell_a1, get_cell_rc
from ..sheets.models import Grid
from .dates import (
    current_month_name,
    get_business_timezone,
    today_key_in_timezone,
)
from .layout import DEFAULT_LAYOUT, ColumnPair, SheetLayout
from .models import (
    BELOW_PACE_RATIO,
    WAY_ABOVE_PACE_RATIO,
    DashboardMetrics,
    Diagnostics,
    MetricPair,
    PeriodBlock,
    YtdPace,
    YtdPaceStatus,
)
from .numbers import round2, sum_range_same_column, to_number
from .rows import find_current_week_row, find_month_row

logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_TIMEZONE = "America/Edmonton"


def percent_of_goal(ytd_actual: float, goal: Optional[float]) -> Optional[float]:
    """Share of the annual goal reached, only defined for a positive goal"""
    if goal is None or goal <= 0:
        return None
    return round2(ytd_actual / goal)


def ytd_pace(ytd_actual: float, ytd_expected: float) -> Optional[YtdPace]:
    """Compare YTD revenue with the plan; undefined when nothing was planned"""
    if not ytd_expected:
        return None

    ratio = ytd_actual / ytd_expected
    if ratio < BELOW_PACE_RATIO:
        status = YtdPaceStatus.BELOW_PACE
    elif ratio > WAY_ABOVE_PACE_RATIO:
        status = YtdPaceStatus.WAY_ABOVE_PACE
    else:
        status = YtdPaceStatus.ON_PACE
    return YtdPace(ratio=round2(ratio), status=status)


def _read_pair(grid: Grid, row: int, columns: ColumnPair) -> MetricPair:
    return MetricPair(
        target=to_number(get_cell_rc(grid, row, columns.target)),
        actual=to_number(get_cell_rc(grid, row, columns.actual)),
    )


def read_period_block(grid: Grid, row: int, label: str, layout: SheetLayout) -> PeriodBlock:
    return PeriodBlock(
        label=label,
        revenue=_read_pair(grid, row, layout.revenue),
        quotes_count=_read_pair(grid, row, layout.quotes_count),
        quotes_value=_read_pair(grid, row, layout.quotes_value),
        source_row=row,
    )


def build_dashboard_metrics(
    grid: Grid,
    layout: SheetLayout = DEFAULT_LAYOUT,
    business_timezone: str = DEFAULT_BUSINESS_TIMEZONE,
    now: Optional[datetime] = None,
) -> DashboardMetrics:
    """Compute every dashboard KPI from one sheet snapshot.

    Args:
        grid: Parsed CSV export of the sheet
        layout: Cell positions of the KPIs
        business_timezone: IANA zone that decides what "today" is
        now: Instant to evaluate at, defaults to the current time

    Missing or malformed cells come back as None. A month or week
    without a matching row gives a None block.
    """
    zone = get_business_timezone(business_timezone)

    sales_goal_annual = to_number(get_cell_a1(grid, layout.sales_goal_cell))
    last_year_revenue = to_number(get_cell_a1(grid, layout.last_year_revenue_cell))
    conversion_rate = to_number(get_cell_a1(grid, layout.conversion_rate_cell))

    ytd_actual_revenue = sum_range_same_column(grid, *layout.ytd_actual_range)
    ytd_expected_revenue = sum_range_same_column(grid, *layout.ytd_expected_range)

    month_name = current_month_name(zone, now)
    month_row = find_month_row(
        grid,
        month_name,
        layout.monthly_start_row,
        layout.monthly_end_row,
        layout.label_column,
    )
    monthly = None
    if month_row is not None:
        monthly = read_period_block(grid, month_row, month_name, layout)

    today_key = today_key_in_timezone(zone, now)
    week_row = find_current_week_row(
        grid,
        today_key,
        layout.weekly_start_row,
        layout.weekly_end_row,
        layout.label_column,
    )
    weekly = None
    week_ending = None
    if week_row is not None:
        week_ending = get_cell_rc(grid, week_row, layout.label_column)
        weekly = read_period_block(grid, week_row, week_ending, layout)

    logger.debug(f"Month {month_name} -> row {month_row}, today {today_key} -> week row {week_row}")

    metrics = DashboardMetrics(
        sales_goal_annual=sales_goal_annual,
        sales_ytd=ytd_actual_revenue,
        last_year_revenue=last_year_revenue,
        percent_of_goal=percent_of_goal(ytd_actual_revenue, sales_goal_annual),
        conversion_rate=conversion_rate,
        ytd_actual_revenue=ytd_actual_revenue,
        ytd_expected_revenue=ytd_expected_revenue,
        ytd_pace=ytd_pace(ytd_actual_revenue, ytd_expected_revenue),
        monthly=monthly,
        weekly=weekly,
        diagnostics=Diagnostics(
            business_timezone=business_timezone,
            today_key=today_key,
            weekly_range=layout.weekly_range_label,
            picked_weekly_row=week_row,
            picked_week_ending=week_ending,
        ),
        fetched_at=datetime.now(timezone.utc),
    )
    logger.info(
        f"Computed dashboard metrics: YTD {ytd_actual_revenue}, "
        f"monthly row {month_row}, weekly row {week_row}"
    )
    return metrics
