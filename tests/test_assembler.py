from datetime import datetime, timezone

import pytest

from sales_dashboard.metrics.assembler import build_dashboard_metrics, percent_of_goal, ytd_pace
from sales_dashboard.metrics.layout import ColumnPair, SheetLayout
from sales_dashboard.metrics.models import MetricPair, PaceStatus, YtdPace, YtdPaceStatus

from .conftest import build_grid

# 11:00 on January 10th in Edmonton
JAN_10 = datetime(2024, 1, 10, 18, 0, tzinfo=timezone.utc)


def test_top_level_kpis(dashboard_grid):
    metrics = build_dashboard_metrics(dashboard_grid, now=JAN_10)

    assert metrics.sales_goal_annual == 1_000_000
    assert metrics.last_year_revenue == 850_000
    assert metrics.conversion_rate == 0.35
    assert metrics.ytd_actual_revenue == 90_000
    assert metrics.ytd_expected_revenue == 80_000
    assert metrics.sales_ytd == metrics.ytd_actual_revenue
    assert metrics.percent_of_goal == 0.09


def test_monthly_block(dashboard_grid):
    monthly = build_dashboard_metrics(dashboard_grid, now=JAN_10).monthly

    assert monthly.label == "January"
    assert monthly.source_row == 40
    assert monthly.revenue == MetricPair(target=80_000, actual=75_500)
    assert monthly.quotes_count == MetricPair(target=40, actual=38)
    assert monthly.quotes_value == MetricPair(target=120_000, actual=110_000)


def test_weekly_block_is_the_week_in_progress(dashboard_grid):
    metrics = build_dashboard_metrics(dashboard_grid, now=JAN_10)

    assert metrics.weekly.label == "1/14/2024"
    assert metrics.weekly.source_row == 58
    assert metrics.weekly.revenue == MetricPair(target=20_000, actual=22_000)
    assert metrics.diagnostics.today_key == 20240110
    assert metrics.diagnostics.weekly_range == "57-64"
    assert metrics.diagnostics.picked_weekly_row == 58
    assert metrics.diagnostics.picked_week_ending == "1/14/2024"
    assert metrics.diagnostics.business_timezone == "America/Edmonton"


def test_weekly_block_after_the_table_ends(dashboard_grid):
    metrics = build_dashboard_metrics(
        dashboard_grid, now=datetime(2024, 3, 1, 18, 0, tzinfo=timezone.utc)
    )
    assert metrics.weekly.source_row == 60
    assert metrics.weekly.label == "1/28/2024"


def test_month_with_blank_cells_gives_null_pairs(dashboard_grid):
    monthly = build_dashboard_metrics(
        dashboard_grid, now=datetime(2024, 3, 15, 18, 0, tzinfo=timezone.utc)
    ).monthly

    assert monthly.label == "March"
    assert monthly.revenue == MetricPair(target=85_000, actual=None)
    assert monthly.quotes_count == MetricPair(target=None, actual=None)


def test_no_matching_month_gives_no_block(dashboard_grid):
    metrics = build_dashboard_metrics(
        dashboard_grid, now=datetime(2024, 4, 15, 18, 0, tzinfo=timezone.utc)
    )
    assert metrics.monthly is None


@pytest.mark.parametrize("goal", ["0", "-100", "", "TBD"])
def test_percent_of_goal_needs_a_positive_goal(goal):
    grid = build_grid({3: ["", "", goal], 57: ["1/7/2024", "", "500"]})
    assert build_dashboard_metrics(grid, now=JAN_10).percent_of_goal is None


def test_percent_of_goal():
    assert percent_of_goal(250, 1000) == 0.25
    assert percent_of_goal(1, 3) == 0.33
    assert percent_of_goal(100, 0) is None
    assert percent_of_goal(100, None) is None


def test_empty_grid_never_fails():
    metrics = build_dashboard_metrics([], now=JAN_10)

    assert metrics.sales_goal_annual is None
    assert metrics.last_year_revenue is None
    assert metrics.conversion_rate is None
    assert metrics.ytd_actual_revenue == 0
    assert metrics.percent_of_goal is None
    assert metrics.monthly is None
    assert metrics.weekly is None
    assert metrics.diagnostics.picked_weekly_row is None


def test_custom_layout():
    layout = SheetLayout(
        sales_goal_cell="B1",
        monthly_start_row=2,
        monthly_end_row=3,
        revenue=ColumnPair(target=4, actual=5),
    ).with_weekly_window(5, 6)
    grid = build_grid(
        {
            1: ["Goal", "200"],
            3: ["January", "", "", "10", "12"],
            5: ["1/14/2024", "", "", "30", "40"],
            6: ["1/21/2024", "", "", "50", "60"],
        },
        rows=6,
    )

    metrics = build_dashboard_metrics(grid, layout=layout, now=JAN_10)

    assert metrics.sales_goal_annual == 200
    assert metrics.monthly.revenue == MetricPair(target=10, actual=12)
    assert metrics.weekly.source_row == 5
    assert metrics.ytd_actual_revenue == 100
    assert metrics.ytd_expected_revenue == 80
    assert metrics.percent_of_goal == 0.5
    assert metrics.diagnostics.weekly_range == "5-6"


def test_business_timezone_decides_the_week():
    grid = build_grid({57: ["1/9/2024"], 58: ["1/10/2024"]})
    # 05:00 UTC on the 10th is still the 9th in Edmonton
    now = datetime(2024, 1, 10, 5, 0, tzinfo=timezone.utc)

    assert build_dashboard_metrics(grid, now=now).weekly.source_row == 57
    assert build_dashboard_metrics(grid, business_timezone="UTC", now=now).weekly.source_row == 58


@pytest.mark.parametrize(
    "target, actual, expected",
    [
        (100, 105, PaceStatus.AHEAD),
        (100, 120, PaceStatus.AHEAD),
        (100, 100, PaceStatus.ON_PACE),
        (100, 96, PaceStatus.ON_PACE),
        (100, 90, PaceStatus.BEHIND),
        (0, 50, PaceStatus.ON_PACE),
        (None, 50, PaceStatus.ON_PACE),
        (100, None, PaceStatus.ON_PACE),
    ],
)
def test_pace_status(target, actual, expected):
    assert MetricPair(target=target, actual=actual).status is expected


def test_layout_rejects_bad_windows():
    with pytest.raises(ValueError):
        SheetLayout(weekly_start_row=10, weekly_end_row=5)
    with pytest.raises(ValueError):
        SheetLayout(monthly_start_row=0)


@pytest.mark.parametrize(
    "actual, expected, status",
    [
        (90, 100, YtdPaceStatus.BELOW_PACE),
        (95, 100, YtdPaceStatus.ON_PACE),
        (115, 100, YtdPaceStatus.ON_PACE),
        (116, 100, YtdPaceStatus.WAY_ABOVE_PACE),
    ],
)
def test_ytd_pace_bands(actual, expected, status):
    assert ytd_pace(actual, expected).status is status


def test_ytd_pace_needs_a_plan():
    assert ytd_pace(500, 0) is None


def test_ytd_pace_in_metrics(dashboard_grid):
    metrics = build_dashboard_metrics(dashboard_grid, now=JAN_10)
    assert metrics.ytd_pace == YtdPace(ratio=1.13, status=YtdPaceStatus.ON_PACE)
