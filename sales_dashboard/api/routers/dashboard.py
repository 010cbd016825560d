from collections.abc import Iterator
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sales_dashboard.config import AppConfig, load_config
from sales_dashboard.metrics.assembler import build_dashboard_metrics
from sales_dashboard.metrics.models import DashboardMetrics, MetricPair, PeriodBlock
from sales_dashboard.sheets.client import CsvSheetClient


router = APIRouter(tags=["dashboard"])


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MetricPairOut(CamelModel):
    target: float | None
    actual: float | None
    status: str


class PeriodOut(CamelModel):
    revenue: MetricPairOut
    quotes_count: MetricPairOut
    quotes_value: MetricPairOut
    source_row: int


class MonthlyOut(PeriodOut):
    month: str


class WeeklyOut(PeriodOut):
    week_ending: str


class YtdPaceOut(CamelModel):
    ratio: float
    status: str


class DebugOut(CamelModel):
    business_time_zone: str
    today_key: int
    weekly_range: str
    picked_weekly_row: int | None
    picked_week_ending: str | None


class DashboardData(CamelModel):
    sales_goal_annual: float | None
    sales_ytd: float = Field(alias="salesYTD")
    last_year_revenue: float | None
    percent_of_goal: float | None
    conversion_rate: float | None
    ytd_actual_revenue: float
    ytd_expected_revenue: float
    ytd_pace: YtdPaceOut | None
    monthly: MonthlyOut | None
    weekly: WeeklyOut | None
    debug: DebugOut
    fetched_at: datetime


def _pair_out(pair: MetricPair) -> MetricPairOut:
    return MetricPairOut(target=pair.target, actual=pair.actual, status=pair.status.value)


def _period_fields(block: PeriodBlock) -> dict:
    return {
        "revenue": _pair_out(block.revenue),
        "quotes_count": _pair_out(block.quotes_count),
        "quotes_value": _pair_out(block.quotes_value),
        "source_row": block.source_row,
    }


def to_dashboard_data(metrics: DashboardMetrics) -> DashboardData:
    """Shape engine output into the JSON the dashboard page reads"""
    monthly = None
    if metrics.monthly is not None:
        monthly = MonthlyOut(month=metrics.monthly.label, **_period_fields(metrics.monthly))

    weekly = None
    if metrics.weekly is not None:
        weekly = WeeklyOut(week_ending=metrics.weekly.label, **_period_fields(metrics.weekly))

    ytd_pace = None
    if metrics.ytd_pace is not None:
        ytd_pace = YtdPaceOut(ratio=metrics.ytd_pace.ratio, status=metrics.ytd_pace.status.value)

    diagnostics = metrics.diagnostics
    return DashboardData(
        sales_goal_annual=metrics.sales_goal_annual,
        sales_ytd=metrics.sales_ytd,
        last_year_revenue=metrics.last_year_revenue,
        percent_of_goal=metrics.percent_of_goal,
        conversion_rate=metrics.conversion_rate,
        ytd_actual_revenue=metrics.ytd_actual_revenue,
        ytd_expected_revenue=metrics.ytd_expected_revenue,
        ytd_pace=ytd_pace,
        monthly=monthly,
        weekly=weekly,
        debug=DebugOut(
            business_time_zone=diagnostics.business_timezone,
            today_key=diagnostics.today_key,
            weekly_range=diagnostics.weekly_range,
            picked_weekly_row=diagnostics.picked_weekly_row,
            picked_week_ending=diagnostics.picked_week_ending,
        ),
        fetched_at=metrics.fetched_at,
    )


def get_config() -> AppConfig:
    return load_config()


def get_sheet_client(config: AppConfig = Depends(get_config)) -> Iterator[CsvSheetClient]:
    sheet_client = CsvSheetClient(
        csv_url=config["DASHBOARD_CSV_URL"],
        timeout=config["CSV_FETCH_TIMEOUT"],
    )
    try:
        yield sheet_client
    finally:
        sheet_client.close()


def get_evaluation_time() -> Optional[datetime]:
    """Instant the KPIs are computed for, None meaning now"""
    return None


@router.get("/dashboard-data", response_model=DashboardData)
def get_dashboard_data(
    response: Response,
    config: AppConfig = Depends(get_config),
    sheet_client: CsvSheetClient = Depends(get_sheet_client),
    now: Optional[datetime] = Depends(get_evaluation_time),
) -> DashboardData:
    """Return the sales KPIs computed from the latest sheet snapshot."""
    grid = sheet_client.get_grid()
    metrics = build_dashboard_metrics(
        grid,
        layout=config["LAYOUT"],
        business_timezone=config["BUSINESS_TIMEZONE"],
        now=now,
    )
    response.headers["Cache-Control"] = "no-store"
    return to_dashboard_data(metrics)
