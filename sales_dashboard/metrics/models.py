from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class PaceStatus(Enum):
    """How an actual figure compares with its target"""

    AHEAD = "Ahead"
    ON_PACE = "On Pace"
    BEHIND = "Behind"


AHEAD_RATIO = 1.05
BEHIND_RATIO = 0.95


@dataclass(frozen=True)
class MetricPair:
    target: Optional[float]
    actual: Optional[float]

    @property
    def status(self) -> PaceStatus:
        if self.actual is None or self.target is None or self.target == 0:
            return PaceStatus.ON_PACE

        ratio = self.actual / self.target
        if ratio >= AHEAD_RATIO:
            return PaceStatus.AHEAD
        if ratio <= BEHIND_RATIO:
            return PaceStatus.BEHIND
        return PaceStatus.ON_PACE


class YtdPaceStatus(Enum):
    """Year-to-date revenue against the planned year-to-date revenue"""

    BELOW_PACE = "Below Pace"
    ON_PACE = "On Pace"
    WAY_ABOVE_PACE = "Way Above Pace"


BELOW_PACE_RATIO = 0.95
WAY_ABOVE_PACE_RATIO = 1.15


@dataclass(frozen=True)
class YtdPace:
    ratio: float
    status: YtdPaceStatus


@dataclass(frozen=True)
class PeriodBlock:
    """KPIs read from the matched row of the monthly or weekly table"""

    label: str
    revenue: MetricPair
    quotes_count: MetricPair
    quotes_value: MetricPair
    source_row: int


@dataclass(frozen=True)
class Diagnostics:
    business_timezone: str
    today_key: int
    weekly_range: str
    picked_weekly_row: Optional[int]
    picked_week_ending: Optional[str]


@dataclass(frozen=True)
class DashboardMetrics:
    sales_goal_annual: Optional[float]
    sales_ytd: float
    last_year_revenue: Optional[float]
    percent_of_goal: Optional[float]
    conversion_rate: Optional[float]
    ytd_actual_revenue: float
    ytd_expected_revenue: float
    ytd_pace: Optional[YtdPace]
    monthly: Optional[PeriodBlock]
    weekly: Optional[PeriodBlock]
    diagnostics: Diagnostics
    fetched_at: datetime
