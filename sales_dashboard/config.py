import os
from typing import TypedDict

from dotenv import load_dotenv

from .metrics.assembler import DEFAULT_BUSINESS_TIMEZONE
from .metrics.dates import get_business_timezone
from .metrics.layout import DEFAULT_LAYOUT, SheetLayout


class ConfigError(OSError):
    """Raised when the environment does not describe a usable setup"""


class AppConfig(TypedDict):
    """Configuration for the application"""

    DASHBOARD_CSV_URL: str
    BUSINESS_TIMEZONE: str
    CSV_FETCH_TIMEOUT: float
    LAYOUT: SheetLayout


def _int_setting(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _float_setting(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


def load_config() -> AppConfig:
    """Load configuration from environment variables"""
    load_dotenv()

    csv_url = os.getenv("DASHBOARD_CSV_URL")
    if not csv_url:
        raise ConfigError("Missing env var: DASHBOARD_CSV_URL")

    business_timezone = os.getenv("BUSINESS_TIMEZONE") or DEFAULT_BUSINESS_TIMEZONE
    try:
        get_business_timezone(business_timezone)
    except ValueError as e:
        raise ConfigError(str(e))

    layout = DEFAULT_LAYOUT
    weekly_start = _int_setting("WEEKLY_START_ROW", layout.weekly_start_row)
    weekly_end = _int_setting("WEEKLY_END_ROW", layout.weekly_end_row)
    if (weekly_start, weekly_end) != (layout.weekly_start_row, layout.weekly_end_row):
        try:
            layout = layout.with_weekly_window(weekly_start, weekly_end)
        except ValueError as e:
            raise ConfigError(f"Invalid weekly window: {e}")

    return {
        "DASHBOARD_CSV_URL": csv_url,
        "BUSINESS_TIMEZONE": business_timezone,
        "CSV_FETCH_TIMEOUT": _float_setting("CSV_FETCH_TIMEOUT", 20.0),
        "LAYOUT": layout,
    }
