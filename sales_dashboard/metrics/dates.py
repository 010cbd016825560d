import logging
import re
from datetime import date, datetime, timezone, tzinfo
from typing import Optional

from dateutil import parser as dateparser
from dateutil import tz

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

SLASH_DATE_PATTERN = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{2,4})")

# Two defaults that differ in every field; a parse that depends on the
# default was missing part of the date
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def date_to_key(value: date) -> int:
    return value.year * 10000 + value.month * 100 + value.day


def parse_sheet_date_to_key(value: Optional[str]) -> Optional[int]:
    """Convert a sheet date cell into a YYYYMMDD integer key.

    Handles M/D/YYYY and M/D/YY (two digit years are 20YY), then falls back
    to dateutil for anything else Google exports. Returns None when the cell
    does not hold a complete calendar date.
    """
    text = (value or "").strip()
    if not text:
        return None

    match = SLASH_DATE_PATTERN.fullmatch(text)
    if match:
        month, day, year = (int(part) for part in match.groups())
        if year < 100:
            year += 2000
        try:
            return date_to_key(date(year, month, day))
        except ValueError:
            return None

    return _parse_generic_date_to_key(text)


def _parse_generic_date_to_key(text: str) -> Optional[int]:
    try:
        first = dateparser.parse(text, default=_DEFAULT_A)
        second = dateparser.parse(text, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return None

    if first.date() != second.date():
        logger.debug(f"Ignoring partial date {text!r}")
        return None

    if first.tzinfo is not None:
        first = first.astimezone(timezone.utc)
    return date_to_key(first)


def get_business_timezone(name: str) -> tzinfo:
    """Resolve an IANA timezone name, raising ValueError if unknown"""
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown timezone: {name}")
    return zone


def now_in_timezone(zone: tzinfo, now: Optional[datetime] = None) -> datetime:
    """Return ``now`` (default: the current instant) as wall time in ``zone``"""
    if now is None:
        return datetime.now(zone)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(zone)


def today_key_in_timezone(zone: tzinfo, now: Optional[datetime] = None) -> int:
    """Today's YYYYMMDD key in the business timezone, not the server's"""
    return date_to_key(now_in_timezone(zone, now))


def current_month_name(zone: tzinfo, now: Optional[datetime] = None) -> str:
    return MONTH_NAMES[now_in_timezone(zone, now).month - 1]
