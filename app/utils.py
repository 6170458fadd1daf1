import datetime
import math
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from app.settings import settings

# date-fns pt-BR abbreviations, as shown on the site
PT_BR_MONTHS = (
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
)


def calculate_reading_time(texts: Iterable[str], words_per_minute: int = 200) -> int:
    """Minutes needed to read every text, rounded up."""
    words = sum(len(text.split()) for text in texts if text)
    return math.ceil(words / words_per_minute)


def parse_timestamp(value: Optional[str]) -> Optional[datetime.datetime]:
    """Parse CMS timestamps such as ``2021-03-25T19:25:28+0000``."""
    if not value:
        return None
    try:
        return datetime.datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")
    except ValueError:
        return datetime.datetime.fromisoformat(value)


def _localize(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(settings.DISPLAY_TIMEZONE))


def format_date(value: Optional[str]) -> str:
    """``2021-03-15T19:25:28+0000`` -> ``15 mar 2021``"""
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""
    parsed = _localize(parsed)
    return f"{parsed.day} {PT_BR_MONTHS[parsed.month - 1]} {parsed.year}"


def format_edited_at(value: Optional[str]) -> str:
    """``2021-03-19T15:49:00+0000`` -> ``19 mar 2021, às 15:49``"""
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""
    parsed = _localize(parsed)
    return f"{format_date(value)}, às {parsed:%H:%M}"
