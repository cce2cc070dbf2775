"""Date utilities for intranet records and calendar exports.

All functions are pure: instants are timezone-aware ``datetime`` objects and
wall-clock conversion always goes through an explicit ``ZoneInfo`` rather than
the host's local timezone.
"""

import re
from datetime import date, datetime, timedelta, tzinfo

from dateutil.relativedelta import relativedelta

from epitech_sync.constants import INTRA_DATE_FORMAT, PARIS_TZ
from epitech_sync.exceptions import DateParseError

RELATIVE_DATE_PATTERN = re.compile(r"^([+-]?)(\d+)(days?|weeks?|months?|years?)$")


def parse_intranet_date(value: str, tz: tzinfo = PARIS_TZ) -> datetime:
    """Parse an intranet ``"YYYY-MM-DD HH:MM:SS"`` string as Paris wall time.

    The time part is optional and defaults to midnight; seconds may be
    omitted.
    """
    if not isinstance(value, str) or not value.strip():
        raise DateParseError(f"Cannot parse date string: {value!r}")

    text = value.strip()
    if " " not in text:
        text = f"{text} 00:00:00"
    elif text.count(":") == 1:
        text = f"{text}:00"

    try:
        naive = datetime.strptime(text, INTRA_DATE_FORMAT)
    except ValueError as e:
        raise DateParseError(f"Cannot parse date string: {value!r}") from e
    return naive.replace(tzinfo=tz)


def parse_slot(packed: str, tz: tzinfo = PARIS_TZ) -> tuple[datetime, datetime]:
    """Split a packed ``"start|end"`` appointment slot into two instants."""
    parts = packed.split("|")
    if len(parts) != 2:
        raise DateParseError(f"Invalid appointment slot: {packed!r}")
    return parse_intranet_date(parts[0], tz), parse_intranet_date(parts[1], tz)


def ensure_datetime(value: object, tz: tzinfo = PARIS_TZ) -> datetime:
    """Coerce a stored date value into a timezone-aware datetime.

    Accepts aware datetimes, ISO-8601 strings (as written to the event
    cache) and intranet date strings. Naive values are read as Paris time.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=tz)

    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return parse_intranet_date(value, tz)
        return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=tz)

    raise DateParseError(f"Invalid date value type: {type(value).__name__}")


def to_local(value: datetime, tz: tzinfo = PARIS_TZ) -> datetime:
    """Convert an instant to wall-clock time in ``tz``."""
    return ensure_datetime(value, tz).astimezone(tz)


def today(now: datetime | None = None, tz: tzinfo = PARIS_TZ) -> date:
    """Current calendar date in ``tz``."""
    current = now if now is not None else datetime.now(tz)
    return to_local(current, tz).date()


def parse_relative_date(relative: str, from_date: date) -> date:
    """Apply a relative offset such as ``"+3months"`` or ``"-2weeks"``."""
    match = RELATIVE_DATE_PATTERN.match(relative.strip())
    if not match:
        raise DateParseError(f"Invalid relative date format: {relative}")

    sign, amount, unit = match.groups()
    value = int(amount) * (-1 if sign == "-" else 1)
    unit = unit.rstrip("s")

    if unit == "day":
        return from_date + timedelta(days=value)
    if unit == "week":
        return from_date + timedelta(weeks=value)
    if unit == "month":
        return from_date + relativedelta(months=value)
    return from_date + relativedelta(years=value)


def _resolve_boundary(value: str, reference: date) -> date:
    if value == "today":
        return reference
    if value.startswith(("+", "-")):
        return parse_relative_date(value, reference)
    try:
        return date.fromisoformat(value[:10])
    except ValueError as e:
        raise DateParseError(f"Invalid sync period boundary: {value}") from e


def resolve_sync_period(start: str, end: str, reference: date) -> tuple[date, date]:
    """Resolve sync period settings into a concrete date range.

    Each boundary is ``"today"``, a relative offset from ``reference``
    (``"+12months"``) or an ISO date.
    """
    return _resolve_boundary(start, reference), _resolve_boundary(end, reference)


def format_api_date(value: date) -> str:
    """Format a date for intranet API calls (YYYY-MM-DD)."""
    return value.strftime("%Y-%m-%d")


def format_duration(minutes: int) -> str:
    """Format a duration in minutes as ``2h``, ``1h30`` or ``45min``."""
    hours, mins = divmod(minutes, 60)
    if hours > 0 and mins > 0:
        return f"{hours}h{mins:02d}"
    if hours > 0:
        return f"{hours}h"
    return f"{mins}min"
