"""ICS writer for canonical events."""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Sequence

from icalendar import Calendar, Event, Timezone, TimezoneDaylight, TimezoneStandard

from epitech_sync.constants import (
    ICS_CALENDAR_NAME,
    ICS_CATEGORY,
    ICS_PRODID,
    TIMEZONE_NAME,
    UID_DOMAIN,
)
from epitech_sync.dates import ensure_datetime, to_local
from epitech_sync.exceptions import DateParseError, ExportError
from epitech_sync.models.event import CanonicalEvent

logger = logging.getLogger(__name__)

CRLF = "\r\n"
FOLD_LIMIT = 75


def fold_line(line: str, limit: int = FOLD_LIMIT) -> str:
    """Fold a content line to ``limit`` octets per physical line.

    The first chunk holds up to ``limit`` octets; each continuation starts
    with a single space followed by at most ``limit - 1`` octets. UTF-8
    sequences are never split.
    """
    data = line.encode("utf-8")
    if len(data) <= limit:
        return line

    chunks = []
    start = 0
    size = limit
    while start < len(data):
        end = min(start + size, len(data))
        # Back off to a character boundary
        while end < len(data) and (data[end] & 0xC0) == 0x80:
            end -= 1
        chunks.append(data[start:end].decode("utf-8"))
        start = end
        size = limit - 1

    return (CRLF + " ").join(chunks)


def build_uid(event: CanonicalEvent) -> str:
    """Globally unique, import-stable UID."""
    return f"{event.id}@{UID_DOMAIN}"


def build_timezone() -> Timezone:
    """Europe/Paris VTIMEZONE with explicit DST rules."""
    tz = Timezone()
    tz.add("tzid", TIMEZONE_NAME)

    daylight = TimezoneDaylight()
    daylight.add("tzoffsetfrom", timedelta(hours=1))
    daylight.add("tzoffsetto", timedelta(hours=2))
    daylight.add("tzname", "CEST")
    daylight.add("dtstart", datetime(1970, 3, 29, 2, 0, 0))
    daylight.add("rrule", {"FREQ": "YEARLY", "BYMONTH": 3, "BYDAY": "-1SU"})
    tz.add_component(daylight)

    standard = TimezoneStandard()
    standard.add("tzoffsetfrom", timedelta(hours=2))
    standard.add("tzoffsetto", timedelta(hours=1))
    standard.add("tzname", "CET")
    standard.add("dtstart", datetime(1970, 10, 25, 3, 0, 0))
    standard.add("rrule", {"FREQ": "YEARLY", "BYMONTH": 10, "BYDAY": "-1SU"})
    tz.add_component(standard)

    return tz


def _local_wall_time(value: object) -> datetime:
    return to_local(ensure_datetime(value)).replace(tzinfo=None)


def build_vevent(event: CanonicalEvent, stamp: datetime | None = None) -> Event:
    """Build the VEVENT for one canonical event.

    Raises:
        DateParseError: If the event dates cannot be resolved
    """
    start = _local_wall_time(event.start_date)
    end = _local_wall_time(event.end_date)
    dtstamp = ensure_datetime(stamp if stamp is not None else event.start_date)

    vevent = Event()
    vevent.add("uid", build_uid(event))
    vevent.add("dtstamp", dtstamp.astimezone(timezone.utc))
    vevent.add("dtstart", start, parameters={"TZID": TIMEZONE_NAME})
    vevent.add("dtend", end, parameters={"TZID": TIMEZONE_NAME})
    vevent.add("summary", event.title)
    if event.description:
        vevent.add("description", event.description)
    if event.location:
        vevent.add("location", event.location)

    categories = [ICS_CATEGORY]
    if event.module.title:
        categories.append(event.module.title)
    vevent.add("categories", categories)

    vevent.add("status", "CONFIRMED" if event.is_registered else "TENTATIVE")
    vevent.add("transp", "OPAQUE")
    # Each export is a full snapshot, not an update
    vevent.add("sequence", 0)
    return vevent


class ICSWriter:
    """Writer for ICS calendar documents."""

    def build_calendar(
        self, events: Iterable[CanonicalEvent], stamp: datetime | None = None
    ) -> Calendar:
        """Assemble the VCALENDAR component tree."""
        cal = Calendar()
        cal.add("prodid", ICS_PRODID)
        cal.add("version", "2.0")
        cal.add("calscale", "GREGORIAN")
        cal.add("method", "PUBLISH")
        cal.add("X-WR-CALNAME", ICS_CALENDAR_NAME)
        cal.add("X-WR-TIMEZONE", TIMEZONE_NAME)
        cal.add_component(build_timezone())

        for event in events:
            cal.add_component(build_vevent(event, stamp))
        return cal

    def encode(
        self, events: Iterable[CanonicalEvent], stamp: datetime | None = None
    ) -> str:
        """Serialize events into an iCalendar document.

        Args:
            events: Canonical events to export
            stamp: DTSTAMP for every event; defaults to each event's start so
                the output depends on the events alone

        Returns:
            The document, CRLF-terminated and folded at 75 octets

        Raises:
            ExportError: If any event holds an unresolvable date
        """
        try:
            cal = self.build_calendar(events, stamp)
        except (DateParseError, TypeError, ValueError) as e:
            raise ExportError(f"Cannot export calendar: {e}") from e

        lines = [str(line) for line in cal.content_lines() if line]
        return "".join(fold_line(line) + CRLF for line in lines)

    def write(
        self,
        events: Iterable[CanonicalEvent],
        path: Path,
        stamp: datetime | None = None,
    ) -> Path:
        """Write the encoded document to ``path``."""
        content = self.encode(events, stamp)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        logger.info(f"Wrote ICS calendar to {path}")
        return path

    def get_extension(self) -> str:
        """Returns file extension."""
        return "ics"


def filter_by_range(
    events: Iterable[CanonicalEvent], start: datetime, end: datetime
) -> list[CanonicalEvent]:
    """Events whose start lies within ``[start, end]``."""
    lower = ensure_datetime(start)
    upper = ensure_datetime(end)
    return [e for e in events if lower <= ensure_datetime(e.start_date) <= upper]


def export_range(
    events: Sequence[CanonicalEvent],
    start: datetime,
    end: datetime,
    stamp: datetime | None = None,
) -> str:
    """Encode only the events starting within ``[start, end]``."""
    return ICSWriter().encode(filter_by_range(events, start, end), stamp)
