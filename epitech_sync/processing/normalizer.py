"""Turn raw intranet planning records into canonical events."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from epitech_sync.constants import EVENT_ID_PREFIX, INTRA_BASE_URL, SLOT_NOT_RESERVED_MARKER
from epitech_sync.dates import format_duration, parse_intranet_date, parse_slot
from epitech_sync.exceptions import DateParseError
from epitech_sync.models.event import ActivityRef, CanonicalEvent, ModuleRef
from epitech_sync.models.raw import RawEvent

logger = logging.getLogger(__name__)

MANDATORY_TAG_PATTERN = re.compile(r"\s*\[OBLIGATOIRE\]\s*", re.IGNORECASE)


@dataclass(frozen=True)
class TimeSlot:
    """Resolved time window of a record.

    ``personal_slot`` is ``None`` for regular events, ``True`` when an
    appointment has a reserved slot and ``False`` when it does not.
    """

    start: datetime
    end: datetime
    personal_slot: bool | None
    duration: str | None


def build_event_id(raw: RawEvent) -> str:
    """Stable id derived from the activity and event codes."""
    return f"{EVENT_ID_PREFIX}{raw.codeacti}-{raw.codeevent}"


def clean_activity_title(title: str) -> str:
    """Strip ``[OBLIGATOIRE]`` tags from an activity title."""
    return MANDATORY_TAG_PATTERN.sub(" ", title).strip()


def format_room_code(code: str) -> str:
    """Format a room code for display.

    ``"FR/PAR/KB2-Pasteur/Bureau-APE"`` becomes ``"KB2 Pasteur: Bureau APE"``.
    """
    relevant = code.split("/")[2:]
    if not relevant:
        return code

    building = relevant[0].replace("-", " ")
    room = " ".join(part.replace("-", " ") for part in relevant[1:])
    if room:
        return f"{building}: {room}"
    return building


def resolve_time_slot(raw: RawEvent) -> TimeSlot:
    """Pick the authoritative time window of a record.

    Appointments (defenses, follow-ups) carry placeholder ``start``/``end``
    values; the real time is the user's reserved slot.

    Raises:
        DateParseError: If a date is malformed or the window ends before it
            starts
    """
    if raw.is_appointment and raw.slot.is_reserved:
        start, end = parse_slot(raw.slot.packed)
        personal_slot: bool | None = True
        duration = None
    else:
        start, end = parse_intranet_date(raw.start), parse_intranet_date(raw.end)
        personal_slot = False if raw.is_appointment else None
        duration = raw.nb_hours

    if end < start:
        raise DateParseError(f"Event ends before it starts: {start} > {end}")

    if personal_slot:
        minutes = round((end - start).total_seconds() / 60)
        duration = format_duration(minutes)
    return TimeSlot(start, end, personal_slot, duration)


def is_registered(raw: RawEvent) -> bool:
    """Registered via the per-event status or the legacy boolean flag."""
    return raw.registration.is_registered or raw.registered


def is_owned_by_user(raw: RawEvent) -> bool:
    """True if the user attends the event or holds an appointment slot."""
    return raw.registration.is_registered or raw.slot.is_reserved


def build_intra_link(raw: RawEvent, base_url: str = INTRA_BASE_URL) -> str:
    """Link to the activity page on the intranet."""
    return (
        f"{base_url}/module/{raw.scolaryear}/{raw.codemodule}/"
        f"{raw.codeinstance}/{raw.codeacti}"
    )


def build_description(
    raw: RawEvent,
    activity_title: str,
    slot: TimeSlot,
    registered: bool,
    base_url: str = INTRA_BASE_URL,
) -> str:
    """Assemble the description in a fixed field order."""
    lines = [
        f"Module: {raw.titlemodule}",
        f"Activity: {activity_title}",
    ]

    if raw.prof_inst:
        instructors = ", ".join(p.display_name for p in raw.prof_inst)
        lines.append(f"Instructor(s): {instructors}")

    if slot.duration:
        lines.append(f"Duration: {slot.duration}")

    if slot.personal_slot is True:
        lines.append("Slot: Personal slot reserved")
    elif slot.personal_slot is False:
        lines.append("Slot: NOT RESERVED - Book your slot!")

    lines.append(f"Registered: {'Yes' if registered else 'No'}")
    lines.append("")
    lines.append(f"Intra: {build_intra_link(raw, base_url)}")
    return "\n".join(lines)


def build_location(raw: RawEvent) -> str:
    """Room name if assigned, else the module instance location."""
    if raw.room and raw.room.code:
        return format_room_code(raw.room.code)
    return raw.instance_location or ""


def normalize(raw: RawEvent, title_prefix: str, base_url: str = INTRA_BASE_URL) -> CanonicalEvent:
    """Map one raw record to a canonical event.

    Raises:
        DateParseError: If a date or slot string is malformed
    """
    activity_title = clean_activity_title(raw.acti_title)
    slot = resolve_time_slot(raw)
    registered = is_registered(raw)

    if slot.personal_slot is False:
        title = f"{title_prefix}{SLOT_NOT_RESERVED_MARKER} {activity_title}"
    else:
        title = f"{title_prefix}{activity_title}"

    return CanonicalEvent(
        id=build_event_id(raw),
        title=title,
        description=build_description(raw, activity_title, slot, registered, base_url),
        location=build_location(raw),
        start_date=slot.start,
        end_date=slot.end,
        module=ModuleRef(
            code=raw.codemodule,
            instance=raw.codeinstance,
            title=raw.titlemodule,
        ),
        activity=ActivityRef(code=raw.codeacti, title=activity_title),
        event_code=raw.codeevent,
        semester=raw.semester,
        instructors=tuple(p.display_name for p in raw.prof_inst),
        is_registered=registered,
        is_past=raw.past,
    )


def normalize_all(
    records: Iterable[RawEvent],
    title_prefix: str,
    base_url: str = INTRA_BASE_URL,
    errors: list[str] | None = None,
) -> list[CanonicalEvent]:
    """Keep the records the user owns and normalize them.

    A record that fails to normalize is skipped; its error is logged and,
    when ``errors`` is given, appended to it as ``"<event id>: <message>"``.
    """
    records = list(records)
    owned = [raw for raw in records if is_owned_by_user(raw)]
    logger.info(f"Filtered {len(owned)} registered events from {len(records)} total")

    events = []
    for raw in owned:
        try:
            events.append(normalize(raw, title_prefix, base_url))
        except DateParseError as e:
            event_id = build_event_id(raw)
            logger.warning(f"Skipping {event_id}: {e}")
            if errors is not None:
                errors.append(f"{event_id}: {e}")
    return events
