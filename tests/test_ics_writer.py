"""Tests for the ICS writer."""

from datetime import datetime, timezone

import pytest
from icalendar import Calendar as ICalendar

from conftest import make_event
from epitech_sync.constants import PARIS_TZ
from epitech_sync.exceptions import ExportError
from epitech_sync.models.event import ActivityRef, CanonicalEvent, ModuleRef
from epitech_sync.output.ics_writer import ICSWriter, export_range, filter_by_range, fold_line

STAMP = datetime(2025, 2, 1, 12, 0, tzinfo=timezone.utc)


def encode(*events: CanonicalEvent) -> str:
    return ICSWriter().encode(list(events), stamp=STAMP)


def unfold(content: str) -> list[str]:
    return content.replace("\r\n ", "").split("\r\n")


def test_document_structure():
    """Document has calendar header, timezone and one event block."""
    content = encode(make_event())
    lines = unfold(content)

    assert lines[0] == "BEGIN:VCALENDAR"
    assert "VERSION:2.0" in lines
    assert "PRODID:-//Epitech Calendar Sync//EN" in lines
    assert "CALSCALE:GREGORIAN" in lines
    assert "METHOD:PUBLISH" in lines
    assert "X-WR-CALNAME:Epitech Calendar" in lines
    assert "X-WR-TIMEZONE:Europe/Paris" in lines
    assert lines.count("BEGIN:VEVENT") == 1
    assert lines[-2] == "END:VCALENDAR"


def test_every_line_ends_with_crlf():
    """Lines use CRLF and the document ends with one."""
    content = encode(make_event())

    assert content.endswith("END:VCALENDAR\r\n")
    assert "\n" not in content.replace("\r\n", "")


def test_timezone_block():
    """VTIMEZONE carries both Paris DST rules."""
    lines = unfold(encode(make_event()))

    assert "BEGIN:VTIMEZONE" in lines
    assert "TZID:Europe/Paris" in lines
    assert "BEGIN:DAYLIGHT" in lines
    assert "BEGIN:STANDARD" in lines
    assert "TZOFFSETFROM:+0100" in lines
    assert "TZOFFSETTO:+0200" in lines
    assert "TZNAME:CEST" in lines
    assert "TZNAME:CET" in lines
    rrules = [line for line in lines if line.startswith("RRULE:")]
    assert len(rrules) == 2
    assert any("BYMONTH=3" in rule and "BYDAY=-1SU" in rule for rule in rrules)
    assert any("BYMONTH=10" in rule and "BYDAY=-1SU" in rule for rule in rrules)


def test_event_properties():
    """VEVENT uses local wall time with TZID, UTC stamp and stable UID."""
    lines = unfold(encode(make_event("epitech-acti-1-event-1")))

    assert "UID:epitech-acti-1-event-1@epitech.eu" in lines
    assert "DTSTART;TZID=Europe/Paris:20250301T090000" in lines
    assert "DTEND;TZID=Europe/Paris:20250301T120000" in lines
    assert "DTSTAMP:20250201T120000Z" in lines
    assert "CATEGORIES:EPITECH,Innovation" in lines
    assert "STATUS:CONFIRMED" in lines
    assert "TRANSP:OPAQUE" in lines
    assert "SEQUENCE:0" in lines


def test_utc_instants_are_written_as_paris_time():
    """Instants in another zone are converted to Paris wall time."""
    event = make_event(
        start_date=datetime(2025, 7, 1, 8, 0, tzinfo=timezone.utc),
        end_date=datetime(2025, 7, 1, 9, 0, tzinfo=timezone.utc),
    )
    lines = unfold(encode(event))

    assert "DTSTART;TZID=Europe/Paris:20250701T100000" in lines


def test_unregistered_event_is_tentative():
    """Unregistered events are exported as tentative."""
    lines = unfold(encode(make_event(is_registered=False)))
    assert "STATUS:TENTATIVE" in lines


def test_text_escaping_and_folding():
    """Special characters are escaped and long lines folded at 75 octets."""
    event = make_event(
        title="EPITECH - Review, part 1; final",
        description="Module: Innovation\n" + "Activité très longue " * 10,
    )
    content = encode(event)

    for physical in content.split("\r\n"):
        assert len(physical.encode("utf-8")) <= 75

    lines = unfold(content)
    assert "SUMMARY:EPITECH - Review\\, part 1\\; final" in lines
    description = next(line for line in lines if line.startswith("DESCRIPTION:"))
    assert description.startswith("DESCRIPTION:Module: Innovation\\nActivité")


def test_output_parses_back():
    """icalendar can read the exported document."""
    cal = ICalendar.from_ical(encode(make_event("A"), make_event("B")))
    uids = [str(c.get("uid")) for c in cal.walk("VEVENT")]
    assert uids == ["A@epitech.eu", "B@epitech.eu"]


def test_encode_is_pure():
    """Same events and stamp give identical documents."""
    assert encode(make_event()) == encode(make_event())


def test_default_stamp_is_event_start():
    """Without an explicit stamp DTSTAMP is the event start in UTC."""
    content = ICSWriter().encode([make_event()])
    assert "DTSTAMP:20250301T080000Z" in unfold(content)


def test_empty_calendar():
    """No events still yields a valid calendar."""
    lines = unfold(encode())
    assert "BEGIN:VEVENT" not in lines
    assert "BEGIN:VTIMEZONE" in lines


def test_bad_date_raises_export_error():
    """An unresolvable date aborts the export."""
    broken = CanonicalEvent.model_construct(
        id="epitech-x-y",
        title="Broken",
        start_date="not a date",
        end_date="not a date",
        module=ModuleRef(code="M"),
        activity=ActivityRef(code="A"),
    )

    with pytest.raises(ExportError):
        ICSWriter().encode([broken], stamp=STAMP)


def test_write_creates_file(tmp_path):
    """write() stores the UTF-8 document."""
    path = ICSWriter().write([make_event()], tmp_path / "out" / "cal.ics", stamp=STAMP)

    assert path.exists()
    assert path.read_bytes().startswith(b"BEGIN:VCALENDAR\r\n")


def test_filter_by_range_is_inclusive():
    """Events starting on either bound are kept."""
    early = make_event("early", start_date=datetime(2025, 3, 1, 9, 0, tzinfo=PARIS_TZ))
    late = make_event(
        "late",
        start_date=datetime(2025, 3, 10, 9, 0, tzinfo=PARIS_TZ),
        end_date=datetime(2025, 3, 10, 10, 0, tzinfo=PARIS_TZ),
    )
    outside = make_event(
        "outside",
        start_date=datetime(2025, 4, 1, 9, 0, tzinfo=PARIS_TZ),
        end_date=datetime(2025, 4, 1, 10, 0, tzinfo=PARIS_TZ),
    )

    kept = filter_by_range(
        [early, late, outside],
        datetime(2025, 3, 1, 9, 0, tzinfo=PARIS_TZ),
        datetime(2025, 3, 10, 9, 0, tzinfo=PARIS_TZ),
    )
    assert [e.id for e in kept] == ["early", "late"]


def test_fold_line_short_line_untouched():
    assert fold_line("SUMMARY:short") == "SUMMARY:short"


def test_fold_line_never_splits_multibyte_characters():
    """Folding backs off to a character boundary."""
    line = "X" * 74 + "é" + "Y" * 100
    folded = fold_line(line)
    physical = folded.split("\r\n")

    assert physical[0] == "X" * 74
    assert physical[1].startswith(" é")
    assert all(len(p.encode("utf-8")) <= 75 for p in physical)
    assert folded.replace("\r\n ", "") == line


def test_export_range_encodes_only_matching_events():
    inside = make_event("inside")
    outside = make_event(
        "outside",
        start_date=datetime(2025, 6, 1, 9, 0, tzinfo=PARIS_TZ),
        end_date=datetime(2025, 6, 1, 10, 0, tzinfo=PARIS_TZ),
    )

    content = export_range(
        [inside, outside],
        datetime(2025, 3, 1, tzinfo=PARIS_TZ),
        datetime(2025, 3, 2, tzinfo=PARIS_TZ),
        stamp=STAMP,
    )

    assert "UID:inside@epitech.eu" in content
    assert "UID:outside@epitech.eu" not in content


def test_long_multibyte_summary_unfolds_to_escaped_title():
    """A SUMMARY over 75 octets with accents folds and unfolds losslessly."""
    title = "EPITECH - Soutenance intermédiaire, évaluation; présentation du projet été " * 2
    content = encode(make_event(title=title))

    summary_start = content.index("SUMMARY:")
    summary_end = content.index("\r\n", summary_start)
    assert content[summary_end + 2] == " "

    for physical in content.split("\r\n"):
        assert len(physical.encode("utf-8")) <= 75

    escaped = title.replace(",", "\\,").replace(";", "\\;")
    assert f"SUMMARY:{escaped}" in unfold(content)
