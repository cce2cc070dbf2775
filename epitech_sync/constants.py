"""Shared constants for Epitech calendar sync."""

from zoneinfo import ZoneInfo

# Intranet
INTRA_BASE_URL = "https://intra.epitech.eu"
INTRA_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SESSION_COOKIE_NAME = "user"

# Every intranet date is wall-clock time in Paris
TIMEZONE_NAME = "Europe/Paris"
PARIS_TZ = ZoneInfo(TIMEZONE_NAME)

# Canonical ids and ICS UIDs
EVENT_ID_PREFIX = "epitech-"
UID_DOMAIN = "epitech.eu"

# Title marker for appointments without a reserved slot
SLOT_NOT_RESERVED_MARKER = "[SLOT NOT RESERVED]"

# ICS export
ICS_PRODID = "-//Epitech Calendar Sync//EN"
ICS_CALENDAR_NAME = "Epitech Calendar"
ICS_CATEGORY = "EPITECH"
ICS_FILENAME_PATTERN = "epitech-calendar-{date}.ics"

# Persistence keys
SETTINGS_KEY = "epitech_calendar_settings"
SYNC_STATUS_KEY = "epitech_sync_status"
CACHED_EVENTS_KEY = "epitech_cached_events"

SYNC_IN_PROGRESS_MESSAGE = "Sync already in progress"
