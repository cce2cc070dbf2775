"""Mirror the Epitech intranet planning into remote calendars and ICS files."""

__version__ = "0.1.0"
