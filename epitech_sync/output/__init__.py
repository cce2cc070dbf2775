"""Output layer for calendar exports."""

from epitech_sync.output.ics_writer import ICSWriter, export_range, filter_by_range, fold_line

__all__ = [
    "ICSWriter",
    "export_range",
    "filter_by_range",
    "fold_line",
]
