"""Authoritative event source."""

from epitech_sync.source.intranet import AuthCheck, EventSource, IntranetClient

__all__ = [
    "AuthCheck",
    "EventSource",
    "IntranetClient",
]
