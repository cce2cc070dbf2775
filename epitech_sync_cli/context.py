"""Shared CLI context with lazy-initialized dependencies."""

import asyncio
from typing import Awaitable, Callable, TypeVar

from epitech_sync.config import SyncConfig
from epitech_sync.notifications import ConsoleNotifier
from epitech_sync.remote.google import GOOGLE_CALENDAR_API, GoogleCalendarAdapter
from epitech_sync.remote.outlook import GRAPH_API, OutlookCalendarAdapter
from epitech_sync.remote.transport import BearerTransport, static_token
from epitech_sync.source.intranet import IntranetClient
from epitech_sync.storage.store import JsonFileStore
from epitech_sync.storage.sync_storage import SyncStorage
from epitech_sync.sync_manager import SyncManager

T = TypeVar("T")


class CLIContext:
    """Shared context with lazy-initialized dependencies for CLI commands.

    HTTP clients are created on first use inside the running event loop and
    released by ``aclose()``.

    Usage:
        ctx = CLIContext()
        result = ctx.run(lambda c: c.manager.perform_sync(manual=True))
    """

    def __init__(self, verbose: bool = False, quiet: bool = False):
        """Initialize CLI context.

        Args:
            verbose: If True, enable info logging
            quiet: If True, suppress non-error output
        """
        self.verbose = verbose
        self.quiet = quiet

        # Lazy-loaded dependencies
        self._config: SyncConfig | None = None
        self._storage: SyncStorage | None = None
        self._source: IntranetClient | None = None
        self._transports: dict[str, BearerTransport] = {}
        self._manager: SyncManager | None = None

    @property
    def config(self) -> SyncConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            self._config = SyncConfig.from_env()
        return self._config

    @property
    def storage(self) -> SyncStorage:
        """Get settings/status storage (lazy-loaded)."""
        if self._storage is None:
            self._storage = SyncStorage(JsonFileStore(self.config.store_path))
        return self._storage

    @property
    def source(self) -> IntranetClient:
        """Get intranet client (lazy-loaded)."""
        if self._source is None:
            self._source = IntranetClient(
                base_url=self.config.intra_base_url,
                session_cookie=self.config.session_cookie,
                timeout=self.config.http_timeout,
            )
        return self._source

    def _transport(self, service: str, label: str, base_url: str, token: str | None) -> BearerTransport:
        if service not in self._transports:
            self._transports[service] = BearerTransport(
                label,
                base_url,
                static_token(label, token),
                timeout=self.config.http_timeout,
            )
        return self._transports[service]

    @property
    def manager(self) -> SyncManager:
        """Get sync manager wired to the configured services (lazy-loaded)."""
        if self._manager is None:
            google = self._transport(
                "google", "Google", GOOGLE_CALENDAR_API, self.config.google_access_token
            )
            outlook = self._transport(
                "outlook", "Outlook", GRAPH_API, self.config.outlook_access_token
            )
            self._manager = SyncManager(
                source=self.source,
                storage=self.storage,
                adapters={
                    "google": GoogleCalendarAdapter(google),
                    "outlook": OutlookCalendarAdapter(outlook),
                },
                notifier=ConsoleNotifier(),
                intra_base_url=self.config.intra_base_url,
            )
        return self._manager

    async def aclose(self) -> None:
        """Close HTTP clients and drop the objects holding them."""
        if self._source is not None:
            await self._source.aclose()
        for transport in self._transports.values():
            await transport.aclose()
        self._source = None
        self._transports = {}
        self._manager = None

    def run(self, func: Callable[["CLIContext"], Awaitable[T]]) -> T:
        """Run an async operation against this context, then close clients."""

        async def runner() -> T:
            try:
                return await func(self)
            finally:
                await self.aclose()

        return asyncio.run(runner())


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context."""
    global _ctx
    _ctx = ctx
