"""CLI package for Epitech calendar sync."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from epitech_sync.config import SyncConfig

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

# Transport libraries log every request at INFO and may echo bearer headers at DEBUG
NOISY_LOGGERS = ("httpx", "httpcore")


def console_level(verbose: bool = False, quiet: bool = False) -> int:
    """Console threshold for the given flags; quiet wins over verbose."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, config: SyncConfig | None = None
) -> None:
    """Log everything to a rotating file and warnings (or more) to stderr.

    The file keeps DEBUG detail across runs, bounded by ``log_max_bytes``
    and ``log_backup_count``. The console stays quiet unless asked.

    Args:
        verbose: If True, set console to INFO level
        quiet: If True, set console to ERROR level only
        config: Optional SyncConfig for log directory/rotation settings
    """
    if config is None:
        config = SyncConfig.from_env()

    config.log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        config.log_dir / config.log_filename,
        maxBytes=config.log_max_bytes,
        backupCount=config.log_backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    console_handler.setLevel(console_level(verbose, quiet))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def main() -> None:
    """Main entry point for the CLI."""
    from epitech_sync.exceptions import SyncError
    from epitech_sync_cli.parser import app

    try:
        app()
    except SyncError as e:
        logging.getLogger(__name__).error(f"Sync error: {e}")
        sys.exit(1)


__all__ = ["console_level", "main", "setup_logging"]
