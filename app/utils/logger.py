"""
Logging utilities with size-based file rotation.

Key Features:
    - Console and file handlers sharing one log file per process run
    - Date-based log directories with automatic cleanup of old runs
    - Graceful handling of rotation failures (e.g. locked files on Windows)
"""

import datetime
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOG_FILE_BASENAME = "bookmarks_app"

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Log rotation settings
MAX_LOG_SIZE_MB = 5
MAX_LOG_SIZE_BYTES = MAX_LOG_SIZE_MB * 1024 * 1024
MAX_BACKUP_COUNT = 10

# Every logger in the process writes to the same file
_run_started = datetime.datetime.now()
_date_dir = LOG_DIR / _run_started.strftime("%Y-%m-%d")
_date_dir.mkdir(exist_ok=True)
_GLOBAL_LOG_FILE = (
    _date_dir / f"{LOG_FILE_BASENAME}_{_run_started.strftime('%Y-%m-%d_%H-%M-%S')}.log"
)

_shared_file_handler: logging.Handler | None = None


class SafeRotatingFileHandler(RotatingFileHandler):
    """Size-based rotation handler that keeps logging when rollover fails."""

    def doRollover(self):
        try:
            super().doRollover()
        except (OSError, PermissionError) as e:
            # The logger itself cannot be used from inside a handler
            sys.stderr.write(
                f"Log rotation failed: {e}. Continuing with current log file.\n"
            )
            sys.stderr.flush()


def _get_log_level(level_str: str) -> int:
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(level_str.upper(), logging.INFO)


def _get_file_handler() -> logging.Handler:
    global _shared_file_handler
    if _shared_file_handler is None:
        _shared_file_handler = SafeRotatingFileHandler(
            _GLOBAL_LOG_FILE,
            maxBytes=MAX_LOG_SIZE_BYTES,
            backupCount=MAX_BACKUP_COUNT,
            encoding="utf-8",
            delay=True,
        )
        _shared_file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        cleanup_old_logs(keep_days=7)
    return _shared_file_handler


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """Set up logger with both console and file handlers."""
    logger = logging.getLogger(name)

    log_level = _get_log_level(level or DEFAULT_LOG_LEVEL)
    logger.setLevel(log_level)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))

    logger.addHandler(console_handler)
    logger.addHandler(_get_file_handler())

    return logger


def list_log_files() -> list[Path]:
    """Return a list of all log files in the log directory."""
    all_files = []
    for date_dir in LOG_DIR.iterdir():
        if date_dir.is_dir():
            all_files.extend(date_dir.glob(f"{LOG_FILE_BASENAME}_*.log"))
            all_files.extend(date_dir.glob(f"{LOG_FILE_BASENAME}_*.log.*"))
    return all_files


def cleanup_old_logs(keep_days: int = 7):
    """Delete dated log directories older than ``keep_days``."""
    cutoff_time = datetime.datetime.now() - datetime.timedelta(days=keep_days)
    deleted_count = 0
    failed_count = 0

    for date_dir in LOG_DIR.iterdir():
        if not date_dir.is_dir():
            continue
        try:
            dir_date = datetime.datetime.strptime(date_dir.name, "%Y-%m-%d")
        except ValueError:
            # Not one of ours
            continue
        if dir_date >= cutoff_time:
            continue

        for log_file in date_dir.iterdir():
            try:
                log_file.unlink()
                deleted_count += 1
            except (PermissionError, FileNotFoundError):
                failed_count += 1
        try:
            date_dir.rmdir()
        except OSError:
            # Directory may not be empty due to failed deletions
            pass

    if deleted_count > 0 or failed_count > 0:
        print(
            f"Log cleanup completed: {deleted_count} files deleted, {failed_count} files failed to delete"
        )
