"""Log file resolution: system directory first, working directory as fallback.

On server platforms a category logs to ``<LOG_DIR>/<app>.<category>.log``.
The directory is created (and chowned to the running user) when missing.
Any failure along that path degrades to ``<LOCAL_LOG_DIR>/<app>.<category>.log``;
only a failure to open the local file is fatal.
"""
from __future__ import annotations
import os
import sys
import threading
from pathlib import Path
from typing import IO, Iterator, Optional, Tuple

from ..common.config import SETTINGS, Settings
from ..common.constants import LOCAL_ONLY_PLATFORMS, LOG_DIR_MODE, LOG_FILE_MODE, LOG_SUFFIX
from ..common.logging import get_logger
from .categories import CategoryPolicy, LogCategory

log = get_logger("hublog/sink")


def log_file_name(app_name: str, category: LogCategory) -> str:
    return f"{app_name}.{category.value}{LOG_SUFFIX}"

def preferred_log_path(app_name: str, category: LogCategory, log_dir: str) -> Path:
    return Path(log_dir) / log_file_name(app_name, category)

def local_log_path(app_name: str, category: LogCategory, local_dir: str = ".") -> Path:
    return Path(local_dir) / log_file_name(app_name, category)

def _opener(path, flags):
    return os.open(path, flags, LOG_FILE_MODE)

def open_log_file(path: Path) -> IO[str]:
    """Open read-write, create if missing, append only (never truncates)."""
    return open(path, "a+", buffering=1, encoding="utf-8", opener=_opener)

def _ensure_log_dir(log_dir: Path) -> None:
    log_dir.mkdir(mode=LOG_DIR_MODE)
    os.chown(log_dir, os.getuid(), os.getgid())

def _fatal(message: str) -> None:
    """End the process. SystemExit only stops the calling thread off the main one."""
    log.critical(message)
    if threading.current_thread() is threading.main_thread():
        raise SystemExit(message)
    # the diagnostic sink is queued and will not flush across os._exit
    sys.stderr.write(message + "\n")
    sys.stderr.flush()
    os._exit(1)

def _open_local(path: Path) -> IO[str]:
    try:
        return open_log_file(path)
    except OSError as e:
        _fatal(f"Failed to create log file: {path}:\n{e}")

def resolve_log_file(
    category: LogCategory,
    settings: Settings = SETTINGS,
    platform: Optional[str] = None,
) -> Tuple[Path, IO[str], bool]:
    """Return ``(path, handle, used_fallback)`` for a category."""
    platform = platform or sys.platform
    local = local_log_path(settings.APP_NAME, category, settings.LOCAL_LOG_DIR)
    if platform.startswith(LOCAL_ONLY_PLATFORMS):
        return local, _open_local(local), False

    log_dir = Path(settings.LOG_DIR)
    preferred = preferred_log_path(settings.APP_NAME, category, settings.LOG_DIR)
    if not log_dir.exists():
        try:
            _ensure_log_dir(log_dir)
        except OSError as e:
            log.warning(f"Cannot prepare {log_dir} ({e}); logging {category} to {local}")
            return local, _open_local(local), True
    try:
        handle = open_log_file(preferred)
    except OSError as e:
        log.warning(f"Cannot open {preferred} ({e}); logging {category} to {local}")
        return local, _open_local(local), True
    log.debug(f"Logging {category} to {preferred}")
    return preferred, handle, False


class LogSink:
    """One open destination for a category, plus an optional mirror stream.

    The file handle is owned here and closed once by ``close()``; the
    mirror (standard error by default) is borrowed and left open.
    """

    def __init__(
        self,
        category: LogCategory,
        handle: IO[str],
        path: Optional[Path] = None,
        mirror: Optional[IO[str]] = None,
        fallback: bool = False,
    ):
        self.category = category
        self.handle = handle
        self.path = path
        self.mirror = mirror
        self.fallback = fallback
        self._closed = False

    @classmethod
    def open(
        cls,
        category: LogCategory,
        settings: Settings = SETTINGS,
        policy: CategoryPolicy = CategoryPolicy(),
        mirror: Optional[IO[str]] = None,
        platform: Optional[str] = None,
    ) -> "LogSink":
        path, handle, fallback = resolve_log_file(category, settings, platform)
        if policy.mirror_stderr:
            mirror = mirror if mirror is not None else sys.stderr
        else:
            mirror = None
        return cls(category, handle, path=path, mirror=mirror, fallback=fallback)

    def streams(self) -> Iterator[IO[str]]:
        yield self.handle
        if self.mirror is not None:
            yield self.mirror

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.handle.flush()
        finally:
            self.handle.close()

    def __repr__(self) -> str:
        return f"LogSink({self.category.value!r}, path={str(self.path)!r}, fallback={self.fallback})"
