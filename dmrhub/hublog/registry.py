"""Lifecycle-scoped table of category loggers.

Build one registry at process start, hand it to whatever needs to log, and
call ``close_all()`` once at exit, after producers have stopped.
"""
from __future__ import annotations
import threading
from typing import Dict, IO, List, Mapping, Optional

from ..common.config import SETTINGS, Settings
from ..common.logging import get_logger
from .caller import CallerTagger
from .categories import DEFAULT_POLICIES, CategoryPolicy, LogCategory, parse_category
from .errors import LoggerClosedError, UnknownCategoryError
from .relay import CategoryLogger, LoggerStats
from .sink import LogSink

log = get_logger("hublog/registry")


class LoggerRegistry:
    def __init__(
        self,
        settings: Settings = SETTINGS,
        policies: Optional[Mapping[LogCategory, CategoryPolicy]] = None,
        mirror: Optional[IO[str]] = None,
        platform: Optional[str] = None,
    ):
        self.settings = settings
        self.policies = dict(DEFAULT_POLICIES if policies is None else policies)
        self.tagger = CallerTagger(settings.CALLER_PREFIX)
        self._mirror = mirror
        self._platform = platform
        self._loggers: Dict[LogCategory, CategoryLogger] = {}
        self._lock = threading.Lock()
        self._closed = False

    def get(self, category) -> CategoryLogger:
        """Return the category's logger, building it on first use."""
        category = parse_category(category)
        policy = self.policies.get(category)
        if policy is None:
            raise UnknownCategoryError(f"No sink policy registered for {category}")
        with self._lock:
            if self._closed:
                raise LoggerClosedError("Logger registry is closed")
            existing = self._loggers.get(category)
            if existing is not None:
                return existing
            created = self._build(category, policy)
            self._loggers[category] = created
            return created

    def _build(self, category: LogCategory, policy: CategoryPolicy) -> CategoryLogger:
        sink = LogSink.open(
            category,
            self.settings,
            policy,
            mirror=self._mirror,
            platform=self._platform,
        )
        return CategoryLogger(
            sink,
            capacity=self.settings.LOG_QUEUE_CAPACITY,
            overflow=self.settings.LOG_OVERFLOW_POLICY,
            line_format=self.settings.LOG_LINE_FORMAT,
            tagger=self.tagger,
        )

    def access(self) -> CategoryLogger:
        return self.get(LogCategory.ACCESS)

    def error(self) -> CategoryLogger:
        return self.get(LogCategory.ERROR)

    def categories(self) -> List[LogCategory]:
        with self._lock:
            return list(self._loggers)

    def stats(self) -> List[LoggerStats]:
        with self._lock:
            loggers = list(self._loggers.values())
        return [lg.stats() for lg in loggers]

    @property
    def closed(self) -> bool:
        return self._closed

    def close_all(self) -> None:
        """Drain and close every logger built so far. Meant to run once."""
        with self._lock:
            if self._closed:
                log.warning("close_all called on an already closed registry")
                return
            self._closed = True
            loggers = list(self._loggers.values())
        for lg in loggers:
            lg.close()

    def __enter__(self) -> "LoggerRegistry":
        return self

    def __exit__(self, *exc) -> None:
        self.close_all()
