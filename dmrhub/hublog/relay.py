"""Per-category logger: bounded queue in front of a single relay thread.

Producers only ever touch the queue. The relay thread is the sole writer of
the category's sink, so lines reach the file (and the mirror stream, if any)
in the order they were enqueued, one whole line per write.
"""
from __future__ import annotations
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from loguru import logger

from ..common.constants import DEFAULT_LINE_FORMAT, QUEUE_CAPACITY, SINK_TOKEN_KEY
from ..common.logging import get_logger
from .caller import CallerTagger
from .errors import LoggerClosedError, QueueFullError
from .sink import LogSink

log = get_logger("hublog/relay")

_CLOSE = object()


class OverflowPolicy(str, Enum):
    """What ``enqueue`` does when the queue is at capacity."""

    BLOCK = "block"              # wait for the relay to make room (default)
    DROP_NEWEST = "drop_newest"  # discard the line being enqueued
    DROP_OLDEST = "drop_oldest"  # discard the oldest pending line
    REJECT = "reject"            # raise QueueFullError


@dataclass(frozen=True)
class LoggerStats:
    category: str
    path: Optional[str]
    fallback: bool
    pending: int
    written: int
    dropped: int
    failed: int
    closed: bool
    relay_alive: bool


class CategoryLogger:
    def __init__(
        self,
        sink: LogSink,
        capacity: int = QUEUE_CAPACITY,
        overflow: OverflowPolicy | str = OverflowPolicy.BLOCK,
        line_format: str = DEFAULT_LINE_FORMAT,
        tagger: Optional[CallerTagger] = None,
    ):
        if capacity < 1:
            raise ValueError(f"Queue capacity must be positive, got {capacity}")
        self.sink = sink
        self.category = sink.category
        self.capacity = capacity
        self.overflow = OverflowPolicy(overflow)
        self.tagger = tagger or CallerTagger()

        self._queue: "queue.Queue[Any]" = queue.Queue(maxsize=capacity)
        self._lock = threading.Lock()
        self._closed = False
        self._written = 0
        self._dropped = 0
        self._failed = 0

        token = f"{self.category.value}-{id(self):x}"
        self._writer = logger.bind(**{SINK_TOKEN_KEY: token})
        self._handler_ids: List[int] = [
            logger.add(
                stream,
                format=line_format,
                level=0,
                filter=lambda record, token=token: record["extra"].get(SINK_TOKEN_KEY) == token,
                colorize=False,
                enqueue=False,
                backtrace=False,
                diagnose=False,
                catch=False,
            )
            for stream in sink.streams()
        ]

        self._relay_thread = threading.Thread(
            target=self._relay, name=f"hublog-{self.category.value}", daemon=True
        )
        self._relay_thread.start()
        log.debug(f"Relay started for {self.category} -> {sink.path}")

    # producer side

    def enqueue(self, line: str) -> bool:
        """Queue a fully formatted line. Returns False if it was dropped."""
        with self._lock:
            if self._closed:
                raise LoggerClosedError(f"{self.category} logger is closed")
            if self.overflow is OverflowPolicy.BLOCK:
                # lock stays held while blocked so close() cannot post its
                # marker ahead of this line
                self._queue.put(line)
                return True
            try:
                self._queue.put_nowait(line)
                return True
            except queue.Full:
                pass
            if self.overflow is OverflowPolicy.REJECT:
                raise QueueFullError(f"{self.category} queue full ({self.capacity} pending)")
            if self.overflow is OverflowPolicy.DROP_NEWEST:
                self._dropped += 1
                return False
            # drop oldest: only the relay competes with us, and it only removes
            try:
                self._queue.get_nowait()
            except queue.Empty:
                pass
            else:
                self._dropped += 1
            self._queue.put_nowait(line)
            return True

    def write(self, caller: Any, message: str) -> bool:
        return self.enqueue(self.tagger.tagged(caller, message))

    def writef(self, caller: Any, fmt: str, *args: Any) -> bool:
        return self.write(caller, fmt % args if args else fmt)

    # relay side

    def _relay(self) -> None:
        while True:
            item = self._queue.get()
            if item is _CLOSE:
                return
            try:
                self._writer.info(item)
            except OSError as e:
                self._failed += 1
                log.error(f"Write to {self.category} sink {self.sink.path} failed: {e}")
                continue
            self._written += 1

    # lifecycle

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Drain pending lines, stop the relay, then close the sink."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            # queued behind every accepted line
            self._queue.put(_CLOSE)
        self._relay_thread.join()
        for handler_id in self._handler_ids:
            logger.remove(handler_id)
        self._handler_ids = []
        self.sink.close()
        log.debug(f"Relay for {self.category} closed after {self._written} lines")

    def stats(self) -> LoggerStats:
        return LoggerStats(
            category=self.category.value,
            path=str(self.sink.path) if self.sink.path is not None else None,
            fallback=self.sink.fallback,
            pending=self._queue.qsize(),
            written=self._written,
            dropped=self._dropped,
            failed=self._failed,
            closed=self._closed,
            relay_alive=self._relay_thread.is_alive(),
        )

    def __repr__(self) -> str:
        return f"CategoryLogger({self.category.value!r}, capacity={self.capacity}, overflow={self.overflow.value})"
