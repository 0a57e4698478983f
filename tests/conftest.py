import threading

import pytest

from dmrhub.common.config import Settings
from dmrhub.hublog.registry import LoggerRegistry


class RecordingStream:
    """Text stream stand-in that keeps every write."""

    def __init__(self):
        self.writes = []
        self.closed = False
        self._lock = threading.Lock()

    def write(self, s):
        with self._lock:
            self.writes.append(s)
        return len(s)

    def flush(self):
        pass

    def close(self):
        self.closed = True

    @property
    def lines(self):
        return "".join(self.writes).splitlines()


class GatedStream(RecordingStream):
    """Blocks every write until ``gate`` is set."""

    def __init__(self):
        super().__init__()
        self.gate = threading.Event()
        self.entered = threading.Event()

    def write(self, s):
        self.entered.set()
        assert self.gate.wait(5), "gate never opened"
        return super().write(s)


@pytest.fixture
def settings(tmp_path):
    (tmp_path / "var").mkdir()
    (tmp_path / "local").mkdir()
    return Settings(
        APP_NAME="DMRHub",
        LOG_DIR=str(tmp_path / "var" / "DMRHub"),
        LOCAL_LOG_DIR=str(tmp_path / "local"),
        LOG_QUEUE_CAPACITY=200,
        LOG_OVERFLOW_POLICY="block",
        CALLER_PREFIX="dmrhub.",
    )


@pytest.fixture
def stderr_stream():
    return RecordingStream()


@pytest.fixture
def registry(settings, stderr_stream):
    logs = LoggerRegistry(settings, mirror=stderr_stream, platform="linux")
    yield logs
    if not logs.closed:
        logs.close_all()


def read_lines(path):
    with open(path, encoding="utf-8") as f:
        return f.read().splitlines()


def messages(lines):
    """Strip the leading 'YYYY/MM/DD HH:MM:SS ' timestamp."""
    return [line.split(" ", 2)[2] for line in lines]
