"""Pytest bootstrap and shared fixtures.

Make ``import lineinput`` resolve to the local package, and provide a
recording output plus a session that already got past the geometry probe.
"""

import sys
from pathlib import Path

import pytest


PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


from lineinput import LineInput, Status  # noqa: E402


class Recorder:
    """Stands in for the write and flush functions of a terminal."""

    def __init__(self):
        self.writes = []
        self.flushes = 0

    def write(self, data):
        self.writes.append(bytes(data))
        return len(data)

    def flush(self):
        self.flushes += 1

    @property
    def data(self):
        return b"".join(self.writes)

    def clear(self):
        self.writes.clear()
        self.flushes = 0


def position_report(row, column):
    return b"\x1b[%d;%dR" % (row, column)


def feed_all(line_input, data):
    """Feed bytes one by one, return the last result."""
    result = None
    for b in data:
        result = line_input.feed(b)
    return result


def start_session(line_input, prompt="> ", columns=80, saved_column=1):
    line_input.start(prompt)
    feed_all(line_input, position_report(5, saved_column))
    result = feed_all(line_input, position_report(5, columns))
    assert result.status is Status.PENDING
    assert line_input.columns == columns


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def session(recorder):
    line_input = LineInput(recorder.write, recorder.flush, tty_fd=0)
    start_session(line_input)
    recorder.clear()
    return line_input
