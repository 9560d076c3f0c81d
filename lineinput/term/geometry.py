"""
Find out how wide the terminal is, by asking the terminal itself.

We ask for the cursor position, move the cursor as far right as it goes,
ask again, and move back. The column of the second answer is the width.
The answers arrive on the input stream, so the probe is fed one byte at a
time like everything else, and never reads by itself.
"""

import re
import time
import enum
import logging

from .errors import ProtocolTimeout


logger = logging.getLogger("lineinput")

QUERY_POSITION = b"\x1b[6n"
MOVE_FAR_RIGHT = b"\x1b[999C"

# Response: ESC [ rows ; cols R
CURSOR_POSITION_REPORT = re.compile(rb"\x1b\[(\d+);(\d+)R")

DEFAULT_MAX_BYTES = 256


class ProbeStep(enum.Enum):
    IDLE = 0
    AWAIT_SAVED_COLUMN = 1
    AWAIT_WIDTH = 2
    DONE = 3


def parse_position_report(data):
    """Return ``(row, column)`` from the first full report in data, or None."""
    m = CURSOR_POSITION_REPORT.search(data)
    if m is None:
        return None
    return int(m.group(1)), int(m.group(2))


class GeometryProbe:
    """One-shot column count discovery.

    Call ``start()`` once, then ``feed()`` each incoming byte until it
    returns the width. Bytes that are not part of a position report are
    collected and skipped. To not wait forever on a terminal that does not
    answer, at most ``max_bytes`` bytes are collected per query, and if a
    ``timeout`` (in seconds) is given, it is checked whenever a byte comes
    in. Either limit raises ProtocolTimeout.
    """

    def __init__(self, output, *, max_bytes=DEFAULT_MAX_BYTES, timeout=None):
        self._output = output
        self._max_bytes = max_bytes
        self._timeout = timeout
        self._step = ProbeStep.IDLE
        self._buf = bytearray()
        self._saved_column = None
        self._started_at = None
        self.width = None

    @property
    def done(self):
        return self._step is ProbeStep.DONE

    def start(self):
        self._step = ProbeStep.AWAIT_SAVED_COLUMN
        self._buf.clear()
        self._saved_column = None
        self._started_at = time.monotonic()
        self.width = None
        # Read current cursor position, to restore it later
        self._output.write(QUERY_POSITION)
        self._output.flush()

    def feed(self, byte):
        """Feed one byte; returns the width once known, else None."""
        if self._step not in (ProbeStep.AWAIT_SAVED_COLUMN, ProbeStep.AWAIT_WIDTH):
            raise RuntimeError(f"Geometry probe is not waiting for input ({self._step.name})")

        self._buf += byte
        self._check_limits()

        report = parse_position_report(self._buf)
        if report is None:
            return None
        self._buf.clear()
        column = report[1]

        if self._step is ProbeStep.AWAIT_SAVED_COLUMN:
            self._saved_column = column
            self._step = ProbeStep.AWAIT_WIDTH
            # Move to a column far, far away. The new position is the width.
            self._output.write(MOVE_FAR_RIGHT + QUERY_POSITION)
            self._output.flush()
            return None

        # Restore position
        self.width = column
        n = column - self._saved_column
        if n > 0:
            self._output.write(b"\x1b[%dD" % n)
            self._output.flush()
        self._step = ProbeStep.DONE
        logger.debug(f"geometry probe -> {column} columns")
        return column

    def _check_limits(self):
        if len(self._buf) > self._max_bytes:
            self._step = ProbeStep.IDLE
            raise ProtocolTimeout(
                f"No cursor position report in {self._max_bytes} bytes"
            )
        if self._timeout is not None:
            elapsed = time.monotonic() - self._started_at
            if elapsed > self._timeout:
                self._step = ProbeStep.IDLE
                raise ProtocolTimeout(
                    f"No cursor position report after {elapsed:.1f} seconds"
                )
