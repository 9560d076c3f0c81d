import os
import sys
import enum
import logging
import contextlib
from typing import NamedTuple, Optional

from .buffer import LineBuffer
from .render import render_line, clear_screen
from .term._context import TerminalController
from .term.geometry import GeometryProbe, DEFAULT_MAX_BYTES
from .term.input_keys import Command, InputDecoder
from .term.io import TerminalOutput


logger = logging.getLogger("lineinput")

# Carriage return, then erase the whole line
ERASE_LINE = b"\r\x1b[2K"

UNSUPPORTED_TERMINALS = {"dumb", "cons25", "emacs"}


def is_unsupported_terminal(environ=None):
    """Whether $TERM names a terminal that does not speak the escape codes we use."""
    environ = os.environ if environ is None else environ
    return environ.get("TERM", "").lower() in UNSUPPORTED_TERMINALS


class Status(enum.Enum):
    PENDING = "pending"
    DONE = "done"
    INTERRUPTED = "interrupted"
    END_OF_INPUT = "end_of_input"


class Phase(enum.Enum):
    IDLE = "idle"
    PROBING_GEOMETRY = "probing_geometry"
    EDITING = "editing"
    DONE = "done"
    INTERRUPTED = "interrupted"
    END_OF_INPUT = "end_of_input"


class FeedResult(NamedTuple):
    status: Status
    line: Optional[str] = None


PENDING = FeedResult(Status.PENDING)

# How each edit command acts on the buffer
BUFFER_ACTIONS = {
    Command.MOVE_LEFT: LineBuffer.move_left,
    Command.MOVE_RIGHT: LineBuffer.move_right,
    Command.MOVE_HOME: LineBuffer.move_home,
    Command.MOVE_END: LineBuffer.move_end,
    Command.DELETE_FORWARD: LineBuffer.delete_forward,
    Command.BACKSPACE: LineBuffer.backspace,
    Command.KILL_TO_END: LineBuffer.kill_to_end,
    Command.CLEAR_LINE: LineBuffer.clear,
    Command.DELETE_WORD: LineBuffer.delete_word,
    Command.TRANSPOSE: LineBuffer.transpose,
}


class LineInput:
    """An editing session that reads one line at a time.

    The session does not read input by itself. The caller calls ``start()``
    and then passes every input byte to ``feed()``, until it returns a
    status other than PENDING. The terminal must be in raw mode meanwhile,
    see ``wrap()`` and ``raw_mode()``.

    The output goes through ``write`` and ``flush``. If ``fd`` is given,
    these are called as ``write(fd, data)`` and ``flush(fd)``, so that e.g.
    ``LineInput(os.write, None, 1)`` works. Raw mode is set on ``tty_fd``,
    which defaults to ``fd``, or to stdin if that is None too.
    """

    def __init__(
        self,
        write,
        flush=None,
        fd=None,
        *,
        tty_fd=None,
        encoding="utf-8",
        probe_max_bytes=DEFAULT_MAX_BYTES,
        probe_timeout=None,
    ):
        if tty_fd is None:
            tty_fd = fd if fd is not None else sys.__stdin__
        self._output = TerminalOutput(write, flush, fd)
        self._terminal = TerminalController(tty_fd)
        self._encoding = encoding
        self._probe = GeometryProbe(
            self._output, max_bytes=probe_max_bytes, timeout=probe_timeout
        )
        self._decoder = InputDecoder()

        self.prompt = ""
        self.buffer = LineBuffer()
        self.columns = -1
        self._phase = Phase.IDLE

    @property
    def phase(self):
        return self._phase

    @property
    def raw_mode_active(self):
        return self._terminal.active

    # %% Raw mode

    def configure(self):
        """Enter raw mode. Does nothing if already in raw mode."""
        self._terminal.acquire()

    def restore(self):
        """Leave raw mode. Does nothing if not in raw mode."""
        self._terminal.release()

    def wrap(self, body, *args, **kwargs):
        """Call ``body`` with the terminal in raw mode.

        The terminal is restored and the current line erased afterwards,
        also when ``body`` raises. Any error is raised again after cleaning up.
        """
        self.configure()
        try:
            return body(*args, **kwargs)
        finally:
            self._leave_raw_mode()

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager version of ``wrap()``."""
        self.configure()
        try:
            yield self
        finally:
            self._leave_raw_mode()

    def _leave_raw_mode(self):
        try:
            self.restore()
        finally:
            self._output.write(ERASE_LINE)
            self._output.flush()

    # %% Session

    def start(self, prompt=None):
        """Begin reading a new line. Without a prompt the previous one is reused."""
        if prompt is not None:
            self.prompt = prompt
        self.buffer = LineBuffer()
        self.columns = -1
        self._decoder.reset()
        self._phase = Phase.PROBING_GEOMETRY
        logger.debug(f"start({self.prompt!r})")
        self._probe.start()

    def feed(self, byte):
        """Feed one input byte and return a FeedResult.

        ``byte`` is an int, a bytes object of length one, or None (or b"")
        to signal the end of the input stream.
        """
        if byte is not None and not isinstance(byte, int):
            if len(byte) > 1:
                raise ValueError(f"feed() takes a single byte, got {byte!r}")
            byte = byte[0] if byte else None
        elif isinstance(byte, int) and not 0 <= byte <= 255:
            raise ValueError(f"Not a byte value: {byte}")

        phase = self._phase
        logger.debug(f"feed({byte!r}) in {phase.value}")

        if phase is Phase.PROBING_GEOMETRY:
            if byte is None:
                return self._finish(Phase.END_OF_INPUT, FeedResult(Status.END_OF_INPUT))
            return self._feed_probe(byte)
        elif phase is Phase.EDITING:
            if byte is None:
                return self._finish(Phase.END_OF_INPUT, FeedResult(Status.END_OF_INPUT))
            return self._feed_editor(byte)
        else:
            raise RuntimeError(f"Cannot feed input while {phase.value}, call start() first.")

    def _feed_probe(self, byte):
        try:
            columns = self._probe.feed(bytes((byte,)))
        except Exception:
            self._phase = Phase.IDLE
            raise
        if columns is None:
            return PENDING
        self.columns = columns
        self._phase = Phase.EDITING
        self.refresh()
        return PENDING

    def _feed_editor(self, byte):
        commands = self._decoder.decode(byte, line_empty=not len(self.buffer))
        result = PENDING
        for edit in commands:
            result = self._apply(edit)
            if result.status is not Status.PENDING:
                break
        logger.debug(f"buf = {self.buffer.text!r}")
        return result

    def _apply(self, edit):
        command = edit.command
        if command is Command.SUBMIT:
            return self._finish(Phase.DONE, FeedResult(Status.DONE, self.line))
        elif command is Command.INTERRUPT:
            return self._finish(Phase.INTERRUPTED, FeedResult(Status.INTERRUPTED, self.line))
        elif command is Command.END_OF_INPUT:
            return self._finish(Phase.END_OF_INPUT, FeedResult(Status.END_OF_INPUT))
        elif command is Command.INSERT_CHAR:
            self.buffer.insert(edit.byte)
        elif command is Command.CLEAR_SCREEN:
            self._output.write(clear_screen())
        elif command in BUFFER_ACTIONS:
            BUFFER_ACTIONS[command](self.buffer)
        else:
            pass  # MOVE_UP, MOVE_DOWN and IGNORED leave the line alone
        self.refresh()
        return PENDING

    def _finish(self, phase, result):
        self._phase = phase
        logger.debug(f"finished: {result.status.value}")
        return result

    @property
    def line(self):
        """The current contents of the buffer, as a string."""
        return self.buffer.text.decode(self._encoding, errors="replace")

    def refresh(self):
        """Redraw the line."""
        if self.columns < 1:
            return
        prompt = self.prompt.encode(self._encoding, errors="replace")
        self._output.write(
            render_line(prompt, self.buffer.text, self.buffer.cursor, self.columns)
        )
        self._output.flush()
