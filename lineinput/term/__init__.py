"""
Utilities to work with the terminal and escape sequences.

We only use a small subset of vt100: cursor position queries, relative
cursor moves, and erasing. That is understood by about every terminal that
is not listed as unsupported, so there's no need for curses or terminfo.

This is POSIX only: raw mode is set with termios.
"""

from ._context import TerminalController, enable_raw, restore  # noqa
from .errors import LineInputError, NotATerminal, TerminalIoError, ProtocolTimeout  # noqa
from .geometry import GeometryProbe  # noqa
from .input_keys import Command, EditCommand, InputDecoder  # noqa
from .io import TerminalOutput  # noqa
