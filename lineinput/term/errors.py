"""
Exceptions raised by the terminal layer.

Malformed input never ends up here: the decoders just resynchronize.
These are for the cases where the terminal itself cannot be used.
"""

import errno as _errno


class LineInputError(Exception):
    """Base class for all lineinput errors."""


class NotATerminal(LineInputError):
    """The given descriptor is not a tty."""

    errno = _errno.ENOTTY

    def __init__(self, fd):
        super().__init__(f"Not a terminal: {fd!r}")
        self.fd = fd


class TerminalIoError(LineInputError):
    """Getting or setting the terminal attributes failed."""

    def __init__(self, errno, message=""):
        super().__init__(errno, message)
        self.errno = errno
        self.message = message

    def __str__(self):
        return f"[Errno {self.errno}] {self.message}"

    @classmethod
    def from_termios_error(cls, err):
        # termios.error carries (errno, strerror)
        args = err.args
        if len(args) >= 2:
            return cls(args[0], args[1])
        return cls(_errno.EIO, str(err))


class ProtocolTimeout(LineInputError):
    """The terminal did not answer a cursor position query in time."""
