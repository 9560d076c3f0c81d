import os
import tty  # Unix
import logging
import termios  # Unix

from .errors import NotATerminal, TerminalIoError


logger = logging.getLogger("lineinput")


def patch_iflag(attrs: int) -> int:
    return attrs & ~(
        # No break signal, don't translate carriage return into newline,
        # no parity check, don't strip the 8th bit.
        termios.BRKINT
        | termios.ICRNL
        | termios.INPCK
        | termios.ISTRIP
        |
        # Disable XON/XOFF flow control (don't capture Ctrl-S and Ctrl-Q).
        termios.IXON
    )


def patch_oflag(attrs: int) -> int:
    # No output post-processing, so "\n" does not become "\r\n".
    return attrs & ~termios.OPOST


def patch_cflag(attrs: int) -> int:
    return attrs | termios.CS8


def patch_lflag(attrs: int) -> int:
    return attrs & ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)


def get_fileno(fd):
    """Accept a descriptor or anything with a ``fileno()`` method."""
    if isinstance(fd, int):
        return fd
    return fd.fileno()


def enable_raw(fd):
    """Put the terminal at ``fd`` in raw mode and return the original attributes.

    Either the new attributes are applied in full, or an exception is raised
    and the terminal is left as it was.
    """
    fd = get_fileno(fd)
    if not os.isatty(fd):
        raise NotATerminal(fd)

    try:
        saved = termios.tcgetattr(fd)
    except termios.error as err:
        raise TerminalIoError.from_termios_error(err) from err

    # The attribute record is flat, except for the list of control chars.
    newattr = list(saved)
    newattr[tty.CC] = list(saved[tty.CC])

    newattr[tty.IFLAG] = patch_iflag(newattr[tty.IFLAG])
    newattr[tty.OFLAG] = patch_oflag(newattr[tty.OFLAG])
    newattr[tty.CFLAG] = patch_cflag(newattr[tty.CFLAG])
    newattr[tty.LFLAG] = patch_lflag(newattr[tty.LFLAG])

    # Return from read() after one byte, without a timeout. VMIN also needs
    # to be set explicitly because on Solaris it shares its slot with VEOF.
    newattr[tty.CC][termios.VMIN] = 1
    newattr[tty.CC][termios.VTIME] = 0

    try:
        termios.tcsetattr(fd, termios.TCSAFLUSH, newattr)
    except termios.error as err:
        raise TerminalIoError.from_termios_error(err) from err

    return saved


def restore(fd, saved):
    """Re-apply attributes previously returned by ``enable_raw()``."""
    fd = get_fileno(fd)
    try:
        termios.tcsetattr(fd, termios.TCSAFLUSH, saved)
    except termios.error as err:
        raise TerminalIoError.from_termios_error(err) from err


class TerminalController:
    """Owns the raw mode of one terminal descriptor.

    At most one saved state is held. Acquiring while raw mode is active, or
    releasing while it is not, does nothing.
    """

    def __init__(self, fd):
        self._fd = fd
        self._saved = None

    @property
    def fd(self):
        return self._fd

    @property
    def active(self):
        return self._saved is not None

    def acquire(self):
        if self._saved is not None:
            return
        self._saved = enable_raw(self._fd)
        logger.info(f"raw mode enabled on fd {get_fileno(self._fd)}")

    def release(self):
        if self._saved is None:
            return
        restore(self._fd, self._saved)
        # Only forget the state once it was actually put back
        self._saved = None
        logger.info(f"raw mode disabled on fd {get_fileno(self._fd)}")
