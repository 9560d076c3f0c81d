"""
The output side of an editing session.

The editor never writes to a global stream. It is handed a write function
(and optionally a flush function and a descriptor) at construction, and all
bytes go through the object defined here.
"""


def _flush_noop(*args):
    pass


class TerminalOutput:
    """Write and flush capability bound to an optional descriptor.

    With a descriptor, ``write(fd, data)`` and ``flush(fd)`` are called,
    which makes e.g. ``os.write`` usable directly. Without one,
    ``write(data)`` and ``flush()`` are called, which suits the methods of a
    binary file object.
    """

    def __init__(self, write, flush=None, fd=None):
        if not callable(write):
            raise TypeError("write must be callable")
        if flush is not None and not callable(flush):
            raise TypeError("flush must be callable or None")
        self._write = write
        self._flush = flush or _flush_noop
        self._fd = fd

    @property
    def fd(self):
        return self._fd

    def write(self, data):
        if isinstance(data, str):
            data = data.encode()
        if self._fd is None:
            return self._write(data)
        return self._write(self._fd, data)

    def flush(self):
        if self._fd is None:
            self._flush()
        else:
            self._flush(self._fd)
