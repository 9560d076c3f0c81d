"""
The text being edited, and the cursor into it.

The buffer is byte-oriented: one byte is one column. The cursor is an index
in ``[0, len(text)]``, where ``len(text)`` is the position right after the
last byte. Every edit is a splice at an index, so appending and prepending
are not special cases. All operations are total: when they make no sense at
the current position they do nothing and return False.
"""


class LineBuffer:
    """Mutable line of bytes plus cursor."""

    def __init__(self, text=b""):
        self._text = bytearray(text)
        self._cursor = len(self._text)

    def __len__(self):
        return len(self._text)

    def __repr__(self):
        return f"<LineBuffer {bytes(self._text)!r} cursor={self._cursor}>"

    @property
    def text(self):
        return bytes(self._text)

    @property
    def cursor(self):
        return self._cursor

    def _check(self):
        assert 0 <= self._cursor <= len(self._text), "cursor out of range"

    def _splice(self, index, remove, insert=b""):
        """Replace ``remove`` bytes at ``index`` with ``insert``."""
        self._text[index : index + remove] = insert

    # %% Cursor movement

    def move_left(self):
        if self._cursor == 0:
            return False
        self._cursor -= 1
        self._check()
        return True

    def move_right(self):
        if self._cursor >= len(self._text):
            return False
        self._cursor += 1
        self._check()
        return True

    def move_home(self):
        if self._cursor == 0:
            return False
        self._cursor = 0
        return True

    def move_end(self):
        if self._cursor == len(self._text):
            return False
        self._cursor = len(self._text)
        return True

    # %% Edits

    def insert(self, byte):
        """Insert one byte at the cursor and move past it."""
        if isinstance(byte, int):
            byte = bytes((byte,))
        if len(byte) != 1:
            raise ValueError(f"Can only insert a single byte, got {byte!r}")
        self._splice(self._cursor, 0, byte)
        self._cursor += 1
        self._check()
        return True

    def delete_forward(self):
        if self._cursor >= len(self._text):
            return False
        self._splice(self._cursor, 1)
        self._check()
        return True

    def backspace(self):
        if self._cursor == 0:
            return False
        self._splice(self._cursor - 1, 1)
        self._cursor -= 1
        self._check()
        return True

    def kill_to_end(self):
        if self._cursor == len(self._text):
            return False
        self._splice(self._cursor, len(self._text) - self._cursor)
        self._check()
        return True

    def clear(self):
        if not self._text and self._cursor == 0:
            return False
        self._splice(0, len(self._text))
        self._cursor = 0
        return True

    def transpose(self):
        """Swap the byte before the cursor with the one under it."""
        i = self._cursor
        if not 0 < i < len(self._text):
            return False
        pair = self._text[i - 1 : i + 1]
        self._splice(i - 1, 2, pair[::-1])
        self._check()
        return True

    def delete_word(self):
        """Delete the word before the cursor, and the spaces behind it."""
        start = self._cursor
        while start > 0 and self._text[start - 1] == 0x20:
            start -= 1
        while start > 0 and self._text[start - 1] != 0x20:
            start -= 1
        if start == self._cursor:
            return False
        self._splice(start, self._cursor - start)
        self._cursor = start
        self._check()
        return True
