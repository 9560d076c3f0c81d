import enum
import logging
from typing import NamedTuple, Optional


logger = logging.getLogger("lineinput")


class Command(enum.Enum):
    """What a (sequence of) input byte(s) asks the editor to do."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_HOME = "move_home"
    MOVE_END = "move_end"
    MOVE_UP = "move_up"  # reserved, no-op
    MOVE_DOWN = "move_down"  # reserved, no-op
    INSERT_CHAR = "insert_char"
    DELETE_FORWARD = "delete_forward"
    BACKSPACE = "backspace"
    KILL_TO_END = "kill_to_end"
    CLEAR_LINE = "clear_line"
    DELETE_WORD = "delete_word"
    TRANSPOSE = "transpose"
    CLEAR_SCREEN = "clear_screen"
    SUBMIT = "submit"
    INTERRUPT = "interrupt"
    END_OF_INPUT = "end_of_input"
    IGNORED = "ignored"


class EditCommand(NamedTuple):
    command: Command
    byte: Optional[bytes] = None  # only for INSERT_CHAR


class DecoderState(enum.Enum):
    NORMAL = 0
    SAW_ESCAPE = 1
    SAW_BRACKET = 2
    SAW_BRACKET_DIGIT = 3


# %% Byte mappings

ESCAPE = 0x1B
CTRL_D = 0x04

# Single control bytes. Ctrl-D is absent, it depends on the line (see below).
KEY_MAP = {
    0x01: Command.MOVE_HOME,  # Control-A (home)
    0x02: Command.MOVE_LEFT,  # Control-B (emacs cursor left)
    0x03: Command.INTERRUPT,  # Control-C (interrupt)
    0x05: Command.MOVE_END,  # Control-E (end)
    0x06: Command.MOVE_RIGHT,  # Control-F (cursor forward)
    0x08: Command.BACKSPACE,  # Control-H (8) (Identical to '\b')
    0x0B: Command.KILL_TO_END,  # Control-K (delete until end of line)
    0x0C: Command.CLEAR_SCREEN,  # Control-L (clear; form feed)
    0x0D: Command.SUBMIT,  # Control-M (13) (Identical to '\r')
    0x14: Command.TRANSPOSE,  # Control-T
    0x15: Command.CLEAR_LINE,  # Control-U
    0x17: Command.DELETE_WORD,  # Control-W
    # Vt220 (and Linux terminal) send this when pressing backspace.
    0x7F: Command.BACKSPACE,
}

# Final byte of "ESC [ X"
CSI_MAP = {
    b"A": Command.MOVE_UP,
    b"B": Command.MOVE_DOWN,
    b"C": Command.MOVE_RIGHT,
    b"D": Command.MOVE_LEFT,
    b"H": Command.MOVE_HOME,
    b"F": Command.MOVE_END,
}

# Digit of "ESC [ N ~"
TILDE_MAP = {
    b"3": Command.DELETE_FORWARD,
}


# %% Decoder


class InputDecoder:
    """A streaming input byte decoder.

    Escape sequences can be split between multiple calls to ``decode()``;
    an unfinished sequence is kept until the bytes that complete it arrive.
    Sequences that do not resolve to a known key are dropped, and decoding
    continues with the next byte.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        self._state = DecoderState.NORMAL
        self._pending = bytearray()

    @property
    def state(self):
        return self._state

    @property
    def pending(self):
        """The bytes of the escape sequence collected so far."""
        return bytes(self._pending)

    def decode(self, data, line_empty=False):
        """Decode the given bytes into a list of EditCommand.

        ``line_empty`` tells whether the line being edited is empty, which
        decides between forward delete and end-of-input for Ctrl-D.
        """
        if isinstance(data, int):
            data = bytes((data,))
        result = []
        for b in data:
            command = self._step(b, line_empty)
            if command is not None:
                result.append(command)
        return result

    def _resolve(self, command, byte=None):
        if self._pending:
            logger.debug(f"escape sequence {bytes(self._pending)!r} -> {command.value}")
        self.reset()
        return EditCommand(command, byte)

    def _step(self, b, line_empty):
        state = self._state
        c = bytes((b,))

        if state is DecoderState.NORMAL:
            if b == ESCAPE:
                self._state = DecoderState.SAW_ESCAPE
                self._pending.append(b)
                return None
            elif b == CTRL_D:
                if line_empty:
                    return self._resolve(Command.END_OF_INPUT)
                return self._resolve(Command.DELETE_FORWARD)
            elif b in KEY_MAP:
                return self._resolve(KEY_MAP[b])
            elif b >= 32:
                return self._resolve(Command.INSERT_CHAR, c)
            else:
                return self._resolve(Command.IGNORED)

        self._pending.append(b)

        if state is DecoderState.SAW_ESCAPE:
            if c == b"[":
                self._state = DecoderState.SAW_BRACKET
                return None
            return self._resolve(Command.IGNORED)

        elif state is DecoderState.SAW_BRACKET:
            if c.isdigit():
                self._state = DecoderState.SAW_BRACKET_DIGIT
                return None
            return self._resolve(CSI_MAP.get(c, Command.IGNORED))

        else:  # SAW_BRACKET_DIGIT
            digit = self._pending[2:3]
            if c == b"~":
                return self._resolve(TILDE_MAP.get(bytes(digit), Command.IGNORED))
            return self._resolve(Command.IGNORED)
