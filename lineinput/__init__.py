"""
lineinput - an embeddable line editor for raw-mode terminals.
"""

from .prompt import LineInput, Status, FeedResult, is_unsupported_terminal  # noqa
from .term import LineInputError, NotATerminal, TerminalIoError, ProtocolTimeout  # noqa
from ._main import main  # noqa
from ._cli import cli  # noqa

__version__ = "0.1.0"
version_info = tuple(map(int, __version__.split(".")))
