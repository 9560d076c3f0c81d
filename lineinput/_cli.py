import sys

from ._main import main
from .utils import listen_to_logs


def cli(argv=None):
    argv = sys.argv if argv is None else argv
    args = argv[1:]
    if "--version" in args:
        from . import __version__

        print("lineinput", __version__)
    elif "--listen" in args:
        listen_to_logs()
    else:
        prompt = args[0] if args else "input: "
        main(prompt)
