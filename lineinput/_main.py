import os
import sys
import logging

from .prompt import LineInput, Status, is_unsupported_terminal


logger = logging.getLogger("lineinput")


def main(prompt="input: "):
    """Read lines from the terminal until Ctrl-C or Ctrl-D, printing each one."""

    if is_unsupported_terminal():
        return _main_plain(prompt)

    fd_in = sys.__stdin__.fileno()
    fd_out = sys.__stdout__.fileno()

    if not os.isatty(fd_in):
        return _main_plain(prompt)

    line_input = LineInput(os.write, None, fd_out, tty_fd=fd_in)

    def read_lines():
        while True:
            line_input.start(prompt)
            result = line_input.feed(os.read(fd_in, 1))
            while result.status is Status.PENDING:
                result = line_input.feed(os.read(fd_in, 1))
            if result.status is not Status.DONE:
                return result.status
            os.write(fd_out, f"\r\nline: {result.line}\r\n".encode())

    status = line_input.wrap(read_lines)
    logger.info(f"main loop ended: {status.value}")
    return status


def _main_plain(prompt):
    """Line reading for terminals that we cannot drive."""
    while True:
        sys.stdout.write(prompt)
        sys.stdout.flush()
        line = sys.stdin.readline()
        if not line:
            return Status.END_OF_INPUT
        print("line:", line.rstrip("\n"))
