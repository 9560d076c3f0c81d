import os
import socket
import logging

logger = logging.getLogger("lineinput")

PORT = 12014
DEBUG_ENV_VAR = "LINEINPUT_DEBUG"


class UDPHandler(logging.Handler):
    """Send log records to a local UDP port, away from the terminal we edit on."""

    udp_address = ("127.0.0.1", PORT)

    def __init__(self):
        super().__init__()
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def emit(self, record):
        try:
            msg = self.format(record)
            bb = msg.encode()
            size = 2**10
            while bb:
                bb1 = bb[:size]
                bb = bb[size:]
                self._socket.sendto(bb1, self.udp_address)
        except Exception:
            self.handleError(record)

    def close(self):
        self._socket.close()
        super().close()


def debug_enabled(environ=None):
    """Whether the trace side channel was asked for via the environment."""
    environ = os.environ if environ is None else environ
    value = environ.get(DEBUG_ENV_VAR, "")
    return bool(value) and value != "0"


def enable_debug_channel():
    """Attach the UDP handler to the lineinput logger (once)."""
    for handler in logger.handlers:
        if isinstance(handler, UDPHandler):
            return handler
    handler = UDPHandler()
    handler.setFormatter(logging.Formatter("[lineinput] %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


if debug_enabled():
    enable_debug_channel()


def listen_to_logs():
    """Called from ``lineinput --listen``.

    This way we can see the trace from another terminal, so it does not get
    mixed up with the line being edited.
    """

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", PORT))

    while True:
        data, addr = sock.recvfrom(2**20)
        print(data.decode())
