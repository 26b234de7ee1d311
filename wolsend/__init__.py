"""Send Wake-on-LAN magic packets.

Example::

    from wolsend import wake_on_lan

    wake_on_lan("00:01:02:03:04:05")                   # local network
    wake_on_lan("00:01:02:03:04:05", "192.168.0.255")  # local subnet
"""

from .wol import (
    DEFAULT_ADDR,
    DEFAULT_PORT,
    MAGIC_PACKET_LENGTH,
    ErrorKind,
    SendError,
    SocketConfigureError,
    SocketCreateError,
    TransmitError,
    WakeTarget,
    build_magic_packet,
    parse_mac,
    send_to,
    wake_on_lan,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ADDR",
    "DEFAULT_PORT",
    "MAGIC_PACKET_LENGTH",
    "ErrorKind",
    "SendError",
    "SocketConfigureError",
    "SocketCreateError",
    "TransmitError",
    "WakeTarget",
    "build_magic_packet",
    "parse_mac",
    "send_to",
    "wake_on_lan",
]
