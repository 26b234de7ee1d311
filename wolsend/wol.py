"""Wake-on-LAN magic packet construction and transmission."""

import enum
import ipaddress
import logging
import socket
from dataclasses import dataclass
from typing import Optional, Tuple, Union

logger = logging.getLogger(__name__)

# Limited broadcast
DEFAULT_ADDR = "255.255.255.255"
# Discard port
DEFAULT_PORT = 9
BIND_ADDR: Tuple[str, int] = ("0.0.0.0", 0)

SYNC_STREAM = b"\xff" * 6
MAC_REPEAT = 16
MAGIC_PACKET_LENGTH = len(SYNC_STREAM) + 6 * MAC_REPEAT  # 102

MacLike = Union[bytes, bytearray, str]
AddrLike = Union[str, bytes, bytearray, ipaddress.IPv4Address]


class ErrorKind(str, enum.Enum):
    CREATE = "create"
    CONFIGURE = "configure"
    SEND = "send"


class SendError(Exception):
    """A socket operation failed while sending a magic packet.

    ``cause`` holds the underlying ``OSError``; ``errno`` and ``strerror``
    are copied from it when present.
    """

    kind: ErrorKind = ErrorKind.SEND
    action = "send magic packet"

    def __init__(self, cause: Optional[OSError] = None, address: Optional[Tuple[str, int]] = None, message: str = ""):
        self.cause = cause
        self.address = address
        self.errno = getattr(cause, "errno", None)
        self.strerror = getattr(cause, "strerror", None) or (str(cause) if cause else "")
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        dest = f" to {self.address[0]}:{self.address[1]}" if self.address else ""
        detail = self.message or self.strerror or "unknown error"
        if self.errno is not None:
            detail = f"[Errno {self.errno}] {detail}"
        return f"failed to {self.action}{dest}: {detail}"


class SocketCreateError(SendError):
    kind = ErrorKind.CREATE
    action = "create socket"


class SocketConfigureError(SendError):
    kind = ErrorKind.CONFIGURE
    action = "enable broadcast"


class TransmitError(SendError):
    kind = ErrorKind.SEND
    action = "send magic packet"


def parse_mac(mac: MacLike) -> bytes:
    """Return the 6 raw bytes of ``mac``.

    Accepts 6 raw bytes, or text as six hex octets separated by ``:`` or
    ``-`` (``aa:bb:cc:dd:ee:ff``), or twelve bare hex digits.
    """
    if isinstance(mac, (bytes, bytearray)):
        if len(mac) != 6:
            raise ValueError(f"MAC address must be 6 bytes, got {len(mac)}")
        return bytes(mac)
    if not isinstance(mac, str):
        raise ValueError(f"Invalid MAC address: {mac!r}")
    text = mac.strip().lower()
    if len(text) == 17:
        sep = text[2]
        if sep not in ":-":
            raise ValueError(f"Invalid MAC address: {mac}")
        parts = text.split(sep)
    elif len(text) == 12:
        parts = [text[i:i + 2] for i in range(0, 12, 2)]
    else:
        raise ValueError(f"Invalid MAC address: {mac}")
    if len(parts) != 6 or not all(len(p) == 2 and all(c in "0123456789abcdef" for c in p) for p in parts):
        raise ValueError(f"Invalid MAC address: {mac}")
    return bytes(int(p, 16) for p in parts)


def format_mac(mac: bytes) -> str:
    return ":".join(f"{b:02x}" for b in mac)


def build_magic_packet(mac: MacLike) -> bytes:
    """Six 0xff bytes followed by 16 repetitions of the MAC address."""
    return SYNC_STREAM + parse_mac(mac) * MAC_REPEAT


def _parse_addr(addr: Optional[AddrLike]) -> str:
    if addr is None:
        return DEFAULT_ADDR
    try:
        if isinstance(addr, (bytes, bytearray)):
            if len(addr) != 4:
                raise ValueError
            return str(ipaddress.IPv4Address(bytes(addr)))
        return str(ipaddress.IPv4Address(addr))
    except ValueError:
        raise ValueError(f"Invalid IPv4 address: {addr!r}") from None


def parse_port(port: Optional[int]) -> int:
    if port is None:
        return DEFAULT_PORT
    if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 0xFFFF:
        raise ValueError(f"Invalid UDP port: {port!r}")
    return port


@dataclass(frozen=True)
class WakeTarget:
    """Where to send a magic packet.

    ``broadcast_ip`` defaults to the limited broadcast address
    ``255.255.255.255`` and ``port`` to the discard port ``9``; ``None``
    selects the default. Fields are validated on construction and a
    malformed value raises ``ValueError``.
    """

    mac: bytes
    broadcast_ip: str = DEFAULT_ADDR
    port: int = DEFAULT_PORT

    def __post_init__(self):
        # frozen, so normalize through object.__setattr__
        object.__setattr__(self, "mac", parse_mac(self.mac))
        object.__setattr__(self, "broadcast_ip", _parse_addr(self.broadcast_ip))
        object.__setattr__(self, "port", parse_port(self.port))

    @classmethod
    def create(cls, mac: MacLike, broadcast_ip: Optional[AddrLike] = None, port: Optional[int] = None) -> "WakeTarget":
        return cls(mac, broadcast_ip, port)

    @property
    def address(self) -> Tuple[str, int]:
        return (self.broadcast_ip, self.port)

    @property
    def packet(self) -> bytes:
        return build_magic_packet(self.mac)


def send_to(target: WakeTarget) -> None:
    """Send one magic packet to ``target``.

    Binds an ephemeral UDP socket on ``0.0.0.0``, enables broadcast and sends
    a single datagram. The socket is closed on every path. Success only means
    the OS accepted the datagram.
    """
    packet = target.packet
    addr = target.address
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as e:
        raise SocketCreateError(e, addr) from e
    with sock:
        try:
            sock.bind(BIND_ADDR)
        except OSError as e:
            raise SocketCreateError(e, addr) from e
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        except OSError as e:
            raise SocketConfigureError(e, addr) from e
        try:
            sent = sock.sendto(packet, addr)
        except OSError as e:
            raise TransmitError(e, addr) from e
    if sent != len(packet):
        raise TransmitError(None, addr, f"short write ({sent} of {len(packet)} bytes)")
    logger.debug("Magic packet sent to %s via %s:%d", format_mac(target.mac), addr[0], addr[1])


def wake_on_lan(mac: MacLike, broadcast_ip: Optional[AddrLike] = None, port: Optional[int] = None) -> None:
    """Wake the NIC ``mac`` by broadcasting a magic packet.

    Defaults to ``255.255.255.255`` on port ``9``. For a NIC on the subnet
    192.168.10.0/24 pass the subnet broadcast ``192.168.10.255``.

    Raises ``ValueError`` for malformed arguments before touching the
    network, and a ``SendError`` subclass when a socket operation fails.
    Nothing is retried.
    """
    send_to(WakeTarget.create(mac, broadcast_ip, port))
