"""Shared fixtures: fake sockets, a loopback UDP listener and host books."""

import socket
from unittest.mock import patch

import pytest
import yaml

from wolsend.wol import MAGIC_PACKET_LENGTH


@pytest.fixture(autouse=True)
def _no_host_book(monkeypatch, tmp_path):
    """Keep tests away from any host book in the working directory."""
    monkeypatch.setenv("WOLSEND_CONFIG", str(tmp_path / "missing.yaml"))


@pytest.fixture
def fake_socket():
    """Patch socket creation in the sender and yield the socket instance."""
    with patch("wolsend.wol.socket.socket") as mock_cls:
        sock = mock_cls.return_value
        sock.sendto.return_value = MAGIC_PACKET_LENGTH
        yield sock


@pytest.fixture
def udp_listener():
    """A UDP socket bound to an ephemeral loopback port."""
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    s.bind(("127.0.0.1", 0))
    s.settimeout(2.0)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def host_book(tmp_path):
    path = tmp_path / "hosts.yaml"
    path.write_text(yaml.safe_dump({
        "log_level": "DEBUG",
        "hosts": [
            {"name": "nas", "mac": "AA-BB-CC-DD-EE-FF", "broadcast": "192.168.0.255"},
            {"name": "desk", "mac": "00:01:02:03:04:05", "port": 7},
            {"mac": "001122334455"},
        ],
    }), encoding="utf-8")
    return path
