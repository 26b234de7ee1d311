"""Tests for the wolsend command line."""

import errno
import logging
from unittest.mock import patch

import pytest

from wolsend import cli
from wolsend.wol import TransmitError, WakeTarget


@pytest.fixture
def mock_send():
    with patch("wolsend.cli.send_to") as m:
        yield m


def sent(mock_send):
    return [c.args[0] for c in mock_send.call_args_list]


def test_mac_with_defaults(mock_send):
    assert cli.main(["aa:bb:cc:dd:ee:ff"]) == 0
    assert sent(mock_send) == [WakeTarget(bytes.fromhex("aabbccddeeff"), "255.255.255.255", 9)]


def test_ip_and_port_flags(mock_send):
    assert cli.main(["00-01-02-03-04-05", "-i", "192.168.0.255", "--port", "7"]) == 0
    assert sent(mock_send) == [WakeTarget(bytes.fromhex("000102030405"), "192.168.0.255", 7)]


def test_host_names_from_book(mock_send, host_book):
    assert cli.main(["-c", str(host_book), "nas", "desk"]) == 0
    assert [t.address for t in sent(mock_send)] == [("192.168.0.255", 9), ("255.255.255.255", 7)]


def test_flags_override_book(mock_send, host_book):
    assert cli.main(["-c", str(host_book), "nas", "-p", "0"]) == 0
    assert sent(mock_send)[0].address == ("192.168.0.255", 0)


def test_unknown_target_sends_nothing(mock_send, capsys):
    assert cli.main(["aa:bb:cc:dd:ee:ff", "nosuchhost"]) == 2
    mock_send.assert_not_called()
    assert "nosuchhost" in capsys.readouterr().err


def test_no_targets(mock_send, capsys):
    assert cli.main([]) == 2
    assert "TARGET" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["aa:bb:cc:dd:ee:ff", "-p", "70000"],
    ["aa:bb:cc:dd:ee:ff", "-p", "nine"],
    ["aa:bb:cc:dd:ee:ff", "-i", "300.1.1.1"],
])
def test_bad_flags_exit_2(mock_send, argv):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    assert exc_info.value.code == 2
    mock_send.assert_not_called()


def test_send_error_exit_1(mock_send, capsys):
    mock_send.side_effect = [
        TransmitError(OSError(errno.ENETUNREACH, "Network is unreachable"), ("255.255.255.255", 9)),
        None,
    ]
    assert cli.main(["aa:bb:cc:dd:ee:ff", "00:01:02:03:04:05"]) == 1
    assert mock_send.call_count == 2
    err = capsys.readouterr().err
    assert "Network is unreachable" in err
    assert "255.255.255.255:9" in err


def test_invalid_book(tmp_path, mock_send, capsys):
    path = tmp_path / "hosts.yaml"
    path.write_text("hosts:\n  - mac: nope\n", encoding="utf-8")
    assert cli.main(["-c", str(path), "nas"]) == 2
    assert "Invalid MAC" in capsys.readouterr().err


def test_list_hosts(host_book, capsys):
    assert cli.main(["-c", str(host_book), "--list"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "nas\taa:bb:cc:dd:ee:ff\t192.168.0.255:9"
    assert out[1] == "desk\t00:01:02:03:04:05\t255.255.255.255:7"


def test_end_to_end_loopback(udp_listener):
    host, port = udp_listener.getsockname()
    assert cli.main(["-i", host, "-p", str(port), "aa:bb:cc:dd:ee:ff"]) == 0
    data, _ = udp_listener.recvfrom(1024)
    assert data == b"\xff" * 6 + bytes.fromhex("aabbccddeeff") * 16


def test_unreadable_book_exit_2(tmp_path, mock_send, capsys):
    assert cli.main(["-c", str(tmp_path), "aa:bb:cc:dd:ee:ff"]) == 2
    mock_send.assert_not_called()
    assert str(tmp_path) in capsys.readouterr().err


def test_bogus_log_level_in_book(tmp_path, mock_send):
    path = tmp_path / "hosts.yaml"
    path.write_text("log_level: [1]\nhosts: []\n", encoding="utf-8")
    with patch("wolsend.util.logging.basicConfig") as basic:
        assert cli.main(["-c", str(path), "aa:bb:cc:dd:ee:ff"]) == 0
    assert basic.call_args.kwargs["level"] == logging.INFO
