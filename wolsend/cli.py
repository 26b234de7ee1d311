"""Command-line entry point: ``wolsend TARGET [TARGET ...]``.

Limitations: may not work outside the local network; requires hardware
support in the destination computer; most 802.11 wireless interfaces do not
keep a link in low-power states and cannot receive a magic packet.
"""

import argparse
import ipaddress
import logging
import sys
from typing import List, Optional, Sequence

from .config import ConfigError, config_path, find_host, host_target, load_config
from .util import setup_logging
from .wol import DEFAULT_ADDR, DEFAULT_PORT, SendError, WakeTarget, format_mac, parse_mac, send_to

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SEND_ERROR = 1
EXIT_USAGE = 2


def _ipv4(value: str) -> str:
    try:
        return str(ipaddress.IPv4Address(value))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid IPv4 address: {value!r}") from None


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}") from None
    if not 0 <= port <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="wolsend", description="Send Wake-on-LAN magic packets.")
    p.add_argument("targets", nargs="*", metavar="TARGET", help="NIC MAC address (aa:bb:cc:dd:ee:ff) or host name from the host book")
    p.add_argument(
        "-i", "--ip", type=_ipv4, default=None,
        help=f"target IP address (default {DEFAULT_ADDR}); for 192.168.10.0/24 use 192.168.10.255",
    )
    p.add_argument("-p", "--port", type=_port, default=None, help=f"target port; usually 0, 7 or 9 (default {DEFAULT_PORT})")
    p.add_argument("-c", "--config", default=None, help="host book YAML file (default $WOLSEND_CONFIG or config/hosts.yaml)")
    p.add_argument("-l", "--list", action="store_true", help="list configured hosts and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="log more (-vv for debug)")
    return p


def resolve_targets(names: Sequence[str], cfg: dict, ip: Optional[str], port: Optional[int]) -> List[WakeTarget]:
    """Turn MACs and host names into send targets; raises ValueError on unknown names."""
    targets: List[WakeTarget] = []
    for name in names:
        try:
            mac = parse_mac(name)
        except ValueError:
            host = find_host(cfg, name)
            if host is None:
                raise ValueError(f"not a MAC address or known host: {name!r}") from None
            targets.append(host_target(host, ip, port))
            continue
        targets.append(WakeTarget.create(mac, ip, port))
    return targets


def _print_hosts(cfg: dict) -> None:
    for h in cfg["hosts"]:
        addr = h["broadcast"] or DEFAULT_ADDR
        port = h["port"] if h["port"] is not None else DEFAULT_PORT
        print(f"{h['name']}\t{h['mac']}\t{addr}:{port}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        print(f"wolsend: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.verbose:
        setup_logging("DEBUG" if args.verbose > 1 else "INFO")
    else:
        setup_logging(cfg.get("log_level"))

    if args.list:
        _print_hosts(cfg)
        return EXIT_OK
    if not args.targets:
        parser.print_usage(sys.stderr)
        print("wolsend: error: at least one TARGET is required", file=sys.stderr)
        return EXIT_USAGE

    try:
        targets = resolve_targets(args.targets, cfg, args.ip, args.port)
    except ValueError as e:
        print(f"wolsend: error: {e} (host book: {config_path(args.config)})", file=sys.stderr)
        return EXIT_USAGE

    rc = EXIT_OK
    for target in targets:
        try:
            send_to(target)
        except SendError as e:
            print(f"wolsend: {e}", file=sys.stderr)
            rc = EXIT_SEND_ERROR
            continue
        logger.info("Magic packet for %s sent via %s:%d", format_mac(target.mac), target.broadcast_ip, target.port)
    return rc
