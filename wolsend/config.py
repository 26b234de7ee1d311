import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from .wol import WakeTarget, format_mac, parse_mac, parse_port

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/hosts.yaml"


class ConfigError(Exception):
    pass


def config_path(path: str | None = None) -> str:
    return path or os.getenv("WOLSEND_CONFIG", DEFAULT_CONFIG_PATH)


def load_config(path: str | None = None) -> Dict[str, Any]:
    """Load the host book. A missing file gives an empty one."""
    cfg_path = config_path(path)
    if not os.path.exists(cfg_path):
        logger.debug("No host book at %s", cfg_path)
        return {"hosts": [], "log_level": None}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"{cfg_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{cfg_path}: expected a mapping at top level")
    entries = data.get("hosts") or []
    if not isinstance(entries, list):
        raise ConfigError(f"{cfg_path}: hosts must be a list")
    # Normalize
    hosts: List[Dict[str, Any]] = []
    for idx, h in enumerate(entries):
        if not isinstance(h, dict):
            raise ConfigError(f"{cfg_path}: host #{idx} is not a mapping")
        name = str(h.get("name") or f"host-{idx}")
        try:
            mac = format_mac(parse_mac(str(h.get("mac") or "")))
        except ValueError as e:
            raise ConfigError(f"{cfg_path}: host {name!r}: {e}") from e
        port = h.get("port")
        if port is not None:
            try:
                port = parse_port(port)
            except ValueError as e:
                raise ConfigError(f"{cfg_path}: host {name!r}: {e}") from e
        hosts.append({
            "name": name,
            "mac": mac,
            "broadcast": str(h.get("broadcast") or ""),
            "port": port,
        })
    logger.debug("Loaded %d host(s) from %s", len(hosts), cfg_path)
    return {"hosts": hosts, "log_level": data.get("log_level")}


def find_host(cfg: Dict[str, Any], name: str) -> Optional[Dict[str, Any]]:
    wanted = name.lower()
    for h in cfg.get("hosts", []):
        if h["name"].lower() == wanted:
            return h
    return None


def host_target(host: Dict[str, Any], broadcast_ip: str | None = None, port: int | None = None) -> WakeTarget:
    # explicit arguments win over the host's configured values
    return WakeTarget.create(
        host["mac"],
        broadcast_ip or host.get("broadcast") or None,
        port if port is not None else host.get("port"),
    )
