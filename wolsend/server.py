import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from .config import find_host, host_target, load_config
from .util import setup_logging
from .wol import SendError, WakeTarget, format_mac, send_to

logger = logging.getLogger(__name__)


def create_app(cfg: Optional[Dict[str, Any]] = None) -> Flask:
    cfg = cfg if cfg is not None else load_config()
    app = Flask(__name__)

    @app.route("/api/hosts")
    def hosts():
        return jsonify({"hosts": cfg.get("hosts", [])})

    @app.route("/api/wol", methods=["POST"])
    def wol():
        data: Dict[str, Any] = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"ok": False, "error": "JSON object required"}), 400
        name = data.get("name")
        mac = data.get("mac") or ""
        broadcast = data.get("broadcast") or None
        port = data.get("port")
        try:
            if name:
                host = find_host(cfg, str(name))
                if not host:
                    return jsonify({"ok": False, "error": "host not found"}), 404
                target = host_target(dict(host, mac=mac or host["mac"]), broadcast, port)
            elif mac:
                target = WakeTarget.create(str(mac), broadcast, port)
            else:
                return jsonify({"ok": False, "error": "mac or name required"}), 400
        except ValueError as e:
            return jsonify({"ok": False, "error": str(e)}), 400
        try:
            send_to(target)
        except SendError as e:
            logger.warning("Wake request failed: %s", e)
            return jsonify({"ok": False, "error": str(e), "kind": e.kind.value}), 502
        logger.info("Magic packet for %s sent via %s:%d", format_mac(target.mac), target.broadcast_ip, target.port)
        return jsonify({
            "ok": True,
            "mac": format_mac(target.mac),
            "broadcast": target.broadcast_ip,
            "port": target.port,
        })

    return app


def main():
    cfg = load_config()
    setup_logging(os.getenv("LOG_LEVEL") or cfg.get("log_level") or "INFO")
    app = create_app(cfg)
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    app.run(host=host, port=port)
