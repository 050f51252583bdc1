"""
project: mazegen
module: server.py
License: MIT

Server bootstrap.

Builds the Flask app via the factory, configures stdlib logging to a rotating
file plus console, and runs the development server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from mazegen import create_app
from mazegen.logging_utils import log


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (integration / runtime only)
    """Start the HTTP server.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    """
    app = create_app()
    _configure_logging(app.instance_path)
    try:
        print(f"[INFO] Starting maze server on {host}:{port}")
        log.info(event="server_start", host=host, port=port, debug=debug)
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(log_dir: str, level: int = logging.INFO) -> str:
    """Configure logging to both console and a rotating file in ``log_dir``.

    The file path will be <log_dir>/mazegen.log. Retains a few backups to avoid growth.
    Returns the log file path.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "mazegen.log")

    root = logging.getLogger()
    root.setLevel(level)
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(level)
    file_handler.setFormatter(fmt)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
