"""
project: mazegen
module: __init__.py
License: MIT

Flask application factory for the maze-dungeon generator.

The generator core lives in ``mazegen.dungeon`` and has no web dependencies;
this module only wires it behind a small JSON API. Configuration is sourced
from environment variables (optionally loaded from a ``.env`` file) with
defaults matching the generator's own.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "0.4.0"

# Keys copied from the environment into app.config (generator defaults + API switches)
_ENV_KEYS = (
    "MAZEGEN_WIDTH",
    "MAZEGEN_HEIGHT",
    "MAZEGEN_MAX_ROOMS",
    "MAZEGEN_MAX_TRIES",
    "MAZEGEN_ROOM_WIDTH",
    "MAZEGEN_ROOM_HEIGHT",
    "MAZEGEN_ENABLE_METRICS",
    "MAZEGEN_DISABLE_CACHE",
)


def create_app(overrides: dict | None = None) -> Flask:
    """Build a configured Flask app with the maze API registered.

    ``overrides`` is applied last, so tests can pin config keys without
    touching the process environment.
    """
    # Load .env if present so MAZEGEN_* settings can live next to the project
    load_dotenv()
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        MAZEGEN_CACHE_MAX=int(os.getenv("MAZEGEN_CACHE_MAX", "8")),
        # Upper bounds on request-supplied width/height
        MAZEGEN_MAX_WIDTH=int(os.getenv("MAZEGEN_MAX_WIDTH", "255")),
        MAZEGEN_MAX_HEIGHT=int(os.getenv("MAZEGEN_MAX_HEIGHT", "255")),
    )
    for key in _ENV_KEYS:
        if key in os.environ:
            app.config[key] = os.environ[key]
    if overrides:
        app.config.update(overrides)

    from mazegen.routes.maze_api import bp_maze

    app.register_blueprint(bp_maze)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app


__all__ = ["create_app", "__version__"]
