"""
project: mazegen
module: maze_api.py
License: MIT

Maze generation API routes.

    GET /api/maze         JSON map (rows, rooms, doors, metrics); ?check=1 adds analysis
    GET /api/maze/ascii   text/plain map; ?regions=1 renders region labels instead
    GET /api/health       liveness + version

Query parameters shared by both map endpoints: seed (int or any string, hashed
deterministically), width, height, max_rooms, stage. Anything not given falls back to
MAZEGEN_* app config, then to the generator defaults. Width and height are capped
by MAZEGEN_MAX_WIDTH / MAZEGEN_MAX_HEIGHT. ``stage`` (rooms, maze, connect) stops
the pipeline early; such partial maps are never cached.
"""

import hashlib
import os
import random
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from mazegen.dungeon import STAGES, ConfigurationError, Dungeon, GeneratorConfig
from mazegen.dungeon.checks import analyze
from mazegen.dungeon.render import to_ascii, to_dict, to_region_map
from mazegen.logging_utils import get_logger

bp_maze = Blueprint("maze_api", __name__)
log = get_logger("mazegen.api")

MAX_SEED = 9223372036854775807

# Simple in-process cache (seed, config)->Dungeon. Guarded by a lock since the dev server is threaded.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()


def _coerce_seed(raw):
    """Convert provided seed (int or str) into a bounded non-negative int."""
    if raw is None:
        return random.randint(1, 1_000_000)
    if isinstance(raw, int):
        return raw % MAX_SEED
    if isinstance(raw, str):
        s = raw.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % MAX_SEED
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % MAX_SEED
    raise ConfigurationError(f"seed must be an int or string, got {type(raw).__name__}")


def _int_arg(name: str):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _flag_arg(name: str) -> bool:
    return request.args.get(name, "0").lower() in ("1", "true", "yes", "on")


def _request_config() -> GeneratorConfig:
    config = GeneratorConfig.from_mapping(current_app.config)
    for name in ("width", "height", "max_rooms"):
        value = _int_arg(name)
        if value is not None:
            setattr(config, name, value)
    # Upper bounds come from app config, not the generator
    for name in ("width", "height"):
        cap = int(current_app.config.get(f"MAZEGEN_MAX_{name.upper()}", 255))
        if getattr(config, name) > cap:
            raise ConfigurationError(f"{name} must be <= {cap}, got {getattr(config, name)}")
    config.seed = _coerce_seed(request.args.get("seed"))
    return config.validate()


def _request_dungeon() -> Dungeon:
    """Finished (cached) dungeon, or a fresh one stopped after ``?stage=``."""
    config = _request_config()
    stage = request.args.get("stage", "").strip().lower()
    if not stage or stage == STAGES[-1]:
        return get_cached_dungeon(config)
    return Dungeon(config, autorun=False).run_until(stage)


def _cache_disabled() -> bool:
    flag = current_app.config.get("MAZEGEN_DISABLE_CACHE", os.environ.get("MAZEGEN_DISABLE_CACHE", "0"))
    return str(flag).lower() in ("1", "true", "yes", "on")


def get_cached_dungeon(config: GeneratorConfig) -> Dungeon:
    if _cache_disabled():
        return Dungeon(config)
    key = (config.seed, config.cache_key(), config.enable_metrics)
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
    if dungeon is not None:
        return dungeon
    dungeon = Dungeon(config)
    cap = int(current_app.config.get("MAZEGEN_CACHE_MAX", 8))
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        # Insertion-ordered dict: evict oldest first
        while len(_dungeon_cache) > cap:
            first_key = next(iter(_dungeon_cache))
            if first_key == key:
                break
            _dungeon_cache.pop(first_key, None)
    return dungeon


def clear_cache() -> None:
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


@bp_maze.errorhandler(ConfigurationError)
def _bad_config(exc):
    log.warn(event="bad_request", path=request.path, detail=str(exc))
    return jsonify({"error": str(exc)}), 400


@bp_maze.route("/api/maze")
def maze_json():
    """Return the generated map for the requested seed and size.

    Response: { seed, width, height, rows, rooms, doors, metrics, legend[, analysis] }
    """
    dungeon = _request_dungeon()
    payload = to_dict(dungeon)
    if _flag_arg("check"):
        payload["analysis"] = analyze(dungeon)
    log.info(event="maze_served", seed=dungeon.seed, size=f"{dungeon.width}x{dungeon.height}")
    return jsonify(payload)


@bp_maze.route("/api/maze/ascii")
def maze_ascii():
    dungeon = _request_dungeon()
    rows = to_region_map(dungeon.grid) if _flag_arg("regions") else to_ascii(dungeon.grid)
    resp = Response("\n".join(rows) + "\n", mimetype="text/plain")
    resp.headers["X-Maze-Seed"] = str(dungeon.seed)
    return resp


@bp_maze.route("/api/health")
def health():
    from mazegen import __version__

    return jsonify({"status": "ok", "version": __version__})
