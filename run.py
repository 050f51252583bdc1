"""mazegen CLI entry point.

Provides subcommands for running the HTTP server and for generating a single
map to stdout. Accepts configuration via flags and environment variables,
with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from dotenv import load_dotenv

from mazegen import __version__


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    mazegen - rooms-and-corridors dungeon generator

    Run the JSON HTTP server or print a generated map. Configuration can be
    provided via CLI flags or MAZEGEN_* environment variables. If both are
    present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          MAZEGEN_WIDTH        Grid width, odd (default: 79)
          MAZEGEN_HEIGHT       Grid height, odd (default: 25)
          MAZEGEN_MAX_ROOMS    Room cap (default: 16)
          MAZEGEN_ROOM_WIDTH   Room width range "lo,hi" (default: 7,10)
          MAZEGEN_ROOM_HEIGHT  Room height range "lo,hi" (default: 5,7)
          MAZEGEN_LOG_LEVEL    debug | info | warn | error

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a map for a fixed seed
          python run.py generate --seed 42

          # Small map with region labels, as JSON
          python run.py generate --width 31 --height 15 --max-rooms 4 --json

          # Region labels before connection, one glyph per region
          python run.py generate --seed 7 --stop-after maze --regions
        """
    )

    parser = argparse.ArgumentParser(
        prog="mazegen",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warn", "error"],
        default=None,
        help="Log verbosity (default: env MAZEGEN_LOG_LEVEL or info)",
    )
    parser.add_argument(
        "--log-json",
        dest="log_json",
        action="store_true",
        default=None,
        help="Emit one JSON object per log line",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"mazegen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask development server with the maze API",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one map and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a map and print it as text (or JSON with --json).",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="RNG seed (default: env MAZEGEN_SEED or random)")
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width, odd")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height, odd")
    gen_parser.add_argument("--max-rooms", dest="max_rooms", type=int, default=None, help="Room cap")
    gen_parser.add_argument("--regions", action="store_true", help="Render region labels instead of doors")
    gen_parser.add_argument(
        "--stop-after",
        dest="stop_after",
        choices=["rooms", "maze", "connect"],
        default=None,
        help="Stop the pipeline after this stage (pairs well with --regions)",
    )
    gen_parser.add_argument("--json", dest="as_json", action="store_true", help="Print the JSON export")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "server"
    return args


def _generate(args) -> int:
    from mazegen.dungeon import ConfigurationError, Dungeon, GeneratorConfig
    from mazegen.dungeon.render import to_ascii, to_dict, to_region_map

    try:
        config = GeneratorConfig.from_env()
        for name in ("seed", "width", "height", "max_rooms"):
            value = getattr(args, name, None)
            if value is not None:
                setattr(config, name, value)
        if args.stop_after:
            dungeon = Dungeon(config, autorun=False).run_until(args.stop_after)
        else:
            dungeon = Dungeon(config)
    except ConfigurationError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    if args.as_json:
        print(json.dumps(to_dict(dungeon), indent=2))
    else:
        rows = to_region_map(dungeon.grid) if args.regions else to_ascii(dungeon.grid)
        print("\n".join(rows))
        print(f"[INFO] seed={dungeon.seed} rooms={len(dungeon.rooms)} doors={len(dungeon.doors)}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    from mazegen import logging_utils

    logging_utils.configure(level=getattr(args, "log_level", None), json_mode=getattr(args, "log_json", None))

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    # Resolve configuration from CLI flags or env vars
    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from mazegen import server
    from mazegen.logging_utils import log

    divider = "=" * 40
    print("\n".join([divider, "  mazegen server", divider, f"  Host: {host}", f"  Port: {port}", divider, ""]))
    log.info(event="listen", host=host, port=port, debug=debug)
    server.start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
