"""HTTP route blueprints."""

from .maze_api import bp_maze  # noqa: F401
