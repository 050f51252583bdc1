import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mazegen import create_app  # noqa: E402
from mazegen.routes.maze_api import clear_cache  # noqa: E402


@pytest.fixture()
def test_app(tmp_path):
    app = create_app({"TESTING": True})
    app.instance_path = str(tmp_path)
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_maze_cache():
    """Cached dungeons must not leak between tests that tweak config."""
    clear_cache()
    yield
    clear_cache()
