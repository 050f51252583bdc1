import importlib
import json
import sys

import pytest

# Import run.py as a module and exercise parse_args + main with a patched
# start_server so no socket is opened.


@pytest.fixture()
def run_module():
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert "mazegen" in out


def test_default_command_is_server(run_module):
    assert run_module.parse_args([]).command == "server"
    assert run_module.parse_args(["--env-file", "x.env"]).command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    import mazegen.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    assert run_module.main(["server"]) == 0
    assert calls == {"host": "127.0.0.1", "port": 5555, "debug": False}


def test_server_flags_override_env(monkeypatch, run_module):
    calls = {}
    import mazegen.server as server_mod

    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setattr(server_mod, "start_server", lambda host, port, debug: calls.update(port=port, debug=debug))
    run_module.main(["server", "--port", "6001", "--debug"])
    assert calls == {"port": 6001, "debug": True}


def test_env_file_argument(monkeypatch, tmp_path, run_module):
    env_file = tmp_path / ".env"
    env_file.write_text("PORT=6002\n")
    monkeypatch.delenv("PORT", raising=False)
    calls = {}
    import mazegen.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", lambda host, port, debug: calls.update(port=port))
    run_module.main(["--env-file", str(env_file), "server"])
    assert calls["port"] == 6002
    monkeypatch.delenv("PORT", raising=False)


def test_generate_prints_map(run_module, capsys):
    assert run_module.main(["generate", "--seed", "5", "--width", "21", "--height", "15"]) == 0
    out = capsys.readouterr().out.splitlines()
    rows = out[:15]
    assert all(len(r) == 21 for r in rows)
    assert out[15].startswith("[INFO] seed=5")


def test_generate_json(run_module, capsys):
    run_module.main(["generate", "--seed", "5", "--width", "21", "--height", "15", "--max-rooms", "2", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["seed"] == 5
    assert len(data["rooms"]) <= 2


def test_generate_regions_view(run_module, capsys):
    run_module.main(["generate", "--seed", "5", "--width", "21", "--height", "15", "--regions"])
    rows = capsys.readouterr().out.splitlines()[:15]
    assert set("".join(rows)) <= set(".#")


def test_generate_bad_config_exits_2(run_module, capsys):
    assert run_module.main(["generate", "--width", "20"]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_generate_stop_after_maze_shows_regions(run_module, capsys):
    args = ["generate", "--seed", "3", "--width", "31", "--height", "21", "--max-rooms", "5"]
    assert run_module.main(args + ["--stop-after", "maze", "--regions"]) == 0
    rows = capsys.readouterr().out.splitlines()[:21]
    assert set("".join(rows)) - set(".#")


def test_generate_stop_after_json_lists_stages(run_module, capsys):
    run_module.main(["generate", "--seed", "3", "--width", "21", "--height", "15", "--stop-after", "rooms", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["stages"] == ["rooms"]
    assert data["doors"] == []


def test_generate_rejects_unknown_stage(run_module):
    with pytest.raises(SystemExit):
        run_module.parse_args(["generate", "--stop-after", "paint"])


def test_log_level_flag(monkeypatch, run_module):
    from mazegen import logging_utils

    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.CURRENT_LEVEL)
    monkeypatch.setattr(logging_utils, "JSON_MODE", logging_utils.JSON_MODE)
    run_module.main(["--log-level", "error", "generate", "--seed", "1", "--width", "21", "--height", "15"])
    assert logging_utils.CURRENT_LEVEL == logging_utils.LEVELS["error"]
