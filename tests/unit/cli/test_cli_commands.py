from __future__ import annotations

import json
from functools import partial
from pathlib import Path

import pytest

from forklaunch.cli import _utils
from forklaunch.cli._dispatcher import build_parser, main
from forklaunch.cli._utils import EXIT_CONFIG_ERROR, EXIT_FAILURE, EXIT_OK, parse_root_arg
from forklaunch.core.orchestrator import open_in_fork
from tests.helpers.fakes import FakeSpawner


@pytest.fixture
def repo(isolated_project_env: Path) -> Path:
    root = isolated_project_env / "repo"
    (root / "src" / "pkg").mkdir(parents=True)
    return root


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == EXIT_OK
    assert "open-here" in capsys.readouterr().out


def test_commands_are_registered() -> None:
    parser = build_parser()
    args = parser.parse_args(["open-here", "/tmp/x", "--root", "a=/r/a", "--root", "/r/b"])
    assert args.command == "open-here"
    assert args.target == "/tmp/x"
    assert args.roots == ["a=/r/a", "/r/b"]
    assert parser.parse_args(["open_here"]).command == "open_here"


def test_open_dry_run_on_macos(monkeypatch, capsys, repo: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")

    code = main(["open", "--root", str(repo), "--dry-run", "--json"])

    assert code == EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "success"
    assert payload["outcome"] == "resolved"
    assert payload["dry_run"] is True
    assert payload["request"] == {"environment": "macos", "directory": str(repo), "executable": None}


def test_open_defaults_to_current_directory(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")

    assert main(["open", "--dry-run"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == f"Would open {Path.cwd()} in Fork"


def test_open_here_target_inside_root(monkeypatch, capsys, repo: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")

    code = main(["open-here", str(repo / "src" / "pkg"), "--root", str(repo), "--dry-run", "--json"])

    assert code == EXIT_OK
    assert json.loads(capsys.readouterr().out)["request"]["directory"] == str(repo)


def test_open_prompts_among_multiple_roots(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")
    monkeypatch.setattr("builtins.input", lambda _msg: "2")
    a = isolated_project_env / "a"
    b = isolated_project_env / "b"

    code = main(["open", "--root", f"api={a}", "--root", f"web={b}", "--dry-run"])

    captured = capsys.readouterr()
    assert code == EXIT_OK
    assert "1) api" in captured.err
    assert captured.out.strip() == f"Would open {b} in Fork"


def test_open_prompt_cancelled(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")
    monkeypatch.setattr("builtins.input", lambda _msg: "")

    code = main(["open", "--root", "/r/a", "--root", "/r/b", "--json"])

    assert code == EXIT_FAILURE
    err = capsys.readouterr().err
    payload = json.loads(err[err.index("{") :])
    assert payload == {
        "error": "no_workspace",
        "message": "Fork error: Working folder not found, open a folder and try again",
    }


def test_unsupported_platform(monkeypatch, capsys, repo: Path) -> None:
    monkeypatch.setattr("sys.platform", "linux")

    code = main(["open", "--root", str(repo)])

    assert code == EXIT_FAILURE
    assert capsys.readouterr().err.strip() == (
        "Error: Fork error: Unsupported platform. Only macOS, Windows and WSL are supported."
    )


def test_wsl_translation_failure_is_reported(monkeypatch, capsys, repo: Path, tmp_path: Path) -> None:
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("FORKLAUNCH_WSL__TRANSLATOR", str(tmp_path / "no-wslpath"))

    code = main(["open", "--root", str(repo), "--remote", "wsl", "--json"])

    assert code == EXIT_FAILURE
    err = json.loads(capsys.readouterr().err)
    assert err["error"] == "translation_failed"
    assert err["message"].startswith("Fork error: Could not translate path with wslpath: ")


def test_invalid_config_exits_with_config_error(capsys, isolated_project_env: Path) -> None:
    (isolated_project_env / ".forklaunch" / "config" / "fork.yaml").write_text("fork: [\n", encoding="utf-8")

    code = main(["open", "--json"])

    assert code == EXIT_CONFIG_ERROR
    assert json.loads(capsys.readouterr().err)["error"] == "config_error"


def test_launch_failure_observed_by_watcher(monkeypatch, capsys, repo: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")
    spawner = FakeSpawner(returncode=1, stderr="Unable to find application named 'Fork'")
    monkeypatch.setattr(_utils, "open_in_fork", partial(open_in_fork, spawner=spawner))

    code = main(["open", "--root", str(repo)])

    assert code == EXIT_FAILURE
    assert spawner.calls[0][0] == f'open -a "Fork" "{repo}"'
    assert capsys.readouterr().err.strip() == "Error: Fork error: Unable to find application named 'Fork'"


def test_successful_launch_reports_opened(monkeypatch, capsys, repo: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")
    monkeypatch.setattr(_utils, "open_in_fork", partial(open_in_fork, spawner=FakeSpawner()))

    assert main(["open", "--root", str(repo)]) == EXIT_OK
    assert capsys.readouterr().out.strip() == f"Opened {repo} in Fork"


def test_where_under_wsl_lists_fallbacks(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setattr("os.path.exists", lambda p: p == "/mnt/c/Program Files (x86)/Fork/Fork.exe")

    code = main(["where", "--remote", "wsl", "--json"])

    assert code == EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert payload["environment"] == "wsl"
    assert [c["path"] for c in payload["candidates"]] == [
        "/mnt/c/Program Files/Fork/Fork.exe",
        "/mnt/c/Program Files (x86)/Fork/Fork.exe",
    ]
    assert payload["executable"] == "/mnt/c/Program Files (x86)/Fork/Fork.exe"


def test_where_on_macos(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")
    assert main(["where"]) == EXIT_OK
    assert "application name: Fork" in capsys.readouterr().out


def test_where_unsupported(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "linux")
    assert main(["where"]) == EXIT_FAILURE
    assert "Unsupported platform" in capsys.readouterr().err


@pytest.mark.parametrize(
    "raw,name,path",
    [
        ("api=/r/api", "api", "/r/api"),
        ("/r/web", "web", "/r/web"),
        ("/r/x=y", "x=y", "/r/x=y"),
    ],
)
def test_parse_root_arg(raw: str, name: str, path: str) -> None:
    folder = parse_root_arg(raw)
    assert folder.name == name
    assert folder.path == path


def test_open_json_with_prompt_keeps_stdout_parseable(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")
    monkeypatch.setattr("builtins.input", lambda _msg="": "2")
    a = isolated_project_env / "a"
    b = isolated_project_env / "b"

    code = main(["open", "--root", str(a), "--root", str(b), "--json", "--dry-run"])

    captured = capsys.readouterr()
    assert code == EXIT_OK
    assert json.loads(captured.out)["request"]["directory"] == str(b)
    assert "Choice [1-2]: " in captured.err


def test_workspace_flag_pointing_at_directory(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")

    code = main(["open", "--workspace", str(isolated_project_env), "--dry-run", "--json"])

    assert code == EXIT_CONFIG_ERROR
    err = json.loads(capsys.readouterr().err)
    assert err["error"] == "workspace_error"
    assert "Cannot read workspace file" in err["message"]


def test_workspace_flag_with_commented_file(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")
    (isolated_project_env / "api").mkdir()
    ws = isolated_project_env / "team.code-workspace"
    ws.write_text('{\n  // one folder\n  "folders": [{"path": "api"},],\n}\n', encoding="utf-8")

    code = main(["open", "--workspace", str(ws), "--dry-run", "--json"])

    assert code == EXIT_OK
    directory = json.loads(capsys.readouterr().out)["request"]["directory"]
    assert Path(directory).name == "api"


def test_unwritable_log_file_is_a_config_error(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "darwin")
    blocker = isolated_project_env / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setenv("FORKLAUNCH_LOGGING__FILE", str(blocker / "forklaunch.log"))

    code = main(["open", "--dry-run", "--json"])

    assert code == EXIT_CONFIG_ERROR
    err = json.loads(capsys.readouterr().err)
    assert err["error"] == "config_error"
    assert "Cannot open log file" in err["message"]


def test_where_executable_matches_first_existing_row(monkeypatch, capsys, isolated_project_env: Path) -> None:
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setattr("os.path.exists", lambda p: p.startswith("/mnt/c/Program Files"))

    assert main(["where", "--remote", "wsl", "--json"]) == EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    first_existing = next(row["path"] for row in payload["candidates"] if row["exists"])
    assert payload["executable"] == first_existing == "/mnt/c/Program Files/Fork/Fork.exe"
