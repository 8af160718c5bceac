from __future__ import annotations

import logging
from pathlib import Path

from forklaunch.core import logs


def test_file_logging_writes_records(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "forklaunch.log"
    logs.configure_logging(level="INFO", log_path=log_path)

    logging.getLogger("forklaunch.core.test").info("resolved %s", "/r/a")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_path.exists()
    assert "resolved /r/a" in log_path.read_text(encoding="utf-8")


def test_file_logging_is_idempotent(tmp_path: Path) -> None:
    log_path = tmp_path / "forklaunch.log"
    logs.configure_stdlib_logging(log_path=log_path, level="INFO")
    logs.configure_stdlib_logging(log_path=log_path, level="INFO")

    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1


def test_verbose_sets_debug_and_mirrors_to_stderr(capsys) -> None:
    logs.configure_logging(level="WARNING", verbose=True)

    assert logging.getLogger("forklaunch").level == logging.DEBUG
    logging.getLogger("forklaunch.core.test").debug("candidate %s", "C:/Fork.exe")

    assert "candidate C:/Fork.exe" in capsys.readouterr().err


def test_level_applies_to_package_logger() -> None:
    logs.configure_logging(level="error")
    assert logging.getLogger("forklaunch").level == logging.ERROR


def test_reset_removes_configured_handlers(tmp_path: Path) -> None:
    logs.configure_logging(level="INFO", log_path=tmp_path / "x.log", verbose=True)
    logs.reset_stdlib_logging_for_tests()

    root = logging.getLogger()
    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)
    assert not any(getattr(h, "stream", None) is not None and type(h) is logging.StreamHandler for h in root.handlers)
