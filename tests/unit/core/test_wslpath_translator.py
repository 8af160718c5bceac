from __future__ import annotations

import subprocess

import pytest

from forklaunch.core.errors import TranslationError
from forklaunch.core.wsl.translator import WslPathTranslator, looks_like_windows_path
from tests.helpers.fakes import FakeWslpathRunner


def test_to_native_path_invokes_wslpath_w() -> None:
    runner = FakeWslpathRunner()
    translator = WslPathTranslator(runner=runner, timeout=2.5)

    assert translator.to_native_path("/home/dev/proj") == r"\\wsl.localhost\Ubuntu\home\dev\proj"
    assert runner.calls == [["wslpath", "-w", "/home/dev/proj"]]
    assert runner.kwargs[0]["timeout"] == 2.5
    assert runner.kwargs[0]["check"] is True


def test_mounted_drive_translates_to_drive_letter() -> None:
    translator = WslPathTranslator(runner=FakeWslpathRunner())
    assert translator.to_native_path("/mnt/c/work/repo") == r"C:\work\repo"


def test_to_wsl_path_invokes_wslpath_u() -> None:
    runner = FakeWslpathRunner()
    translator = WslPathTranslator("/usr/bin/wslpath", runner=runner)

    assert translator.to_wsl_path(r"C:\Tools\Fork\Fork.exe") == "/mnt/c/Tools/Fork/Fork.exe"
    assert runner.calls == [["/usr/bin/wslpath", "-u", r"C:\Tools\Fork\Fork.exe"]]


def test_output_is_trimmed() -> None:
    translator = WslPathTranslator(runner=FakeWslpathRunner(stdout="  D:\\x  \r\n"))
    assert translator.to_native_path("/mnt/d/x") == "D:\\x"


@pytest.mark.parametrize("stdout", ["", "   \n", "a\nb\n"])
def test_unexpected_output_is_an_error(stdout: str) -> None:
    translator = WslPathTranslator(runner=FakeWslpathRunner(stdout=stdout))
    with pytest.raises(TranslationError):
        translator.to_native_path("/home/dev")


def test_nonzero_exit_is_an_error_with_stderr() -> None:
    exc = subprocess.CalledProcessError(1, ["wslpath"], output="", stderr="wslpath: bogus: Invalid argument\n")
    translator = WslPathTranslator(runner=FakeWslpathRunner(fail_with=exc))
    with pytest.raises(TranslationError, match="Invalid argument"):
        translator.to_wsl_path("bogus")


def test_timeout_is_an_error() -> None:
    exc = subprocess.TimeoutExpired(["wslpath"], 1.0)
    translator = WslPathTranslator(runner=FakeWslpathRunner(fail_with=exc), timeout=1.0)
    with pytest.raises(TranslationError, match="timed out after 1s"):
        translator.to_native_path("/home/dev")


def test_missing_helper_is_an_error() -> None:
    exc = FileNotFoundError(2, "No such file or directory", "wslpath")
    translator = WslPathTranslator(runner=FakeWslpathRunner(fail_with=exc))
    with pytest.raises(TranslationError, match="not available"):
        translator.to_native_path("/home/dev")


def test_real_runner_with_missing_helper(tmp_path) -> None:
    translator = WslPathTranslator(str(tmp_path / "no-such-wslpath"), timeout=5)
    with pytest.raises(TranslationError):
        translator.to_native_path("/home/dev")


@pytest.mark.parametrize(
    "path,expected",
    [
        (r"C:\Program Files\Fork\Fork.exe", True),
        ("C:/Tools/Fork.exe", True),
        ("c:", True),
        (r"\\server\share\Fork.exe", True),
        (r"relative\Fork.exe", True),
        ("/mnt/c/Program Files/Fork/Fork.exe", False),
        ("/opt/fork/Fork.exe", False),
        ("Fork.exe", False),
        ("C:relative", False),
    ],
)
def test_looks_like_windows_path(path: str, expected: bool) -> None:
    assert looks_like_windows_path(path) is expected


def test_round_trip_for_translatable_paths() -> None:
    translator = WslPathTranslator(runner=FakeWslpathRunner())
    for path in ("/mnt/c/Users/dev/repo", "/home/dev/proj"):
        assert translator.to_wsl_path(translator.to_native_path(path)) == path
