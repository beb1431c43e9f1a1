from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from tomlmenu.cli._processes import ProcessError, list_search_path_executables, run_selector, run_shell

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="requires a POSIX shell")


def _make_executable(path: Path, content: str = "#!/bin/sh\n") -> Path:
    path.write_text(content, encoding="utf-8")
    path.chmod(0o755)
    return path


@posix_only
def test_list_search_path_executables_first_directory_wins(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    _make_executable(first / "tool")
    _make_executable(second / "tool")
    _make_executable(second / "other")
    (second / "notes.txt").write_text("not executable", encoding="utf-8")
    (second / "subdir").mkdir()

    found = list_search_path_executables(os.pathsep.join([str(first), str(tmp_path / "missing"), str(second)]))

    assert dict(found) == {"tool": first / "tool", "other": second / "other"}
    assert [name for name, _ in found] == ["tool", "other"]


def test_list_search_path_executables_reads_path_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PATH", str(tmp_path / "does-not-exist"))

    assert list_search_path_executables() == []


@posix_only
def test_run_selector_returns_chosen_line(tmp_path: Path) -> None:
    selector = _make_executable(tmp_path / "fake-dmenu", "#!/bin/sh\nsed -n 2p\n")

    assert run_selector(str(selector), ["-i"], ["alpha", "beta", "gamma"]) == "beta"


@posix_only
def test_run_selector_non_zero_exit_means_no_selection(tmp_path: Path) -> None:
    selector = _make_executable(tmp_path / "fake-dmenu", "#!/bin/sh\ncat >/dev/null\necho alpha\nexit 1\n")

    assert run_selector(str(selector), [], ["alpha"]) is None


@posix_only
def test_run_selector_empty_output_means_no_selection(tmp_path: Path) -> None:
    selector = _make_executable(tmp_path / "fake-dmenu", "#!/bin/sh\ncat >/dev/null\n")

    assert run_selector(str(selector), [], ["alpha"]) is None


def test_run_selector_missing_program_is_process_error(tmp_path: Path) -> None:
    with pytest.raises(ProcessError, match="selector"):
        run_selector(str(tmp_path / "no-such-selector"), [], ["alpha"])


@posix_only
def test_run_shell_waits_and_returns_status() -> None:
    assert run_shell(["sh", "-c"], "exit 3", wait=True) == 3


@posix_only
def test_run_shell_detached_returns_none(tmp_path: Path) -> None:
    marker = tmp_path / "ran"

    assert run_shell(["sh", "-c"], f"touch {marker}") is None


def test_run_shell_missing_program_is_process_error(tmp_path: Path) -> None:
    with pytest.raises(ProcessError, match="failed to run"):
        run_shell([str(tmp_path / "no-such-shell"), "-c"], "true", wait=True)


@posix_only
def test_run_selector_replaces_undecodable_output(tmp_path: Path) -> None:
    selector = _make_executable(tmp_path / "fake-dmenu", "#!/bin/sh\ncat >/dev/null\nprintf 'caf\\377\\n'\n")

    assert run_selector(str(selector), [], ["alpha"]) == "caf�"
