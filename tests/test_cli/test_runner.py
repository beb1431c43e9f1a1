from __future__ import annotations

from collections.abc import Sequence

import pytest

from tomlmenu.cli._config_loader import ParseError, parse_config_document
from tomlmenu.cli._resolver import EntryError
from tomlmenu.cli._runner import run_menu
from tomlmenu.cli._schemas import ConfigDocument
from tomlmenu.cli._selector import SelectionError


class _FakeSelector:
    def __init__(self, answer: str | None) -> None:
        self.answer = answer
        self.calls: list[tuple[str, list[str], list[str]]] = []

    def __call__(self, program: str, args: Sequence[str], candidates: Sequence[str]) -> str | None:
        self.calls.append((program, list(args), list(candidates)))
        return self.answer


class _FakeShell:
    def __init__(self, status: int | None = None) -> None:
        self.status = status
        self.calls: list[tuple[list[str], str, bool]] = []

    def __call__(self, argv_prefix: Sequence[str], command: str, *, wait: bool = False) -> int | None:
        self.calls.append((list(argv_prefix), command, wait))
        return self.status


PATTERN = """
[menu]
browser = "firefox"
editor = { run = "code", group = -1 }

[config]
prompt = "go:"
"""


def test_run_menu_launches_selected_command() -> None:
    selector = _FakeSelector("browser")
    shell = _FakeShell()

    outcome = run_menu(parse_config_document(PATTERN), selector=selector, shell=shell)

    assert selector.calls == [("dmenu", ["-i", "-p", "go:"], ["editor", "browser"])]
    assert shell.calls == [(["sh", "-c"], "firefox", False)]
    assert outcome.launched
    assert outcome.choice == "browser"
    assert outcome.command == "firefox"


def test_run_menu_merges_base_underneath_pattern() -> None:
    base = parse_config_document(
        """
        [menu]
        terminal = "xterm"

        [config]
        prompt = "base:"
        shell = ["bash", "-c"]

        [config.dmenu]
        program = "bemenu"
        """
    )
    selector = _FakeSelector("terminal")
    shell = _FakeShell()

    run_menu(parse_config_document(PATTERN), base, selector=selector, shell=shell)

    program, args, candidates = selector.calls[0]
    assert program == "bemenu"
    assert args == ["-i", "-p", "go:"]
    assert candidates == ["editor", "terminal", "browser"]
    assert shell.calls == [(["bash", "-c"], "xterm", False)]


def test_run_menu_no_selection_spawns_nothing() -> None:
    shell = _FakeShell()

    outcome = run_menu(parse_config_document(PATTERN), selector=_FakeSelector(None), shell=shell)

    assert shell.calls == []
    assert not outcome.launched


def test_run_menu_wait_returns_exit_status() -> None:
    shell = _FakeShell(status=7)

    outcome = run_menu(parse_config_document(PATTERN), selector=_FakeSelector("editor"), shell=shell, wait=True)

    assert shell.calls == [(["sh", "-c"], "code", True)]
    assert outcome.exit_status == 7


def test_run_menu_dry_run_spawns_nothing() -> None:
    selector = _FakeSelector("browser")
    shell = _FakeShell()

    outcome = run_menu(parse_config_document(PATTERN), selector=selector, shell=shell, dry_run=True)

    assert [entry.name for entry in outcome.entries] == ["editor", "browser"]
    assert selector.calls == []
    assert shell.calls == []


def test_run_menu_entry_error_aborts_before_selector() -> None:
    selector = _FakeSelector("broken")
    pattern = ConfigDocument(entries={"broken": {"group": 2}})

    with pytest.raises(EntryError):
        run_menu(pattern, selector=selector, shell=_FakeShell())

    assert selector.calls == []


def test_malformed_pattern_never_reaches_selector() -> None:
    selector = _FakeSelector("browser")

    with pytest.raises(ParseError):
        run_menu(parse_config_document("[menu\n"), selector=selector)

    assert selector.calls == []


def test_run_menu_ad_hoc_choice() -> None:
    pattern = parse_config_document(PATTERN + "ad-hoc = true\n")
    shell = _FakeShell()

    run_menu(pattern, selector=_FakeSelector("notify-send hi"), shell=shell)

    assert shell.calls == [(["sh", "-c"], "notify-send hi", False)]


def test_run_menu_rejects_unknown_choice_without_ad_hoc() -> None:
    shell = _FakeShell()

    with pytest.raises(SelectionError):
        run_menu(parse_config_document(PATTERN), selector=_FakeSelector("rm -rf /tmp/x"), shell=shell)

    assert shell.calls == []


def test_run_menu_uses_path_scan_lister() -> None:
    pattern = parse_config_document(PATTERN + "scan-path = true\n")
    selector = _FakeSelector(None)

    outcome = run_menu(
        pattern,
        selector=selector,
        shell=_FakeShell(),
        list_executables=lambda: [("firefox", None), ("browser", None)],
    )

    assert [entry.name for entry in outcome.entries] == ["editor", "browser", "firefox"]
    assert selector.calls[0][2] == ["editor", "browser", "firefox"]
