"""One menu round trip: merge, resolve, select, launch."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ._merge import merge
from ._processes import run_selector, run_shell
from ._resolver import Entry, ExecutableLister, resolve
from ._schemas import ConfigDocument, EffectiveConfig
from ._selector import build_menu, build_selector_args, choose_command

logger = logging.getLogger(__name__)

SelectorRunner = Callable[[str, Sequence[str], Sequence[str]], "str | None"]
ShellRunner = Callable[..., "int | None"]


@dataclass(slots=True)
class MenuOutcome:
    """What happened during a run; ``command`` is ``None`` when nothing was launched."""

    config: EffectiveConfig
    entries: list[Entry]
    choice: str | None = None
    command: str | None = None
    exit_status: int | None = None

    @property
    def launched(self) -> bool:
        return self.command is not None


def run_menu(
    pattern: ConfigDocument,
    base: ConfigDocument | None = None,
    *,
    selector: SelectorRunner | None = None,
    shell: ShellRunner | None = None,
    list_executables: ExecutableLister | None = None,
    wait: bool = False,
    dry_run: bool = False,
) -> MenuOutcome:
    """Resolve ``pattern`` over ``base`` and, unless ``dry_run``, show it and run the choice.

    Config and entry errors are raised before any process is spawned.
    """
    effective = merge(base or ConfigDocument(), pattern)
    entries = resolve(effective, list_executables=list_executables)
    outcome = MenuOutcome(config=effective, entries=entries)
    if dry_run:
        return outcome

    menu = build_menu(entries, numbered=effective.numbered, separator=effective.separator)
    selector = selector or run_selector
    outcome.choice = selector(effective.selector_program, build_selector_args(effective), menu.lines)

    command = choose_command(menu, outcome.choice, ad_hoc=effective.ad_hoc)
    if command is None:
        logger.info("Nothing selected.")
        return outcome

    outcome.command = command
    shell = shell or run_shell
    outcome.exit_status = shell(effective.shell, command, wait=wait)
    return outcome


__all__ = ["MenuOutcome", "SelectorRunner", "ShellRunner", "run_menu"]
