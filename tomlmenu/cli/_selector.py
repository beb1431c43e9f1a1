"""Render resolved entries for the selector and map its answer back to a command."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from . import MenuError
from ._resolver import Entry
from ._schemas import EffectiveConfig


class SelectionError(MenuError, ValueError):
    """Raised when the selector returns text that matches no entry and ad-hoc commands are off."""


@dataclass(slots=True)
class Menu:
    """Display lines handed to the selector plus the label → entry lookup."""

    lines: list[str] = field(default_factory=list)
    lookup: dict[str, Entry] = field(default_factory=dict)
    separator: str | None = None


def build_selector_args(cfg: EffectiveConfig) -> list[str]:
    """Translate appearance settings into dmenu-compatible flags."""
    options = cfg.dmenu
    args: list[str] = []

    if options.bottom:
        args.append("-b")
    if options.fast:
        args.append("-f")
    # Matching is case-insensitive unless asked otherwise.
    if not options.case_sensitive:
        args.append("-i")

    valued = [
        ("-l", options.lines),
        ("-m", options.monitor),
        ("-p", cfg.prompt),
        ("-fn", options.font),
        ("-nb", options.background),
        ("-nf", options.foreground),
        ("-sb", options.selected_background),
        ("-sf", options.selected_foreground),
        ("-w", options.window_id),
    ]
    for flag, value in valued:
        if value is not None:
            args.extend([flag, str(value)])
    return args


def build_menu(entries: Sequence[Entry], *, numbered: bool = False, separator: str | None = None) -> Menu:
    """Lay out ``entries`` as selector lines.

    Numbered labels read ``"<n>: <name>"`` counting from 1. When ``separator``
    is set, a separator line is drawn wherever the group changes.
    """
    menu = Menu(separator=separator)
    previous_group: int | None = None
    for index, entry in enumerate(entries, start=1):
        if separator is not None and previous_group is not None and entry.group != previous_group:
            menu.lines.append(separator)
        previous_group = entry.group

        label = f"{index}: {entry.name}" if numbered else entry.name
        menu.lines.append(label)
        menu.lookup.setdefault(label, entry)
    return menu


def choose_command(menu: Menu, choice: str | None, *, ad_hoc: bool = False) -> str | None:
    """Return the command for ``choice``; ``None`` means nothing was chosen."""
    if choice is None or not choice.strip():
        return None
    entry = menu.lookup.get(choice)
    if entry is not None:
        return entry.command
    if menu.separator is not None and choice == menu.separator:
        return None
    if ad_hoc:
        return choice
    raise SelectionError(
        f"`{choice}` is not a menu entry and ad-hoc commands are disabled; "
        "choose a menu option or set `config.ad-hoc = true`"
    )


__all__ = ["Menu", "SelectionError", "build_menu", "build_selector_args", "choose_command"]
