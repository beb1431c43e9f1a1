"""Expand an effective configuration into the ordered list of menu entries."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import MenuError
from ._processes import list_search_path_executables
from ._schemas import EffectiveConfig

logger = logging.getLogger(__name__)

ExecutableLister = Callable[[], Iterable[tuple[str, Path]]]


class EntryError(MenuError, ValueError):
    """Raised when an entry definition is structurally invalid."""


@dataclass(frozen=True, slots=True)
class Entry:
    """One selectable menu item."""

    name: str
    command: str
    group: int = 0


def normalize_entry(name: str, raw: Any) -> Entry:
    """Turn a raw config value (command string or ``run``/``group`` table) into an :class:`Entry`."""
    if isinstance(raw, str):
        return Entry(name=name, command=raw)
    if not isinstance(raw, Mapping):
        raise EntryError(f"menu entry `{name}` must be a string or a table")

    run = raw.get("run")
    if run is None:
        raise EntryError(f"menu entry `{name}` has no `run` value")
    if not isinstance(run, str):
        raise EntryError(f"menu entry `{name}` has a non-string `run` value")

    group = raw.get("group", 0)
    # bool is an int subclass; `group = true` is a typo, not a group.
    if isinstance(group, bool) or not isinstance(group, int):
        raise EntryError(f"menu entry `{name}` has a non-integer `group` value: {group!r}")
    return Entry(name=name, command=run, group=group)


def resolve(cfg: EffectiveConfig, *, list_executables: ExecutableLister | None = None) -> list[Entry]:
    """Build the final menu: explicit entries, optional ``$PATH`` executables, sorted by group.

    Explicit entries keep the order fixed by the merge. Executables found on the
    search path are appended after them and never replace an explicit entry of
    the same name. The result is stably sorted by ascending group.
    """
    entries = [normalize_entry(name, raw) for name, raw in cfg.entries.items()]

    if cfg.scan_path:
        if list_executables is None:
            list_executables = list_search_path_executables
        entries.extend(_path_entries(list_executables(), explicit={entry.name for entry in entries}))

    if not entries:
        raise EntryError("no menu entries defined; add a `[menu]` table, an `entries` array, or enable `scan-path`")

    return sorted(entries, key=lambda entry: entry.group)


def _path_entries(executables: Iterable[tuple[str, Path]], *, explicit: set[str]) -> list[Entry]:
    seen = set(explicit)
    found: list[Entry] = []
    skipped = 0
    for filename, _path in executables:
        if filename in seen:
            skipped += 1
            continue
        seen.add(filename)
        found.append(Entry(name=filename, command=filename))
    logger.debug("Path scan added %d executable(s), skipped %d shadowed name(s).", len(found), skipped)
    return found


__all__ = ["Entry", "EntryError", "ExecutableLister", "normalize_entry", "resolve"]
