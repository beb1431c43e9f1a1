"""Merge a base config document with a pattern document.

Precedence is decided here and nowhere else:

- entries: the pattern overrides base values by name; base names keep their
  position and new pattern names are appended in order.
- settings: a value set in the pattern beats the base, which beats the
  built-in default. Lists (``shell``) are replaced wholesale, nested tables
  (``dmenu``) are merged key by key.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from ._constants import DEFAULT_SEPARATOR
from ._schemas import ConfigDocument, EffectiveConfig, RawEntry, SelectorSchema, SettingsSchema

logger = logging.getLogger(__name__)


def merge(base: ConfigDocument, overlay: ConfigDocument) -> EffectiveConfig:
    """Combine ``base`` and ``overlay`` into an :class:`EffectiveConfig` with defaults applied."""
    entries = merge_entries(base.entries, overlay.entries)
    settings = merge_settings(base.settings, overlay.settings)
    logger.debug("Merged %d base and %d pattern entries into %d.", len(base.entries), len(overlay.entries), len(entries))

    selector = SelectorSchema.model_validate(settings.get("dmenu") or {})
    effective: dict[str, Any] = {
        "entries": entries,
        "dmenu": selector,
        "separator": _resolve_separator(settings.get("separator")),
    }
    if selector.program is not None:
        effective["selector_program"] = selector.program
    for key in ("prompt", "shell", "scan_path", "ad_hoc", "numbered"):
        if settings.get(key) is not None:
            effective[key] = settings[key]
    return EffectiveConfig(**effective)


def merge_entries(base: dict[str, RawEntry], overlay: dict[str, RawEntry]) -> dict[str, RawEntry]:
    # dict assignment to an existing key keeps its insertion position.
    merged = copy.deepcopy(base)
    for name, value in overlay.items():
        merged[name] = copy.deepcopy(value)
    return merged


def merge_settings(base: SettingsSchema, overlay: SettingsSchema) -> dict[str, Any]:
    """Return the merged set (non-``None``) settings as a plain dict keyed by field name.

    Overlay values replace base values, lists included. Nested tables are
    merged one key at a time.
    """
    merged = _set_fields(base)
    for key, value in _set_fields(overlay).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def _set_fields(settings: SettingsSchema) -> dict[str, Any]:
    return copy.deepcopy(settings.model_dump(exclude_none=True))


def _resolve_separator(value: Any) -> str | None:
    if value is True:
        return DEFAULT_SEPARATOR
    if isinstance(value, str):
        return value
    return None


__all__ = ["merge", "merge_entries", "merge_settings"]
