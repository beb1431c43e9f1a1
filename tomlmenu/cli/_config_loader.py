"""Config loader utilities bridging TOML/YAML menu files and Pydantic schemas."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TextIO

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pydantic import BaseModel, ValidationError

from . import MenuError
from ._constants import STDIN_SOURCE
from ._resolver import EntryError
from ._schemas import ConfigDocument, RawEntry, SelectorSchema, SettingsSchema
from tomlmenu.utils.pathing import default_base_config_path, resolve_user_path

logger = logging.getLogger(__name__)

MENU_KEY = "menu"
ENTRIES_KEY = "entries"
CONFIG_KEY = "config"
TOP_LEVEL_KEYS = (MENU_KEY, ENTRIES_KEY, CONFIG_KEY)
YAML_SUFFIXES = (".yaml", ".yml")


class ParseError(MenuError, ValueError):
    """Raised when a configuration source is malformed or has a wrongly typed value."""


def parse_config_document(text: str, *, source: str = STDIN_SOURCE, allow_empty: bool = False) -> ConfigDocument:
    """Parse TOML text into a :class:`ConfigDocument`.

    Pattern documents must not be blank; the base config may be (``allow_empty``).
    """
    if not text.strip():
        if allow_empty:
            return ConfigDocument()
        raise ParseError(f"provided config {source} is empty")
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ParseError(f"can't parse {source} as TOML: {exc}") from exc
    return document_from_mapping(data, source=source)


def load_config_document(path: str | Path, *, allow_empty: bool = False) -> ConfigDocument:
    """Load a menu document from disk; ``.yaml``/``.yml`` files go through OmegaConf."""
    resolved = resolve_user_path(path)
    logger.debug("Loading menu config %s", resolved)
    if resolved.suffix.lower() in YAML_SUFFIXES:
        return document_from_mapping(_load_yaml(resolved, allow_empty=allow_empty), source=str(resolved))
    text = _read_text(resolved)
    return parse_config_document(text, source=str(resolved), allow_empty=allow_empty)


def load_base_config(path: str | Path | None = None) -> ConfigDocument:
    """Load the user-level base config.

    An explicit ``path`` must exist. The default location is optional and yields
    an empty document when absent.
    """
    if path is not None:
        return load_config_document(path, allow_empty=True)
    candidate = default_base_config_path()
    if not candidate.is_file():
        logger.debug("No base config at %s", candidate)
        return ConfigDocument()
    return load_config_document(candidate, allow_empty=True)


def read_pattern(path: str | Path | None, stdin: TextIO) -> ConfigDocument:
    """Read the pattern document from ``path`` or, when it is ``None``, from ``stdin``."""
    if path is not None:
        return load_config_document(path)
    try:
        text = stdin.read()
    except UnicodeDecodeError as exc:
        raise ParseError(f"{STDIN_SOURCE} is not valid UTF-8: {exc}") from exc
    return parse_config_document(text, source=STDIN_SOURCE)


def document_from_mapping(data: Any, *, source: str) -> ConfigDocument:
    """Convert a decoded mapping (TOML or YAML) into a :class:`ConfigDocument`."""
    if not isinstance(data, Mapping):
        raise ParseError(f"{source}: configuration root must be a table, got {type(data).__name__}")

    unknown = [key for key in data if key not in TOP_LEVEL_KEYS]
    if unknown:
        logger.warning("%s: ignoring unknown top-level key(s): %s", source, ", ".join(map(str, unknown)))

    entries: dict[str, RawEntry] = {}
    entries.update(_collect_menu_table(data.get(MENU_KEY), source=source))
    entries.update(_collect_entries_array(data.get(ENTRIES_KEY), source=source))
    settings = _build_settings(data.get(CONFIG_KEY), source=source)
    return ConfigDocument(entries=entries, settings=settings)


def _collect_menu_table(value: Any, *, source: str) -> dict[str, RawEntry]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ParseError(f"{source}: only a table is valid for `{MENU_KEY}`; found {_type_name(value)}")
    collected: dict[str, RawEntry] = {}
    for name, entry in value.items():
        collected[str(name)] = _check_raw_entry(entry, target=f"{MENU_KEY}.{name}", source=source)
    return collected


def _collect_entries_array(value: Any, *, source: str) -> dict[str, RawEntry]:
    if value is None:
        return {}
    if not isinstance(value, list):
        raise ParseError(f"{source}: only an array is valid for `{ENTRIES_KEY}`; found {_type_name(value)}")
    collected: dict[str, RawEntry] = {}
    for index, entry in enumerate(value):
        target = f"{ENTRIES_KEY}[{index}]"
        entry = _check_raw_entry(entry, target=target, source=source)
        if isinstance(entry, str):
            collected[entry] = entry
            continue
        # Array entries are named explicitly or after the command they run.
        entry = dict(entry)
        name = entry.pop("name", None)
        if name is None:
            name = entry.get("run")
        if not isinstance(name, str):
            raise EntryError(f"{source}: {target} has no `name` or `run` string to name it by")
        collected[name] = entry
    return collected


def _check_raw_entry(entry: Any, *, target: str, source: str) -> RawEntry:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping):
        return dict(entry)
    raise ParseError(f"{source}: only a string or table is valid for `{target}`; found {_type_name(entry)}")


def _build_settings(value: Any, *, source: str) -> SettingsSchema:
    if value is None:
        return SettingsSchema()
    if not isinstance(value, Mapping):
        raise ParseError(f"{source}: only a table is valid for `{CONFIG_KEY}`; found {_type_name(value)}")
    _warn_unknown_keys(value, SettingsSchema, section=CONFIG_KEY, source=source)
    selector = value.get("dmenu")
    if isinstance(selector, Mapping):
        _warn_unknown_keys(selector, SelectorSchema, section=f"{CONFIG_KEY}.dmenu", source=source)
    try:
        return SettingsSchema.model_validate(dict(value))
    except ValidationError as exc:
        raise ParseError(f"{source}: invalid `{CONFIG_KEY}`: {_summarize_validation_error(exc)}") from exc


def _warn_unknown_keys(value: Mapping[str, Any], schema: type[BaseModel], *, section: str, source: str) -> None:
    known: set[str] = set()
    for name, field in schema.model_fields.items():
        known.add(name)
        if field.alias:
            known.add(field.alias)
    unknown = [str(key) for key in value if key not in known]
    if unknown:
        logger.warning("%s: ignoring unknown key(s) in `%s`: %s", source, section, ", ".join(unknown))


def _summarize_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def _load_yaml(path: Path, *, allow_empty: bool) -> Any:
    text = _read_text(path)
    try:
        cfg = OmegaConf.create(text)
        # Commands may contain shell `${VAR}` syntax, so interpolations stay unresolved.
        data = OmegaConf.to_container(cfg, resolve=False)
    except (OmegaConfBaseException, yaml.YAMLError) as exc:
        raise ParseError(f"can't parse {path} as YAML: {exc}") from exc
    if data is None or data == {}:
        if allow_empty:
            return {}
        raise ParseError(f"provided config {path} is empty")
    return data


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"{path} is not valid UTF-8: {exc}") from exc


def _type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "table"
    return type(value).__name__


__all__ = [
    "ParseError",
    "document_from_mapping",
    "load_base_config",
    "load_config_document",
    "parse_config_document",
    "read_pattern",
]
