"""Pydantic schemas for menu documents and the merged effective configuration."""

from __future__ import annotations

import shlex
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator

from ._constants import DEFAULT_SELECTOR, DEFAULT_SHELL

RawEntry = Union[StrictStr, dict[str, Any]]


class SelectorSchema(BaseModel):
    """Appearance options forwarded to the selector program (``[config.dmenu]``)."""

    model_config = ConfigDict(populate_by_name=True)

    program: StrictStr | None = Field(None, description="Selector executable (defaults to dmenu).")
    bottom: StrictBool | None = Field(None, description="Show the menu at the bottom of the screen.")
    fast: StrictBool | None = Field(None, description="Grab the keyboard before reading stdin.")
    case_sensitive: StrictBool | None = Field(None, alias="case-sensitive")
    lines: StrictInt | None = Field(None, ge=0, description="List entries vertically with this many lines.")
    monitor: StrictInt | None = Field(None, ge=0)
    font: StrictStr | None = None
    background: StrictStr | None = None
    foreground: StrictStr | None = None
    selected_background: StrictStr | None = Field(None, alias="selected-background")
    selected_foreground: StrictStr | None = Field(None, alias="selected-foreground")
    window_id: StrictStr | None = Field(None, alias="window-id")


class SettingsSchema(BaseModel):
    """Everything under ``[config]``. ``None`` means the key was not set."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: StrictStr | None = None
    shell: list[StrictStr] | None = Field(None, description="Argv prefix used to run the chosen command.")
    scan_path: StrictBool | None = Field(None, alias="scan-path")
    ad_hoc: StrictBool | None = Field(None, alias="ad-hoc")
    numbered: StrictBool | None = None
    separator: StrictBool | StrictStr | None = None
    dmenu: SelectorSchema | None = None

    @field_validator("shell", mode="before")
    @classmethod
    def split_shell(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            try:
                value = shlex.split(value)
            except ValueError as exc:
                raise ValueError(f"shell string could not be split: {exc}") from exc
        if isinstance(value, (list, tuple)) and not value:
            raise ValueError("shell must name at least the program to run.")
        return value


class ConfigDocument(BaseModel):
    """One parsed configuration source (a pattern file or the base config)."""

    entries: dict[str, RawEntry] = Field(default_factory=dict)
    settings: SettingsSchema = Field(default_factory=SettingsSchema)


class EffectiveConfig(BaseModel):
    """Result of merging a base document with a pattern document, defaults applied."""

    entries: dict[str, RawEntry] = Field(default_factory=dict)
    prompt: str | None = None
    shell: list[str] = Field(default_factory=lambda: list(DEFAULT_SHELL))
    scan_path: bool = False
    ad_hoc: bool = False
    numbered: bool = False
    separator: str | None = None
    selector_program: str = DEFAULT_SELECTOR
    dmenu: SelectorSchema = Field(default_factory=SelectorSchema)


__all__ = ["ConfigDocument", "EffectiveConfig", "RawEntry", "SelectorSchema", "SettingsSchema"]
