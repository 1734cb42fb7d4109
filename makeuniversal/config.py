"""Settings for a merge run, optionally read from a YAML file."""

from __future__ import annotations

import math
import pathlib
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

import yaml

from makeuniversal.arch import Architecture
from makeuniversal.classifier import NOT_BINARY_PATTERN


@dataclass(frozen=True)
class Settings:
    lipo: str = "lipo"
    rsync: str = "rsync"
    primary_arch: Architecture = Architecture.X86_64
    secondary_arch: Architecture = Architecture.ARM64
    timeout: Optional[float] = None
    not_binary_pattern: str = NOT_BINARY_PATTERN
    allow_partial_copy: bool = False

    def override(self, **changes: Any) -> "Settings":
        """Return a copy with every non-None value in ``changes`` applied."""
        return validate(replace(self, **{key: value for key, value in changes.items() if value is not None}))


def load_yaml(path: pathlib.Path) -> dict:
    if not path.exists():
        raise SystemExit(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SystemExit(f"YAML must contain a mapping: {path}")
    return data


def validate(settings: Settings) -> Settings:
    if settings.primary_arch == settings.secondary_arch:
        raise SystemExit(f"primary_arch and secondary_arch are both {settings.primary_arch}")
    if settings.timeout is not None and not (math.isfinite(settings.timeout) and settings.timeout > 0):
        raise SystemExit(f"timeout must be a positive, finite number of seconds, got {settings.timeout}")
    try:
        re.compile(settings.not_binary_pattern)
    except re.error as exc:
        raise SystemExit(f"Invalid not_binary_pattern: {exc}") from None
    return settings


def settings_from_mapping(data: dict, source: str = "config") -> Settings:
    known = {item.name for item in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise SystemExit(f"Unknown keys in {source}: {', '.join(map(str, unknown))}")

    values: dict[str, Any] = {}
    for key in ("lipo", "rsync", "not_binary_pattern"):
        if key in data:
            if not isinstance(data[key], str) or not data[key]:
                raise SystemExit(f"{key} must be a non-empty string in {source}")
            values[key] = data[key]
    for key in ("primary_arch", "secondary_arch"):
        if key in data:
            try:
                values[key] = Architecture.parse(data[key])
            except ValueError as exc:
                raise SystemExit(f"{exc} in {source}") from None
    if data.get("timeout") is not None:
        timeout = data["timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise SystemExit(f"timeout must be a number of seconds in {source}")
        values["timeout"] = float(timeout)
    if "allow_partial_copy" in data:
        if not isinstance(data["allow_partial_copy"], bool):
            raise SystemExit(f"allow_partial_copy must be true or false in {source}")
        values["allow_partial_copy"] = data["allow_partial_copy"]

    return validate(Settings(**values))


def load_settings(path: Optional[pathlib.Path]) -> Settings:
    if path is None:
        return Settings()
    return settings_from_mapping(load_yaml(path), source=str(path))
