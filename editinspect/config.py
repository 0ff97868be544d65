from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

DEFAULT_STYLES: Mapping[str, str] = MappingProxyType(
    {
        "title": "bold #d3deee",
        "directory": "#82aaff",
        "line_nr": "#ffcb6b",
        "comment": "italic #9db0c8",
        "label": "bold #92f2ae",
        "removed": "bold #ffd3d7 on #4a1119",
        "added": "bold #c4f8d1 on #0f3a1f",
    }
)


@dataclass(frozen=True)
class InspectConfig:
    styles: Mapping[str, str] = field(default_factory=lambda: DEFAULT_STYLES)
    navigate_keys: tuple[str, ...] = ("enter",)
    dismiss_keys: tuple[str, ...] = ("escape", "q")

    def style(self, group: str) -> str:
        return self.styles.get(group, "")


def _keys(value: object, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise RuntimeError(f"Key bindings must be a string or a list of strings: {value!r}")
    keys = tuple(str(item).strip() for item in value if str(item).strip())
    return keys or default


def _table(data: dict, name: str) -> dict:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise RuntimeError(f"[{name}] must be a table in config, got {type(value).__name__}")
    return value


def load_inspect_config(path: Path | None) -> InspectConfig:
    if path is None:
        return InspectConfig()
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise RuntimeError(f"Config not found: {path}") from error
    except tomllib.TOMLDecodeError as error:
        raise RuntimeError(f"Invalid config TOML: {error}") from error

    overrides = _table(data, "styles")
    unknown = sorted(set(overrides) - set(DEFAULT_STYLES))
    if unknown:
        raise RuntimeError(f"Unknown style groups in config: {', '.join(unknown)}")
    styles = dict(DEFAULT_STYLES)
    styles.update({str(key): str(value) for key, value in overrides.items()})

    keys = _table(data, "keys")
    return InspectConfig(
        styles=MappingProxyType(styles),
        navigate_keys=_keys(keys.get("navigate"), ("enter",)),
        dismiss_keys=_keys(keys.get("dismiss"), ("escape", "q")),
    )
