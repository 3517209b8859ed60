from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

# Persisted key -> dataclass attribute.
_KEY_TO_ATTR = {
    "headerBackground": "header_background",
    "headerForeground": "header_foreground",
    "gridColor": "grid_color",
    "valueColor": "value_color",
}

THEME_KEYS: tuple[str, ...] = tuple(_KEY_TO_ATTR)

THEME_LABELS = {
    "headerBackground": "Header background",
    "headerForeground": "Header text",
    "gridColor": "Grid lines",
    "valueColor": "Cell text",
}


@dataclass(frozen=True)
class ThemeConfig:
    header_background: str = "#333333"
    header_foreground: str = "#ffffff"
    grid_color: str = "#444444"
    value_color: str = "#cccccc"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ThemeConfig":
        """Build a theme from persisted settings; absent or blank values keep their default."""
        if not isinstance(data, Mapping):
            return cls()
        kwargs: dict[str, str] = {}
        for key, attr in _KEY_TO_ATTR.items():
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                kwargs[attr] = value.strip()
        return cls(**kwargs)

    def to_mapping(self) -> dict[str, str]:
        return {key: getattr(self, attr) for key, attr in _KEY_TO_ATTR.items()}

    def get(self, key: str) -> str:
        return getattr(self, _attr_for(key))

    def with_value(self, key: str, value: str) -> "ThemeConfig":
        """Return a copy with one persisted key changed. A blank value restores the default."""
        attr = _attr_for(key)
        value = (value or "").strip()
        if not value:
            value = _DEFAULTS[attr]
        return replace(self, **{attr: value})


def _attr_for(key: str) -> str:
    try:
        return _KEY_TO_ATTR[key]
    except KeyError:
        raise KeyError(f"Unknown theme key: {key!r} (expected one of {', '.join(THEME_KEYS)})") from None


_DEFAULTS = {f.name: f.default for f in fields(ThemeConfig)}
