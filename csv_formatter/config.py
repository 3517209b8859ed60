from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Optional

from .errors import ConfigError
from .theme import THEME_KEYS, ThemeConfig

logger = logging.getLogger("csv-formatter")


@dataclass(frozen=True)
class AppConfig:
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    last_file: Optional[str] = None


def _config_path() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "csv-formatter" / "config.json"


def load_config() -> AppConfig:
    path = _config_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.debug("No config at %s, using defaults", path)
        return AppConfig()
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return AppConfig()
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return AppConfig()

    kwargs: dict[str, object] = {"theme": ThemeConfig.from_mapping(data.get("theme"))}
    last_file = data.get("last_file")
    if isinstance(last_file, str) and last_file.strip():
        kwargs["last_file"] = last_file.strip()
    return AppConfig(**kwargs)  # type: ignore[arg-type]


def save_config(config: AppConfig) -> None:
    path = _config_path()
    data = {"theme": config.theme.to_mapping(), "last_file": config.last_file}
    tmp = path.with_suffix(".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(path)
    except OSError as e:
        raise ConfigError(f"Cannot write settings to {path}: {e}") from e
    logger.info("Saved settings to %s", path)


ThemeListener = Callable[[ThemeConfig], None]


class ThemeStore:
    """Theme settings seen by the viewer.

    `get_theme` and `on_theme_change` are the only two calls the UI needs; every
    change is written through to the config file before listeners hear about it.
    """

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        self._config = config if config is not None else load_config()
        self._listeners: list[ThemeListener] = []

    @property
    def config(self) -> AppConfig:
        return self._config

    def get_theme(self) -> ThemeConfig:
        return self._config.theme

    def on_theme_change(self, key: str, value: str) -> ThemeConfig:
        if key not in THEME_KEYS:
            raise ConfigError(f"Unknown theme key: {key!r} (expected one of {', '.join(THEME_KEYS)})")
        theme = self._config.theme.with_value(key, value)
        if theme == self._config.theme:
            return theme
        self._commit(replace(self._config, theme=theme))
        return theme

    def reset(self) -> ThemeConfig:
        self._commit(replace(self._config, theme=ThemeConfig()))
        return self._config.theme

    def remember_file(self, path: Path) -> None:
        self._commit(replace(self._config, last_file=str(path)), notify=False)

    def subscribe(self, listener: ThemeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, config: AppConfig, *, notify: bool = True) -> None:
        save_config(config)
        self._config = config
        if not notify:
            return
        for listener in list(self._listeners):
            listener(config.theme)
