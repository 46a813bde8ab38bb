from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

from spider_core.deck import SuitVariant
from spider_core.history import DEFAULT_HISTORY_LIMIT

SECTION = "game"
DEBUG_ENV = "SPIDER_DEBUG"

DEFAULT_SETTINGS = {
    "suits": "2",
    "seed": "",
    "history_limit": str(DEFAULT_HISTORY_LIMIT),
    "unicode_suits": "yes",
    "debug": "no",
}


@dataclass(slots=True)
class GameConfig:
    suits: int = 2
    seed: int | None = None
    history_limit: int = DEFAULT_HISTORY_LIMIT
    unicode_suits: bool = True
    debug: bool = False

    @property
    def variant(self) -> SuitVariant:
        return SuitVariant.from_count(self.suits)


def _as_bool(value, default: bool) -> bool:
    text = str(value).strip().lower()
    if text in ("1", "yes", "true", "on"):
        return True
    if text in ("0", "no", "false", "off"):
        return False
    return default


def _sanitize(settings) -> GameConfig:
    data = dict(DEFAULT_SETTINGS)
    data.update(settings)
    config = GameConfig()

    try:
        suits = int(data["suits"])
    except ValueError:
        suits = config.suits
    if suits not in tuple(v.value for v in SuitVariant):
        suits = config.suits
    config.suits = suits

    raw_seed = str(data["seed"]).strip()
    if raw_seed:
        try:
            config.seed = int(raw_seed)
        except ValueError:
            config.seed = None

    try:
        limit = int(data["history_limit"])
    except ValueError:
        limit = config.history_limit
    if limit < 1:
        limit = DEFAULT_HISTORY_LIMIT
    config.history_limit = limit

    config.unicode_suits = _as_bool(data["unicode_suits"], config.unicode_suits)
    config.debug = _as_bool(data["debug"], config.debug)
    return config


def load_config(path: str | Path | None = None, environ=None) -> GameConfig:
    """
    Reads the [game] section of an INI file. Missing files, sections or bad values fall back to defaults.
    SPIDER_DEBUG=1 in the environment switches debug on regardless of the file.
    """
    raw = {}
    if path is not None:
        path = Path(path)
        parser = configparser.ConfigParser()
        try:
            parser.read(path, encoding="utf-8")
        except (configparser.Error, OSError, UnicodeDecodeError):
            parser = None
        if parser is not None and SECTION in parser:
            raw = {k: v for k, v in parser[SECTION].items() if k in DEFAULT_SETTINGS}
    config = _sanitize(raw)

    environ = os.environ if environ is None else environ
    if environ.get(DEBUG_ENV) == "1":
        config.debug = True
    return config

