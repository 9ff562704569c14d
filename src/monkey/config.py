# src/monkey/config.py
"""Runtime configuration for the interpreter.

Values come from, in increasing priority: built-in defaults, the user's
``~/.monkey/config.json``, ``MONKEY_*`` environment variables, and finally
whatever the CLI sets on the shared ``config`` object.
"""
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".monkey" / "config.json"

_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

_TRUTHY = {"1", "true", "yes", "on"}


class Config:
    DEFAULTS = {
        "debug": False,
        "log_level": "warning",
        "prompt": ">> ",
        "max_depth": None,
    }

    def __init__(self, path=None, environ=None):
        self._data = dict(self.DEFAULTS)
        self.path = Path(path) if path is not None else CONFIG_PATH
        self._load_file()
        self._load_environ(os.environ if environ is None else environ)

    def _load_file(self):
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config file %s: %s", self.path, e)
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: expected a JSON object", self.path)
            return
        for key, value in data.items():
            self._set_from(str(self.path), key, value)

    def _load_environ(self, environ):
        if "MONKEY_DEBUG" in environ:
            self._set_from("MONKEY_DEBUG", "debug", environ["MONKEY_DEBUG"].strip().lower() in _TRUTHY)
        if "MONKEY_LOG_LEVEL" in environ:
            self._set_from("MONKEY_LOG_LEVEL", "log_level", environ["MONKEY_LOG_LEVEL"])
        if "MONKEY_PROMPT" in environ:
            self._set_from("MONKEY_PROMPT", "prompt", environ["MONKEY_PROMPT"])

    def _set_from(self, source, key, value):
        try:
            self.set(key, value)
        except (KeyError, ValueError, TypeError) as e:
            logger.warning("Ignoring config value from %s: %s", source, e)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        if key not in self.DEFAULTS:
            raise KeyError(f"Unknown config key: {key}")
        if key == "log_level":
            value = str(value).lower()
            if value not in _LEVELS:
                raise ValueError(f"Invalid log level: {value}")
        elif key == "max_depth" and value is not None:
            value = int(value)
            if value <= 0:
                raise ValueError("max_depth must be positive")
        self._data[key] = value

    @property
    def debug(self):
        return bool(self._data["debug"])

    @property
    def log_level(self):
        return _LEVELS[self._data["log_level"]]

    @property
    def prompt(self):
        return self._data["prompt"]

    @property
    def max_depth(self):
        return self._data["max_depth"]

    def should_log(self, level="debug"):
        """Whether a trace message at ``level`` should be emitted."""
        if level == "debug":
            return self.debug
        return _LEVELS.get(level, logging.DEBUG) >= self.log_level

    def items(self):
        return self._data.items()


config = Config()
