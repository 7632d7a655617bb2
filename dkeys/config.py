"""Configuration management — JSON-based, stored in ~/.config/dkeys/."""
import json
from pathlib import Path

DEFAULT_CONFIG = {
    "grammar_url": "http://localhost:3000/grammar/fix",
    "grammar_timeout_ms": 5000,
    "locale": "en_US",
    "max_suggestions": 3,
    "overlap_policy": "warn",  # "warn" or "drop"
    "debug_logging": False,
}

CONFIG_DIR = Path.home() / ".config" / "dkeys"
CONFIG_FILE = CONFIG_DIR / "config.json"


class Config:
    def __init__(self, path=None):
        self.path = Path(path) if path is not None else CONFIG_FILE
        self._data = dict(DEFAULT_CONFIG)
        self.load()

    def load(self):
        if self.path.exists():
            try:
                with open(self.path, "r") as f:
                    stored = json.load(f)
                if isinstance(stored, dict):
                    self._data.update(stored)
            except (json.JSONDecodeError, IOError):
                pass

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        self.save()

    @property
    def grammar_url(self):
        return self._data["grammar_url"]

    @grammar_url.setter
    def grammar_url(self, val):
        self._data["grammar_url"] = val
        self.save()

    @property
    def grammar_timeout_ms(self):
        return self._data["grammar_timeout_ms"]

    @property
    def locale(self):
        return self._data.get("locale", "en_US")

    @property
    def max_suggestions(self):
        return self._data.get("max_suggestions", 3)

    @property
    def overlap_policy(self):
        return self._data.get("overlap_policy", "warn")

    @property
    def debug_logging(self):
        return self._data["debug_logging"]
