from __future__ import annotations

import os
from typing import Any, MutableMapping

PREFIX = "GRATE_"

DEFAULTS: dict[str, Any] = {
    "LOG_FILE": "",
    "SNIFF_BYTES": 4096,
    "ENCODING": "utf-8-sig",
    "DATETIME_FORMATS": "%Y-%m-%d %H:%M:%S;%Y-%m-%d;%m/%d/%Y %H:%M:%S;%m/%d/%Y",
}


class AppSettings:
    """Thin wrapper around the process environment for grate options.

    Keys are looked up with the ``GRATE_`` prefix, so ``get("ENCODING")``
    reads ``GRATE_ENCODING``. Values set through :meth:`set` take precedence.
    """

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ
        self._overrides: dict[str, Any] = {}

    def get(self, key: str, default=None):  # noqa: ANN001 - any stored type
        """Return the stored value for *key* or *default* if missing."""
        if key in self._overrides:
            return self._overrides[key]
        val = self._environ.get(PREFIX + key)
        if val is not None:
            return val
        return DEFAULTS.get(key, default)

    # Typed getters -----------------------------------------------------
    def get_str(self, key: str, default: str = "") -> str:
        val = self.get(key, default)
        if val is None:
            return default
        return str(val)

    def get_bool(self, key: str, default: bool = False) -> bool:
        val = self.get(key, default)
        if isinstance(val, bool):
            return val
        if isinstance(val, (int, float)):
            return bool(val)
        if isinstance(val, str):
            return val.strip().lower() in ("1", "true", "yes", "on")
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        val = self.get(key, default)
        try:
            return int(float(val))
        except (TypeError, ValueError):
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        val = self.get(key, default)
        try:
            return float(val)
        except (TypeError, ValueError):
            return default

    def get_list(self, key: str, sep: str = ";") -> list[str]:
        """Return a ``sep``-separated value as a list, skipping blanks."""
        return [part.strip() for part in self.get_str(key).split(sep) if part.strip()]

    def set(self, key: str, value) -> None:  # noqa: ANN001 - any stored type
        """Store *value* under *key* for this settings object only."""
        self._overrides[key] = value


settings = AppSettings()

__all__ = ["AppSettings", "settings", "DEFAULTS", "PREFIX"]
