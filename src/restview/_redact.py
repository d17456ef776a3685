"""Token redaction for map option dumps written to debug logs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_TOKEN_KEYS: frozenset[str] = frozenset({"accesstoken", "mapboxtoken", "token", "apikey"})


def _normalize_key(key: str) -> str:
    return key.lower().replace("_", "").replace("-", "")


def redact_for_log(options: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *options* with token-bearing keys masked.

    Nested mappings are redacted too; other values are kept as they are.
    """
    redacted: dict[str, Any] = {}
    for key, value in options.items():
        if _normalize_key(key) in _TOKEN_KEYS:
            redacted[key] = None if value is None else "<redacted>"
        elif isinstance(value, Mapping):
            redacted[key] = redact_for_log(value)
        else:
            redacted[key] = value
    return redacted
