"""JSON helpers, dict merging and lenient query-value parsing."""

from __future__ import annotations

import json
import re
from pathlib import Path

_LEADING_INT = re.compile(r"^\s*([+-]?)0*(\d+)")

# Longer digit runs saturate; no caller range comes near this
_MAX_DIGITS = 9


def load_json(path: Path) -> dict:
    """Load a JSON file, returning empty dict if missing or malformed."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def save_json(path: Path, data: dict) -> None:
    """Save dict as pretty-printed JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def parse_int(raw: str | int | None, default: int) -> int:
    """Parse the leading integer of a query value, like a browser's parseInt.

    "12px" -> 12, " 7" -> 7, "abc" / "" / None -> default.
    """
    if raw is None:
        return default
    if isinstance(raw, int):
        return raw
    m = _LEADING_INT.match(raw)
    if not m:
        return default
    sign, digits = m.groups()
    value = 10 ** _MAX_DIGITS if len(digits) > _MAX_DIGITS else int(digits)
    return -value if sign == "-" else value


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))
