# -*- coding: utf-8 -*-
"""
Duration strings

Public API:
- `parse_duration`

Accepts Go-style durations such as `500ms`, `30s`, `1m`, `1h30m` or `1.5h`.
A bare number is read as seconds.
"""

from __future__ import annotations

import re

_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_BARE_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_duration(text: str) -> float:
    """Return the duration in seconds; raise ValueError if malformed."""
    value = text.strip().lower()
    if not value:
        raise ValueError("empty duration")
    if _BARE_NUMBER.fullmatch(value):
        return float(value)

    total = 0.0
    position = 0
    for match in _PART.finditer(value):
        if match.start() != position:
            break
        total += float(match.group(1)) * _UNITS[match.group(2)]
        position = match.end()
    if position != len(value):
        raise ValueError(f"invalid duration {text!r}")
    return total
