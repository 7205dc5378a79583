"""Process-wide debug switch."""

from __future__ import annotations


class _DebugState:
    enabled = False


def get_debug() -> bool:
    return _DebugState.enabled


def set_debug(value: bool) -> None:
    _DebugState.enabled = bool(value)