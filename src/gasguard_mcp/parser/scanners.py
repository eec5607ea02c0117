"""Whole-source declaration scanners: contract name, state variables, events."""

from __future__ import annotations

import re

DEFAULT_CONTRACT_NAME = "Unknown"

_CONTRACT_RE = re.compile(r"contract\s+(\w+)")

# Closed set of value types; user-defined structs/enums are never captured.
_STATE_VAR_RE = re.compile(
    r"\s*(uint256|uint|address|bool|string|mapping)\s+"
    r"(?:public\s+|private\s+|internal\s+)?(\w+)"
)

_EVENT_RE = re.compile(r"event\s+(\w+)\s*\(")


def scan_contract_name(source: str) -> str:
    """Name of the first ``contract X`` declaration, or ``"Unknown"``."""
    m = _CONTRACT_RE.search(source)
    return m.group(1) if m else DEFAULT_CONTRACT_NAME


def scan_state_variables(source: str) -> list[str]:
    """Variable names declared with a known value type, duplicates included."""
    return [m.group(2) for m in _STATE_VAR_RE.finditer(source)]


def scan_events(source: str) -> list[str]:
    return [m.group(1) for m in _EVENT_RE.finditer(source)]
