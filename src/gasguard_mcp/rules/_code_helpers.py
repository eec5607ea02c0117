"""Text heuristics shared by several suggestion rules."""

from __future__ import annotations

import re

_STATE_CHANGE_PATTERNS = [
    re.compile(r"\w+\s*=\s*[^=!<>]"),  # assignment, not comparison
    re.compile(r"\w+\[\w*\]\s*="),
    re.compile(r"emit\s+\w+"),
    re.compile(r"\.transfer\("),
    re.compile(r"\.call\("),
    re.compile(r"\.delegatecall\("),
    re.compile(r"\.send\("),
    re.compile(r"selfdestruct\("),
    re.compile(r"require\("),
    re.compile(r"assert\("),
    re.compile(r"revert\("),
    re.compile(r"delete\s+\w+"),
    re.compile(r"\.push\("),
    re.compile(r"\.pop\("),
]

_STATE_READ_PATTERNS = [
    re.compile(r"\bmsg\."),
    re.compile(r"\btx\."),
    re.compile(r"\bblock\."),
    re.compile(r"\baddress\(this\)"),
    re.compile(r"\bbalance"),
    re.compile(r"\w+\[\w*\]"),
    re.compile(r"\w+\.call"),
    re.compile(r"keccak256\("),
    re.compile(r"ecrecover\("),
]


def has_state_changes(code: str) -> bool:
    return any(p.search(code) for p in _STATE_CHANGE_PATTERNS)


def reads_no_state(code: str) -> bool:
    """True when nothing in *code* looks like a storage or context read."""
    return not any(p.search(code) for p in _STATE_READ_PATTERNS)


def is_called_internally(code: str, function_name: str) -> bool:
    # The definition itself accounts for one occurrence.
    if not function_name:
        return False
    calls = re.findall(rf"\b{re.escape(function_name)}\s*\(", code)
    return len(calls) > 1
