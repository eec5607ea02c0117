"""Heuristic gas-pattern rules evaluated over a single function's text.

Every rule rescans the same function text independently. Rules run in the
fixed order of ``RULES`` and each emits at most one finding; costs and
wording come from ``GAS_PATTERN_TABLE``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from ..models import PatternFinding, PatternKind


@dataclass(frozen=True)
class PatternSpec:
    description: str
    base_cost: int
    suggestion: str


GAS_PATTERN_TABLE: dict[PatternKind, PatternSpec] = {
    PatternKind.LOOP: PatternSpec(
        description="Loop detected - gas scales with iterations",
        base_cost=5000,
        suggestion="Consider using unchecked arithmetic for counters and caching array length",
    ),
    PatternKind.STORAGE_WRITE: PatternSpec(
        description="Storage write operations detected",
        base_cost=20000,
        suggestion="Consider batching storage operations or using memory for intermediate calculations",
    ),
    PatternKind.VALIDATION: PatternSpec(
        description="Input validation detected",
        base_cost=500,
        suggestion="Consider custom errors instead of require with strings",
    ),
    PatternKind.EXTERNAL_CALL: PatternSpec(
        description="External call detected",
        base_cost=2300,
        suggestion="Ensure proper gas estimation and consider reentrancy protection",
    ),
    PatternKind.ARRAY_OPERATION: PatternSpec(
        description="Array operations detected",
        base_cost=1000,
        suggestion="Cache array length in loops and consider gas costs of dynamic arrays",
    ),
    PatternKind.STRING_OPERATION: PatternSpec(
        description="String operations detected",
        base_cost=2000,
        suggestion="String operations are expensive; consider using bytes32 for fixed-length strings",
    ),
}

_LOOP_RE = re.compile(r"\b(for|while)\s*\(")
_STORAGE_WRITE_RE = re.compile(
    r"(?P<indexed>\w+\s*[\[\.].*?\]\s*=)|(?P<plain>\w+\s*=\s*[^=!<>])"
)
_VALIDATION_RE = re.compile(r"require\s*\(")
_EXTERNAL_CALL_RE = re.compile(r"\w+\.call\(|\w+\.delegatecall\(|\w+\.staticcall\(")
_ARRAY_OP_RE = re.compile(r"\w+\.length|\w+\.push\(|\w+\.pop\(\)")
_STRING_OP_RE = re.compile(r"string\s*\(\s*|\babi\.encode|\babi\.encodePacked")

# A bare assignment preceded by one of these is a local declaration.
_DECLARATION_PREFIX_RE = re.compile(
    r"(?:\b(?:u?int\d*|bytes\d*|address|bool|string|var|payable"
    r"|memory|storage|calldata)|\])\s+$"
)
_DECLARATION_LOOKBEHIND = 48

_NOT_A_WRITE = ("==", "!=", "require", "<=", ">=")


def _finding(kind: PatternKind, count: int = 1) -> PatternFinding:
    entry = GAS_PATTERN_TABLE[kind]
    return PatternFinding(
        kind=kind,
        description=entry.description,
        estimated_gas=entry.base_cost * count,
        suggestion=entry.suggestion,
    )


def _is_local_declaration(code: str, offset: int) -> bool:
    window = code[max(0, offset - _DECLARATION_LOOKBEHIND):offset]
    return _DECLARATION_PREFIX_RE.search(window) is not None


def count_storage_writes(code: str) -> int:
    count = 0
    for m in _STORAGE_WRITE_RE.finditer(code):
        text = m.group(0)
        if any(op in text for op in _NOT_A_WRITE):
            continue
        if m.group("plain") and _is_local_declaration(code, m.start()):
            continue
        count += 1
    return count


def detect_loop(code: str) -> PatternFinding | None:
    if _LOOP_RE.search(code):
        return _finding(PatternKind.LOOP)
    return None


def detect_storage_write(code: str) -> PatternFinding | None:
    writes = count_storage_writes(code)
    if writes:
        return _finding(PatternKind.STORAGE_WRITE, writes)
    return None


def detect_validation(code: str) -> PatternFinding | None:
    checks = len(_VALIDATION_RE.findall(code))
    if checks:
        return _finding(PatternKind.VALIDATION, checks)
    return None


def detect_external_call(code: str) -> PatternFinding | None:
    if _EXTERNAL_CALL_RE.search(code):
        return _finding(PatternKind.EXTERNAL_CALL)
    return None


def detect_array_operation(code: str) -> PatternFinding | None:
    if _ARRAY_OP_RE.search(code):
        return _finding(PatternKind.ARRAY_OPERATION)
    return None


def detect_string_operation(code: str) -> PatternFinding | None:
    if _STRING_OP_RE.search(code):
        return _finding(PatternKind.STRING_OPERATION)
    return None


RULES: tuple[Callable[[str], PatternFinding | None], ...] = (
    detect_loop,
    detect_storage_write,
    detect_validation,
    detect_external_call,
    detect_array_operation,
    detect_string_operation,
)


def detect_patterns(code: str) -> list[PatternFinding]:
    """Run every rule over *code*; an empty list means nothing was found."""
    findings: list[PatternFinding] = []
    for rule in RULES:
        found = rule(code)
        if found is not None:
            findings.append(found)
    return findings


def complexity_score(findings: list[PatternFinding]) -> int:
    return 1 + 2 * len(findings)
