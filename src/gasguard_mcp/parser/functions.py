"""Function signature location, body span resolution and signature fields."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

DEFAULT_VISIBILITY = "public"
DEFAULT_MUTABILITY = "nonpayable"

# Bounded window used when a body's closing brace is never found.
TRUNCATED_SPAN_LIMIT = 1000

# Single-level parentheses only: nested parens in a parameter type mis-extract.
_FUNC_RE = re.compile(
    r"function\s+(?P<name>\w+)\s*\((?P<params>[^)]*)\)\s*"
    r"(?:(?P<visibility>public|private|internal|external))?\s*"
    r"(?:(?P<mutability>pure|view|payable|nonpayable))?\s*"
    r"(?:returns\s*\((?P<returns>[^)]*)\))?\s*\{"
)

_PARAM_RE = re.compile(r"\s*(\w+(?:\[\])?)\s+(\w+)")
_RETURN_RE = re.compile(r"\s*(\w+(?:\[\])?)")


@dataclass
class Signature:
    """One function signature match, before its body is resolved."""

    name: str
    start: int  # offset of the ``function`` keyword
    brace: int  # offset of the opening ``{``
    params: str
    returns: str
    visibility: str
    mutability: str


def line_of(source: str, offset: int) -> int:
    """1-based line number of *offset*."""
    return source.count("\n", 0, offset) + 1


def iter_signatures(source: str) -> Iterator[Signature]:
    """Yield function signatures left to right, non-overlapping."""
    for m in _FUNC_RE.finditer(source):
        yield Signature(
            name=m.group("name"),
            start=m.start(),
            brace=m.end() - 1,
            params=m.group("params"),
            returns=m.group("returns") or "",
            visibility=m.group("visibility") or DEFAULT_VISIBILITY,
            mutability=m.group("mutability") or DEFAULT_MUTABILITY,
        )


def resolve_span(source: str, start: int, brace: int) -> str:
    """Return the function text from *start* through its matching ``}``.

    Braces inside strings and comments are counted like any other. When the
    source ends before the body closes, the first ``TRUNCATED_SPAN_LIMIT``
    characters from *start* are returned instead.
    """
    depth, pos = 1, brace + 1
    while pos < len(source) and depth > 0:
        if source[pos] == "{":
            depth += 1
        elif source[pos] == "}":
            depth -= 1
        pos += 1
    if depth > 0:
        return source[start:start + TRUNCATED_SPAN_LIMIT]
    return source[start:pos]


def extract_parameters(params: str) -> list[tuple[str, str]]:
    """``(type, name)`` pairs from a raw parameter list.

    Only ``type name`` shapes match; data-location keywords are not stripped,
    so ``string memory s`` yields ``("string", "memory")``.
    """
    if not params.strip():
        return []
    return [(m.group(1), m.group(2)) for m in _PARAM_RE.finditer(params)]


def extract_return_types(returns: str) -> list[str]:
    if not returns.strip():
        return []
    return [m.group(1) for m in _RETURN_RE.finditer(returns)]
