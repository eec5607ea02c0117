"""Regex-driven Solidity analysis engine.

This is intentionally not a compiler front end: there is no tokenizer, no
scope resolution and no awareness of comments or string literals. Use
``analyze`` to turn contract text into a ``ContractReport``.
"""

from .engine import analyze, build_function
from .functions import (
    Signature,
    extract_parameters,
    extract_return_types,
    iter_signatures,
    line_of,
    resolve_span,
)
from .patterns import GAS_PATTERN_TABLE, PatternSpec, complexity_score, detect_patterns
from .scanners import scan_contract_name, scan_events, scan_state_variables

__all__ = [
    "analyze",
    "build_function",
    "Signature",
    "extract_parameters",
    "extract_return_types",
    "iter_signatures",
    "line_of",
    "resolve_span",
    "GAS_PATTERN_TABLE",
    "PatternSpec",
    "complexity_score",
    "detect_patterns",
    "scan_contract_name",
    "scan_events",
    "scan_state_variables",
]
