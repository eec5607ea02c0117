"""Report assembly: drives the function locator and the declaration scanners."""

from __future__ import annotations

import logging
import re

from ..errors import InvalidArgumentError, ParseError
from ..models import ContractReport, FunctionInfo, Parameter
from .functions import (
    Signature,
    extract_parameters,
    extract_return_types,
    iter_signatures,
    line_of,
    resolve_span,
)
from .patterns import complexity_score, detect_patterns
from .scanners import scan_contract_name, scan_events, scan_state_variables

logger = logging.getLogger(__name__)


def build_function(source: str, sig: Signature) -> FunctionInfo:
    """Resolve one signature's span and classify its gas patterns."""
    code = resolve_span(source, sig.start, sig.brace)
    patterns = detect_patterns(code)
    return FunctionInfo(
        name=sig.name,
        visibility=sig.visibility,
        state_mutability=sig.mutability,
        start_line=line_of(source, sig.start),
        source_code=code,
        parameters=[
            Parameter(type=ptype, name=pname)
            for ptype, pname in extract_parameters(sig.params)
        ],
        return_types=extract_return_types(sig.returns),
        patterns=patterns,
        complexity_score=complexity_score(patterns),
    )


def analyze(source: str | None = None) -> ContractReport:
    """Analyze contract text and return its structured summary.

    Raises:
        InvalidArgumentError: *source* is missing or not a ``str``.
        ParseError: the regex engine itself failed while scanning.
    """
    if not isinstance(source, str):
        raise InvalidArgumentError(
            f"String expected, got {type(source).__name__}"
        )

    try:
        functions = [build_function(source, sig) for sig in iter_signatures(source)]
        report = ContractReport(
            name=scan_contract_name(source),
            functions=functions,
            total_lines=source.count("\n") + 1,
            state_variables=scan_state_variables(source),
            events=scan_events(source),
        )
    except (re.error, RecursionError) as exc:
        raise ParseError(str(exc) or type(exc).__name__) from exc

    logger.debug(
        "Analyzed contract %s: %d functions, %d lines",
        report.name, len(report.functions), report.total_lines,
    )
    return report
