"""Exception hierarchy for the analysis engine and its callers."""

from __future__ import annotations


class GasGuardError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(GasGuardError, TypeError):
    """The analysis input is missing or is not text."""


class ParseError(GasGuardError):
    """The pattern-matching engine failed internally while scanning a source."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Parse error: {message}")


class ContractNotFoundError(GasGuardError, FileNotFoundError):
    """A contract file handed to the analyzer does not exist."""


class AnalysisError(GasGuardError):
    """A file-level analysis failed for a reason other than a missing file."""
