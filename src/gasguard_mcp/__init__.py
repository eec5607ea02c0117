"""Static gas-pattern analysis of Solidity contracts."""

from .errors import (
    AnalysisError,
    ContractNotFoundError,
    GasGuardError,
    InvalidArgumentError,
    ParseError,
)
from .models import (
    ContractReport,
    FunctionInfo,
    Parameter,
    PatternFinding,
    PatternKind,
)
from .parser import analyze

__all__ = [
    "analyze",
    "AnalysisError",
    "ContractNotFoundError",
    "GasGuardError",
    "InvalidArgumentError",
    "ParseError",
    "ContractReport",
    "FunctionInfo",
    "Parameter",
    "PatternFinding",
    "PatternKind",
]
