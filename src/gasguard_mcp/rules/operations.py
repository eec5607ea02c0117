"""Rule: expensive arithmetic, string and array operations; variable hygiene."""

from __future__ import annotations

import re

from ..models import FunctionInfo, Impact, Suggestion
from .registry import BaseRule, get_registry

# A name assigned a literal and then used again later on the same line.
_CONSTANT_CANDIDATE_RE = re.compile(r"""\b(\w+)\s*=\s*[\d"'][^;]*;.*?\b\1\b""")


class OperationsRule(BaseRule):
    name = "operations"
    description = "Flags costly division/modulo, string concatenation, dynamic arrays and wasteful variables"
    tags = ["arithmetic", "string", "array", "types"]

    def evaluate(self, function: FunctionInfo) -> list[Suggestion]:
        code = function.source_code
        suggestions: list[Suggestion] = []

        if "/" in code and "//" not in code:
            suggestions.append(Suggestion(
                category="arithmetic",
                message="Division operations are expensive. Consider using bit shifting for powers of 2.",
                confidence=0.6,
                impact=Impact.MEDIUM,
                estimated_saving=1500,
                rule=self.name,
            ))

        if "%" in code:
            suggestions.append(Suggestion(
                category="arithmetic",
                message="Modulo operations are expensive. Consider using bitwise AND for powers of 2.",
                confidence=0.6,
                impact=Impact.MEDIUM,
                estimated_saving=1200,
                rule=self.name,
            ))

        if "string" in code and ("concat" in code or "+" in code):
            suggestions.append(Suggestion(
                category="string",
                message="String concatenation is gas-expensive. Consider using bytes or assembly.",
                confidence=0.7,
                impact=Impact.HIGH,
                estimated_saving=8000,
                rule=self.name,
            ))

        if ".push(" in code or ".pop()" in code:
            suggestions.append(Suggestion(
                category="array",
                message="Dynamic array operations are expensive. Consider using fixed-size arrays when possible.",
                confidence=0.5,
                impact=Impact.MEDIUM,
                estimated_saving=4000,
                rule=self.name,
            ))

        if "uint256" in code and "< 256" in code:
            suggestions.append(Suggestion(
                category="types",
                message="Consider using uint8 or uint16 for small values to save gas in structs.",
                confidence=0.4,
                impact=Impact.LOW,
                estimated_saving=1000,
                rule=self.name,
            ))

        if _CONSTANT_CANDIDATE_RE.search(code) and "constant" not in code:
            suggestions.append(Suggestion(
                category="constants",
                message='Consider marking unchanging values as "constant" or "immutable".',
                confidence=0.6,
                impact=Impact.MEDIUM,
                estimated_saving=2000,
                rule=self.name,
            ))

        if "uint256 i = 0" in code:
            suggestions.append(Suggestion(
                category="variables",
                message="Avoid explicit initialization of loop counters to 0 (default value).",
                confidence=0.8,
                impact=Impact.LOW,
                estimated_saving=500,
                rule=self.name,
            ))

        return suggestions


get_registry().register(OperationsRule())
