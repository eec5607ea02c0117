"""Rule: loop optimisations, applied only to functions with a loop finding."""

from __future__ import annotations

import re

from ..models import FunctionInfo, Impact, PatternKind, Suggestion
from .registry import BaseRule, get_registry

_NESTED_LOOP_RE = re.compile(r"for\s*\([^}]*for\s*\(")


class LoopRule(BaseRule):
    name = "loops"
    description = "Suggests counter, length-caching and nesting fixes for loops"
    tags = ["loop"]

    def evaluate(self, function: FunctionInfo) -> list[Suggestion]:
        if not function.has_pattern(PatternKind.LOOP):
            return []

        code = function.source_code
        suggestions = [Suggestion(
            category="loop",
            message=(
                "Loop detected. Consider using unchecked arithmetic for counters "
                "and caching array length."
            ),
            confidence=0.9,
            impact=Impact.MEDIUM,
            estimated_saving=5000,
            rule=self.name,
        )]

        if ".length" in code and ("for" in code or "while" in code):
            suggestions.append(Suggestion(
                category="loop",
                message=(
                    "Cache array length before loop: uint256 len = array.length; "
                    "for(uint256 i = 0; i < len;)"
                ),
                confidence=0.85,
                impact=Impact.MEDIUM,
                estimated_saving=3000,
                rule=self.name,
            ))

        if "++" in code or "i + 1" in code:
            suggestions.append(Suggestion(
                category="loop",
                message="Use unchecked{++i} for loop increments when overflow is impossible.",
                confidence=0.9,
                impact=Impact.MEDIUM,
                estimated_saving=2500,
                rule=self.name,
            ))

        if _NESTED_LOOP_RE.search(code):
            suggestions.append(Suggestion(
                category="loop",
                message=(
                    "Nested loops detected. Consider alternative algorithms or "
                    "breaking into separate functions."
                ),
                confidence=0.7,
                impact=Impact.HIGH,
                estimated_saving=10000,
                rule=self.name,
            ))

        return suggestions


get_registry().register(LoopRule())
