"""Rule: visibility, calldata and state-mutability declarations."""

from __future__ import annotations

from ..models import FunctionInfo, Impact, PatternKind, Suggestion
from ._code_helpers import has_state_changes, is_called_internally, reads_no_state
from .registry import BaseRule, get_registry


class VisibilityRule(BaseRule):
    name = "visibility"
    description = "Recommends external/calldata and tighter mutability where the body allows it"
    tags = ["visibility", "mutability"]

    def evaluate(self, function: FunctionInfo) -> list[Suggestion]:
        code = function.source_code
        suggestions: list[Suggestion] = []

        if function.visibility == "public" and not is_called_internally(code, function.name):
            suggestions.append(Suggestion(
                category="visibility",
                message='Consider using "external" instead of "public" if function is only called externally.',
                confidence=0.6,
                impact=Impact.LOW,
                estimated_saving=1000,
                rule=self.name,
            ))

        if function.visibility == "external" and "memory" in code and "calldata" not in code:
            suggestions.append(Suggestion(
                category="visibility",
                message='Use "calldata" instead of "memory" for external function parameters.',
                confidence=0.8,
                impact=Impact.MEDIUM,
                estimated_saving=3000,
                rule=self.name,
            ))

        if (
            function.state_mutability == "nonpayable"
            and not has_state_changes(code)
            and not function.has_pattern(PatternKind.STORAGE_WRITE)
        ):
            if reads_no_state(code):
                message = 'Function appears to be pure (no state reading). Consider marking as "pure".'
            else:
                message = 'Function appears to be read-only. Consider marking as "view".'
            suggestions.append(Suggestion(
                category="mutability",
                message=message,
                confidence=0.5,
                impact=Impact.LOW,
                estimated_saving=500,
                rule=self.name,
            ))

        return suggestions


get_registry().register(VisibilityRule())
