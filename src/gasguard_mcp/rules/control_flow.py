"""Rule: control flow shape, reentrancy exposure, events and hashing."""

from __future__ import annotations

import re

from ..models import FunctionInfo, Impact, Suggestion
from .registry import BaseRule, get_registry

_REQUIRE_RE = re.compile(r"require\s*\(")
_ELSE_IF_RE = re.compile(r"\belse\s+if\b")


class ControlFlowRule(BaseRule):
    name = "control_flow"
    description = "Reviews require chains, boolean ordering, if-else ladders, external calls, events and hashing"
    tags = ["control_flow", "security", "events"]

    def evaluate(self, function: FunctionInfo) -> list[Suggestion]:
        code = function.source_code
        suggestions: list[Suggestion] = []

        requires = len(_REQUIRE_RE.findall(code))
        if requires > 2:
            suggestions.append(Suggestion(
                category="control_flow",
                message="Multiple require statements detected. Consider custom errors and early returns.",
                confidence=0.7,
                impact=Impact.MEDIUM,
                estimated_saving=requires * 1000,
                rule=self.name,
            ))

        if "&&" in code or "||" in code:
            suggestions.append(Suggestion(
                category="control_flow",
                message="Optimize boolean operations by placing cheaper conditions first.",
                confidence=0.5,
                impact=Impact.LOW,
                estimated_saving=500,
                rule=self.name,
            ))

        if len(_ELSE_IF_RE.findall(code)) > 3:
            suggestions.append(Suggestion(
                category="control_flow",
                message="Consider using mapping-based lookup instead of long if-else chains.",
                confidence=0.6,
                impact=Impact.MEDIUM,
                estimated_saving=3000,
                rule=self.name,
            ))

        if ".call(" in code and "nonReentrant" not in code:
            suggestions.append(Suggestion(
                category="security",
                message=(
                    "External call detected. Consider reentrancy protection and "
                    "checks-effects-interactions pattern."
                ),
                confidence=0.8,
                impact=Impact.HIGH,
                estimated_saving=0,
                rule=self.name,
            ))

        if "emit" in code and "string" in code:
            suggestions.append(Suggestion(
                category="events",
                message="Avoid emitting strings in events. Use indexed parameters and bytes32 when possible.",
                confidence=0.7,
                impact=Impact.MEDIUM,
                estimated_saving=5000,
                rule=self.name,
            ))

        if "get" in function.name and "return" in code:
            suggestions.append(Suggestion(
                category="patterns",
                message='Getter functions should be marked as "view" and consider using public variables instead.',
                confidence=0.6,
                impact=Impact.LOW,
                estimated_saving=1000,
                rule=self.name,
            ))

        if "keccak256" in code or "sha256" in code:
            suggestions.append(Suggestion(
                category="assembly",
                message="Consider using inline assembly for hash operations to save gas.",
                confidence=0.4,
                impact=Impact.MEDIUM,
                estimated_saving=2000,
                rule=self.name,
            ))

        return suggestions


get_registry().register(ControlFlowRule())
