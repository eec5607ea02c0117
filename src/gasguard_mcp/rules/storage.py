"""Rule: storage access costs (writes, repeated reads, packing, default init)."""

from __future__ import annotations

import re

from ..models import FunctionInfo, Impact, PatternKind, Suggestion
from .registry import BaseRule, get_registry

_WRITE_RE = re.compile(r"\w+\s*=\s*[^=!<>]|\w+\[\w*\]\s*=")
_INDEXED_READ_RE = re.compile(r"\w+\[[\w\s]*\]")
_DEFAULT_INIT_RES = (
    re.compile(r"\w+\s*=\s*0[^x\w]"),
    re.compile(r"\w+\s*=\s*false"),
    re.compile(r'\w+\s*=\s*""'),
)


class StorageRule(BaseRule):
    name = "storage"
    description = "Flags heavy storage writes, repeated reads, unpacked structs and default initialisation"
    tags = ["storage"]

    def evaluate(self, function: FunctionInfo) -> list[Suggestion]:
        code = function.source_code
        suggestions: list[Suggestion] = []

        if function.has_pattern(PatternKind.STORAGE_WRITE):
            writes = len(_WRITE_RE.findall(code))
            if writes > 3:
                suggestions.append(Suggestion(
                    category="storage",
                    message=(
                        "Multiple storage writes detected. Consider batching operations "
                        "or using memory for intermediate calculations."
                    ),
                    confidence=0.8,
                    impact=Impact.HIGH,
                    estimated_saving=writes * 5000,
                    rule=self.name,
                ))

        reads = len(_INDEXED_READ_RE.findall(code))
        if reads > 2:
            suggestions.append(Suggestion(
                category="storage",
                message="Multiple storage reads detected. Cache storage values in memory variables.",
                confidence=0.7,
                impact=Impact.MEDIUM,
                estimated_saving=(reads - 1) * 2100,
                rule=self.name,
            ))

        if "struct" in code and "uint256" in code:
            suggestions.append(Suggestion(
                category="storage",
                message=(
                    "Consider packing struct variables to use fewer storage slots "
                    "(uint128 instead of uint256 when possible)."
                ),
                confidence=0.6,
                impact=Impact.HIGH,
                estimated_saving=20000,
                rule=self.name,
            ))

        if any(p.search(code) for p in _DEFAULT_INIT_RES):
            suggestions.append(Suggestion(
                category="storage",
                message='Avoid explicit initialization to default values (0, false, "") to save gas.',
                confidence=0.9,
                impact=Impact.LOW,
                estimated_saving=2000,
                rule=self.name,
            ))

        return suggestions


get_registry().register(StorageRule())
