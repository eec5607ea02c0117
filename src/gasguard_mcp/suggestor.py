"""Suggestion engine: run the static rules, merge near-duplicates, rank.

Different rules occasionally phrase the same advice slightly differently
(e.g. loop and array rules both nagging about ``.length``).  Messages are
compared with fuzzy token matching so each piece of advice appears once.
"""

from __future__ import annotations

import logging

from thefuzz import fuzz

from .models import FunctionInfo, Impact, Suggestion
from .rules import RuleRegistry, get_registry

logger = logging.getLogger(__name__)

# 0-100, higher = stricter
_MESSAGE_FUZZY_THRESHOLD = 75


def _is_similar(a: str, b: str) -> bool:
    return fuzz.token_sort_ratio(a, b) >= _MESSAGE_FUZZY_THRESHOLD


class SuggestionEngine:
    """Produces ranked optimisation suggestions for parsed functions."""

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        *,
        rules: list[str] | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.rules = rules

    def generate(self, function: FunctionInfo) -> list[Suggestion]:
        suggestions = self.registry.run_all(function, only=self.rules)
        return self.deduplicate_and_rank(suggestions)

    @staticmethod
    def deduplicate_and_rank(suggestions: list[Suggestion]) -> list[Suggestion]:
        """Drop later near-duplicates, then order by impact × confidence."""
        unique: list[Suggestion] = []
        for s in suggestions:
            if any(_is_similar(s.message, kept.message) for kept in unique):
                logger.debug("Dropping duplicate suggestion: %s", s.message)
                continue
            unique.append(s)
        return sorted(unique, key=lambda s: s.score, reverse=True)


def total_estimated_savings(suggestions: list[Suggestion]) -> int:
    return sum(s.estimated_saving for s in suggestions)


def categorize_by_impact(suggestions: list[Suggestion]) -> dict[Impact, list[Suggestion]]:
    groups: dict[Impact, list[Suggestion]] = {i: [] for i in Impact}
    for s in suggestions:
        groups[s.impact].append(s)
    return groups


def top_suggestions(suggestions: list[Suggestion], limit: int = 5) -> list[Suggestion]:
    """Highest-confidence suggestions first."""
    return sorted(suggestions, key=lambda s: s.confidence, reverse=True)[:limit]
