"""Suggestion-rule registry: discover and run static optimisation rules."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..models import FunctionInfo, Suggestion

logger = logging.getLogger(__name__)


class BaseRule(ABC):
    """Every static suggestion rule inherits from this."""

    name: str  # unique slug, e.g. "storage"
    description: str = ""
    tags: list[str] = []

    @abstractmethod
    def evaluate(self, function: FunctionInfo) -> list[Suggestion]:
        """Inspect one parsed function and return suggestions."""


class RuleRegistry:
    """Holds rule instances in registration order."""

    def __init__(self) -> None:
        self._rules: dict[str, BaseRule] = {}

    def register(self, rule: BaseRule) -> None:
        self._rules[rule.name] = rule
        logger.debug("Registered suggestion rule: %s", rule.name)

    def get(self, name: str) -> BaseRule | None:
        return self._rules.get(name)

    @property
    def all(self) -> list[BaseRule]:
        return list(self._rules.values())

    def names(self) -> list[str]:
        return list(self._rules.keys())

    def select(self, only: list[str] | None = None) -> list[BaseRule]:
        """Rules named in *only*, in registration order; all when None."""
        if only is None:
            return self.all
        unknown = set(only) - self._rules.keys()
        if unknown:
            logger.warning("Ignoring unknown suggestion rules: %s", ", ".join(sorted(unknown)))
        return [r for name, r in self._rules.items() if name in only]

    def run_all(
        self,
        function: FunctionInfo,
        *,
        only: list[str] | None = None,
    ) -> list[Suggestion]:
        """Evaluate the selected rules; a rule that raises contributes nothing."""
        suggestions: list[Suggestion] = []
        for rule in self.select(only):
            try:
                suggestions += rule.evaluate(function)
            except Exception:
                logger.exception("Suggestion rule %s failed on %s", rule.name, function.name)
        return suggestions


# ---------------------------------------------------------------------------
# Singleton registry; rule modules register themselves on import
# ---------------------------------------------------------------------------
_registry = RuleRegistry()


def get_registry() -> RuleRegistry:
    return _registry
