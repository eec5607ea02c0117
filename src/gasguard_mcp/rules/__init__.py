"""Static gas-optimisation suggestion rules."""

from .registry import BaseRule, RuleRegistry, get_registry
from .storage import StorageRule
from .loops import LoopRule
from .visibility import VisibilityRule
from .operations import OperationsRule
from .control_flow import ControlFlowRule

__all__ = [
    "BaseRule",
    "RuleRegistry",
    "get_registry",
    "StorageRule",
    "LoopRule",
    "VisibilityRule",
    "OperationsRule",
    "ControlFlowRule",
]
