"""Framework adapters that supply measured gas figures."""

from .base import BaseAdapter
from .foundry import FoundryAdapter
from .hardhat import HardhatAdapter

__all__ = ["BaseAdapter", "FoundryAdapter", "HardhatAdapter"]
