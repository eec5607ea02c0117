"""Foundry gas data: locate the project, read or produce ``.gas-snapshot``."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from .base import BaseAdapter, candidate_roots

logger = logging.getLogger(__name__)

# ``Suite:testName() (gas: 123)`` in snapshots, ``Suite::testName()`` in logs
_SNAPSHOT_LINE_RE = re.compile(r"(\w+)::?test_?(\w+)\(\)\s+\(gas:\s*(\d+)\)")
_TEST_NAME_RE = re.compile(r"test_?(\w+)", re.IGNORECASE)


def _function_from_test(test_name: str) -> str | None:
    m = _TEST_NAME_RE.search(test_name)
    return m.group(1).lower() if m else None


class FoundryAdapter(BaseAdapter):
    """Maps Foundry test gas figures onto contract function names.

    A test called ``testTransfer`` (or ``test_transfer``) is attributed to
    the function ``transfer``.
    """

    name = "foundry"

    def __init__(self, snapshot_file: str = ".gas-snapshot") -> None:
        self.snapshot_file = snapshot_file

    # ------------------------------------------------------------------
    # Project discovery
    # ------------------------------------------------------------------

    @staticmethod
    def is_foundry_project(root: Path) -> bool:
        return (root / "foundry.toml").exists() or (root / "lib").is_dir()

    @classmethod
    def find_project_root(cls, contract_path: Path) -> Path | None:
        """Walk up from the contract's directory looking for a Foundry root."""
        return next(
            (d for d in candidate_roots(contract_path) if cls.is_foundry_project(d)),
            None,
        )

    # ------------------------------------------------------------------
    # Parsers
    # ------------------------------------------------------------------

    @staticmethod
    def parse_snapshot(content: str) -> dict[str, int]:
        """Parse ``.gas-snapshot`` (or ``forge test`` text) output."""
        gas: dict[str, int] = {}
        for line in content.splitlines():
            m = _SNAPSHOT_LINE_RE.search(line)
            if m:
                gas[m.group(2).lower()] = int(m.group(3))
        return gas

    @classmethod
    def parse_forge_json(cls, output: str) -> dict[str, int]:
        """Parse ``forge test --json`` output.

        Accepts the suite map (``{suite: {"test_results": {...}}}``) and the
        legacy flat map (``{testName: gas}``). Anything that is not JSON is
        handed to ``parse_snapshot``.
        """
        try:
            data = json.loads(output)
        except json.JSONDecodeError:
            return cls.parse_snapshot(output)
        if not isinstance(data, dict):
            return {}

        gas: dict[str, int] = {}
        for key, value in data.items():
            if isinstance(value, dict) and isinstance(value.get("test_results"), dict):
                for test_name, info in value["test_results"].items():
                    if not isinstance(info, dict) or not info.get("gas_used"):
                        continue
                    fn = _function_from_test(test_name)
                    if fn:
                        gas[fn] = int(info["gas_used"])
            elif isinstance(value, (int, float)):
                fn = _function_from_test(key)
                if fn:
                    gas[fn] = int(value)
        return gas

    # ------------------------------------------------------------------
    # Snapshot I/O
    # ------------------------------------------------------------------

    def load_snapshot(self, root: Path) -> dict[str, int] | None:
        path = root / self.snapshot_file
        if not path.exists():
            logger.debug("No gas snapshot at %s", path)
            return None
        logger.info("Reading gas snapshot from %s", path)
        return self.parse_snapshot(path.read_text(errors="replace"))

    async def generate_snapshot(self, root: Path, timeout: int = 120) -> dict[str, int]:
        """Run ``forge snapshot`` in *root* and parse the file it writes.

        When no snapshot file appears the gas lines printed by forge are used.
        """
        stdout, stderr, rc = await self._exec(
            ["forge", "snapshot"], cwd=root, timeout=timeout,
        )
        if rc != 0:
            logger.error("forge snapshot failed: %s", stderr[:500])
            return {}
        return self.load_snapshot(root) or self.parse_forge_json(stdout)

    async def get_gas_data(
        self,
        contract_path: Path,
        *,
        project_root: Path | None = None,
        run_tool: bool = False,
        timeout: int = 120,
    ) -> dict[str, int]:
        root = project_root or self.find_project_root(contract_path)
        if root is None:
            logger.warning("Not a Foundry project: %s (static analysis only)", contract_path)
            return {}
        logger.info("Found Foundry project at %s", root)

        gas = self.load_snapshot(root)
        if not gas and run_tool:
            gas = await self.generate_snapshot(root, timeout=timeout)
        return gas or {}
