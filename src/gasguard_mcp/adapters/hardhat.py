"""Hardhat gas data from hardhat-gas-reporter output or ``npx hardhat test`` logs."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from .base import BaseAdapter, candidate_roots

logger = logging.getLogger(__name__)

_CONFIG_FILES = ("hardhat.config.js", "hardhat.config.ts")
_EXTRA_REPORT_FILES = ("gas-report.json", "reports/gas-report.json", ".gas-report.json")

# ``|  Token  ·  transfer  ·  min  ·  max  ·  avg  ·  calls ...``
_REPORT_ROW_RE = re.compile(r"\|\s*\w+\s*·\s*(\w+)\s*·[^·]*·[^·]*·\s*(\d+)\s*·")
# ``transfer gas used: 51234`` as logged by test scripts
_GAS_USED_RE = re.compile(r"(\w+)\s+gas used:\s*(\d+)", re.IGNORECASE)


def _has_hardhat_dependency(package_json: Path) -> bool:
    try:
        pkg = json.loads(package_json.read_text())
    except (OSError, ValueError):
        return False
    if not isinstance(pkg, dict):
        return False
    return any(
        "hardhat" in (pkg.get(section) or {})
        for section in ("dependencies", "devDependencies")
    )


class HardhatAdapter(BaseAdapter):
    """Maps hardhat-gas-reporter averages onto contract function names."""

    name = "hardhat"

    def __init__(self, gas_report_file: str = "gasReporterOutput.json") -> None:
        self.gas_report_file = gas_report_file

    # ------------------------------------------------------------------
    # Project discovery
    # ------------------------------------------------------------------

    @staticmethod
    def is_hardhat_project(root: Path) -> bool:
        if any((root / name).exists() for name in _CONFIG_FILES):
            return True
        package_json = root / "package.json"
        return package_json.is_file() and _has_hardhat_dependency(package_json)

    @classmethod
    def find_project_root(cls, contract_path: Path) -> Path | None:
        return next(
            (d for d in candidate_roots(contract_path) if cls.is_hardhat_project(d)),
            None,
        )

    # ------------------------------------------------------------------
    # Parsers
    # ------------------------------------------------------------------

    @staticmethod
    def parse_gas_report(data: Any) -> dict[str, int]:
        """Parse gas-reporter JSON.

        Reads ``info.methods[contract][method].avg`` and the flat
        ``methods[method].gasUsed`` form; later entries win.
        """
        gas: dict[str, int] = {}
        if not isinstance(data, dict):
            return gas

        info = data.get("info")
        if isinstance(info, dict) and isinstance(info.get("methods"), dict):
            for methods in info["methods"].values():
                if not isinstance(methods, dict):
                    continue
                for method, stats in methods.items():
                    if isinstance(stats, dict) and stats.get("avg"):
                        gas[method.lower()] = int(stats["avg"])

        if isinstance(data.get("methods"), dict):
            for method, stats in data["methods"].items():
                if isinstance(stats, dict) and stats.get("gasUsed"):
                    gas[method.lower()] = int(stats["gasUsed"])
        return gas

    @staticmethod
    def parse_gas_report_text(content: str) -> dict[str, int]:
        """Parse the table hardhat-gas-reporter prints (the avg column)."""
        gas: dict[str, int] = {}
        for m in _REPORT_ROW_RE.finditer(content):
            avg = int(m.group(2))
            if avg > 0:
                gas[m.group(1).lower()] = avg
        return gas

    @staticmethod
    def parse_test_output(output: str) -> dict[str, int]:
        return {m.group(1).lower(): int(m.group(2)) for m in _GAS_USED_RE.finditer(output)}

    # ------------------------------------------------------------------
    # Report I/O
    # ------------------------------------------------------------------

    def report_paths(self, root: Path) -> list[Path]:
        return [root / self.gas_report_file] + [root / p for p in _EXTRA_REPORT_FILES]

    def load_gas_report(self, root: Path) -> dict[str, int] | None:
        """Parse the first gas report found under *root*, JSON or text."""
        for path in self.report_paths(root):
            if not path.is_file():
                continue
            logger.info("Reading gas report from %s", path)
            content = path.read_text(errors="replace")
            if content.lstrip().startswith(("{", "[")):
                try:
                    return self.parse_gas_report(json.loads(content))
                except json.JSONDecodeError:
                    logger.warning("%s is not valid JSON, reading it as text", path)
            return self.parse_gas_report_text(content)
        logger.debug("No gas report under %s", root)
        return None

    async def generate_gas_report(self, root: Path, timeout: int = 180) -> dict[str, int]:
        """Run ``npx hardhat test`` with ``REPORT_GAS`` set.

        Gas figures logged by the tests take precedence over the report file.
        """
        stdout, stderr, rc = await self._exec(
            ["npx", "hardhat", "test"], cwd=root, timeout=timeout,
            env={"REPORT_GAS": "true"},
        )
        if rc != 0:
            logger.error("hardhat test failed: %s", stderr[:500])
            return {}
        return self.parse_test_output(stdout) or self.load_gas_report(root) or {}

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
            logger.warning("Not a Hardhat project: %s (static analysis only)", contract_path)
            return {}
        logger.info("Found Hardhat project at %s", root)

        gas = self.load_gas_report(root)
        if not gas and run_tool:
            gas = await self.generate_gas_report(root, timeout=timeout)
        return gas or {}
