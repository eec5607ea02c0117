"""Base interface for gas-data adapters backed by external toolchains."""

from __future__ import annotations

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

# Project discovery never climbs into these
STOP_DIRS = frozenset({"/", "/var", "/usr", "/System", "/home", "/Users"})
MAX_ROOT_DEPTH = 10


def candidate_roots(contract_path: Path) -> Iterator[Path]:
    """Yield the contract's directory and its parents, nearest first."""
    current = Path(contract_path).resolve().parent
    for _ in range(MAX_ROOT_DEPTH):
        if str(current) in STOP_DIRS or current.parent == current:
            return
        yield current
        current = current.parent


class BaseAdapter(ABC):
    """Contract every framework adapter must satisfy."""

    name: str  # e.g. "foundry"

    @abstractmethod
    async def get_gas_data(
        self,
        contract_path: Path,
        *,
        project_root: Path | None = None,
        run_tool: bool = False,
        timeout: int = 120,
    ) -> dict[str, int]:
        """Return ``{lower-cased function name: gas used}`` for a contract."""

    # --- shared helpers -----------------------------------------------------

    async def _exec(
        self,
        cmd: list[str],
        *,
        cwd: str | Path,
        timeout: int,
        env: dict[str, str] | None = None,
    ) -> tuple[str, str, int]:
        """Run *cmd* in *cwd*, killing it after *timeout* seconds.

        *env* entries are layered over the current environment.
        Returns (stdout, stderr, returncode).
        """
        logger.info("[%s] %s in %s (timeout=%ds)", self.name, " ".join(cmd), cwd, timeout)
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd),
            env={**os.environ, **env} if env else None,
        )
        try:
            out, err = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.communicate()
            raise TimeoutError(f"{' '.join(cmd)} timed out after {timeout}s in {cwd}")
        rc = proc.returncode or 0
        logger.debug("[%s] exit %d", self.name, rc)
        return out.decode(errors="replace"), err.decode(errors="replace"), rc
