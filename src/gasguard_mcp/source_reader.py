"""Helpers for locating and reading Solidity source files."""

from __future__ import annotations

from pathlib import Path

from .errors import ContractNotFoundError

_DECLARATION_KEYWORDS = ("contract", "interface", "library")


def read_contract_source(path: str | Path) -> str:
    """Read a contract file, raising ``ContractNotFoundError`` if absent."""
    fp = Path(path)
    if not fp.is_file():
        raise ContractNotFoundError(f"File not found: {fp}")
    return fp.read_text(errors="replace")


def looks_like_solidity(source: str) -> bool:
    """Cheap sanity check: some contract/interface/library keyword is present."""
    return any(kw in source for kw in _DECLARATION_KEYWORDS)


def list_solidity_files(
    project_path: Path,
    exclude: list[str] | None = None,
) -> list[str]:
    """Return relative paths of all .sol files under *project_path*."""
    exclude = exclude or []
    results: list[str] = []
    skip_dirs = {"node_modules", "lib", ".git", "out", "cache"}
    for sol in sorted(project_path.rglob("*.sol")):
        rel_path = sol.relative_to(project_path)
        if any(part in skip_dirs for part in rel_path.parts):
            continue
        rel = str(rel_path)
        if any(ex in rel for ex in exclude):
            continue
        results.append(rel)
    return results
