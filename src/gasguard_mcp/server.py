"""gasguard MCP server: static gas-pattern analysis of Solidity contracts.

Exposes the following MCP tools:

  analyze_source         Parse contract text into the structured report
  analyze_contracts      Full file analysis: patterns + measured gas + suggestions
  suggest_optimizations  Ranked optimisation hints per function
  gas_report             Markdown / JSON report for a batch of files
  list_rules             List registered suggestion rules
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from .analyzer import GasAnalyzer
from .errors import GasGuardError
from .models import AnalyzerConfig, Framework
from .parser import analyze
from .report import ReportFormat, generate_report
from .rules import get_registry
from .source_reader import list_solidity_files

logging.basicConfig(level=logging.INFO, format="%(levelname)s  %(name)s  %(message)s")
logger = logging.getLogger("gasguard_mcp")

# ---------------------------------------------------------------------------
# MCP server instance
# ---------------------------------------------------------------------------
mcp = FastMCP(
    "gasguard-mcp",
    instructions=(
        "Solidity gas analysis server: locates functions, state variables and "
        "events, flags gas-relevant patterns (loops, storage writes, external "
        "calls, ...) with heuristic costs, and suggests optimisations. Can merge "
        "measured gas figures from a Foundry .gas-snapshot or a hardhat-gas-reporter file."
    ),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _expand_paths(files: list[str]) -> list[str]:
    """Replace any directory in *files* with the .sol files beneath it."""
    paths: list[str] = []
    for f in files:
        p = Path(f)
        if p.is_dir():
            paths += [str(p / rel) for rel in list_solidity_files(p)]
        else:
            paths.append(f)
    return paths


def _config_from_args(
    framework: Framework,
    project_root: str | None,
    use_gas_data: bool,
    run_tool: bool,
    rules: list[str] | None,
) -> AnalyzerConfig:
    """Build an AnalyzerConfig from the raw tool arguments."""
    return AnalyzerConfig(
        framework=framework,
        project_root=project_root,
        use_gas_data=use_gas_data,
        run_tool=run_tool,
        rules=rules,
    )


# ---------------------------------------------------------------------------
# MCP Tools
# ---------------------------------------------------------------------------

@mcp.tool()
async def analyze_source(source: str) -> str:
    """Analyze Solidity source text and return the contract report as JSON.

    Args:
        source: Full text of a Solidity contract.

    Returns:
        JSON with name, functions (signature fields, source span, gas
        patterns, complexity score), totalLines, stateVariables and events.
    """
    try:
        report = analyze(source)
    except GasGuardError as exc:
        return json.dumps({"error": str(exc)})
    return json.dumps(report.to_wire(), indent=2)


@mcp.tool()
async def analyze_contracts(
    files: list[str],
    framework: Framework = "foundry",
    project_root: str | None = None,
    use_gas_data: bool = True,
    run_tool: bool = False,
    rules: list[str] | None = None,
) -> str:
    """Analyze Solidity files and return the full analysis run as JSON.

    Args:
        files: Paths of .sol files or directories to scan for them.
        framework: "foundry" or "hardhat" to merge measured gas figures, "none" for static only.
        project_root: Optional project root (detected from each file otherwise).
        use_gas_data: Whether to look up measured gas figures.
        run_tool: Run `forge snapshot` (or `npx hardhat test`) when no gas data exists.
        rules: Subset of suggestion rules to apply (default: all).
    """
    config = _config_from_args(framework, project_root, use_gas_data, run_tool, rules)
    run = await GasAnalyzer(config).analyze_contracts(_expand_paths(files))
    return run.model_dump_json(by_alias=True, indent=2)


@mcp.tool()
async def suggest_optimizations(
    files: list[str],
    rules: list[str] | None = None,
) -> str:
    """List ranked optimisation suggestions for every function in the given files.

    Args:
        files: Paths of .sol files or directories to scan for them.
        rules: Subset of suggestion rules to apply (default: all).
    """
    analyzer = GasAnalyzer(
        AnalyzerConfig(framework="none", use_gas_data=False, rules=rules),
    )
    out: list[str] = []
    for file in _expand_paths(files):
        out.append(f"Contract file: {file}")
        try:
            report = analyzer.read_contract(Path(file))
        except (GasGuardError, OSError) as exc:
            out.append(f"  error: {exc}")
            continue
        for fn in report.functions:
            out.append(
                f"  {fn.name} | visibility: {fn.visibility} | complexity: {fn.complexity_score}"
            )
            if fn.patterns:
                out.append(f"    patterns: {', '.join(p.kind.value for p in fn.patterns)}")
            suggestions = analyzer.suggestor.generate(fn)
            if not suggestions:
                out.append("    no optimization suggestions - function appears optimal")
            for s in suggestions:
                out.append(
                    f"    [{s.impact.value}] {s.message} "
                    f"(confidence {round(s.confidence * 100)}%)"
                )
    return "\n".join(out)


@mcp.tool()
async def gas_report(
    files: list[str],
    format: ReportFormat = "markdown",
    output_path: str | None = None,
    framework: Framework = "foundry",
    use_gas_data: bool = True,
    run_tool: bool = False,
) -> str:
    """Generate a gas analysis report for the given files.

    Args:
        files: Paths of .sol files or directories to scan for them.
        format: "markdown" (default) or "json".
        output_path: Also write the report to this file when given.
        framework: "foundry", "hardhat" or "none".
        use_gas_data: Whether to look up measured gas figures.
        run_tool: Run `forge snapshot` (or `npx hardhat test`) when no gas data exists.
    """
    config = _config_from_args(framework, None, use_gas_data, run_tool, None)
    run = await GasAnalyzer(config).analyze_contracts(_expand_paths(files))
    text = generate_report(run, format)
    if output_path:
        Path(output_path).write_text(text)
        logger.info("Report saved to %s", output_path)
    return text


@mcp.tool()
async def list_rules() -> str:
    """List all registered suggestion rules with their descriptions and tags."""
    rules = [
        {"name": r.name, "description": r.description, "tags": r.tags}
        for r in get_registry().all
    ]
    return json.dumps(rules, indent=2)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
