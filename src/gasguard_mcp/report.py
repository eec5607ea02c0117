"""Render an ``AnalysisRun`` as Markdown or JSON."""

from __future__ import annotations

import json
from typing import Literal

from .models import AnalysisRun, ContractAnalysis, FunctionAnalysis, Impact
from .suggestor import categorize_by_impact, top_suggestions, total_estimated_savings

ReportFormat = Literal["markdown", "json"]


def _num(value: int) -> str:
    return f"{value:,}"


def _function_row(fn: FunctionAnalysis) -> str:
    gas = _num(fn.gas_usage) if fn.gas_usage > 0 else "N/A"
    patterns = ", ".join(p.kind.value for p in fn.patterns) or "-"
    return (
        f"| {fn.name} | {gas} | {fn.gas_rank.value} | {patterns} "
        f"| {len(fn.suggestions)} | {_num(fn.potential_savings)} |"
    )


def _contract_section(contract: ContractAnalysis) -> list[str]:
    lines = [
        f"## Contract: {contract.name}",
        "",
        f"- **File**: {contract.file_path or 'n/a'}",
        f"- **Functions**: {len(contract.functions)}",
        f"- **Lines**: {contract.total_lines}",
        f"- **State Variables**: {', '.join(contract.state_variables) or 'none'}",
        f"- **Events**: {', '.join(contract.events) or 'none'}",
        f"- **Gas Data Available**: {'Yes' if contract.gas_data_available else 'No'}",
    ]
    suggestions = [s for fn in contract.functions for s in fn.suggestions]
    if suggestions:
        by_impact = categorize_by_impact(suggestions)
        lines.append(
            f"- **Suggestions**: {len(suggestions)} ("
            + ", ".join(f"{i.value} {len(by_impact[i])}" for i in Impact)
            + ")"
        )
        lines.append(
            f"- **Rule-Estimated Savings**: {_num(total_estimated_savings(suggestions))} gas"
        )
    lines.append("")
    if not contract.functions:
        return lines

    lines += [
        "### Functions",
        "",
        "| Function | Gas Usage | Rank | Patterns | Suggestions | Potential Savings |",
        "|----------|-----------|------|----------|-------------|-------------------|",
    ]
    lines += [_function_row(fn) for fn in contract.functions]
    lines.append("")

    for fn in contract.functions:
        if not fn.patterns and not fn.suggestions:
            continue
        lines.append(
            f"#### `{fn.name}` (line {fn.start_line}, complexity {fn.complexity_score})"
        )
        lines.append("")
        for p in fn.patterns:
            lines.append(
                f"- **{p.kind.value}** (~{_num(p.estimated_gas)} gas): "
                f"{p.description}. {p.suggestion}"
            )
        for s in fn.suggestions:
            lines.append(f"- [{s.impact.value}] {s.message}")
        lines.append("")

    if suggestions:
        lines += ["### Top Suggestions", ""]
        lines += [
            f"{n}. [{s.impact.value}] {s.message} ({round(s.confidence * 100)}% confidence)"
            for n, s in enumerate(top_suggestions(suggestions), 1)
        ]
        lines.append("")
    return lines


def generate_markdown(run: AnalysisRun) -> str:
    summary = run.summary
    lines = [
        "# Gas Guardian Analysis Report",
        "",
        "## Summary",
        "",
        f"- **Framework**: {run.framework}",
        f"- **Generated**: {run.timestamp}",
        f"- **Contracts**: {summary.total_contracts}",
        f"- **Functions**: {summary.total_functions}",
        f"- **Total Gas Usage**: {_num(summary.total_gas_usage)}",
        f"- **Potential Savings**: {_num(summary.total_potential_savings)} gas "
        f"({summary.potential_savings_percentage}%)",
        f"- **Gas Data Coverage**: {summary.gas_data_coverage}%",
        "",
    ]
    if run.errors:
        lines += ["## Errors", ""]
        lines += [f"- {e}" for e in run.errors]
        lines.append("")
    for contract in run.contracts:
        lines += _contract_section(contract)
    return "\n".join(lines)


def generate_report(run: AnalysisRun, fmt: ReportFormat = "markdown") -> str:
    if fmt == "json":
        return json.dumps(run.to_wire(), indent=2)
    if fmt == "markdown":
        return generate_markdown(run)
    raise ValueError(f"Unknown report format: {fmt!r}")
