"""File-level gas analysis: parse, attach measured gas, suggest, summarise."""

from __future__ import annotations

import logging
import math
from pathlib import Path

from .adapters import BaseAdapter, FoundryAdapter, HardhatAdapter
from .errors import AnalysisError, GasGuardError
from .models import (
    AnalysisRun,
    AnalysisSummary,
    AnalyzerConfig,
    ContractAnalysis,
    ContractReport,
    FunctionAnalysis,
    FunctionInfo,
    GasRank,
    Impact,
    Suggestion,
)
from .parser import analyze
from .source_reader import looks_like_solidity, read_contract_source
from .suggestor import SuggestionEngine

logger = logging.getLogger(__name__)

INVALID_CONTRACT_NAME = "InvalidContract"

# Share of measured gas a suggestion is expected to save, by impact
_MEASURED_SAVINGS_RATE = {Impact.HIGH: 0.15, Impact.MEDIUM: 0.08, Impact.LOW: 0.03}
# Flat estimate per suggestion when nothing was measured
_ESTIMATED_SAVINGS = {Impact.HIGH: 15000, Impact.MEDIUM: 5000, Impact.LOW: 1000}


def gas_rank(gas_usage: int) -> GasRank:
    if gas_usage == 0:
        return GasRank.UNKNOWN
    if gas_usage < 30000:
        return GasRank.LOW
    if gas_usage < 100000:
        return GasRank.MEDIUM
    return GasRank.HIGH


def potential_savings(suggestions: list[Suggestion], gas_usage: int) -> int:
    if gas_usage > 0:
        return sum(int(gas_usage * _MEASURED_SAVINGS_RATE[s.impact]) for s in suggestions)
    return sum(_ESTIMATED_SAVINGS[s.impact] for s in suggestions)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _percent(part: int, whole: int) -> int:
    return _round_half_up(part / whole * 100) if whole > 0 else 0


def summarize(contracts: list[ContractAnalysis]) -> AnalysisSummary:
    total_functions = sum(len(c.functions) for c in contracts)
    total_gas = sum(c.total_gas_usage for c in contracts)
    total_savings = sum(c.total_potential_savings for c in contracts)
    with_gas = sum(1 for c in contracts if c.gas_data_available)
    return AnalysisSummary(
        total_contracts=len(contracts),
        total_functions=total_functions,
        total_gas_usage=total_gas,
        total_potential_savings=total_savings,
        contracts_with_gas_data=with_gas,
        gas_data_coverage=_percent(with_gas, len(contracts)),
        average_gas_per_function=_round_half_up(total_gas / total_functions) if total_functions else 0,
        potential_savings_percentage=_percent(total_savings, total_gas),
    )


class GasAnalyzer:
    """Analyses contract files with optional Foundry or Hardhat gas measurements."""

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        *,
        suggestor: SuggestionEngine | None = None,
        adapter: BaseAdapter | None = None,
    ) -> None:
        self.config = config or AnalyzerConfig()
        self.suggestor = suggestor or SuggestionEngine(rules=self.config.rules)
        self.adapter = adapter or self._default_adapter()

    def _default_adapter(self) -> BaseAdapter | None:
        if self.config.framework == "foundry":
            return FoundryAdapter(snapshot_file=self.config.snapshot_file)
        if self.config.framework == "hardhat":
            return HardhatAdapter(gas_report_file=self.config.gas_report_file)
        return None

    # ------------------------------------------------------------------
    # Single contract
    # ------------------------------------------------------------------

    def read_contract(self, path: Path) -> ContractReport:
        """Parse a file; text with no contract-like keyword is not analysed."""
        source = read_contract_source(path)
        if not looks_like_solidity(source):
            logger.warning("File %s doesn't appear to contain valid Solidity code", path)
            return ContractReport(
                name=INVALID_CONTRACT_NAME,
                total_lines=source.count("\n") + 1,
            )
        return analyze(source)

    async def _load_gas_data(self, path: Path) -> dict[str, int]:
        if self.adapter is None or not self.config.use_gas_data:
            return {}
        try:
            gas = await self.adapter.get_gas_data(
                path,
                project_root=Path(self.config.project_root) if self.config.project_root else None,
                run_tool=self.config.run_tool,
                timeout=self.config.tool_timeout,
            )
        except (OSError, TimeoutError) as exc:
            logger.warning("Could not load %s gas data: %s", self.adapter.name, exc)
            return {}
        if gas:
            logger.info("Loaded gas data for %d functions from %s", len(gas), self.adapter.name)
        return gas

    def enrich_function(self, fn: FunctionInfo, gas_data: dict[str, int]) -> FunctionAnalysis:
        gas_usage = gas_data.get(fn.name.lower(), 0)
        logger.debug("Function %s -> gas %d", fn.name, gas_usage)
        suggestions = self.suggestor.generate(fn)
        return FunctionAnalysis(
            **dict(fn),
            gas_usage=gas_usage,
            gas_rank=gas_rank(gas_usage),
            has_gas_data=gas_usage > 0,
            suggestions=suggestions,
            potential_savings=potential_savings(suggestions, gas_usage),
        )

    async def analyze_contract(self, contract_path: str | Path) -> ContractAnalysis:
        path = Path(contract_path)
        logger.info("Analyzing contract: %s", path.name)
        try:
            report = self.read_contract(path)
            gas_data = await self._load_gas_data(path)
            functions = [self.enrich_function(fn, gas_data) for fn in report.functions]
        except FileNotFoundError:
            raise
        except GasGuardError as exc:
            raise AnalysisError(f"Contract analysis failed: {exc}") from exc

        total_gas = sum(f.gas_usage for f in functions)
        return ContractAnalysis(
            **report.model_dump(exclude={"functions"}),
            file_path=str(path),
            functions=functions,
            total_gas_usage=total_gas,
            framework_used=self.config.framework,
            gas_data_available=total_gas > 0,
            total_potential_savings=sum(f.potential_savings for f in functions),
        )

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    async def analyze_contracts(self, contract_paths: list[str | Path]) -> AnalysisRun:
        """Analyse each file in order; failures are recorded, not raised."""
        contracts: list[ContractAnalysis] = []
        errors: list[str] = []
        for contract_path in contract_paths:
            try:
                contracts.append(await self.analyze_contract(contract_path))
            except (GasGuardError, OSError) as exc:
                logger.error("Analysis of %s failed: %s", contract_path, exc)
                errors.append(f"{contract_path}: {exc}")
        return AnalysisRun(
            contracts=contracts,
            summary=summarize(contracts),
            framework=self.config.framework,
            errors=errors,
        )
