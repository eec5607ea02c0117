"""Canonical data models shared by the parser, rules, analyzer, and reports.

Attributes are snake_case; every model serialises to the camelCase wire
names consumed by callers through field aliases (see ``to_wire``).
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PatternKind(str, Enum):
    LOOP = "loop"
    STORAGE_WRITE = "storage_write"
    VALIDATION = "validation"
    EXTERNAL_CALL = "external_call"
    ARRAY_OPERATION = "array_operation"
    STRING_OPERATION = "string_operation"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        return {Impact.HIGH: 3, Impact.MEDIUM: 2, Impact.LOW: 1}[self]


class GasRank(str, Enum):
    UNKNOWN = "unknown"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


Visibility = Literal["public", "private", "internal", "external"]
StateMutability = Literal["pure", "view", "payable", "nonpayable"]
Framework = Literal["foundry", "hardhat", "none"]


class _WireModel(BaseModel):
    """Immutable model that dumps to its wire (alias) names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# ---------------------------------------------------------------------------
# Core report
# ---------------------------------------------------------------------------

class Parameter(_WireModel):
    type: str
    name: str


class PatternFinding(_WireModel):
    """One heuristic rule's positive detection inside a function body."""

    kind: PatternKind = Field(alias="type")
    description: str
    estimated_gas: int = Field(alias="estimatedGas")
    suggestion: str


class FunctionInfo(_WireModel):
    name: str
    visibility: Visibility = "public"
    state_mutability: StateMutability = Field("nonpayable", alias="stateMutability")
    start_line: int = Field(alias="startLine", ge=1)
    source_code: str = Field(alias="sourceCode")
    parameters: list[Parameter] = Field(default_factory=list)
    return_types: list[str] = Field(default_factory=list, alias="returnTypes")
    patterns: list[PatternFinding] = Field(default_factory=list)
    complexity_score: int = Field(1, alias="complexityScore", ge=1)

    def has_pattern(self, kind: PatternKind) -> bool:
        return any(p.kind == kind for p in self.patterns)


class ContractReport(_WireModel):
    """Structured summary of one contract source."""

    name: str = "Unknown"
    functions: list[FunctionInfo] = Field(default_factory=list)
    total_lines: int = Field(1, alias="totalLines")
    state_variables: list[str] = Field(default_factory=list, alias="stateVariables")
    events: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Suggestions and file-level analysis
# ---------------------------------------------------------------------------

class Suggestion(_WireModel):
    """A static optimisation hint produced by a suggestion rule."""

    category: str = Field(alias="type")
    message: str
    confidence: float = Field(0.5, ge=0.0, le=1.0)
    impact: Impact = Impact.LOW
    source: str = "static"
    estimated_saving: int = Field(0, alias="estimatedSaving")
    rule: str = ""

    @property
    def score(self) -> float:
        return self.impact.weight * self.confidence


class FunctionAnalysis(FunctionInfo):
    """A parsed function enriched with measured gas and suggestions."""

    gas_usage: int = Field(0, alias="gasUsage")
    gas_rank: GasRank = Field(GasRank.UNKNOWN, alias="gasRank")
    has_gas_data: bool = Field(False, alias="hasGasData")
    suggestions: list[Suggestion] = Field(default_factory=list)
    potential_savings: int = Field(0, alias="potentialSavings")


class ContractAnalysis(ContractReport):
    file_path: str = Field("", alias="filePath")
    functions: list[FunctionAnalysis] = Field(default_factory=list)
    total_gas_usage: int = Field(0, alias="totalGasUsage")
    framework_used: str = Field("none", alias="frameworkUsed")
    gas_data_available: bool = Field(False, alias="gasDataAvailable")
    total_potential_savings: int = Field(0, alias="totalPotentialSavings")
    analysis_timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        alias="analysisTimestamp",
    )


class AnalysisSummary(_WireModel):
    total_contracts: int = Field(0, alias="totalContracts")
    total_functions: int = Field(0, alias="totalFunctions")
    total_gas_usage: int = Field(0, alias="totalGasUsage")
    total_potential_savings: int = Field(0, alias="totalPotentialSavings")
    contracts_with_gas_data: int = Field(0, alias="contractsWithGasData")
    gas_data_coverage: int = Field(0, alias="gasDataCoverage")
    average_gas_per_function: int = Field(0, alias="averageGasPerFunction")
    potential_savings_percentage: int = Field(0, alias="potentialSavingsPercentage")


class AnalysisRun(_WireModel):
    """Aggregated result of analysing a batch of contract files."""

    contracts: list[ContractAnalysis] = Field(default_factory=list)
    summary: AnalysisSummary = Field(default_factory=AnalysisSummary)
    framework: str = "none"
    errors: list[str] = Field(default_factory=list)
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class AnalyzerConfig(BaseModel):
    """Runtime configuration for a file-level analysis run."""

    framework: Framework = "foundry"
    project_root: str | None = None
    use_gas_data: bool = True
    run_tool: bool = False  # forge snapshot / npx hardhat test when no data exists
    tool_timeout: int = 120
    snapshot_file: str = ".gas-snapshot"
    gas_report_file: str = "gasReporterOutput.json"
    rules: list[str] | None = None  # None = all
