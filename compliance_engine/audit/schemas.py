"""Report types for compliance audits."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from compliance_engine.core.ontology import CheckResult, CheckType, Jurisdiction
from compliance_engine.consistency.schemas import Violation
from compliance_engine.defeasibility.schemas import PotestativeViolation, RuleEvaluation
from compliance_engine.solver import SolverStats


class SectionResult(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"


class OverallStatus(str, Enum):
    COMPLIANT = "COMPLIANT"
    NON_COMPLIANT = "NON_COMPLIANT"


def section_result(ok: bool) -> SectionResult:
    return SectionResult.PASS if ok else SectionResult.FAIL


# =============================================================================
# Gaps
# =============================================================================

class GapType(str, Enum):
    MISSING_ENTITY = "MISSING_ENTITY"
    UNIMPLEMENTED_ASSIGNMENT = "UNIMPLEMENTED_ASSIGNMENT"
    MISSING_REPORTING = "MISSING_REPORTING"
    MISSING_SEQUENCE = "MISSING_SEQUENCE"


class Gap(BaseModel):
    """A law requirement with no enterprise counterpart."""

    type: GapType
    source: str = Field(..., description="Entity id, or the source of the missing edge")
    target: str | None = Field(None, description="Target of the missing edge")
    name: str | None = None
    entity_type: str | None = None
    message: str


class OntologyCoverage(BaseModel):
    law_entities: int
    enterprise_entities: int
    matched: int
    coverage_pct: int


# =============================================================================
# Report Sections
# =============================================================================

class ConsistencySection(BaseModel):
    title: str = "Consistency Analysis"
    result: SectionResult
    violations: list[Violation] = Field(default_factory=list)
    solver_stats: SolverStats
    conflicting_clauses: list[int] = Field(default_factory=list)
    detail: str


class OntologySection(BaseModel):
    title: str = "Ontology Audit"
    result: SectionResult
    gaps: list[Gap] = Field(default_factory=list)
    coverage: OntologyCoverage


class ScenarioSection(BaseModel):
    title: str = "Scenario Audit"
    result: SectionResult
    total_checks: int = 0
    passed: int = 0
    failed: int = 0
    indeterminate: int = 0
    checks: list[CheckResult] = Field(default_factory=list)


class PotestativeSection(BaseModel):
    title: str = "Access & Potestative Audit"
    result: SectionResult
    violations: list[PotestativeViolation] = Field(default_factory=list)


class DefeasibilitySection(BaseModel):
    """Informational; carries no PASS/FAIL result."""

    title: str = "Defeasibility Audit"
    result: SectionResult | None = None
    total_rules: int = 0
    active_rules: int = 0
    defeated_rules: int = 0
    reinstated_rules: int = 0
    details: list[RuleEvaluation] = Field(default_factory=list)


class CompletenessSection(BaseModel):
    title: str = "Completeness Audit"
    result: SectionResult
    gaps: list[Gap] = Field(default_factory=list)


class CriticalFinding(BaseModel):
    """A Critical item surfaced in the executive summary."""

    section: str = Field(..., description="consistency, potestative or scenario")
    type: str
    message: str


class ExecutiveSummary(BaseModel):
    overall: OverallStatus
    total_sections: int
    passed_sections: int
    failed_sections: int
    critical_violations: list[CriticalFinding] = Field(default_factory=list)
    summary: str


class ComplianceReport(BaseModel):
    """Full audit of an Enterprise Model against a Law Model."""

    timestamp: datetime
    run_id: str
    law_context: str
    enterprise_context: str
    overall_status: OverallStatus
    consistency: ConsistencySection
    ontology: OntologySection
    scenario: ScenarioSection
    potestative: PotestativeSection
    defeasibility: DefeasibilitySection
    completeness: CompletenessSection
    executive_summary: ExecutiveSummary

    def sections(self) -> list[BaseModel]:
        return [
            self.consistency,
            self.ontology,
            self.scenario,
            self.potestative,
            self.defeasibility,
            self.completeness,
        ]


# =============================================================================
# Compliance Matrix
# =============================================================================

class MatrixStatus(str, Enum):
    COVERED = "COVERED"
    GAP = "GAP"
    CONFLICT = "CONFLICT"


class MatrixRow(BaseModel):
    requirement_type: str = Field(..., description="Role, Process, Assignment, SoD or Policy")
    requirement_id: str
    requirement_name: str
    jurisdiction: str | None = None
    enterprise_control: str | None = None
    status: MatrixStatus


class MatrixSummary(BaseModel):
    total: int = 0
    covered: int = 0
    gaps: int = 0
    conflicts: int = 0
    coverage_pct: int = 100


class ComplianceMatrix(BaseModel):
    timestamp: datetime
    scope: str
    jurisdiction: Jurisdiction
    rows: list[MatrixRow] = Field(default_factory=list)
    summary: MatrixSummary = Field(default_factory=MatrixSummary)


# =============================================================================
# Jurisdiction Comparison
# =============================================================================

class EquivalenceMapping(BaseModel):
    type: str = Field(..., description="Equivalence relation type, e.g. 'EquRole'")
    entity_a: str
    entity_b: str
    name_a: str
    name_b: str
    auto_matched: bool = False


class JurisdictionGap(BaseModel):
    entity_id: str
    entity_name: str
    entity_type: str
    message: str


class PolicyConflict(BaseModel):
    type: str
    entity: str
    target: str
    jurisdiction_a_policy: str
    jurisdiction_b_policy: str
    message: str


class RecommendationPriority(str, Enum):
    CRITICAL = "Critical"
    MAJOR = "Major"
    INFO = "Info"


class Recommendation(BaseModel):
    priority: RecommendationPriority
    action: str
    detail: str


class JurisdictionComparison(BaseModel):
    timestamp: datetime
    jurisdiction_a: Jurisdiction
    jurisdiction_b: Jurisdiction
    domain: str = "All"
    equivalences: list[EquivalenceMapping] = Field(default_factory=list)
    gaps_a: list[JurisdictionGap] = Field(default_factory=list, description="Present in B, missing in A")
    gaps_b: list[JurisdictionGap] = Field(default_factory=list, description="Present in A, missing in B")
    conflicts: list[PolicyConflict] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)


# =============================================================================
# Rule Deprecation
# =============================================================================

class RemovedEdge(BaseModel):
    type: str
    source: str
    target: str


class RemovedCheck(BaseModel):
    check_type: CheckType
    label: str


class DownstreamEffect(BaseModel):
    type: str = "DEFEASIBILITY_CHANGE"
    affected_rule: str
    message: str


class DeprecationReport(BaseModel):
    rule_id: str
    reason: str
    timestamp: datetime
    entities_deprecated: list[str] = Field(default_factory=list)
    relations_removed: list[RemovedEdge] = Field(default_factory=list)
    policies_removed: list[RemovedEdge] = Field(default_factory=list)
    checks_removed: list[RemovedCheck] = Field(default_factory=list)
    downstream_effects: list[DownstreamEffect] = Field(default_factory=list)
    error: str | None = None
