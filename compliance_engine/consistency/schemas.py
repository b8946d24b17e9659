"""Result types for consistency checking."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from compliance_engine.core.ontology import Policy, Severity
from compliance_engine.solver import SolverStats


class ViolationType(str, Enum):
    INCONSISTENCY = "INCONSISTENCY"
    SOD_VIOLATION = "SOD_VIOLATION"
    ACCESS_CONTROL_CONTRADICTION = "ACCESS_CONTROL_CONTRADICTION"


class Violation(BaseModel):
    """A contradiction found between or within models."""

    type: ViolationType
    severity: Severity = Severity.CRITICAL
    message: str

    # SOD_VIOLATION
    user: str | None = None
    process1: str | None = None
    process2: str | None = None

    # ACCESS_CONTROL_CONTRADICTION
    law_policy: Policy | None = None
    enterprise_policy: Policy | None = None

    # INCONSISTENCY
    conflicting_clauses: int | None = Field(None, description="Number of clauses flagged by conflict extraction")


class ConsistencyResult(BaseModel):
    """Outcome of Con(Φ_E ∧ Φ_L) or of a single-model check."""

    consistent: bool
    violations: list[Violation] = Field(default_factory=list)
    model: dict[str, bool] | None = Field(None, description="Satisfying assignment when consistent")
    stats: SolverStats = Field(default_factory=SolverStats)
    conflicting_clauses: list[int] = Field(
        default_factory=list,
        description="Indices of clauses whose removal restores satisfiability",
    )
    clause_count: int = 0
