"""Result types for defeasible reasoning."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from compliance_engine.core.ontology import (
    ConflictPrinciple,
    DefeatMechanism,
    Entity,
    HohfeldianModality,
    InferentialStrength,
    Policy,
    Preference,
    RelationType,
)


# =============================================================================
# Rule Status
# =============================================================================

class RuleStatus(str, Enum):
    """Per-rule state: Active by default, Defeated by an effective attack,
    Reinstated when the attacker is itself defeated."""

    ACTIVE = "Active"
    DEFEATED = "Defeated"
    REINSTATED = "Reinstated"


class RuleEvaluation(BaseModel):
    rule_id: str
    rule_name: str
    inferential_strength: InferentialStrength
    status: RuleStatus = RuleStatus.ACTIVE
    defeated_by: str | None = None
    defeat_mechanism: DefeatMechanism | None = None
    reinstated: bool = False
    reinstated_by: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status != RuleStatus.DEFEATED


# =============================================================================
# Conflict Resolution
# =============================================================================

UNRESOLVED = "UNRESOLVED"


class ResolutionContext(BaseModel):
    """Facts the meta-principles may consult beyond the two rules."""

    date_a: date | None = Field(None, description="Overrides rule A's effective_date")
    date_b: date | None = Field(None, description="Overrides rule B's effective_date")
    value_preferences: list[Preference] = Field(default_factory=list)
    operating_jurisdictions: list[str] = Field(default_factory=list)


class ConflictResolution(BaseModel):
    winner: Entity | None = None
    loser: Entity | None = None
    principle: ConflictPrinciple | Literal["UNRESOLVED"]
    message: str | None = None

    @property
    def resolved(self) -> bool:
        return self.principle != UNRESOLVED


# =============================================================================
# Hohfeldian Consistency
# =============================================================================

class PotestativeViolationType(str, Enum):
    HOHFELDIAN_MISMATCH = "HOHFELDIAN_MISMATCH"
    HOHFELDIAN_CONTRADICTION = "HOHFELDIAN_CONTRADICTION"


class PotestativeViolation(BaseModel):
    type: PotestativeViolationType
    policy_a: Policy
    policy_b: Policy
    expected: HohfeldianModality | None = None
    actual: HohfeldianModality | None = None
    message: str


# =============================================================================
# Default Hierarchy
# =============================================================================

class HierarchyNode(BaseModel):
    id: str
    name: str
    strength: InferentialStrength
    level: int = Field(0, description="Rules defeated minus rules defeating this one")


class HierarchyEdge(BaseModel):
    source: str = Field(..., description="Attacking rule")
    target: str = Field(..., description="Attacked rule")
    type: RelationType


class DefaultHierarchy(BaseModel):
    """Rules ordered from most general (highest level) to most specific."""

    nodes: list[HierarchyNode] = Field(default_factory=list)
    edges: list[HierarchyEdge] = Field(default_factory=list)
