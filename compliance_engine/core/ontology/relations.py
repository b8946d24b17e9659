"""Relation types for governance graphs."""

from enum import Enum
from pydantic import BaseModel, Field


class RelationType(str, Enum):
    """Types of directed edges between entities."""

    # Organizational structure
    INCLUDES = "Includes"
    ACTS = "Acts"
    ASSIGNED_TO = "AssignedTo"
    CONTAINS = "Contains"
    NEXT = "Next"
    ASSUMES = "Assumes"
    COMPOSED_OF = "ComposedOf"
    SEPARATE = "Separate"
    DELEGATE = "Delegate"

    # Constitutive and equivalence relations
    COUNTS_AS = "CountsAs"
    EQU_ROLE = "EquRole"
    EQU_ACTIVITY = "EquActivity"
    EQU_PROCESS = "EquProcess"

    # Regulated-domain relations
    ACTS_ON = "ActsOn"
    HAS_CONSTRAINT = "HasConstraint"
    REQUIRES_CONDITION = "RequiresCondition"
    MUST_REPORT = "MustReport"
    APPLIES_IN = "AppliesIn"
    HAS_THRESHOLD = "HasThreshold"

    # Defeasibility
    UNDERCUTS = "Undercuts"
    REBUTS = "Rebuts"
    PREFERS = "Prefers"
    TRIGGERS_SANCTION = "TriggersSanction"


EQUIVALENCE_RELATIONS = frozenset({
    RelationType.EQU_ROLE,
    RelationType.EQU_ACTIVITY,
    RelationType.EQU_PROCESS,
})

DEFEAT_RELATIONS = frozenset({RelationType.REBUTS, RelationType.UNDERCUTS})


class DefeatMechanism(str, Enum):
    """How one rule defeats another."""

    REBUTTING = "Rebutting"
    UNDERCUTTING = "Undercutting"
    DEFEATER = "Defeater"


class ConflictPrinciple(str, Enum):
    """Meta-principles for resolving conflicts between rules."""

    LEX_SPECIALIS = "LexSpecialis"
    LEX_POSTERIOR = "LexPosterior"
    LEX_SUPERIOR = "LexSuperior"
    VALUE_PREFERENCE = "Value-Preference"
    JURISDICTIONAL_PRIMACY = "JurisdictionalPrimacy"


class RelationParameters(BaseModel):
    """Optional qualifiers on a relation."""

    additional_target: str | None = None
    conflict_resolution_principle: ConflictPrinciple | None = None
    defeat_mechanism: DefeatMechanism | None = None
    jurisdiction: str | None = None
    condition: str | None = Field(None, description="Exceptional condition, e.g. for Undercuts")
    temporal_persistence: str | None = None


class Relation(BaseModel):
    """A typed directed edge between two entities."""

    type: RelationType
    source: str = Field(..., description="ID of the source entity")
    target: str = Field(..., description="ID of the target entity")
    parameters: RelationParameters = Field(default_factory=RelationParameters)

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.type.value, self.source, self.target)
