"""Core entity types for governance graphs.

An entity is a node in a Law Model or Enterprise Model graph:
- Organizational structure (users, roles, processes, activities)
- Regulated objects (data objects, vehicles, infrastructure zones)
- Normative content (legal instruments, rules, constraints, sanctions)
- Argumentation support (values, factors)
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# Entities
# =============================================================================

class EntityType(str, Enum):
    """Fixed vocabulary of entity kinds."""

    USER = "User"
    ACTIVITY = "Activity"
    PROCESS = "Process"
    DEPARTMENT_ROLE = "DepartmentRole"
    LEGAL_ENTITY = "LegalEntity"
    DATA_OBJECT = "DataObject"
    VEHICLE = "Vehicle"
    INFRASTRUCTURE_ZONE = "InfrastructureZone"
    LEGAL_INSTRUMENT = "LegalInstrument"
    CONSTRAINT = "Constraint"
    VALUE = "Value"
    FACTOR = "Factor"
    RULE = "Rule"
    SANCTION = "Sanction"


class InferentialStrength(str, Enum):
    """Sartor's classification of rule strength."""

    STRICT = "Strict"
    DEFEASIBLE = "Defeasible"


class Entity(BaseModel):
    """A node of a governance graph.

    Entities are immutable once produced, except for the soft deprecation
    flag set by `deprecate_rule`.
    """

    id: str
    type: EntityType
    name: str
    subtype: str | None = Field(None, description="Free-form refinement, e.g. 'Strict' for rules")
    jurisdiction: str | None = Field(None, description="Jurisdiction tag, e.g. 'US-CA' or 'EU'")
    description: str | None = None

    # Rule metadata consumed by the conflict-resolution meta-principles
    jurisdiction_level: str | None = Field(None, description="e.g. 'Federal', 'State'")
    effective_date: date | None = None
    value: str | None = Field(None, description="ID of the Value entity backing this rule")

    # Soft deprecation
    deprecated: bool = False
    deprecation_reason: str | None = None
    deprecation_date: date | None = None

    @property
    def inferential_strength(self) -> InferentialStrength:
        if self.subtype == InferentialStrength.STRICT.value:
            return InferentialStrength.STRICT
        return InferentialStrength.DEFEASIBLE
