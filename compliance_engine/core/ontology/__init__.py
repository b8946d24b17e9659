"""Core ontology types for governance graphs."""

from .types import Entity, EntityType, InferentialStrength
from .relations import (
    Relation,
    RelationType,
    RelationParameters,
    DefeatMechanism,
    ConflictPrinciple,
    EQUIVALENCE_RELATIONS,
    DEFEAT_RELATIONS,
)
from .policies import (
    Policy,
    PolicyType,
    PolicyParameters,
    AllowDeny,
    DeonticStatus,
    HohfeldianModality,
    PowerSubtype,
    ConsentType,
)
from .checks import (
    Check,
    CheckType,
    CheckParameters,
    CheckResult,
    Quantifier,
    Severity,
    Verdict,
)
from .jurisdiction import Country, Domain, Jurisdiction, JurisdictionLevel, level_rank
from .model import Model, ModelKind, Preference, TheoryConstruction, merge_models
from .validation import ModelValidationResult, validate_model

__all__ = [
    # Entities
    "Entity",
    "EntityType",
    "InferentialStrength",
    # Relations
    "Relation",
    "RelationType",
    "RelationParameters",
    "DefeatMechanism",
    "ConflictPrinciple",
    "EQUIVALENCE_RELATIONS",
    "DEFEAT_RELATIONS",
    # Policies
    "Policy",
    "PolicyType",
    "PolicyParameters",
    "AllowDeny",
    "DeonticStatus",
    "HohfeldianModality",
    "PowerSubtype",
    "ConsentType",
    # Checks
    "Check",
    "CheckType",
    "CheckParameters",
    "CheckResult",
    "Quantifier",
    "Severity",
    "Verdict",
    # Jurisdiction
    "Country",
    "Domain",
    "Jurisdiction",
    "JurisdictionLevel",
    "level_rank",
    # Models
    "Model",
    "ModelKind",
    "Preference",
    "TheoryConstruction",
    "merge_models",
    # Validation
    "ModelValidationResult",
    "validate_model",
]
