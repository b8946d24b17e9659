"""Defeasible reasoning over legal rules."""

from .schemas import (
    UNRESOLVED,
    ConflictResolution,
    DefaultHierarchy,
    HierarchyEdge,
    HierarchyNode,
    PotestativeViolation,
    PotestativeViolationType,
    ResolutionContext,
    RuleEvaluation,
    RuleStatus,
)
from .service import build_default_hierarchy, evaluate_defeasibility
from .resolvers import (
    CONFLICT_RESOLVERS,
    RESOLUTION_ORDER,
    jurisdictional_primacy,
    lex_posterior,
    lex_specialis,
    lex_superior,
    resolve_conflict,
    specificity,
    value_preference,
)
from .hohfeld import CORRELATIVES, OPPOSITES, check_potestative_consistency

__all__ = [
    "UNRESOLVED",
    "ConflictResolution",
    "DefaultHierarchy",
    "HierarchyEdge",
    "HierarchyNode",
    "PotestativeViolation",
    "PotestativeViolationType",
    "ResolutionContext",
    "RuleEvaluation",
    "RuleStatus",
    "build_default_hierarchy",
    "evaluate_defeasibility",
    "CONFLICT_RESOLVERS",
    "RESOLUTION_ORDER",
    "jurisdictional_primacy",
    "lex_posterior",
    "lex_specialis",
    "lex_superior",
    "resolve_conflict",
    "specificity",
    "value_preference",
    "CORRELATIVES",
    "OPPOSITES",
    "check_potestative_consistency",
]
