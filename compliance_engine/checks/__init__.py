"""Structural validation check generation and execution, and model builders."""

from .generator import (
    GENERATORS,
    generate_access_checks,
    generate_activity_checks,
    generate_assignment_checks,
    generate_constraint_checks,
    generate_defeat_checks,
    generate_jurisdiction_checks,
    generate_multi_jurisdiction_checks,
    generate_potestative_checks,
    generate_process_checks,
    generate_reporting_checks,
    generate_role_checks,
    generate_separation_checks,
    generate_threshold_checks,
    generate_validation_checks,
    transitive_successors,
)
from .builders import build_enterprise_model, build_law_model, merge_law_models
from .executor import (
    EVALUATORS,
    RELATIONAL_CHECKS,
    CheckIndex,
    compute_reachable,
    execute_check,
    execute_checks,
)

__all__ = [
    "build_enterprise_model",
    "build_law_model",
    "merge_law_models",
    "GENERATORS",
    "generate_access_checks",
    "generate_activity_checks",
    "generate_assignment_checks",
    "generate_constraint_checks",
    "generate_defeat_checks",
    "generate_jurisdiction_checks",
    "generate_multi_jurisdiction_checks",
    "generate_potestative_checks",
    "generate_process_checks",
    "generate_reporting_checks",
    "generate_role_checks",
    "generate_separation_checks",
    "generate_threshold_checks",
    "generate_validation_checks",
    "transitive_successors",
    "EVALUATORS",
    "RELATIONAL_CHECKS",
    "CheckIndex",
    "compute_reachable",
    "execute_check",
    "execute_checks",
]
