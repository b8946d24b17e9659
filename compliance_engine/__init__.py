"""Compliance validation engine.

Proves or disproves consistency between a Law Model and an Enterprise Model
with propositional satisfiability, and audits the enterprise against the law
through defeasible rule status, Hohfeldian modality checks and structural
validation checks.
"""

from compliance_engine.consistency import check_consistency
from compliance_engine.defeasibility import check_potestative_consistency, evaluate_defeasibility
from compliance_engine.checks import (
    build_enterprise_model,
    build_law_model,
    execute_checks,
    generate_validation_checks,
    merge_law_models,
)
from compliance_engine.audit import validate_compliance

generate_checks = generate_validation_checks

__all__ = [
    "check_consistency",
    "evaluate_defeasibility",
    "generate_checks",
    "execute_checks",
    "check_potestative_consistency",
    "validate_compliance",
    "build_law_model",
    "build_enterprise_model",
    "merge_law_models",
]
