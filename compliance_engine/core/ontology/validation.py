"""Structural validation of model graphs.

Vocabulary membership is enforced by the pydantic models at construction
time. This module covers what a single field cannot see: blank identifiers,
duplicate entity ids and dangling relation/policy endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from compliance_engine.core.ontology.model import Model, ModelKind


class ModelValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_model(model: Model) -> ModelValidationResult:
    """Collect structural errors in a model without raising.

    Args:
        model: Law or Enterprise model to validate.

    Returns:
        ModelValidationResult with every error found.
    """
    errors: list[str] = []

    if _blank(model.context):
        errors.append("Model must have a context")

    seen: set[str] = set()
    for entity in model.entities:
        if _blank(entity.id):
            errors.append("Entity must have a non-empty id")
        if _blank(entity.name):
            errors.append(f"Entity[{entity.id}]: Entity must have a non-empty name")
        if entity.id in seen:
            errors.append(f"Entity[{entity.id}]: Duplicate entity id")
        seen.add(entity.id)

    for rel in model.relations:
        for role, endpoint in (("source", rel.source), ("target", rel.target)):
            if _blank(endpoint):
                errors.append(f"Relation[{rel.type.value}]: Relation must have a {role}")
            elif endpoint not in seen:
                errors.append(f"Relation[{rel.type.value}]: Unknown {role} entity: {endpoint}")

    for pol in model.policies:
        for role, endpoint in (("source", pol.source), ("target", pol.target)):
            if _blank(endpoint):
                errors.append(f"Policy[{pol.type.value}]: Policy must have a {role}")
            elif endpoint not in seen:
                errors.append(f"Policy[{pol.type.value}]: Unknown {role} entity: {endpoint}")

    if model.model_type == ModelKind.LAW:
        for check in model.validation_checks:
            if _blank(check.label):
                errors.append(f"Check[{check.check_type.value}]: Check must have a label")
            if _blank(check.source):
                errors.append(f"Check[{check.label}]: Check must have a source")
            if _blank(check.target):
                errors.append(f"Check[{check.label}]: Check must have a target")

    return ModelValidationResult(valid=not errors, errors=errors)
