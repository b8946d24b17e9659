"""Rule deprecation without disrupting the rest of the ontology."""

from __future__ import annotations

from datetime import datetime, timezone

from compliance_engine.core.ontology import DEFEAT_RELATIONS, Model, RelationType
from compliance_engine.audit.schemas import (
    DeprecationReport,
    DownstreamEffect,
    RemovedCheck,
    RemovedEdge,
)

_DEFEASIBILITY_EDGES = DEFEAT_RELATIONS | {RelationType.PREFERS}


def deprecate_rule(model: Model, rule_id: str, reason: str) -> tuple[Model, DeprecationReport]:
    """Soft-deprecate a rule and drop everything that references it.

    The rule entity stays in the model with its deprecation flag set.
    Relations and policies touching it (policies also through
    `legal_basis`) and validation checks naming it are removed. Removing a
    Prefers/Rebuts/Undercuts edge is reported as a downstream effect on the
    other rule.

    Args:
        model: Model to deprecate the rule in. It is not modified.
        rule_id: ID of the rule entity.
        reason: Why the rule is deprecated.

    Returns:
        (new model, report). For an unknown rule id the original model is
        returned and the report carries an error.
    """
    now = datetime.now(timezone.utc)
    report = DeprecationReport(rule_id=rule_id, reason=reason, timestamp=now)

    if model.get_entity(rule_id) is None:
        report.error = f"Rule {rule_id} not found in model"
        return model, report

    entities = []
    for entity in model.entities:
        if entity.id == rule_id:
            entity = entity.model_copy(update={
                "deprecated": True,
                "deprecation_reason": reason,
                "deprecation_date": now.date(),
            })
        entities.append(entity)
    report.entities_deprecated.append(rule_id)

    relations = []
    for rel in model.relations:
        if rule_id not in (rel.source, rel.target):
            relations.append(rel)
            continue
        report.relations_removed.append(RemovedEdge(type=rel.type.value, source=rel.source, target=rel.target))
        if rel.type in _DEFEASIBILITY_EDGES:
            other = rel.source if rel.target == rule_id else rel.target
            report.downstream_effects.append(DownstreamEffect(
                affected_rule=other,
                message=f"Removing {rel.type.value} relation may alter defeasibility status of {other}",
            ))

    policies = []
    for pol in model.policies:
        if rule_id in (pol.source, pol.target) or pol.parameters.legal_basis == rule_id:
            report.policies_removed.append(RemovedEdge(type=pol.type.value, source=pol.source, target=pol.target))
        else:
            policies.append(pol)

    checks = []
    for check in model.validation_checks:
        if rule_id in (check.source, check.target) or rule_id in check.label:
            report.checks_removed.append(RemovedCheck(check_type=check.check_type, label=check.label))
        else:
            checks.append(check)

    updated = model.model_copy(update={
        "entities": entities,
        "relations": relations,
        "policies": policies,
        "validation_checks": checks,
    })
    return updated, report
