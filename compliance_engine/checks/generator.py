"""Validation check generation.

Derives a catalogue of structural checks from a model's relations and
policies, one sub-generator per relation/policy family. Generation is a pure
function of the model.
"""

from __future__ import annotations

from compliance_engine.core.ontology import (
    AllowDeny,
    Check,
    CheckParameters,
    CheckType,
    EntityType,
    HohfeldianModality,
    Model,
    PolicyType,
    Quantifier,
    Relation,
    RelationType,
    Severity,
)


def _check(
    check_type: CheckType,
    label: str,
    source: str,
    target: str,
    *,
    description: str,
    severity: Severity = Severity.MAJOR,
    quantifier: Quantifier = Quantifier.ALL,
    expected_result: str = "True",
    jurisdiction: str | None = None,
) -> Check:
    return Check(
        check_type=check_type,
        label=label,
        quantifier=quantifier,
        source=source,
        target=target,
        parameters=CheckParameters(
            severity=severity,
            expected_result=expected_result,
            jurisdiction=jurisdiction,
            description=description,
        ),
    )


# =============================================================================
# Process & Activity Checks
# =============================================================================

def generate_process_checks(model: Model) -> list[Check]:
    checks = []
    for rel in model.relations_of(RelationType.COMPOSED_OF):
        checks.append(_check(
            CheckType.PROCESS_PARENT,
            f"Check_ProcessParent_{rel.target}",
            rel.source,
            rel.target,
            description=f"Validate that {rel.target} is a child of {rel.source}",
        ))
    for rel in model.relations_of(RelationType.CONTAINS):
        checks.append(_check(
            CheckType.PROCESS_ACTIVITY,
            f"Check_ProcessActivity_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            description=f"Validate that activity {rel.target} is contained in process {rel.source}",
        ))
    return checks


def transitive_successors(sequences: list[Relation]) -> dict[str, list[str]]:
    """For each Next source, every activity reachable from it (excluding itself).

    Sources with nothing reachable are omitted. Order follows a depth-first
    walk, so the output is deterministic for a given relation order.
    """
    adjacency: dict[str, list[str]] = {}
    for seq in sequences:
        adjacency.setdefault(seq.source, []).append(seq.target)

    closure: dict[str, list[str]] = {}
    for start in adjacency:
        reachable: dict[str, None] = {}
        stack = [start]
        visited: set[str] = set()
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            for neighbor in adjacency.get(node, []):
                if neighbor != start:
                    reachable[neighbor] = None
                stack.append(neighbor)
        if reachable:
            closure[start] = list(reachable)
    return closure


def generate_activity_checks(model: Model) -> list[Check]:
    checks = []
    sequences = model.relations_of(RelationType.NEXT)

    for rel in sequences:
        checks.append(_check(
            CheckType.ACTIVITY_PREDECESSOR,
            f"Check_ActivityPred_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            severity=Severity.CRITICAL,
            description=f"Validate that {rel.source} immediately precedes {rel.target}",
        ))

    for ancestor, descendants in transitive_successors(sequences).items():
        for descendant in descendants:
            checks.append(_check(
                CheckType.ACTIVITY_TRACE,
                f"Check_ActivityTrace_{ancestor}_{descendant}",
                ancestor,
                descendant,
                description=f"Verify transitive path from {ancestor} to {descendant}",
            ))
    return checks


# =============================================================================
# Role, User & Assignment Checks
# =============================================================================

_INSTANCE_TYPES = (EntityType.DEPARTMENT_ROLE, EntityType.PROCESS, EntityType.ACTIVITY)


def generate_role_checks(model: Model) -> list[Check]:
    checks = []
    for rel in model.relations_of(RelationType.INCLUDES):
        checks.append(_check(
            CheckType.DEP_PARENT,
            f"Check_DepParent_{rel.target}",
            rel.source,
            rel.target,
            description=f"Validate that {rel.target} is included in {rel.source}",
        ))

    # Grouped by type: all roles, then processes, then activities
    for entity_type in _INSTANCE_TYPES:
        for entity in model.entities_of(entity_type):
            checks.append(_check(
                CheckType.INSTANCE,
                f"Check_Instance_{entity.id}",
                entity.id,
                entity.type.value,
                description=f"Ensure entity {entity.name} ({entity.type.value}) exists in ontology",
            ))
    return checks


def generate_assignment_checks(model: Model) -> list[Check]:
    checks = []
    for rel in model.relations_of(RelationType.ASSIGNED_TO):
        checks.append(_check(
            CheckType.ASSIGNED_TO,
            f"Check_AssignedTo_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            description=f"Verify {rel.target} is assigned to {rel.source}",
        ))
    for rel in model.relations_of(RelationType.ACTS):
        checks.append(_check(
            CheckType.ACTS,
            f"Check_Acts_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            description=f"Verify user {rel.target} fills role {rel.source}",
        ))
    for rel in model.relations_of(RelationType.ASSUMES):
        checks.append(_check(
            CheckType.ASSUMES,
            f"Check_Assumes_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            description=f"Validate user {rel.source} is authorized for process {rel.target}",
        ))
    for rel in model.relations_of(RelationType.DELEGATE):
        checks.append(_check(
            CheckType.DELEGATE,
            f"Check_Delegate_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            severity=Severity.CRITICAL,
            description=f"Authorize delegation from {rel.source} to {rel.target}",
        ))
    return checks


# =============================================================================
# Multi-Variable Constraint Checks
# =============================================================================

def generate_separation_checks(model: Model) -> list[Check]:
    return [
        _check(
            CheckType.SEPARATION,
            f"Check_SoD_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            quantifier=Quantifier.NONE,
            severity=Severity.CRITICAL,
            description=f"Verify separation of duties between {rel.source} and {rel.target}",
        )
        for rel in model.relations_of(RelationType.SEPARATE)
    ]


_ACCESS_POLICY_TYPES = (PolicyType.CAN_ACCESS, PolicyType.CAN_COLLECT, PolicyType.CAN_PROCESS)


def generate_access_checks(model: Model) -> list[Check]:
    """Object-access checks; source is the data object, target the role."""
    checks = []
    for pol in model.policies_of(*_ACCESS_POLICY_TYPES):
        allowed = pol.allow_deny == AllowDeny.ALLOW
        checks.append(_check(
            CheckType.OBJECT_ACCESS,
            f"Check_ObjAccess_{pol.source}_{pol.target}",
            pol.target,
            pol.source,
            quantifier=Quantifier.ALL if allowed else Quantifier.NONE,
            severity=Severity.MAJOR if allowed else Severity.CRITICAL,
            expected_result=pol.allow_deny.value,
            description=f"Verify {pol.type.value} {pol.allow_deny.value}: {pol.source} → {pol.target}",
        ))
    return checks


def generate_constraint_checks(model: Model) -> list[Check]:
    return [
        _check(
            CheckType.CONSTRAINT,
            f"Check_Constraint_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            description=f"Validate constraint {rel.target} on entity {rel.source}",
        )
        for rel in model.relations_of(RelationType.HAS_CONSTRAINT)
    ]


def generate_reporting_checks(model: Model) -> list[Check]:
    return [
        _check(
            CheckType.REPORTING,
            f"Check_Report_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            severity=Severity.CRITICAL,
            description=f"Verify mandatory reporting from {rel.source} to {rel.target}",
        )
        for rel in model.relations_of(RelationType.MUST_REPORT)
    ]


def generate_potestative_checks(model: Model) -> list[Check]:
    checks = []
    for pol in model.policies:
        modality = pol.hohfeldian_modality
        if modality == HohfeldianModality.NONE:
            continue
        checks.append(_check(
            CheckType.POTESTATIVE,
            f"Check_Potestative_{pol.source}_{modality.value}",
            pol.source,
            pol.target,
            expected_result=modality.value,
            description=f"Verify Hohfeldian modality: {pol.source} has {modality.value} toward {pol.target}",
        ))
    return checks


def generate_jurisdiction_checks(model: Model) -> list[Check]:
    return [
        _check(
            CheckType.JURISDICTION,
            f"Check_Jurisdiction_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            jurisdiction=rel.parameters.jurisdiction,
            description=f"Verify jurisdictional scope: {rel.source} applies in {rel.target}",
        )
        for rel in model.relations_of(RelationType.APPLIES_IN)
    ]


def generate_threshold_checks(model: Model) -> list[Check]:
    return [
        _check(
            CheckType.THRESHOLD,
            f"Check_Threshold_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            description=f"Verify applicability threshold: {rel.source} → {rel.target}",
        )
        for rel in model.relations_of(RelationType.HAS_THRESHOLD)
    ]


def generate_defeat_checks(model: Model) -> list[Check]:
    defeats = [
        *model.relations_of(RelationType.REBUTS),
        *model.relations_of(RelationType.UNDERCUTS),
    ]
    return [
        _check(
            CheckType.DEFEAT,
            f"Check_Defeat_{rel.source}_{rel.target}",
            rel.source,
            rel.target,
            severity=Severity.CRITICAL,
            description=f"Verify defeasibility resolution: {rel.source} {rel.type.value} {rel.target}",
        )
        for rel in defeats
    ]


def generate_multi_jurisdiction_checks(model: Model) -> list[Check]:
    """Pairwise cross-jurisdiction checks when more than one tag is present."""
    jurisdictions: list[str] = []
    for entity in model.entities:
        if entity.jurisdiction and entity.jurisdiction not in jurisdictions:
            jurisdictions.append(entity.jurisdiction)

    if len(jurisdictions) < 2:
        return []

    checks = []
    for i, first in enumerate(jurisdictions):
        for second in jurisdictions[i + 1:]:
            checks.append(_check(
                CheckType.MULTI_JURISDICTION,
                f"Check_MultiJuris_{first}_{second}",
                first,
                second,
                severity=Severity.CRITICAL,
                description=f"Cross-jurisdictional consistency between {first} and {second}",
            ))
    return checks


# =============================================================================
# Entry Point
# =============================================================================

GENERATORS = (
    generate_process_checks,
    generate_activity_checks,
    generate_role_checks,
    generate_assignment_checks,
    generate_separation_checks,
    generate_access_checks,
    generate_constraint_checks,
    generate_reporting_checks,
    generate_potestative_checks,
    generate_jurisdiction_checks,
    generate_threshold_checks,
    generate_defeat_checks,
    generate_multi_jurisdiction_checks,
)


def generate_validation_checks(model: Model) -> list[Check]:
    """Generate all validation checks for a model.

    Args:
        model: Usually a Law Model.

    Returns:
        Checks in generator order (process, activity, role, assignment,
        separation, access, constraint, reporting, potestative,
        jurisdiction, threshold, defeat, multi-jurisdiction).
    """
    checks: list[Check] = []
    for generate in GENERATORS:
        checks.extend(generate(model))
    return checks
