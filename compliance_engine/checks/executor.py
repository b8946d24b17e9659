"""Validation check execution.

Each check is evaluated independently against a merged model, using an
index of relations and policies keyed by (type, source, target). Missing
entities or edges yield FAIL or INDETERMINATE, never an exception.
"""

from __future__ import annotations

import logging
from typing import Callable

from compliance_engine.core.ontology import (
    Check,
    CheckResult,
    CheckType,
    Model,
    Policy,
    PolicyType,
    Relation,
    RelationType,
    Verdict,
)

logger = logging.getLogger(__name__)


class CheckIndex:
    """Lookup structures over a merged model."""

    def __init__(self, model: Model):
        self.entity_ids = model.entity_ids()
        self.relations: dict[tuple[str, str, str], Relation] = {}
        self.relations_by_type: dict[RelationType, list[Relation]] = {}
        self.policies: dict[tuple[str, str, str], Policy] = {}

        for rel in model.relations:
            self.relations[rel.key] = rel
            self.relations_by_type.setdefault(rel.type, []).append(rel)
        for pol in model.policies:
            self.policies[pol.key] = pol

    def has_relation(self, rel_type: RelationType, source: str, target: str) -> bool:
        return (rel_type.value, source, target) in self.relations

    def relations_of(self, rel_type: RelationType) -> list[Relation]:
        return self.relations_by_type.get(rel_type, [])

    def policy(self, pol_type: PolicyType, source: str, target: str) -> Policy | None:
        return self.policies.get((pol_type.value, source, target))


def compute_reachable(start: str, next_relations: list[Relation]) -> set[str]:
    """Every node reachable from `start` over Next edges (depth-first)."""
    reachable: set[str] = set()
    stack = [start]
    visited: set[str] = set()
    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        for rel in next_relations:
            if rel.source == node:
                reachable.add(rel.target)
                stack.append(rel.target)
    return reachable


# =============================================================================
# Evaluators
# =============================================================================

Evaluation = tuple[Verdict, str]
Evaluator = Callable[[Check, CheckIndex], Evaluation]


def _instance(check: Check, index: CheckIndex) -> Evaluation:
    if check.source in index.entity_ids:
        return Verdict.PASS, f"Entity {check.source} found in ontology"
    return Verdict.FAIL, f"Entity {check.source} MISSING from ontology"


RELATIONAL_CHECKS: dict[CheckType, RelationType] = {
    CheckType.PROCESS_PARENT: RelationType.COMPOSED_OF,
    CheckType.PROCESS_ACTIVITY: RelationType.CONTAINS,
    CheckType.ACTIVITY_PREDECESSOR: RelationType.NEXT,
    CheckType.DEP_PARENT: RelationType.INCLUDES,
    CheckType.ASSIGNED_TO: RelationType.ASSIGNED_TO,
    CheckType.ACTS: RelationType.ACTS,
    CheckType.ASSUMES: RelationType.ASSUMES,
    CheckType.DELEGATE: RelationType.DELEGATE,
}


def _relational(check: Check, index: CheckIndex) -> Evaluation:
    rel_type = RELATIONAL_CHECKS[check.check_type]
    if index.has_relation(rel_type, check.source, check.target):
        return Verdict.PASS, f"{rel_type.value} relation {check.source} → {check.target} verified"
    return Verdict.FAIL, f"{rel_type.value} relation {check.source} → {check.target} NOT FOUND"


def _trace(check: Check, index: CheckIndex) -> Evaluation:
    reachable = compute_reachable(check.source, index.relations_of(RelationType.NEXT))
    if check.target in reachable:
        return Verdict.PASS, f"Transitive path from {check.source} to {check.target} verified"
    return Verdict.FAIL, f"No transitive path from {check.source} to {check.target}"


def _separation(check: Check, index: CheckIndex) -> Evaluation:
    assumes = index.relations_of(RelationType.ASSUMES)
    first = [r.source for r in assumes if r.target == check.source]
    second = {r.source for r in assumes if r.target == check.target}
    overlap = [user for user in dict.fromkeys(first) if user in second]
    if not overlap:
        return Verdict.PASS, f"SoD enforced: no user overlap between {check.source} and {check.target}"
    return (
        Verdict.FAIL,
        f"SoD VIOLATION: users [{', '.join(overlap)}] access both {check.source} and {check.target}",
    )


def _object_access(check: Check, index: CheckIndex) -> Evaluation:
    # Generated with source = data object, target = role; only CanAccess is consulted
    policy = index.policy(PolicyType.CAN_ACCESS, check.target, check.source)
    if policy is None:
        return Verdict.INDETERMINATE, f"No access policy found for {check.target} → {check.source}"
    verdict = Verdict.PASS if policy.allow_deny.value == check.parameters.expected_result else Verdict.FAIL
    return verdict, f"Access policy {policy.allow_deny.value} for {check.target} → {check.source}"


def _deferred(check: Check, index: CheckIndex) -> Evaluation:
    return Verdict.INDETERMINATE, f"Check {check.check_type.value} requires additional context for evaluation"


def _unsupported(check: Check, index: CheckIndex) -> Evaluation:
    return Verdict.INDETERMINATE, f"No evaluator for check type: {check.check_type.value}"


# Every CheckType has an entry
EVALUATORS: dict[CheckType, Evaluator] = {
    CheckType.INSTANCE: _instance,
    CheckType.PROCESS_PARENT: _relational,
    CheckType.PROCESS_ACTIVITY: _relational,
    CheckType.ACTIVITY_PREDECESSOR: _relational,
    CheckType.DEP_PARENT: _relational,
    CheckType.ASSIGNED_TO: _relational,
    CheckType.ACTS: _relational,
    CheckType.ASSUMES: _relational,
    CheckType.DELEGATE: _relational,
    CheckType.ACTIVITY_TRACE: _trace,
    CheckType.SEPARATION: _separation,
    CheckType.OBJECT_ACCESS: _object_access,
    CheckType.POTESTATIVE: _deferred,
    CheckType.JURISDICTION: _deferred,
    CheckType.THRESHOLD: _deferred,
    CheckType.CONSTRAINT: _deferred,
    CheckType.REPORTING: _deferred,
    CheckType.DEFEAT: _deferred,
    CheckType.MULTI_JURISDICTION: _deferred,
    CheckType.GROUP_ASSERT: _deferred,
    CheckType.ACTIVITY_PROCESS_PRED: _unsupported,
    CheckType.ACTIVITY_PROCESS_TRACE: _unsupported,
}


def execute_check(check: Check, index: CheckIndex) -> CheckResult:
    verdict, detail = EVALUATORS[check.check_type](check, index)
    return CheckResult(
        label=check.label,
        check_type=check.check_type,
        severity=check.parameters.severity,
        result=verdict,
        detail=detail,
    )


def execute_checks(checks: list[Check], model: Model) -> list[CheckResult]:
    """Execute validation checks against a merged model.

    Args:
        checks: Checks to run, typically a Law Model's validation_checks.
        model: Merged Law + Enterprise model.

    Returns:
        One CheckResult per check, in input order.
    """
    index = CheckIndex(model)
    results = [execute_check(check, index) for check in checks]

    failed = sum(1 for r in results if r.result == Verdict.FAIL)
    logger.debug("Executed %d checks against %s, %d failed", len(results), model.context, failed)
    return results
