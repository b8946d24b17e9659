"""Consistency encoder: Con(Φ_E ∧ Φ_L) by propositional satisfiability.

Law and Enterprise graphs are translated into CNF, one clause pattern per
relation type and one unit clause per policy. Cross-model contradictions
(separation of duty, access control) are found by direct graph analysis,
recorded as violations and forced into the formula as contradictory unit
pairs so the combined formula is UNSAT whenever one is detected.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple

from compliance_engine.core.config import Settings, get_settings
from compliance_engine.core.ontology import (
    AllowDeny,
    DeonticStatus,
    EQUIVALENCE_RELATIONS,
    Model,
    Policy,
    Relation,
    RelationType,
    Severity,
)
from compliance_engine.consistency.schemas import (
    ConsistencyResult,
    Violation,
    ViolationType,
)
from compliance_engine.solver import (
    CNF,
    DPLLSolver,
    PropositionRegistry,
    SearchBudget,
    clause,
    iff,
    implies,
    mutual_exclusion,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Relation Clause Patterns
# =============================================================================

class ClauseShape(str, Enum):
    IMPLIES = "implies"
    EXCLUDES = "excludes"
    IFF = "iff"


class ClausePattern(NamedTuple):
    """How a relation becomes clauses.

    The first proposition is built from the relation source and
    `first_kind`, the second from the target and `second_kind`; `swapped`
    reverses which endpoint feeds which proposition. A kind of None yields a
    bare ``scope:id`` proposition.
    """

    shape: ClauseShape
    first_kind: str | None
    second_kind: str | None
    swapped: bool = False


# Every RelationType has an entry; None means the relation is not encoded.
_CLAUSE_PATTERNS: dict[RelationType, ClausePattern | None] = {
    RelationType.CONTAINS: ClausePattern(ClauseShape.IMPLIES, "process", "activity"),
    RelationType.NEXT: ClausePattern(ClauseShape.IMPLIES, "completed", "initiated"),
    RelationType.COMPOSED_OF: ClausePattern(ClauseShape.IMPLIES, "process", "process"),
    RelationType.INCLUDES: ClausePattern(ClauseShape.IMPLIES, "role", "role"),
    RelationType.ASSIGNED_TO: ClausePattern(ClauseShape.IMPLIES, "role", "activity"),
    RelationType.SEPARATE: ClausePattern(ClauseShape.EXCLUDES, "access", "access"),
    RelationType.ACTS: ClausePattern(ClauseShape.IMPLIES, "user", "role", swapped=True),
    RelationType.ASSUMES: ClausePattern(ClauseShape.IMPLIES, "user", "process"),
    RelationType.COUNTS_AS: ClausePattern(ClauseShape.IFF, None, None),
    RelationType.REQUIRES_CONDITION: ClausePattern(ClauseShape.IMPLIES, "action", "condition"),
    RelationType.MUST_REPORT: ClausePattern(ClauseShape.IMPLIES, "event", "report"),
    RelationType.DELEGATE: None,
    RelationType.EQU_ROLE: None,
    RelationType.EQU_ACTIVITY: None,
    RelationType.EQU_PROCESS: None,
    RelationType.ACTS_ON: None,
    RelationType.HAS_CONSTRAINT: None,
    RelationType.APPLIES_IN: None,
    RelationType.HAS_THRESHOLD: None,
    RelationType.UNDERCUTS: None,
    RelationType.REBUTS: None,
    RelationType.PREFERS: None,
    RelationType.TRIGGERS_SANCTION: None,
}


def _proposition(scope: str, kind: str | None, entity_id: str) -> str:
    if kind is None:
        return f"{scope}:{entity_id}"
    return f"{scope}:{kind}:{entity_id}"


def policy_proposition(scope: str, policy: Policy) -> str:
    """Access proposition fixed by a policy."""
    name = f"{scope}:policy:{policy.type.value}:{policy.source}:{policy.target}"
    if policy.parameters.activity_or_process:
        name += f":{policy.parameters.activity_or_process}"
    return name


def users_assuming(model: Model, process_id: str) -> list[str]:
    """Users with an Assumes edge to a process, in edge order, without repeats."""
    users: list[str] = []
    for rel in model.relations:
        if rel.type == RelationType.ASSUMES and rel.target == process_id and rel.source not in users:
            users.append(rel.source)
    return users


# =============================================================================
# Encoding Run
# =============================================================================

class _Encoding:
    """Clauses and violations produced during one encode cycle.

    Owns its registry; never reused across runs.
    """

    def __init__(self) -> None:
        self.registry = PropositionRegistry()
        self.clauses: CNF = []
        self.forced: list[bool] = []
        self.violations: list[Violation] = []

    def add(self, clauses: CNF, forced: bool = False) -> None:
        self.clauses.extend(clauses)
        self.forced.extend([forced] * len(clauses))

    def force_contradiction(self, name: str) -> None:
        var = self.registry.variable(name)
        self.add([clause(var), clause(-var)], forced=True)

    def base_clauses(self) -> CNF:
        return [c for c, forced in zip(self.clauses, self.forced) if not forced]

    # -------------------------------------------------------------------------

    def encode_relations(self, relations: list[Relation], scope: str) -> None:
        reg = self.registry
        for rel in relations:
            pattern = _CLAUSE_PATTERNS[rel.type]
            if pattern is None:
                continue

            first_id, second_id = (rel.target, rel.source) if pattern.swapped else (rel.source, rel.target)
            a = reg.pos(_proposition(scope, pattern.first_kind, first_id))
            b = reg.pos(_proposition(scope, pattern.second_kind, second_id))

            if pattern.shape == ClauseShape.IMPLIES:
                self.add([implies(a, b)])
            elif pattern.shape == ClauseShape.EXCLUDES:
                self.add(mutual_exclusion(a, b))
            elif pattern.shape == ClauseShape.IFF:
                self.add(iff(a, b))

    def encode_policies(self, policies: list[Policy], scope: str) -> None:
        reg = self.registry
        for pol in policies:
            name = policy_proposition(scope, pol)
            if pol.allow_deny == AllowDeny.ALLOW:
                self.add([clause(reg.pos(name))])
            else:
                self.add([clause(reg.neg(name))])

            if pol.deontic_status == DeonticStatus.OBLIGATORY:
                self.add([clause(reg.pos(f"{scope}:obligation:{pol.source}:{pol.target}"))])
            elif pol.deontic_status == DeonticStatus.PROHIBITED:
                self.add([clause(reg.neg(f"{scope}:permitted:{pol.source}:{pol.target}"))])

    def encode_separation_of_duties(self, law: Model, enterprise: Model) -> None:
        reg = self.registry
        for sep in law.relations_of(RelationType.SEPARATE):
            first = users_assuming(enterprise, sep.source)
            second = users_assuming(enterprise, sep.target)

            for user in first:
                if user in second:
                    self.violations.append(Violation(
                        type=ViolationType.SOD_VIOLATION,
                        severity=Severity.CRITICAL,
                        message=(
                            f'Separation of Duties violation: User "{user}" has access to '
                            f'both "{sep.source}" and "{sep.target}"'
                        ),
                        user=user,
                        process1=sep.source,
                        process2=sep.target,
                    ))
                    self.force_contradiction(f"sod:{user}:{sep.source}")

            self.add(mutual_exclusion(
                reg.pos(f"sod:combined:{sep.source}"),
                reg.pos(f"sod:combined:{sep.target}"),
            ))

    def encode_access_control(self, law: Model, enterprise: Model) -> None:
        denials: dict[tuple[str, str, str], Policy] = {}
        for pol in law.policies:
            if pol.allow_deny == AllowDeny.DENY:
                denials[pol.key] = pol

        for pol in enterprise.policies:
            if pol.allow_deny != AllowDeny.ALLOW or pol.key not in denials:
                continue
            self.violations.append(Violation(
                type=ViolationType.ACCESS_CONTROL_CONTRADICTION,
                severity=Severity.CRITICAL,
                message=(
                    f"Enterprise allows {pol.type.value} for {pol.source}→{pol.target} "
                    f"but law denies it"
                ),
                law_policy=denials[pol.key],
                enterprise_policy=pol,
            ))
            self.force_contradiction("access_conflict:" + ":".join(pol.key))

    def encode_equivalences(self, law: Model) -> None:
        reg = self.registry
        for eq in law.relations_of(*EQUIVALENCE_RELATIONS):
            self.add(iff(reg.pos(f"equiv:{eq.source}"), reg.pos(f"equiv:{eq.target}")))


# =============================================================================
# Consistency Checker
# =============================================================================

class ConsistencyChecker:
    """Checks Con(Φ_E ∧ Φ_L) with a fresh registry and solver per call.

    Usage:
        checker = ConsistencyChecker()
        result = checker.check(law_model, enterprise_model)
        if not result.consistent:
            for violation in result.violations:
                print(violation.message)
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def _solver(self, registry: PropositionRegistry) -> DPLLSolver:
        return DPLLSolver(registry, budget=SearchBudget.from_settings(self.settings))

    def check(self, law: Model, enterprise: Model) -> ConsistencyResult:
        """Encode both models plus cross-model constraints and solve.

        Args:
            law: Law Model (Φ_L).
            enterprise: Enterprise Model (Φ_E).

        Returns:
            ConsistencyResult; `consistent` is the satisfiability of the
            union of all clauses.
        """
        enc = _Encoding()
        enc.encode_relations(law.relations, "law")
        enc.encode_policies(law.policies, "law")
        enc.encode_relations(enterprise.relations, "enterprise")
        enc.encode_policies(enterprise.policies, "enterprise")
        enc.encode_separation_of_duties(law, enterprise)
        enc.encode_access_control(law, enterprise)
        enc.encode_equivalences(law)

        logger.info(
            "Encoded %s + %s: %d clauses over %d propositions",
            law.context, enterprise.context, len(enc.clauses), len(enc.registry),
        )

        solver = self._solver(enc.registry)
        result = solver.solve(enc.clauses)

        conflicts: list[int] = []
        if not result.satisfiable:
            if self.settings.extract_conflicts:
                conflicts = solver.find_conflicts(enc.clauses, known_unsat=True)

            # Forced pairs already carry their own violation; only report a
            # general inconsistency when the graphs contradict by themselves.
            if any(enc.forced):
                base_unsat = not solver.solve(enc.base_clauses()).satisfiable
            else:
                base_unsat = True

            if base_unsat:
                enc.violations.append(Violation(
                    type=ViolationType.INCONSISTENCY,
                    severity=Severity.CRITICAL,
                    message="Logical inconsistency detected: Φ_E ∧ Φ_L is unsatisfiable",
                    conflicting_clauses=len(conflicts),
                ))

        for violation in enc.violations:
            logger.warning("%s: %s", violation.type.value, violation.message)

        return ConsistencyResult(
            consistent=result.satisfiable,
            violations=enc.violations,
            model=result.assignment,
            stats=result.stats,
            conflicting_clauses=conflicts,
            clause_count=len(enc.clauses),
        )

    def check_single_model(self, model: Model) -> ConsistencyResult:
        """Check one model for internal contradictions.

        Relations and policies are encoded under the ``model`` scope, plus
        an explicit exclusion for every Separate pair. No cross-model
        violations are produced.
        """
        enc = _Encoding()
        enc.encode_relations(model.relations, "model")
        enc.encode_policies(model.policies, "model")

        reg = enc.registry
        for sep in model.relations_of(RelationType.SEPARATE):
            enc.add(mutual_exclusion(
                reg.pos(f"model:access:{sep.source}"),
                reg.pos(f"model:access:{sep.target}"),
            ))

        solver = self._solver(reg)
        result = solver.solve(enc.clauses)

        conflicts: list[int] = []
        if not result.satisfiable and self.settings.extract_conflicts:
            conflicts = solver.find_conflicts(enc.clauses, known_unsat=True)

        return ConsistencyResult(
            consistent=result.satisfiable,
            violations=enc.violations,
            model=result.assignment,
            stats=result.stats,
            conflicting_clauses=conflicts,
            clause_count=len(enc.clauses),
        )


def check_consistency(law: Model, enterprise: Model) -> ConsistencyResult:
    """Convenience function: Con(Φ_E ∧ Φ_L) with default settings."""
    return ConsistencyChecker().check(law, enterprise)
