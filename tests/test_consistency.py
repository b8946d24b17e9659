"""Tests for the consistency encoder."""

from __future__ import annotations

import pytest

from compliance_engine.consistency import (
    ConsistencyChecker,
    ViolationType,
    check_consistency,
    policy_proposition,
    users_assuming,
)
from compliance_engine.consistency.service import _CLAUSE_PATTERNS
from compliance_engine.core.config import Settings
from compliance_engine.core.ontology import (
    AllowDeny,
    DeonticStatus,
    Entity,
    EntityType,
    Model,
    ModelKind,
    Policy,
    PolicyParameters,
    PolicyType,
    Relation,
    RelationType,
    Severity,
)


def _model(kind: ModelKind, relations=(), policies=(), context: str = "test") -> Model:
    return Model(model_type=kind, context=context, relations=list(relations), policies=list(policies))


def _access(allow_deny: AllowDeny, **kwargs) -> Policy:
    return Policy(type=PolicyType.CAN_ACCESS, allow_deny=allow_deny, source="Clerk", target="Records", **kwargs)


@pytest.fixture
def checker(settings) -> ConsistencyChecker:
    return ConsistencyChecker(settings)


# =============================================================================
# Cross-Model Tests
# =============================================================================

class TestSeparationOfDuties:
    """Separation-of-duty violations across law and enterprise."""

    def test_sod_violation_detected(self, checker, law_model, enterprise_model):
        result = checker.check(law_model, enterprise_model)

        assert not result.consistent
        sod = [v for v in result.violations if v.type == ViolationType.SOD_VIOLATION]
        assert len(sod) == 1
        assert sod[0].severity == Severity.CRITICAL
        assert sod[0].user == "alice"
        assert sod[0].process1 == "Requisition"
        assert sod[0].process2 == "Procurement"

    def test_forced_pair_is_the_only_conflict(self, checker, law_model, enterprise_model):
        result = checker.check(law_model, enterprise_model)

        assert len(result.conflicting_clauses) == 2
        first, second = result.conflicting_clauses
        assert second == first + 1

    def test_no_general_inconsistency_for_forced_pairs(self, checker, law_model, enterprise_model):
        result = checker.check(law_model, enterprise_model)
        assert ViolationType.INCONSISTENCY not in {v.type for v in result.violations}

    def test_compliant_enterprise_is_consistent(self, checker, law_model, compliant_enterprise):
        result = checker.check(law_model, compliant_enterprise)

        assert result.consistent
        assert result.violations == []
        assert result.model is not None
        assert result.conflicting_clauses == []

    def test_users_assuming(self, enterprise_model):
        assert users_assuming(enterprise_model, "Requisition") == ["alice"]
        assert users_assuming(enterprise_model, "Unknown") == []


class TestAccessControl:
    """Enterprise Allow against law Deny."""

    def test_allow_against_deny_is_contradiction(self, checker):
        law = _model(ModelKind.LAW, policies=[_access(AllowDeny.DENY)])
        enterprise = _model(ModelKind.ENTERPRISE, policies=[_access(AllowDeny.ALLOW)])

        result = checker.check(law, enterprise)

        assert not result.consistent
        assert [v.type for v in result.violations] == [ViolationType.ACCESS_CONTROL_CONTRADICTION]
        violation = result.violations[0]
        assert violation.severity == Severity.CRITICAL
        assert violation.law_policy.allow_deny == AllowDeny.DENY
        assert violation.enterprise_policy.allow_deny == AllowDeny.ALLOW

    def test_matching_allow_is_consistent(self, checker):
        law = _model(ModelKind.LAW, policies=[_access(AllowDeny.ALLOW)])
        enterprise = _model(ModelKind.ENTERPRISE, policies=[_access(AllowDeny.ALLOW)])
        assert checker.check(law, enterprise).consistent

    def test_different_policy_type_not_matched(self, checker):
        law = _model(ModelKind.LAW, policies=[_access(AllowDeny.DENY)])
        enterprise = _model(ModelKind.ENTERPRISE, policies=[
            Policy(type=PolicyType.CAN_USE, allow_deny=AllowDeny.ALLOW, source="Clerk", target="Records"),
        ])
        assert checker.check(law, enterprise).consistent


class TestIntrinsicInconsistency:
    """Contradictions inside the encoded graphs themselves."""

    def test_allow_and_deny_in_law(self, checker):
        law = _model(ModelKind.LAW, policies=[_access(AllowDeny.ALLOW), _access(AllowDeny.DENY)])
        enterprise = _model(ModelKind.ENTERPRISE)

        result = checker.check(law, enterprise)

        assert not result.consistent
        assert [v.type for v in result.violations] == [ViolationType.INCONSISTENCY]
        assert result.violations[0].conflicting_clauses == len(result.conflicting_clauses)

    def test_conflict_extraction_can_be_disabled(self):
        settings = Settings(_env_file=None, extract_conflicts=False)
        law = _model(ModelKind.LAW, policies=[_access(AllowDeny.ALLOW), _access(AllowDeny.DENY)])

        result = ConsistencyChecker(settings).check(law, _model(ModelKind.ENTERPRISE))

        assert not result.consistent
        assert result.conflicting_clauses == []


# =============================================================================
# Encoding Tests
# =============================================================================

class TestEncoding:
    """Clause patterns and proposition naming."""

    def test_every_relation_type_has_a_pattern_entry(self):
        assert set(_CLAUSE_PATTERNS) == set(RelationType)

    def test_unencoded_relations_are_skipped(self, checker):
        law = _model(ModelKind.LAW, relations=[
            Relation(type=RelationType.REBUTS, source="R1", target="R2"),
            Relation(type=RelationType.APPLIES_IN, source="R1", target="EU"),
        ])
        result = checker.check(law, _model(ModelKind.ENTERPRISE))
        assert result.consistent
        assert result.clause_count == 0

    def test_acts_encodes_user_implies_role(self, checker):
        law = _model(ModelKind.LAW, relations=[
            Relation(type=RelationType.ACTS, source="Clerk", target="u1"),
        ])
        result = checker.check(law, _model(ModelKind.ENTERPRISE))
        assert result.model == {"law:user:u1": False, "law:role:Clerk": True}

    def test_counts_as_uses_bare_scope(self, checker):
        law = _model(ModelKind.LAW, relations=[
            Relation(type=RelationType.COUNTS_AS, source="Signature", target="Consent"),
        ])
        result = checker.check(law, _model(ModelKind.ENTERPRISE))
        assert result.clause_count == 2
        assert result.model["law:Signature"] == result.model["law:Consent"]

    def test_separate_is_exclusion(self, checker):
        enterprise = _model(ModelKind.ENTERPRISE, relations=[
            Relation(type=RelationType.SEPARATE, source="P1", target="P2"),
        ])
        result = checker.check(_model(ModelKind.LAW), enterprise)
        assert result.clause_count == 1
        assert not (result.model["enterprise:access:P1"] and result.model["enterprise:access:P2"])

    def test_policy_propositions(self, checker):
        law = _model(ModelKind.LAW, policies=[
            _access(AllowDeny.ALLOW, parameters=PolicyParameters(activity_or_process="Filing")),
            Policy(
                type=PolicyType.CAN_DISCLOSE,
                allow_deny=AllowDeny.DENY,
                source="Clerk",
                target="Press",
                deontic_status=DeonticStatus.PROHIBITED,
            ),
        ])
        result = checker.check(law, _model(ModelKind.ENTERPRISE))

        assert result.model["law:policy:CanAccess:Clerk:Records:Filing"] is True
        assert result.model["law:obligation:Clerk:Records"] is True
        assert result.model["law:policy:CanDisclose:Clerk:Press"] is False
        assert result.model["law:permitted:Clerk:Press"] is False

    def test_permitted_policy_adds_no_deontic_clause(self, checker):
        law = _model(ModelKind.LAW, policies=[_access(AllowDeny.ALLOW, deontic_status=DeonticStatus.PERMITTED)])
        result = checker.check(law, _model(ModelKind.ENTERPRISE))
        assert result.clause_count == 1

    def test_policy_proposition_name(self):
        assert policy_proposition("enterprise", _access(AllowDeny.ALLOW)) == "enterprise:policy:CanAccess:Clerk:Records"

    def test_equivalences_become_biconditionals(self, checker):
        law = _model(ModelKind.LAW, relations=[
            Relation(type=RelationType.EQU_ROLE, source="Clerk", target="Officer"),
        ])
        result = checker.check(law, _model(ModelKind.ENTERPRISE))
        assert result.clause_count == 2
        assert result.model["equiv:Clerk"] == result.model["equiv:Officer"]

    def test_repeated_checks_are_independent(self, checker, law_model, enterprise_model):
        first = checker.check(law_model, enterprise_model)
        second = checker.check(law_model, enterprise_model)
        assert first.clause_count == second.clause_count
        assert first.stats == second.stats
        assert first.conflicting_clauses == second.conflicting_clauses

    def test_convenience_function(self, law_model, compliant_enterprise):
        assert check_consistency(law_model, compliant_enterprise).consistent

    def test_large_law_model(self, checker):
        law = _model(ModelKind.LAW, relations=[
            Relation(type=RelationType.COUNTS_AS, source=f"Act{i}", target=f"Effect{i}")
            for i in range(1200)
        ])

        result = checker.check(law, _model(ModelKind.ENTERPRISE))

        assert result.consistent
        assert result.clause_count == 2400
        assert result.stats.decisions == 1200


# =============================================================================
# Single Model Tests
# =============================================================================

class TestSingleModel:
    """Internal contradictions within one model."""

    def test_fixture_is_internally_consistent(self, checker, enterprise_model):
        result = checker.check_single_model(enterprise_model)
        assert result.consistent
        assert result.violations == []

    def test_contradictory_policies(self, checker):
        model = _model(ModelKind.ENTERPRISE, policies=[_access(AllowDeny.ALLOW), _access(AllowDeny.DENY)])
        result = checker.check_single_model(model)
        assert not result.consistent
        assert result.violations == []
        assert len(result.conflicting_clauses) > 0

    def test_uses_model_scope(self, checker):
        model = _model(ModelKind.ENTERPRISE, relations=[
            Relation(type=RelationType.SEPARATE, source="P1", target="P2"),
        ])
        result = checker.check_single_model(model)
        # Pattern clause plus the explicit exclusion
        assert result.clause_count == 2
        assert set(result.model) == {"model:access:P1", "model:access:P2"}

    def test_entities_are_not_required(self, checker):
        model = Model(
            model_type=ModelKind.LAW,
            context="entities only",
            entities=[Entity(id="P1", type=EntityType.PROCESS, name="P1")],
        )
        result = checker.check_single_model(model)
        assert result.consistent
        assert result.clause_count == 0
