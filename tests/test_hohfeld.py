"""Tests for Hohfeldian correlative / opposite consistency."""

from __future__ import annotations

from compliance_engine.core.ontology import (
    AllowDeny,
    HohfeldianModality,
    Policy,
    PolicyType,
)
from compliance_engine.defeasibility import (
    CORRELATIVES,
    OPPOSITES,
    PotestativeViolationType,
    check_potestative_consistency,
)


def _policy(source: str, target: str, modality: HohfeldianModality) -> Policy:
    return Policy(
        type=PolicyType.CAN_PROCESS,
        allow_deny=AllowDeny.ALLOW,
        source=source,
        target=target,
        hohfeldian_modality=modality,
    )


# =============================================================================
# Table Tests
# =============================================================================

class TestTables:

    def test_correlatives_are_symmetric(self):
        for key, value in CORRELATIVES.items():
            assert CORRELATIVES[value] == key

    def test_opposites_are_symmetric(self):
        for key, value in OPPOSITES.items():
            assert OPPOSITES[value] == key

    def test_untagged_has_no_entries(self):
        assert HohfeldianModality.NONE not in CORRELATIVES
        assert HohfeldianModality.NONE not in OPPOSITES

    def test_every_tagged_modality_covered(self):
        tagged = set(HohfeldianModality) - {HohfeldianModality.NONE}
        assert set(CORRELATIVES) == tagged
        assert set(OPPOSITES) == tagged
        assert CORRELATIVES[HohfeldianModality.POWER] == HohfeldianModality.LIABILITY
        assert OPPOSITES[HohfeldianModality.IMMUNITY] == HohfeldianModality.LIABILITY


# =============================================================================
# Consistency Tests
# =============================================================================

class TestPotestativeConsistency:
    """Mirrored policy pairs."""

    def test_correlative_pair_is_consistent(self):
        policies = [
            _policy("Controller", "Subject", HohfeldianModality.DUTY),
            _policy("Subject", "Controller", HohfeldianModality.CLAIM_RIGHT),
        ]
        assert check_potestative_consistency(policies) == []

    def test_mismatch(self):
        policies = [
            _policy("Controller", "Subject", HohfeldianModality.DUTY),
            _policy("Subject", "Controller", HohfeldianModality.NO_RIGHT),
        ]

        violations = check_potestative_consistency(policies)

        assert len(violations) == 1
        violation = violations[0]
        assert violation.type == PotestativeViolationType.HOHFELDIAN_MISMATCH
        assert violation.expected == HohfeldianModality.CLAIM_RIGHT
        assert violation.actual == HohfeldianModality.NO_RIGHT

    def test_opposite_is_mismatch_and_contradiction(self):
        policies = [
            _policy("Controller", "Subject", HohfeldianModality.DUTY),
            _policy("Subject", "Controller", HohfeldianModality.PRIVILEGE),
        ]

        types = [v.type for v in check_potestative_consistency(policies)]

        assert types == [
            PotestativeViolationType.HOHFELDIAN_MISMATCH,
            PotestativeViolationType.HOHFELDIAN_CONTRADICTION,
        ]

    def test_untagged_counterpart_exempt(self):
        policies = [
            _policy("Controller", "Subject", HohfeldianModality.POWER),
            _policy("Subject", "Controller", HohfeldianModality.NONE),
        ]
        assert check_potestative_consistency(policies) == []

    def test_untagged_first_policy_skipped(self):
        policies = [
            _policy("Controller", "Subject", HohfeldianModality.NONE),
            _policy("Subject", "Controller", HohfeldianModality.PRIVILEGE),
        ]
        assert check_potestative_consistency(policies) == []

    def test_non_mirrored_pairs_ignored(self):
        policies = [
            _policy("Controller", "Subject", HohfeldianModality.DUTY),
            _policy("Processor", "Controller", HohfeldianModality.PRIVILEGE),
        ]
        assert check_potestative_consistency(policies) == []

    def test_pairs_compared_once(self):
        policies = [
            _policy("A", "B", HohfeldianModality.POWER),
            _policy("B", "A", HohfeldianModality.IMMUNITY),
            _policy("C", "D", HohfeldianModality.DUTY),
        ]
        violations = check_potestative_consistency(policies)
        assert len(violations) == 1
        assert violations[0].policy_a.source == "A"
