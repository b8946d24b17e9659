"""Hohfeldian modality consistency across policies."""

from __future__ import annotations

from compliance_engine.core.ontology import HohfeldianModality, Policy
from compliance_engine.defeasibility.schemas import (
    PotestativeViolation,
    PotestativeViolationType,
)


# What the other party must hold when one party holds the key
CORRELATIVES: dict[HohfeldianModality, HohfeldianModality] = {
    HohfeldianModality.DUTY: HohfeldianModality.CLAIM_RIGHT,
    HohfeldianModality.CLAIM_RIGHT: HohfeldianModality.DUTY,
    HohfeldianModality.PRIVILEGE: HohfeldianModality.NO_RIGHT,
    HohfeldianModality.NO_RIGHT: HohfeldianModality.PRIVILEGE,
    HohfeldianModality.POWER: HohfeldianModality.LIABILITY,
    HohfeldianModality.LIABILITY: HohfeldianModality.POWER,
    HohfeldianModality.IMMUNITY: HohfeldianModality.DISABILITY,
    HohfeldianModality.DISABILITY: HohfeldianModality.IMMUNITY,
}

# Jural opposites: holding the key excludes holding the value
OPPOSITES: dict[HohfeldianModality, HohfeldianModality] = {
    HohfeldianModality.DUTY: HohfeldianModality.PRIVILEGE,
    HohfeldianModality.PRIVILEGE: HohfeldianModality.DUTY,
    HohfeldianModality.CLAIM_RIGHT: HohfeldianModality.NO_RIGHT,
    HohfeldianModality.NO_RIGHT: HohfeldianModality.CLAIM_RIGHT,
    HohfeldianModality.POWER: HohfeldianModality.DISABILITY,
    HohfeldianModality.DISABILITY: HohfeldianModality.POWER,
    HohfeldianModality.IMMUNITY: HohfeldianModality.LIABILITY,
    HohfeldianModality.LIABILITY: HohfeldianModality.IMMUNITY,
}


def check_potestative_consistency(policies: list[Policy]) -> list[PotestativeViolation]:
    """Check correlative pairing of modalities between mirrored policies.

    For every unordered pair (a, b) with a.source == b.target and
    a.target == b.source, b must hold a's correlative (untagged policies are
    exempt), and must not hold a's opposite.

    Args:
        policies: Policies to compare, typically law and enterprise combined.

    Returns:
        HOHFELDIAN_MISMATCH and HOHFELDIAN_CONTRADICTION violations.
    """
    violations: list[PotestativeViolation] = []

    for i, a in enumerate(policies):
        for b in policies[i + 1:]:
            if a.source != b.target or a.target != b.source:
                continue

            expected = CORRELATIVES.get(a.hohfeldian_modality)
            if expected and b.hohfeldian_modality not in (expected, HohfeldianModality.NONE):
                violations.append(PotestativeViolation(
                    type=PotestativeViolationType.HOHFELDIAN_MISMATCH,
                    policy_a=a,
                    policy_b=b,
                    expected=expected,
                    actual=b.hohfeldian_modality,
                    message=(
                        f"{a.source} has {a.hohfeldian_modality.value} toward {a.target}, "
                        f"but {b.source} has {b.hohfeldian_modality.value} instead of "
                        f"expected correlative {expected.value}"
                    ),
                ))

            opposite = OPPOSITES.get(a.hohfeldian_modality)
            if opposite and b.hohfeldian_modality == opposite:
                violations.append(PotestativeViolation(
                    type=PotestativeViolationType.HOHFELDIAN_CONTRADICTION,
                    policy_a=a,
                    policy_b=b,
                    message=(
                        f"{a.source} has both {a.hohfeldian_modality.value} and "
                        f"{opposite.value} toward {a.target} - logical contradiction"
                    ),
                ))

    return violations
