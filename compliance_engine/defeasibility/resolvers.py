"""Conflict-resolution meta-principles.

Each resolver compares two rules and either names a winner or returns None
when the principle does not discriminate. `resolve_conflict` tries them in
RESOLUTION_ORDER and falls back to UNRESOLVED (manual adjudication).
"""

from __future__ import annotations

from typing import Callable

from compliance_engine.core.config import get_settings
from compliance_engine.core.ontology import ConflictPrinciple, Entity, level_rank
from compliance_engine.defeasibility.schemas import (
    UNRESOLVED,
    ConflictResolution,
    ResolutionContext,
)

Resolver = Callable[[Entity, Entity, ResolutionContext], ConflictResolution | None]


def _decide(
    rule_a: Entity,
    rule_b: Entity,
    score_a: float,
    score_b: float,
    principle: ConflictPrinciple,
) -> ConflictResolution | None:
    """Higher score wins; equal scores do not resolve."""
    if score_a > score_b:
        return ConflictResolution(winner=rule_a, loser=rule_b, principle=principle)
    if score_b > score_a:
        return ConflictResolution(winner=rule_b, loser=rule_a, principle=principle)
    return None


def specificity(rule: Entity) -> int:
    """+2 for a jurisdiction, +1 for a subtype, +1 for a description over 50 chars."""
    score = 0
    if rule.jurisdiction:
        score += 2
    if rule.subtype:
        score += 1
    if rule.description and len(rule.description) > 50:
        score += 1
    return score


# =============================================================================
# Meta-Principles
# =============================================================================

def lex_specialis(rule_a: Entity, rule_b: Entity, context: ResolutionContext) -> ConflictResolution | None:
    """The more specific rule prevails."""
    return _decide(rule_a, rule_b, specificity(rule_a), specificity(rule_b), ConflictPrinciple.LEX_SPECIALIS)


def lex_posterior(rule_a: Entity, rule_b: Entity, context: ResolutionContext) -> ConflictResolution | None:
    """The later rule prevails. Needs a date for both rules."""
    date_a = context.date_a or rule_a.effective_date
    date_b = context.date_b or rule_b.effective_date
    if date_a is None or date_b is None:
        return None
    return _decide(
        rule_a, rule_b, date_a.toordinal(), date_b.toordinal(), ConflictPrinciple.LEX_POSTERIOR
    )


def lex_superior(rule_a: Entity, rule_b: Entity, context: ResolutionContext) -> ConflictResolution | None:
    """The rule from the higher jurisdiction level prevails."""
    return _decide(
        rule_a,
        rule_b,
        level_rank(rule_a.jurisdiction_level),
        level_rank(rule_b.jurisdiction_level),
        ConflictPrinciple.LEX_SUPERIOR,
    )


def value_preference(rule_a: Entity, rule_b: Entity, context: ResolutionContext) -> ConflictResolution | None:
    """The rule backed by the preferred value prevails; first matching entry wins."""
    for vp in context.value_preferences:
        if vp.preferred == rule_a.value and vp.over == rule_b.value:
            return ConflictResolution(winner=rule_a, loser=rule_b, principle=ConflictPrinciple.VALUE_PREFERENCE)
        if vp.preferred == rule_b.value and vp.over == rule_a.value:
            return ConflictResolution(winner=rule_b, loser=rule_a, principle=ConflictPrinciple.VALUE_PREFERENCE)
    return None


def jurisdictional_primacy(rule_a: Entity, rule_b: Entity, context: ResolutionContext) -> ConflictResolution | None:
    """The rule whose jurisdiction is in the operating set prevails.

    Both or neither applying leaves the conflict open.
    """
    operating = context.operating_jurisdictions
    a_applies = rule_a.jurisdiction in operating
    b_applies = rule_b.jurisdiction in operating
    return _decide(rule_a, rule_b, int(a_applies), int(b_applies), ConflictPrinciple.JURISDICTIONAL_PRIMACY)


CONFLICT_RESOLVERS: dict[ConflictPrinciple, Resolver] = {
    ConflictPrinciple.LEX_SPECIALIS: lex_specialis,
    ConflictPrinciple.LEX_POSTERIOR: lex_posterior,
    ConflictPrinciple.LEX_SUPERIOR: lex_superior,
    ConflictPrinciple.VALUE_PREFERENCE: value_preference,
    ConflictPrinciple.JURISDICTIONAL_PRIMACY: jurisdictional_primacy,
}

RESOLUTION_ORDER: tuple[ConflictPrinciple, ...] = (
    ConflictPrinciple.LEX_SPECIALIS,
    ConflictPrinciple.LEX_POSTERIOR,
    ConflictPrinciple.LEX_SUPERIOR,
    ConflictPrinciple.VALUE_PREFERENCE,
    ConflictPrinciple.JURISDICTIONAL_PRIMACY,
)


def resolve_conflict(
    rule_a: Entity,
    rule_b: Entity,
    context: ResolutionContext | None = None,
) -> ConflictResolution:
    """Resolve a conflict between two rules.

    Args:
        rule_a: First rule entity.
        rule_b: Second rule entity.
        context: Dates, value preferences and operating jurisdictions.
            Defaults to the configured operating jurisdictions.

    Returns:
        The first resolution found in RESOLUTION_ORDER, or an UNRESOLVED
        result flagged for manual adjudication.
    """
    if context is None:
        context = ResolutionContext(operating_jurisdictions=get_settings().operating_jurisdictions)

    for principle in RESOLUTION_ORDER:
        resolution = CONFLICT_RESOLVERS[principle](rule_a, rule_b, context)
        if resolution is not None:
            return resolution

    return ConflictResolution(
        principle=UNRESOLVED,
        message=(
            f"Cannot resolve conflict between {rule_a.id} and {rule_b.id} "
            f"- requires manual adjudication"
        ),
    )
