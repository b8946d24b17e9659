"""Comparative analysis of two jurisdictions' models."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from compliance_engine.core.ontology import EQUIVALENCE_RELATIONS, Model
from compliance_engine.audit.schemas import (
    EquivalenceMapping,
    JurisdictionComparison,
    JurisdictionGap,
    PolicyConflict,
    Recommendation,
    RecommendationPriority,
)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def _normalize(name: str) -> str:
    return _NON_ALNUM.sub("", name.lower())


def names_similar(name_a: str, name_b: str) -> bool:
    """Normalized names are equal or one contains the other."""
    a, b = _normalize(name_a), _normalize(name_b)
    if not a or not b:
        return False
    return a == b or a in b or b in a


def _label(model: Model) -> str:
    return model.jurisdiction.name or model.jurisdiction.country.value


def compare_jurisdictions(model_a: Model, model_b: Model, domain: str = "All") -> JurisdictionComparison:
    """Map equivalences, gaps and policy conflicts between two models.

    Explicit EquRole/EquActivity/EquProcess edges from either model are taken
    as given. Remaining entities of A are matched to unused entities of B of
    the same type with similar names. Unmatched entities become gaps.

    Args:
        model_a: Model for jurisdiction A.
        model_b: Model for jurisdiction B.
        domain: Regulatory domain label for the report.

    Returns:
        JurisdictionComparison with prioritized recommendations.
    """
    report = JurisdictionComparison(
        timestamp=datetime.now(timezone.utc),
        jurisdiction_a=model_a.jurisdiction,
        jurisdiction_b=model_b.jurisdiction,
        domain=domain,
    )
    name_a, name_b = _label(model_a), _label(model_b)
    entities_a = model_a.entity_map()
    entities_b = model_b.entity_map()

    # Both endpoints of an edge are named from the model that declares it
    for model, entities in ((model_a, entities_a), (model_b, entities_b)):
        for eq in model.relations_of(*EQUIVALENCE_RELATIONS):
            report.equivalences.append(EquivalenceMapping(
                type=eq.type.value,
                entity_a=eq.source,
                entity_b=eq.target,
                name_a=entities[eq.source].name if eq.source in entities else eq.source,
                name_b=entities[eq.target].name if eq.target in entities else eq.target,
            ))

    # Auto-match by name similarity
    for id_a, entity_a in entities_a.items():
        if any(m.entity_a == id_a for m in report.equivalences):
            continue
        matched = False
        for id_b, entity_b in entities_b.items():
            if entity_a.type != entity_b.type or not names_similar(entity_a.name, entity_b.name):
                continue
            if any(m.entity_b == id_b for m in report.equivalences):
                continue
            report.equivalences.append(EquivalenceMapping(
                type=f"Equ{entity_a.type.value}",
                entity_a=id_a,
                entity_b=id_b,
                name_a=entity_a.name,
                name_b=entity_b.name,
                auto_matched=True,
            ))
            matched = True
            break
        if not matched:
            report.gaps_b.append(JurisdictionGap(
                entity_id=id_a,
                entity_name=entity_a.name,
                entity_type=entity_a.type.value,
                message=f"{entity_a.name} exists in {name_a} but has no equivalent in {name_b}",
            ))

    for id_b, entity_b in entities_b.items():
        if not any(m.entity_b == id_b for m in report.equivalences):
            report.gaps_a.append(JurisdictionGap(
                entity_id=id_b,
                entity_name=entity_b.name,
                entity_type=entity_b.type.value,
                message=f"{entity_b.name} exists in {name_b} but has no equivalent in {name_a}",
            ))

    for pol_a in model_a.policies:
        for pol_b in model_b.policies:
            if pol_a.key == pol_b.key and pol_a.allow_deny != pol_b.allow_deny:
                report.conflicts.append(PolicyConflict(
                    type=pol_a.type.value,
                    entity=pol_a.source,
                    target=pol_a.target,
                    jurisdiction_a_policy=pol_a.allow_deny.value,
                    jurisdiction_b_policy=pol_b.allow_deny.value,
                    message=(
                        f"Conflicting {pol_a.type.value} policy: {name_a} says "
                        f"{pol_a.allow_deny.value}, {name_b} says {pol_b.allow_deny.value}"
                    ),
                ))

    report.recommendations = _recommendations(report, name_a, name_b)
    return report


def _recommendations(report: JurisdictionComparison, name_a: str, name_b: str) -> list[Recommendation]:
    recommendations = []
    if report.conflicts:
        recommendations.append(Recommendation(
            priority=RecommendationPriority.CRITICAL,
            action="Resolve policy conflicts using highest-common-denominator approach",
            detail=(
                f"{len(report.conflicts)} conflicting policies detected. Apply the stricter "
                f"standard to ensure compliance across both jurisdictions."
            ),
        ))
    if report.gaps_a:
        recommendations.append(Recommendation(
            priority=RecommendationPriority.MAJOR,
            action=f"Add {len(report.gaps_a)} missing entities to match {name_b} requirements",
            detail=", ".join(g.entity_name for g in report.gaps_a),
        ))
    if report.gaps_b:
        recommendations.append(Recommendation(
            priority=RecommendationPriority.MAJOR,
            action=f"Add {len(report.gaps_b)} missing entities to match {name_a} requirements",
            detail=", ".join(g.entity_name for g in report.gaps_b),
        ))
    if report.equivalences:
        recommendations.append(Recommendation(
            priority=RecommendationPriority.INFO,
            action="Use equivalence mappings to avoid duplicate policy definitions",
            detail=f"{len(report.equivalences)} equivalences identified that can streamline compliance",
        ))
    return recommendations
