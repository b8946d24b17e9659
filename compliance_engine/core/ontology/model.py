"""Law and Enterprise model graphs.

A model bundles entities, relations, policies and (for Law models) the
validation checks derived from it. Two models merge into a third that check
execution runs against.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from compliance_engine.core.ontology.checks import Check
from compliance_engine.core.ontology.jurisdiction import Domain, Jurisdiction
from compliance_engine.core.ontology.policies import Policy, PolicyType
from compliance_engine.core.ontology.relations import Relation, RelationType
from compliance_engine.core.ontology.types import Entity, EntityType


class ModelKind(str, Enum):
    LAW = "Law_Model"
    ENTERPRISE = "Enterprise_Model"


class Preference(BaseModel):
    """`preferred` takes priority over `over`."""

    preferred: str
    over: str


class TheoryConstruction(BaseModel):
    """Case-based argumentation material attached to a model."""

    cases: list[dict[str, Any]] = Field(default_factory=list)
    factors: list[dict[str, Any]] = Field(default_factory=list)
    value_preferences: list[Preference] = Field(default_factory=list)
    rule_preferences: list[Preference] = Field(default_factory=list)


class Model(BaseModel):
    """A governance graph (Law Model or Enterprise Model)."""

    model_config = ConfigDict(protected_namespaces=())

    model_type: ModelKind
    context: str = Field(..., description="Human-readable scope, e.g. 'CCPA Privacy'")
    jurisdiction: Jurisdiction = Field(default_factory=Jurisdiction)
    effective_date: date | None = None
    domains: list[Domain] = Field(default_factory=lambda: [Domain.ALL])
    entities: list[Entity] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)
    policies: list[Policy] = Field(default_factory=list)
    theory_construction: TheoryConstruction = Field(default_factory=TheoryConstruction)
    validation_checks: list[Check] = Field(default_factory=list)

    def entity_ids(self) -> set[str]:
        return {e.id for e in self.entities}

    def entity_map(self) -> dict[str, Entity]:
        """Map entity id to entity; the first occurrence of an id wins."""
        result: dict[str, Entity] = {}
        for entity in self.entities:
            result.setdefault(entity.id, entity)
        return result

    def get_entity(self, entity_id: str) -> Entity | None:
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        return None

    def entities_of(self, *types: EntityType) -> list[Entity]:
        return [e for e in self.entities if e.type in types]

    def relations_of(self, *types: RelationType) -> list[Relation]:
        return [r for r in self.relations if r.type in types]

    def policies_of(self, *types: PolicyType) -> list[Policy]:
        return [p for p in self.policies if p.type in types]


def merge_models(model_a: Model, model_b: Model) -> Model:
    """Merge two models into a new one.

    Entities are unioned by id (first occurrence wins); relations, policies,
    theory construction and validation checks are concatenated; domains are
    de-duplicated in order. Kind, jurisdiction and effective date come from
    `model_a`.
    """
    seen: set[str] = set()
    entities: list[Entity] = []
    for entity in [*model_a.entities, *model_b.entities]:
        if entity.id not in seen:
            seen.add(entity.id)
            entities.append(entity)

    domains: list[Domain] = []
    for domain in [*model_a.domains, *model_b.domains]:
        if domain not in domains:
            domains.append(domain)

    tc_a = model_a.theory_construction
    tc_b = model_b.theory_construction

    return Model(
        model_type=model_a.model_type,
        context=f"{model_a.context} + {model_b.context}",
        jurisdiction=model_a.jurisdiction,
        effective_date=model_a.effective_date,
        domains=domains,
        entities=entities,
        relations=[*model_a.relations, *model_b.relations],
        policies=[*model_a.policies, *model_b.policies],
        theory_construction=TheoryConstruction(
            cases=[*tc_a.cases, *tc_b.cases],
            factors=[*tc_a.factors, *tc_b.factors],
            value_preferences=[*tc_a.value_preferences, *tc_b.value_preferences],
            rule_preferences=[*tc_a.rule_preferences, *tc_b.rule_preferences],
        ),
        validation_checks=[*model_a.validation_checks, *model_b.validation_checks],
    )
