"""Law and Enterprise model construction from structured definitions.

Law models always leave here with their validation checks generated, so
downstream compliance runs have scenario checks without further setup.
Enterprise models never carry checks.
"""

from __future__ import annotations

import logging
from datetime import date
from functools import reduce
from typing import Iterable, Sequence

from compliance_engine.core.ontology import (
    Domain,
    Entity,
    Jurisdiction,
    Model,
    ModelKind,
    Policy,
    Relation,
    TheoryConstruction,
    merge_models,
)
from compliance_engine.checks.generator import generate_validation_checks

logger = logging.getLogger(__name__)


def _build(
    kind: ModelKind,
    context: str,
    jurisdiction: Jurisdiction | None,
    effective_date: date | None,
    domains: Iterable[Domain] | None,
    entities: Iterable[Entity],
    relations: Iterable[Relation],
    policies: Iterable[Policy],
    theory_construction: TheoryConstruction | None = None,
) -> Model:
    return Model(
        model_type=kind,
        context=context,
        jurisdiction=jurisdiction or Jurisdiction(),
        effective_date=effective_date or date.today(),
        domains=list(domains) if domains else [Domain.ALL],
        entities=list(entities),
        relations=list(relations),
        policies=list(policies),
        theory_construction=theory_construction or TheoryConstruction(),
    )


def build_law_model(
    context: str,
    jurisdiction: Jurisdiction | None = None,
    *,
    effective_date: date | None = None,
    domains: Iterable[Domain] | None = None,
    entities: Iterable[Entity] = (),
    relations: Iterable[Relation] = (),
    policies: Iterable[Policy] = (),
    theory_construction: TheoryConstruction | None = None,
) -> Model:
    """Build a Law Model from pre-structured provisions.

    Args:
        context: Human-readable scope of the law.
        jurisdiction: Drafting jurisdiction; OTHER/Federal when omitted.
        effective_date: Defaults to today.
        domains: Defaults to ``[Domain.ALL]``.
        entities: Provision entities.
        relations: Provision relations.
        policies: Provision policies.
        theory_construction: Cases, factors and preferences.

    Returns:
        Law Model with ``validation_checks`` generated from its contents.
    """
    model = _build(
        ModelKind.LAW, context, jurisdiction, effective_date, domains,
        entities, relations, policies, theory_construction,
    )
    model.validation_checks = generate_validation_checks(model)
    logger.debug("Built law model %s with %d checks", context, len(model.validation_checks))
    return model


def build_enterprise_model(
    context: str,
    jurisdiction: Jurisdiction | None = None,
    *,
    effective_date: date | None = None,
    domains: Iterable[Domain] | None = None,
    entities: Iterable[Entity] = (),
    relations: Iterable[Relation] = (),
    policies: Iterable[Policy] = (),
) -> Model:
    """Build an Enterprise Model from pre-structured policy definitions.

    Same defaults as :func:`build_law_model`. No validation checks.
    """
    return _build(
        ModelKind.ENTERPRISE, context, jurisdiction, effective_date, domains,
        entities, relations, policies,
    )


def merge_law_models(models: Sequence[Model]) -> Model | None:
    """Merge Law Models, e.g. federal plus state requirements.

    Models merge left to right with :func:`merge_models`, so kind,
    jurisdiction and effective date come from the first. Checks are
    regenerated from the merged contents, not concatenated.

    Returns:
        None for no models, the model itself for one, otherwise the merge.
    """
    if not models:
        return None
    if len(models) == 1:
        return models[0]

    merged = reduce(merge_models, models)
    merged.validation_checks = generate_validation_checks(merged)
    logger.debug(
        "Merged %d law models into %s with %d checks",
        len(models), merged.context, len(merged.validation_checks),
    )
    return merged
