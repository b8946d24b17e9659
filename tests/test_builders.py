"""Tests for building and merging Law and Enterprise models."""

from __future__ import annotations

from datetime import date

from compliance_engine import validate_compliance
from compliance_engine.audit import OverallStatus, SectionResult
from compliance_engine.checks import (
    build_enterprise_model,
    build_law_model,
    generate_validation_checks,
    merge_law_models,
)
from compliance_engine.core.ontology import (
    Country,
    Domain,
    Entity,
    EntityType,
    Jurisdiction,
    JurisdictionLevel,
    ModelKind,
    Relation,
    RelationType,
)

FEDERAL = Jurisdiction(country=Country.US, level=JurisdictionLevel.FEDERAL, name="United States")
STATE = Jurisdiction(country=Country.US, level=JurisdictionLevel.STATE, name="California")


def _activities(*ids: str) -> list[Entity]:
    return [Entity(id=i, type=EntityType.ACTIVITY, name=i) for i in ids]


def _next(source: str, target: str) -> Relation:
    return Relation(type=RelationType.NEXT, source=source, target=target)


def _labels(model) -> list[str]:
    return [c.label for c in model.validation_checks]


# =============================================================================
# Builder Tests
# =============================================================================

class TestBuildLawModel:
    """Law models carry generated checks."""

    def test_checks_generated(self, law_model):
        law = build_law_model(
            law_model.context,
            law_model.jurisdiction,
            effective_date=law_model.effective_date,
            entities=law_model.entities,
            relations=law_model.relations,
            policies=law_model.policies,
        )

        assert law.model_type == ModelKind.LAW
        assert law.validation_checks == generate_validation_checks(law_model)
        assert len(law.validation_checks) == 15

    def test_defaults(self):
        law = build_law_model("Empty Act")

        assert law.jurisdiction == Jurisdiction()
        assert law.domains == [Domain.ALL]
        assert law.effective_date == date.today()
        assert law.validation_checks == []

    def test_inputs_are_copied(self):
        relations = [_next("A", "B")]
        law = build_law_model("Act", entities=_activities("A", "B"), relations=relations)

        relations.append(_next("B", "C"))

        assert len(law.relations) == 1


class TestBuildEnterpriseModel:
    """Enterprise models never carry checks."""

    def test_no_checks(self, enterprise_model):
        enterprise = build_enterprise_model(
            enterprise_model.context,
            enterprise_model.jurisdiction,
            domains=[Domain.FINANCIAL],
            entities=enterprise_model.entities,
            relations=enterprise_model.relations,
        )

        assert enterprise.model_type == ModelKind.ENTERPRISE
        assert enterprise.validation_checks == []
        assert enterprise.domains == [Domain.FINANCIAL]
        assert enterprise.relations == enterprise_model.relations


# =============================================================================
# Merge Tests
# =============================================================================

class TestMergeLawModels:
    """Federal plus state requirements."""

    def test_empty_and_single(self):
        law = build_law_model("Act", relations=[_next("A", "B")])

        assert merge_law_models([]) is None
        assert merge_law_models([law]) is law

    def test_checks_regenerated(self):
        federal = build_law_model(
            "Federal Act", FEDERAL,
            entities=_activities("Intake", "Review"),
            relations=[_next("Intake", "Review")],
        )
        state = build_law_model(
            "State Act", STATE,
            entities=_activities("Review", "Decision"),
            relations=[_next("Review", "Decision")],
        )

        merged = merge_law_models([federal, state])

        assert merged.context == "Federal Act + State Act"
        assert merged.jurisdiction == FEDERAL
        assert [e.id for e in merged.entities] == ["Intake", "Review", "Decision"]
        assert merged.validation_checks == generate_validation_checks(merged)
        # The trace only exists once both sequences are combined
        assert "Check_ActivityTrace_Intake_Decision" in _labels(merged)
        assert "Check_ActivityTrace_Intake_Decision" not in _labels(federal) + _labels(state)
        assert len(_labels(merged)) == len(set(_labels(merged)))

    def test_three_models_merge_left_to_right(self):
        laws = [
            build_law_model(name, relations=[_next(f"{name}1", f"{name}2")])
            for name in ("A", "B", "C")
        ]

        merged = merge_law_models(laws)

        assert merged.context == "A + B + C"
        assert [r.source for r in merged.relations] == ["A1", "B1", "C1"]


# =============================================================================
# End-to-End Tests
# =============================================================================

class TestBuiltModelsValidation:
    """Compliance runs over built models use the generated checks."""

    def test_report_runs_generated_checks(self, law_model, enterprise_model, settings):
        law = build_law_model(
            law_model.context,
            law_model.jurisdiction,
            entities=law_model.entities,
            relations=law_model.relations,
        )
        enterprise = build_enterprise_model(
            enterprise_model.context,
            enterprise_model.jurisdiction,
            entities=enterprise_model.entities,
            relations=enterprise_model.relations,
            policies=enterprise_model.policies,
        )

        report = validate_compliance(law, enterprise, settings=settings)

        assert report.overall_status == OverallStatus.NON_COMPLIANT
        assert report.scenario.result == SectionResult.FAIL
        assert report.scenario.total_checks == 15
        assert report.scenario.failed == 1
        assert [f.section for f in report.executive_summary.critical_violations] == [
            "consistency", "scenario",
        ]

    def test_merged_law_report(self, law_model, compliant_enterprise, settings):
        federal = build_law_model(
            law_model.context,
            law_model.jurisdiction,
            entities=law_model.entities,
            relations=law_model.relations,
        )
        state = build_law_model("State Procurement Rules", STATE)

        merged = merge_law_models([federal, state])
        report = validate_compliance(merged, compliant_enterprise, settings=settings)

        assert report.law_context == "Procurement Controls Act + State Procurement Rules"
        assert report.scenario.total_checks == len(merged.validation_checks) == 15
        assert report.overall_status == OverallStatus.COMPLIANT
