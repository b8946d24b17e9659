"""Tests for the compliance validation pipeline."""

from __future__ import annotations

from compliance_engine import validate_compliance
from compliance_engine.audit import (
    GapType,
    OverallStatus,
    SectionResult,
    audit_completeness,
    audit_ontology,
    validate_many_sync,
)
from compliance_engine.checks import generate_validation_checks
from compliance_engine.core.logging_config import get_run_id
from compliance_engine.core.ontology import (
    AllowDeny,
    Entity,
    EntityType,
    HohfeldianModality,
    Policy,
    PolicyType,
    Relation,
    RelationType,
)


def _without_entity(model, entity_id):
    return model.model_copy(update={"entities": [e for e in model.entities if e.id != entity_id]})


# =============================================================================
# End-to-End Tests
# =============================================================================

class TestValidateCompliance:
    """Six-section report over the procurement fixtures."""

    def test_sod_violation_is_non_compliant(self, law_model, enterprise_model, settings):
        report = validate_compliance(law_model, enterprise_model, settings=settings)

        assert report.overall_status == OverallStatus.NON_COMPLIANT
        assert report.consistency.result == SectionResult.FAIL
        assert report.ontology.result == SectionResult.PASS
        assert report.scenario.result == SectionResult.PASS
        assert report.potestative.result == SectionResult.PASS
        assert report.completeness.result == SectionResult.PASS
        assert report.defeasibility.result is None

        summary = report.executive_summary
        assert summary.total_sections == 6
        assert summary.failed_sections == 1
        assert summary.passed_sections == 4
        assert len(summary.critical_violations) == 1
        finding = summary.critical_violations[0]
        assert finding.section == "consistency"
        assert finding.type == "SOD_VIOLATION"
        assert "alice" in finding.message

    def test_compliant_enterprise(self, law_model, compliant_enterprise, settings):
        report = validate_compliance(law_model, compliant_enterprise, settings=settings)

        assert report.overall_status == OverallStatus.COMPLIANT
        assert report.executive_summary.failed_sections == 0
        assert report.executive_summary.critical_violations == []
        assert report.executive_summary.summary == "Enterprise model is compliant with all legal requirements"

    def test_generated_checks_add_scenario_finding(self, law_model, enterprise_model, settings):
        checks = generate_validation_checks(law_model)

        report = validate_compliance(law_model, enterprise_model, checks=checks, settings=settings)

        assert report.scenario.result == SectionResult.FAIL
        assert report.scenario.total_checks == len(checks)
        assert report.scenario.failed == 1
        assert report.scenario.passed == len(checks) - 1
        assert [f.section for f in report.executive_summary.critical_violations] == ["consistency", "scenario"]

    def test_law_validation_checks_used_by_default(self, law_model, enterprise_model, settings):
        law = law_model.model_copy(update={"validation_checks": generate_validation_checks(law_model)})
        report = validate_compliance(law, enterprise_model, settings=settings)
        assert report.scenario.total_checks == len(law.validation_checks)

    def test_hohfeldian_contradiction_is_critical(self, law_model, compliant_enterprise, settings):
        duty = Policy(
            type=PolicyType.CAN_PROCESS,
            allow_deny=AllowDeny.ALLOW,
            source="Buyer",
            target="Requester",
            hohfeldian_modality=HohfeldianModality.DUTY,
        )
        privilege = Policy(
            type=PolicyType.CAN_PROCESS,
            allow_deny=AllowDeny.ALLOW,
            source="Requester",
            target="Buyer",
            hohfeldian_modality=HohfeldianModality.PRIVILEGE,
        )
        law = law_model.model_copy(update={"policies": [duty]})
        enterprise = compliant_enterprise.model_copy(update={"policies": [privilege]})

        report = validate_compliance(law, enterprise, settings=settings)

        assert report.potestative.result == SectionResult.FAIL
        assert len(report.potestative.violations) == 2
        critical = report.executive_summary.critical_violations
        assert [f.type for f in critical] == ["HOHFELDIAN_CONTRADICTION"]

    def test_defeasibility_counts(self, law_model, compliant_enterprise, settings):
        law = law_model.model_copy(update={
            "entities": [
                *law_model.entities,
                Entity(id="R1", type=EntityType.RULE, name="Default"),
                Entity(id="R2", type=EntityType.RULE, name="Exception"),
                Entity(id="R3", type=EntityType.RULE, name="Counter-exception"),
            ],
            "relations": [
                *law_model.relations,
                Relation(type=RelationType.UNDERCUTS, source="R2", target="R1"),
                Relation(type=RelationType.UNDERCUTS, source="R3", target="R2"),
            ],
        })

        section = validate_compliance(law, compliant_enterprise, settings=settings).defeasibility

        assert section.total_rules == 3
        assert section.active_rules == 2
        assert section.defeated_rules == 1
        assert section.reinstated_rules == 1

    def test_report_carries_run_id(self, law_model, compliant_enterprise, settings):
        report = validate_compliance(law_model, compliant_enterprise, settings=settings)
        assert len(report.run_id) == 32
        assert get_run_id() == ""

    def test_sections_helper(self, law_model, compliant_enterprise, settings):
        report = validate_compliance(law_model, compliant_enterprise, settings=settings)
        titles = [s.title for s in report.sections()]
        assert titles == [
            "Consistency Analysis",
            "Ontology Audit",
            "Scenario Audit",
            "Access & Potestative Audit",
            "Defeasibility Audit",
            "Completeness Audit",
        ]


# =============================================================================
# Supporting Audit Tests
# =============================================================================

class TestAuditOntology:
    def test_full_coverage(self, law_model, enterprise_model):
        gaps, coverage = audit_ontology(law_model, enterprise_model)
        assert gaps == []
        assert coverage.coverage_pct == 100
        assert coverage.law_entities == 7
        assert coverage.enterprise_entities == 9

    def test_missing_role(self, law_model, enterprise_model):
        gaps, coverage = audit_ontology(law_model, _without_entity(enterprise_model, "Buyer"))

        assert [(g.type, g.source) for g in gaps] == [(GapType.MISSING_ENTITY, "Buyer")]
        assert gaps[0].message == 'Law requires DepartmentRole "Buyer" but not found in enterprise model'
        assert coverage.matched == 6
        assert coverage.coverage_pct == 86

    def test_missing_activity_is_not_a_gap(self, law_model, enterprise_model):
        gaps, _ = audit_ontology(law_model, _without_entity(enterprise_model, "IssuePO"))
        assert gaps == []

    def test_equivalence_counts_as_present(self, law_model, enterprise_model):
        law = law_model.model_copy(update={
            "entities": [*law_model.entities, Entity(id="Purchaser", type=EntityType.DEPARTMENT_ROLE, name="Purchaser")],
            "relations": [*law_model.relations, Relation(type=RelationType.EQU_ROLE, source="Purchaser", target="Buyer")],
        })
        gaps, _ = audit_ontology(law, enterprise_model)
        assert gaps == []


class TestAuditCompleteness:
    def test_fixture_is_complete(self, law_model, enterprise_model):
        assert audit_completeness(law_model, enterprise_model) == []

    def test_missing_sequence_and_reporting(self, law_model, enterprise_model):
        law = law_model.model_copy(update={
            "relations": [*law_model.relations, Relation(type=RelationType.MUST_REPORT, source="IssuePO", target="Auditor")],
        })
        enterprise = enterprise_model.model_copy(update={
            "relations": [
                r for r in enterprise_model.relations
                if not (r.type == RelationType.NEXT and r.target == "IssuePO")
            ],
        })

        gaps = audit_completeness(law, enterprise)

        assert [g.type for g in gaps] == [GapType.MISSING_REPORTING, GapType.MISSING_SEQUENCE]
        assert gaps[1].message == "Sequential requirement ApproveRequest → IssuePO not implemented"


# =============================================================================
# Concurrency Tests
# =============================================================================

class TestValidateMany:
    def test_reports_in_input_order(self, law_model, enterprise_model, compliant_enterprise, settings):
        pairs = [
            (law_model, enterprise_model),
            (law_model, compliant_enterprise),
            (law_model, enterprise_model),
        ]

        reports = validate_many_sync(pairs, settings)

        assert [r.overall_status for r in reports] == [
            OverallStatus.NON_COMPLIANT,
            OverallStatus.COMPLIANT,
            OverallStatus.NON_COMPLIANT,
        ]
        assert len({r.run_id for r in reports}) == 3

    def test_concurrent_runs_match_sequential(self, law_model, enterprise_model, settings):
        sequential = validate_compliance(law_model, enterprise_model, settings=settings)
        concurrent = validate_many_sync([(law_model, enterprise_model)] * 4, settings)

        for report in concurrent:
            assert report.consistency.conflicting_clauses == sequential.consistency.conflicting_clauses
            assert report.consistency.solver_stats == sequential.consistency.solver_stats
