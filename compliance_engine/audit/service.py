"""
Compliance validation: Con(Φ_E ∧ Φ_L) plus ontology, scenario, potestative,
defeasibility and completeness audits, aggregated into one report.

Independent (law, enterprise) pairs can be validated concurrently with
`validate_many`; each run owns its own registry and solver.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from compliance_engine.core.config import Settings, get_settings
from compliance_engine.core.logging_config import run_context
from compliance_engine.core.ontology import (
    EntityType,
    Check,
    Model,
    RelationType,
    Severity,
    Verdict,
    merge_models,
)
from compliance_engine.audit.schemas import (
    ComplianceReport,
    CompletenessSection,
    ConsistencySection,
    CriticalFinding,
    DefeasibilitySection,
    ExecutiveSummary,
    Gap,
    GapType,
    OntologyCoverage,
    OntologySection,
    OverallStatus,
    PotestativeSection,
    ScenarioSection,
    SectionResult,
    section_result,
)
from compliance_engine.checks import execute_checks
from compliance_engine.consistency import ConsistencyChecker
from compliance_engine.defeasibility import (
    PotestativeViolationType,
    RuleStatus,
    check_potestative_consistency,
    evaluate_defeasibility,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Supporting Audits
# =============================================================================

def audit_ontology(law: Model, enterprise: Model) -> tuple[list[Gap], OntologyCoverage]:
    """Law roles and processes must exist in the enterprise.

    An entity counts as present when the enterprise has the same id, or when
    the law maps it through an EquRole/EquProcess edge.
    """
    law_entities = law.entity_map()
    enterprise_ids = enterprise.entity_ids()
    mapped = {
        endpoint
        for rel in law.relations_of(RelationType.EQU_ROLE, RelationType.EQU_PROCESS)
        for endpoint in (rel.source, rel.target)
    }

    gaps: list[Gap] = []
    for entity_id, entity in law_entities.items():
        if entity.type not in (EntityType.DEPARTMENT_ROLE, EntityType.PROCESS):
            continue
        if entity_id in enterprise_ids or entity_id in mapped:
            continue
        gaps.append(Gap(
            type=GapType.MISSING_ENTITY,
            source=entity_id,
            name=entity.name,
            entity_type=entity.type.value,
            message=f'Law requires {entity.type.value} "{entity.name}" but not found in enterprise model',
        ))

    total = len(law_entities)
    matched = total - len(gaps)
    coverage = OntologyCoverage(
        law_entities=total,
        enterprise_entities=len(enterprise_ids),
        matched=matched,
        coverage_pct=round(matched / total * 100) if total else 100,
    )
    return gaps, coverage


_COMPLETENESS_RULES: tuple[tuple[RelationType, GapType, str], ...] = (
    (RelationType.ASSIGNED_TO, GapType.UNIMPLEMENTED_ASSIGNMENT,
     "Assignment {source} → {target} required by law but not implemented"),
    (RelationType.MUST_REPORT, GapType.MISSING_REPORTING,
     "Mandatory reporting {source} → {target} not implemented"),
    (RelationType.NEXT, GapType.MISSING_SEQUENCE,
     "Sequential requirement {source} → {target} not implemented"),
)


def audit_completeness(law: Model, enterprise: Model) -> list[Gap]:
    """Law assignments, reporting duties and sequences must be implemented."""
    gaps: list[Gap] = []
    for rel_type, gap_type, template in _COMPLETENESS_RULES:
        implemented = {(r.source, r.target) for r in enterprise.relations_of(rel_type)}
        for rel in law.relations_of(rel_type):
            if (rel.source, rel.target) in implemented:
                continue
            gaps.append(Gap(
                type=gap_type,
                source=rel.source,
                target=rel.target,
                message=template.format(source=rel.source, target=rel.target),
            ))
    return gaps


# =============================================================================
# Compliance Validation
# =============================================================================

def validate_compliance(
    law: Model,
    enterprise: Model,
    checks: list[Check] | None = None,
    settings: Settings | None = None,
) -> ComplianceReport:
    """Validate an Enterprise Model against a Law Model.

    Args:
        law: Law Model (Φ_L).
        enterprise: Enterprise Model (Φ_E).
        checks: Scenario checks to run. Defaults to the law's
            validation_checks.
        settings: Engine settings; defaults to the cached settings.

    Returns:
        ComplianceReport; NON_COMPLIANT iff any section fails.
    """
    settings = settings or get_settings()

    with run_context() as run_id:
        logger.info("Validating %s against %s", enterprise.context, law.context)

        # 1. Consistency
        consistency = ConsistencyChecker(settings).check(law, enterprise)
        n_violations = len(consistency.violations)
        consistency_section = ConsistencySection(
            result=section_result(consistency.consistent),
            violations=consistency.violations,
            solver_stats=consistency.stats,
            conflicting_clauses=consistency.conflicting_clauses,
            detail=(
                "Con(Φ_E ∧ Φ_L) holds - no logical contradictions detected"
                if consistency.consistent
                else f"Con(Φ_E ∧ Φ_L) FAILS - {n_violations} contradiction(s) detected"
            ),
        )

        # 2. Ontology
        ontology_gaps, coverage = audit_ontology(law, enterprise)
        ontology_section = OntologySection(
            result=section_result(not ontology_gaps),
            gaps=ontology_gaps,
            coverage=coverage,
        )

        # 3. Scenario
        merged = merge_models(law, enterprise)
        check_results = execute_checks(law.validation_checks if checks is None else checks, merged)
        failed = sum(1 for r in check_results if r.result == Verdict.FAIL)
        scenario_section = ScenarioSection(
            result=section_result(failed == 0),
            total_checks=len(check_results),
            passed=sum(1 for r in check_results if r.result == Verdict.PASS),
            failed=failed,
            indeterminate=sum(1 for r in check_results if r.result == Verdict.INDETERMINATE),
            checks=check_results,
        )

        # 4. Access & potestative
        potestative = check_potestative_consistency([*law.policies, *enterprise.policies])
        potestative_section = PotestativeSection(
            result=section_result(not potestative),
            violations=potestative,
        )

        # 5. Defeasibility
        rules = evaluate_defeasibility(law)
        defeasibility_section = DefeasibilitySection(
            total_rules=len(rules),
            active_rules=sum(1 for r in rules if r.is_active),
            defeated_rules=sum(1 for r in rules if r.status == RuleStatus.DEFEATED),
            reinstated_rules=sum(1 for r in rules if r.reinstated),
            details=rules,
        )

        # 6. Completeness
        completeness_gaps = audit_completeness(law, enterprise)
        completeness_section = CompletenessSection(
            result=section_result(not completeness_gaps),
            gaps=completeness_gaps,
        )

        # 7. Executive summary
        sections = [
            consistency_section,
            ontology_section,
            scenario_section,
            potestative_section,
            defeasibility_section,
            completeness_section,
        ]
        failed_sections = sum(1 for s in sections if s.result == SectionResult.FAIL)
        passed_sections = sum(1 for s in sections if s.result == SectionResult.PASS)
        overall = OverallStatus.COMPLIANT if failed_sections == 0 else OverallStatus.NON_COMPLIANT

        critical: list[CriticalFinding] = []
        for v in consistency.violations:
            if v.severity == Severity.CRITICAL:
                critical.append(CriticalFinding(section="consistency", type=v.type.value, message=v.message))
        for pv in potestative:
            if pv.type == PotestativeViolationType.HOHFELDIAN_CONTRADICTION:
                critical.append(CriticalFinding(section="potestative", type=pv.type.value, message=pv.message))
        for r in check_results:
            if r.result == Verdict.FAIL and r.severity == Severity.CRITICAL:
                critical.append(CriticalFinding(
                    section="scenario",
                    type=r.check_type.value,
                    message=f"{r.label}: {r.detail}",
                ))

        summary = ExecutiveSummary(
            overall=overall,
            total_sections=len(sections),
            passed_sections=passed_sections,
            failed_sections=failed_sections,
            critical_violations=critical,
            summary=(
                "Enterprise model is compliant with all legal requirements"
                if failed_sections == 0
                else f"Enterprise model has {failed_sections} compliance failure(s) requiring remediation"
            ),
        )

        logger.info(
            "%s: %d/%d sections passed, %d critical finding(s)",
            overall.value, passed_sections, len(sections), len(critical),
        )

        return ComplianceReport(
            timestamp=datetime.now(timezone.utc),
            run_id=run_id,
            law_context=law.context,
            enterprise_context=enterprise.context,
            overall_status=overall,
            consistency=consistency_section,
            ontology=ontology_section,
            scenario=scenario_section,
            potestative=potestative_section,
            defeasibility=defeasibility_section,
            completeness=completeness_section,
            executive_summary=summary,
        )


# =============================================================================
# Concurrent Validation
# =============================================================================

async def validate_compliance_async(
    law: Model,
    enterprise: Model,
    checks: list[Check] | None = None,
    settings: Settings | None = None,
) -> ComplianceReport:
    """Run `validate_compliance` in a worker thread."""
    return await asyncio.to_thread(validate_compliance, law, enterprise, checks, settings)


async def validate_many(
    pairs: list[tuple[Model, Model]],
    settings: Settings | None = None,
) -> list[ComplianceReport]:
    """
    Validate independent (law, enterprise) pairs in parallel.

    Uses asyncio.gather; each run owns its registry and solver, so runs
    share no mutable state.

    Args:
        pairs: List of (law, enterprise) model tuples
        settings: Engine settings shared by all runs

    Returns:
        One report per pair, in input order
    """
    tasks = [
        validate_compliance_async(law, enterprise, settings=settings)
        for law, enterprise in pairs
    ]
    return await asyncio.gather(*tasks)


def validate_many_sync(
    pairs: list[tuple[Model, Model]],
    settings: Settings | None = None,
) -> list[ComplianceReport]:
    """
    Synchronous wrapper for validate_many.

    For use in non-async contexts.
    """
    return asyncio.run(validate_many(pairs, settings))
