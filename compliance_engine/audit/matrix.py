"""Compliance matrix: law requirements mapped to enterprise controls."""

from __future__ import annotations

from datetime import datetime, timezone

from compliance_engine.core.ontology import EntityType, Model, RelationType
from compliance_engine.audit.schemas import (
    ComplianceMatrix,
    MatrixRow,
    MatrixStatus,
    MatrixSummary,
)


def _covered(ok: bool) -> MatrixStatus:
    return MatrixStatus.COVERED if ok else MatrixStatus.GAP


def generate_compliance_matrix(law: Model, enterprise: Model) -> ComplianceMatrix:
    """Map every law requirement to the enterprise control implementing it.

    Rows are emitted for law roles, processes, AssignedTo and Separate
    edges, and policies. A policy row is CONFLICT when the enterprise has
    the same (type, source, target) policy with the opposite allow/deny.

    Args:
        law: Law Model supplying the requirements.
        enterprise: Enterprise Model supplying the controls.

    Returns:
        ComplianceMatrix with per-row status and a coverage summary.
    """
    default_jurisdiction = law.jurisdiction.name
    enterprise_ids = {
        EntityType.DEPARTMENT_ROLE: {e.id for e in enterprise.entities_of(EntityType.DEPARTMENT_ROLE)},
        EntityType.PROCESS: {e.id for e in enterprise.entities_of(EntityType.PROCESS)},
    }
    enterprise_relations = {rel.key for rel in enterprise.relations}
    enterprise_policies = {pol.key: pol for pol in enterprise.policies}

    rows: list[MatrixRow] = []

    for entity_type, label in ((EntityType.DEPARTMENT_ROLE, "Role"), (EntityType.PROCESS, "Process")):
        for entity in law.entities_of(entity_type):
            covered = entity.id in enterprise_ids[entity_type]
            rows.append(MatrixRow(
                requirement_type=label,
                requirement_id=entity.id,
                requirement_name=entity.name,
                jurisdiction=entity.jurisdiction or default_jurisdiction,
                enterprise_control=entity.id if covered else None,
                status=_covered(covered),
            ))

    for rel in law.relations_of(RelationType.ASSIGNED_TO):
        key = ":".join(rel.key)
        covered = rel.key in enterprise_relations
        rows.append(MatrixRow(
            requirement_type="Assignment",
            requirement_id=key,
            requirement_name=f"{rel.source} → {rel.target}",
            jurisdiction=rel.parameters.jurisdiction or default_jurisdiction,
            enterprise_control=key if covered else None,
            status=_covered(covered),
        ))

    for rel in law.relations_of(RelationType.SEPARATE):
        key = ":".join(rel.key)
        covered = rel.key in enterprise_relations
        rows.append(MatrixRow(
            requirement_type="SoD",
            requirement_id=key,
            requirement_name=f"Separate({rel.source}, {rel.target})",
            jurisdiction=default_jurisdiction,
            enterprise_control=key if covered else None,
            status=_covered(covered),
        ))

    for pol in law.policies:
        key = ":".join(pol.key)
        counterpart = enterprise_policies.get(pol.key)
        if counterpart is None:
            status = MatrixStatus.GAP
        elif counterpart.allow_deny == pol.allow_deny:
            status = MatrixStatus.COVERED
        else:
            status = MatrixStatus.CONFLICT
        rows.append(MatrixRow(
            requirement_type="Policy",
            requirement_id=key,
            requirement_name=f"{pol.type.value}({pol.allow_deny.value}, {pol.source}, {pol.target})",
            jurisdiction=pol.parameters.jurisdiction or default_jurisdiction,
            enterprise_control=key if counterpart is not None else None,
            status=status,
        ))

    total = len(rows)
    covered_count = sum(1 for r in rows if r.status == MatrixStatus.COVERED)
    summary = MatrixSummary(
        total=total,
        covered=covered_count,
        gaps=sum(1 for r in rows if r.status == MatrixStatus.GAP),
        conflicts=sum(1 for r in rows if r.status == MatrixStatus.CONFLICT),
        coverage_pct=round(covered_count / total * 100) if total else 100,
    )

    return ComplianceMatrix(
        timestamp=datetime.now(timezone.utc),
        scope=enterprise.context,
        jurisdiction=law.jurisdiction,
        rows=rows,
        summary=summary,
    )
