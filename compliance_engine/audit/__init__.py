"""Compliance audits and reports."""

from .schemas import (
    ComplianceMatrix,
    ComplianceReport,
    CriticalFinding,
    DeprecationReport,
    ExecutiveSummary,
    Gap,
    GapType,
    JurisdictionComparison,
    MatrixRow,
    MatrixStatus,
    OntologyCoverage,
    OverallStatus,
    RecommendationPriority,
    SectionResult,
)
from .service import (
    audit_completeness,
    audit_ontology,
    validate_compliance,
    validate_compliance_async,
    validate_many,
    validate_many_sync,
)
from .matrix import generate_compliance_matrix
from .jurisdictions import compare_jurisdictions, names_similar
from .deprecation import deprecate_rule

__all__ = [
    "ComplianceMatrix",
    "ComplianceReport",
    "CriticalFinding",
    "DeprecationReport",
    "ExecutiveSummary",
    "Gap",
    "GapType",
    "JurisdictionComparison",
    "MatrixRow",
    "MatrixStatus",
    "OntologyCoverage",
    "OverallStatus",
    "RecommendationPriority",
    "SectionResult",
    "audit_completeness",
    "audit_ontology",
    "validate_compliance",
    "validate_compliance_async",
    "validate_many",
    "validate_many_sync",
    "generate_compliance_matrix",
    "compare_jurisdictions",
    "names_similar",
    "deprecate_rule",
]
