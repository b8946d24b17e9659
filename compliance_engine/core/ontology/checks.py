"""Declarative validation checks and their verdicts."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class CheckType(str, Enum):
    """Kinds of structural assertion a check can make."""

    PROCESS_PARENT = "Process-Parent"
    PROCESS_ACTIVITY = "Process-Activity"
    DEP_PARENT = "Dep-Parent"
    INSTANCE = "checkInstance"
    ACTS = "checkActs"
    DELEGATE = "checkDelegate"
    ACTIVITY_PREDECESSOR = "Activity-Predecessor"
    ACTIVITY_TRACE = "Activity-Trace"
    ACTIVITY_PROCESS_PRED = "Activity-Process-Pred"
    ACTIVITY_PROCESS_TRACE = "Activity-Process-Trace"
    ASSIGNED_TO = "checkAssignedTo"
    ASSUMES = "checkAssumes"
    SEPARATION = "Check-Separation"
    OBJECT_ACCESS = "Check-Object-Access"
    CONSTRAINT = "Check-Constraint"
    REPORTING = "Check-Reporting"
    POTESTATIVE = "Check-Potestative"
    JURISDICTION = "Check-Jurisdiction"
    THRESHOLD = "Check-Threshold"
    DEFEAT = "Check-Defeat"
    MULTI_JURISDICTION = "Check-MultiJurisdiction"
    GROUP_ASSERT = "Group-Assert"


class Quantifier(str, Enum):
    ALL = "ALL"
    SOME = "SOME"
    NONE = "NONE"


class Severity(str, Enum):
    CRITICAL = "Critical"
    MAJOR = "Major"
    MINOR = "Minor"


class Verdict(str, Enum):
    """Outcome of evaluating one check. There are no partial states."""

    PASS = "PASS"
    FAIL = "FAIL"
    INDETERMINATE = "INDETERMINATE"


class CheckParameters(BaseModel):
    additional_target: str | None = None
    jurisdiction: str | None = None
    severity: Severity = Severity.MAJOR
    expected_result: str | None = Field(None, description="'True', 'Allow', 'Deny' or a modality")
    description: str | None = None


class Check(BaseModel):
    """A declarative assertion evaluated against a merged model."""

    check_type: CheckType
    label: str
    quantifier: Quantifier = Quantifier.ALL
    source: str
    target: str
    parameters: CheckParameters = Field(default_factory=CheckParameters)


class CheckResult(BaseModel):
    """Verdict for a single check."""

    label: str
    check_type: CheckType
    severity: Severity
    result: Verdict
    detail: str
