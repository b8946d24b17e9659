"""Access policies and their normative qualifiers.

A policy states that a subject (source) may or may not perform a kind of
access on an object (target). Each policy also carries a deontic status and
an optional Hohfeldian modality describing the legal relation between the
two parties.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class PolicyType(str, Enum):
    """Fixed access-policy vocabulary."""

    CAN_ASSIGN_TO = "CanAssignTo"
    CAN_ASSUME = "CanAssume"
    CAN_ACT = "CanAct"
    CAN_DELEGATE = "CanDelegate"
    CAN_ACCESS = "CanAccess"
    CAN_COLLECT = "CanCollect"
    CAN_USE = "CanUse"
    CAN_DISCLOSE = "CanDisclose"
    CAN_RETAIN = "CanRetain"
    CAN_TRANSFER = "CanTransfer"
    CAN_DELETE = "CanDelete"
    CAN_PROCESS = "CanProcess"


class AllowDeny(str, Enum):
    ALLOW = "Allow"
    DENY = "Deny"


class DeonticStatus(str, Enum):
    """Normative force of a policy."""

    OBLIGATORY = "Obligatory"
    PERMITTED = "Permitted"
    PROHIBITED = "Prohibited"


class HohfeldianModality(str, Enum):
    """Hohfeld's eight fundamental legal relations, plus an untagged marker."""

    DUTY = "Duty"
    CLAIM_RIGHT = "Claim-Right"
    PRIVILEGE = "Privilege"
    NO_RIGHT = "No-Right"
    POWER = "Power"
    LIABILITY = "Liability"
    IMMUNITY = "Immunity"
    DISABILITY = "Disability"
    NONE = "None"


class PowerSubtype(str, Enum):
    ACTION_POWER = "Action-Power"
    ENABLING_POWER = "Enabling-Power"
    POTESTATIVE_RIGHT = "Potestative-Right"
    DECLARATIVE_POWER = "Declarative-Power"
    NONE = "None"


class ConsentType(str, Enum):
    EXPRESS = "Express"
    IMPLIED = "Implied"
    OPT_IN = "Opt-In"
    OPT_OUT = "Opt-Out"


class PolicyParameters(BaseModel):
    """Optional qualifiers on a policy."""

    activity_or_process: str | None = Field(None, description="Activity or process the access happens in")
    jurisdiction: str | None = None
    condition: str | None = None
    consent_type: ConsentType | None = None
    legal_basis: str | None = Field(None, description="ID of the rule this policy implements")


class Policy(BaseModel):
    """An access policy between a subject and an object."""

    type: PolicyType
    allow_deny: AllowDeny
    source: str = Field(..., description="Subject entity ID (usually a role)")
    target: str = Field(..., description="Object entity ID")
    deontic_status: DeonticStatus = DeonticStatus.OBLIGATORY
    hohfeldian_modality: HohfeldianModality = HohfeldianModality.NONE
    power_subtype: PowerSubtype = PowerSubtype.NONE
    parameters: PolicyParameters = Field(default_factory=PolicyParameters)

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.type.value, self.source, self.target)
