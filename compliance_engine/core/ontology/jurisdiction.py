"""
Jurisdiction types for multi-jurisdiction compliance.

Models carry the jurisdiction they were drafted for; the level ordering is
used by the LexSuperior meta-principle.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class Country(str, Enum):
    """Supported country / bloc codes."""
    CA = "CA"
    US = "US"
    UK = "UK"
    DE = "DE"
    EU = "EU"
    CN = "CN"
    JP = "JP"
    SG = "SG"
    KR = "KR"
    AE = "AE"
    UNECE = "UNECE"
    OTHER = "OTHER"


class JurisdictionLevel(str, Enum):
    """Level of the legislating body."""
    FEDERAL = "Federal"
    STATE = "State"
    PROVINCIAL = "Provincial"
    MUNICIPAL = "Municipal"
    SUPRANATIONAL = "Supranational"
    EMIRATE = "Emirate"


class Domain(str, Enum):
    """Regulatory domains a model can cover."""
    PRIVACY = "Privacy"
    TRAFFIC = "Traffic"
    AV = "AV"
    FINANCIAL = "Financial"
    ALL = "All"


# Higher rank wins under LexSuperior
LEVEL_RANK: dict[str, int] = {
    JurisdictionLevel.SUPRANATIONAL.value: 5,
    JurisdictionLevel.FEDERAL.value: 4,
    JurisdictionLevel.STATE.value: 3,
    JurisdictionLevel.PROVINCIAL.value: 3,
    JurisdictionLevel.MUNICIPAL.value: 2,
    JurisdictionLevel.EMIRATE.value: 2,
}


def level_rank(level: str | JurisdictionLevel | None) -> int:
    """Rank of a jurisdiction level; unknown or missing levels rank 0."""
    if level is None:
        return 0
    if isinstance(level, JurisdictionLevel):
        level = level.value
    return LEVEL_RANK.get(level, 0)


class Jurisdiction(BaseModel):
    """Jurisdiction a model was drafted for."""
    country: Country = Country.OTHER
    level: JurisdictionLevel = JurisdictionLevel.FEDERAL
    name: str = ""
