"""Consistency checking of Law and Enterprise models."""

from .schemas import ConsistencyResult, Violation, ViolationType
from .service import (
    ClausePattern,
    ClauseShape,
    ConsistencyChecker,
    check_consistency,
    policy_proposition,
    users_assuming,
)

__all__ = [
    "ConsistencyResult",
    "Violation",
    "ViolationType",
    "ClausePattern",
    "ClauseShape",
    "ConsistencyChecker",
    "check_consistency",
    "policy_proposition",
    "users_assuming",
]
