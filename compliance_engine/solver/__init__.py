"""Propositional CNF construction and DPLL solving."""

from .cnf import (
    CNF,
    Clause,
    Literal,
    PropositionRegistry,
    at_least_one,
    at_most_one,
    clause,
    evaluate,
    exactly_one,
    iff,
    implies,
    mutual_exclusion,
)
from .dpll import (
    DPLLSolver,
    SearchBudget,
    SearchBudgetExceeded,
    SolveResult,
    SolverStats,
)

__all__ = [
    "CNF",
    "Clause",
    "Literal",
    "PropositionRegistry",
    "at_least_one",
    "at_most_one",
    "clause",
    "evaluate",
    "exactly_one",
    "iff",
    "implies",
    "mutual_exclusion",
    "DPLLSolver",
    "SearchBudget",
    "SearchBudgetExceeded",
    "SolveResult",
    "SolverStats",
]
