"""DPLL satisfiability solver.

Plain DPLL: unit propagation to a fixpoint, pure-literal elimination, then
branching on the first unassigned variable of the first remaining clause,
trying true before false. There is no clause learning, no restarts and no
branching heuristic.

The search is iterative over one shared assignment. Every assigned variable
is recorded on an undo trail and each open branch point remembers the trail
length it started from, so backtracking pops the trail back to that mark.
Search depth is not bounded by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
import time
from typing import Sequence

from pydantic import BaseModel, Field

from compliance_engine.core.config import Settings
from compliance_engine.solver.cnf import Clause, PropositionRegistry

logger = logging.getLogger(__name__)

Assignment = dict[int, bool]


class SearchBudgetExceeded(Exception):
    """Raised when a search exceeds its decision or wall-clock budget."""


class SearchBudget(BaseModel):
    """Limits checked at every branch point. None means unbounded."""

    max_decisions: int | None = None
    timeout_seconds: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchBudget | None":
        if settings.solver_max_decisions is None and settings.solver_timeout_seconds is None:
            return None
        return cls(
            max_decisions=settings.solver_max_decisions,
            timeout_seconds=settings.solver_timeout_seconds,
        )


class SolverStats(BaseModel):
    decisions: int = 0
    propagations: int = 0
    conflicts: int = 0


class SolveResult(BaseModel):
    """Outcome of a single solve call."""

    satisfiable: bool
    assignment: dict[str, bool] | None = Field(
        None, description="Proposition name -> value for every variable the search assigned"
    )
    stats: SolverStats = Field(default_factory=SolverStats)


class DPLLSolver:
    """DPLL solver bound to the registry that produced its formulas."""

    def __init__(self, registry: PropositionRegistry, budget: SearchBudget | None = None):
        self.registry = registry
        self.budget = budget
        self._stats = SolverStats()
        self._deadline: float | None = None

    # =========================================================================
    # Public API
    # =========================================================================

    def solve(self, clauses: Sequence[Clause]) -> SolveResult:
        """Decide satisfiability of a CNF formula.

        Args:
            clauses: Formula in CNF. An empty clause makes it UNSAT.

        Returns:
            SolveResult with the assignment when satisfiable.

        Raises:
            SearchBudgetExceeded: If a configured budget runs out.
        """
        self._stats = SolverStats()
        self._deadline = None
        if self.budget is not None and self.budget.timeout_seconds is not None:
            self._deadline = time.monotonic() + self.budget.timeout_seconds

        solution = self._dpll([tuple(c) for c in clauses])
        stats = self._stats.model_copy()

        if solution is None:
            logger.debug("UNSAT over %d clauses (%s)", len(clauses), stats)
            return SolveResult(satisfiable=False, assignment=None, stats=stats)

        assignment: dict[str, bool] = {}
        for var, value in solution.items():
            name = self.registry.name_of(var)
            if name is not None:
                assignment[name] = value
        logger.debug("SAT over %d clauses (%s)", len(clauses), stats)
        return SolveResult(satisfiable=True, assignment=assignment, stats=stats)

    def find_conflicts(self, clauses: Sequence[Clause], known_unsat: bool = False) -> list[int]:
        """Indices of clauses whose individual removal makes the formula SAT.

        This re-solves once per clause. It approximates a minimal
        unsatisfiable subset; it is not one. Returns an empty list when the
        formula is already satisfiable. Pass ``known_unsat`` when the caller
        has already solved the full formula to skip that check.
        """
        if not known_unsat and self.solve(clauses).satisfiable:
            return []

        conflicts: list[int] = []
        for i in range(len(clauses)):
            reduced = [c for j, c in enumerate(clauses) if j != i]
            if self.solve(reduced).satisfiable:
                conflicts.append(i)
        return conflicts

    # =========================================================================
    # Search
    # =========================================================================

    def _dpll(self, clauses: list[Clause]) -> Assignment | None:
        assignment: Assignment = {}
        trail: list[int] = []
        # Open branch points: (clauses, trail length before the branch, variable)
        branches: list[tuple[list[Clause], int, int]] = []

        active = self._simplify(clauses, assignment, trail)
        while True:
            if active is not None:
                chosen = _first_unassigned(active, assignment)
                if chosen is None:
                    return assignment
                self._check_budget()
                self._stats.decisions += 1
                branches.append((active, len(trail), chosen))
                assignment[chosen] = True
                trail.append(chosen)
                active = self._simplify(active, assignment, trail)
                continue

            if not branches:
                return None
            parent, mark, chosen = branches.pop()
            while len(trail) > mark:
                del assignment[trail.pop()]
            self._check_budget()
            self._stats.decisions += 1
            assignment[chosen] = False
            trail.append(chosen)
            active = self._simplify(parent, assignment, trail)

    def _simplify(
        self, clauses: list[Clause], assignment: Assignment, trail: list[int]
    ) -> list[Clause] | None:
        """Unit propagation and pure literal elimination; None on conflict.

        Extends ``assignment`` in place and records every variable it sets on
        ``trail``. Returns the clauses still open.
        """
        pending: list[Clause | None] = list(clauses)

        # Unit propagation
        changed = True
        while changed:
            changed = False
            for i, c in enumerate(pending):
                if c is None:
                    continue
                satisfied, remaining = _reduce(c, assignment)
                if satisfied:
                    pending[i] = None
                    continue
                if not remaining:
                    self._stats.conflicts += 1
                    return None
                if len(remaining) == 1:
                    lit = remaining[0]
                    assignment[abs(lit)] = lit > 0
                    trail.append(abs(lit))
                    pending[i] = None
                    self._stats.propagations += 1
                    changed = True

        # Pure literal elimination
        polarity: dict[int, int] = {}
        for c in pending:
            if c is None:
                continue
            for lit in c:
                var = abs(lit)
                if var in assignment:
                    continue
                sign = 1 if lit > 0 else -1
                if var not in polarity:
                    polarity[var] = sign
                elif polarity[var] != sign:
                    polarity[var] = 0
        for var, sign in polarity.items():
            if sign != 0 and var not in assignment:
                assignment[var] = sign > 0
                trail.append(var)
                self._stats.propagations += 1

        active: list[Clause] = []
        for c in pending:
            if c is None:
                continue
            satisfied, remaining = _reduce(c, assignment)
            if satisfied:
                continue
            if not remaining:
                self._stats.conflicts += 1
                return None
            active.append(remaining)

        return active

    def _check_budget(self) -> None:
        if self.budget is None:
            return
        if self.budget.max_decisions is not None and self._stats.decisions >= self.budget.max_decisions:
            raise SearchBudgetExceeded(
                f"Decision budget of {self.budget.max_decisions} exhausted"
            )
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchBudgetExceeded(
                f"Search exceeded {self.budget.timeout_seconds}s timeout"
            )


def _reduce(c: Clause, assignment: Assignment) -> tuple[bool, Clause]:
    """Return (satisfied, unassigned literals) for a clause."""
    remaining: list[int] = []
    for lit in c:
        value = assignment.get(abs(lit))
        if value is None:
            remaining.append(lit)
        elif value == (lit > 0):
            return True, ()
    return False, tuple(remaining)


def _first_unassigned(clauses: list[Clause], assignment: Assignment) -> int | None:
    for c in clauses:
        for lit in c:
            if abs(lit) not in assignment:
                return abs(lit)
    return None
