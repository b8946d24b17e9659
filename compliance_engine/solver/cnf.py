"""Proposition registry and CNF construction helpers.

Propositions are namespaced strings (``scope:kind:id``) interned to positive
integer variables. A literal is a signed variable: ``v`` asserts the
proposition, ``-v`` denies it. A clause is a non-empty tuple of literals and
a formula (CNF) is a list of clauses, implicitly conjoined.
"""

from __future__ import annotations

from typing import Iterable, Sequence

Literal = int
Clause = tuple[int, ...]
CNF = list[Clause]


class PropositionRegistry:
    """Interns proposition names as integer variables.

    Ids are assigned 1..n in first-seen order. A registry belongs to exactly
    one validation run; create a new one per run instead of sharing.
    """

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}
        self._names: dict[int, str] = {}

    def variable(self, name: str) -> int:
        """Get or create the variable id for a proposition."""
        var = self._ids.get(name)
        if var is None:
            var = len(self._ids) + 1
            self._ids[name] = var
            self._names[var] = name
        return var

    def pos(self, name: str) -> Literal:
        return self.variable(name)

    def neg(self, name: str) -> Literal:
        return -self.variable(name)

    def name_of(self, var: int) -> str | None:
        return self._names.get(abs(var))

    def reset(self) -> None:
        self._ids.clear()
        self._names.clear()

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, name: object) -> bool:
        return name in self._ids


# =============================================================================
# Combinators
# =============================================================================

def clause(*literals: Literal) -> Clause:
    """Build a clause, rejecting empty clauses and the zero literal."""
    if not literals:
        raise ValueError("A clause must contain at least one literal")
    if any(lit == 0 for lit in literals):
        raise ValueError("0 is not a valid literal")
    return tuple(literals)


def implies(a: Literal, b: Literal) -> Clause:
    """a → b, i.e. (¬a ∨ b)."""
    return clause(-a, b)


def iff(a: Literal, b: Literal) -> CNF:
    """a ↔ b, i.e. (¬a ∨ b) ∧ (a ∨ ¬b)."""
    return [clause(-a, b), clause(a, -b)]


def mutual_exclusion(a: Literal, b: Literal) -> CNF:
    """a and b are not both true."""
    return [clause(-a, -b)]


def at_least_one(literals: Sequence[Literal]) -> CNF:
    return [clause(*literals)]


def at_most_one(literals: Sequence[Literal]) -> CNF:
    """Pairwise encoding: one negated-pair clause per pair of literals."""
    clauses: CNF = []
    for i in range(len(literals)):
        for j in range(i + 1, len(literals)):
            clauses.append(clause(-literals[i], -literals[j]))
    return clauses


def exactly_one(literals: Sequence[Literal]) -> CNF:
    return [*at_least_one(literals), *at_most_one(literals)]


def evaluate(clauses: Iterable[Clause], assignment: dict[int, bool]) -> bool:
    """True iff every clause has a literal made true by the assignment.

    Variables missing from the assignment make their literals false.
    """
    for c in clauses:
        if not any(assignment.get(abs(lit), None) == (lit > 0) for lit in c):
            return False
    return True
