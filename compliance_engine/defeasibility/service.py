"""Defeasibility engine: non-monotonic status of legal rules.

A rule is Active unless an effective defeat reaches it:

- Prefers(R, attacker) neutralizes the attack.
- An Undercuts edge is effective on its own; a Rebuts edge only when
  Prefers(attacker, R) exists.
- If the attacker is itself under an attack from some B that it does not
  prefer itself over, R is Reinstated by B; otherwise R is Defeated.

Only the first effective incoming defeat of a rule decides its status.
"""

from __future__ import annotations

import logging

from compliance_engine.core.ontology import (
    DEFEAT_RELATIONS,
    DefeatMechanism,
    Entity,
    EntityType,
    Model,
    Relation,
    RelationType,
)
from compliance_engine.defeasibility.schemas import (
    DefaultHierarchy,
    HierarchyEdge,
    HierarchyNode,
    RuleEvaluation,
    RuleStatus,
)

logger = logging.getLogger(__name__)


def _mechanism(defeat: Relation) -> DefeatMechanism:
    if defeat.type == RelationType.UNDERCUTS:
        return DefeatMechanism.UNDERCUTTING
    return DefeatMechanism.REBUTTING


class _DefeatGraph:
    """Defeat and preference edges of one model."""

    def __init__(self, model: Model):
        self.rules: dict[str, Entity] = {r.id: r for r in model.entities_of(EntityType.RULE)}
        self.defeats: list[Relation] = model.relations_of(*DEFEAT_RELATIONS)
        self.prefers: set[tuple[str, str]] = {
            (p.source, p.target) for p in model.relations_of(RelationType.PREFERS)
        }

    def incoming(self, rule_id: str) -> list[Relation]:
        return [d for d in self.defeats if d.target == rule_id]

    def outgoing(self, rule_id: str) -> list[Relation]:
        return [d for d in self.defeats if d.source == rule_id]

    def prefers_over(self, preferred: str, over: str) -> bool:
        return (preferred, over) in self.prefers

    def is_effective(self, defeat: Relation) -> bool:
        if self.prefers_over(defeat.target, defeat.source):
            return False
        if defeat.type == RelationType.UNDERCUTS:
            return True
        return self.prefers_over(defeat.source, defeat.target)

    def reinstater_of(self, attacker: str) -> str | None:
        """First B attacking `attacker` that `attacker` is not preferred over."""
        for defeat in self.incoming(attacker):
            if not self.prefers_over(attacker, defeat.source):
                return defeat.source
        return None


def _evaluate_rule(rule: Entity, graph: _DefeatGraph) -> RuleEvaluation:
    evaluation = RuleEvaluation(
        rule_id=rule.id,
        rule_name=rule.name,
        inferential_strength=rule.inferential_strength,
    )

    for defeat in graph.incoming(rule.id):
        if defeat.source not in graph.rules:
            continue
        if not graph.is_effective(defeat):
            continue

        evaluation.defeated_by = defeat.source
        evaluation.defeat_mechanism = _mechanism(defeat)

        reinstater = graph.reinstater_of(defeat.source)
        if reinstater is not None:
            evaluation.status = RuleStatus.REINSTATED
            evaluation.reinstated = True
            evaluation.reinstated_by = reinstater
        else:
            evaluation.status = RuleStatus.DEFEATED
        break

    return evaluation


def evaluate_defeasibility(model: Model) -> list[RuleEvaluation]:
    """Compute the status of every Rule entity in a model.

    Args:
        model: Usually a Law Model carrying Rule entities and
            Rebuts/Undercuts/Prefers relations.

    Returns:
        One RuleEvaluation per rule, in entity order.
    """
    graph = _DefeatGraph(model)
    results = [_evaluate_rule(rule, graph) for rule in graph.rules.values()]

    defeated = sum(1 for r in results if r.status == RuleStatus.DEFEATED)
    logger.debug("Evaluated %d rules in %s, %d defeated", len(results), model.context, defeated)
    return results


def build_default_hierarchy(model: Model) -> DefaultHierarchy:
    """Layer rules from general defaults down to specific exceptions.

    level = (rules this rule defeats) - (rules defeating it). Nodes are
    sorted by level, highest first; ties keep entity order.
    """
    graph = _DefeatGraph(model)
    hierarchy = DefaultHierarchy()

    for rule in graph.rules.values():
        defeated_by = graph.incoming(rule.id)
        hierarchy.nodes.append(HierarchyNode(
            id=rule.id,
            name=rule.name,
            strength=rule.inferential_strength,
            level=len(graph.outgoing(rule.id)) - len(defeated_by),
        ))
        for d in defeated_by:
            hierarchy.edges.append(HierarchyEdge(source=d.source, target=rule.id, type=d.type))

    hierarchy.nodes.sort(key=lambda n: n.level, reverse=True)
    return hierarchy
