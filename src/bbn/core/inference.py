# src/bbn/core/inference.py
"""
Exact inference with full evidence.

Every node except a single query node has a known value. The joint
probability of a complete assignment is then a product of one CPT entry
per node:

  P(x_1, ..., x_n) = Π P(x_i | parents(x_i))

and Bayes' rule over the query's two values gives the posterior:

  P(q = v | e) = P(q = v, e) / (P(q = T, e) + P(q = F, e))

This is a restricted case of exact inference. There is no elimination over
unobserved variables: with more than one unknown the caller needs a
different algorithm.

None of these functions modify the network or the caller's mappings.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from bbn.core.cpt import Assignment, format_key, parse_value
from bbn.core.errors import (
    ImpossibleEvidenceError,
    MissingEvidenceError,
    MultipleOrZeroTargetsError,
)
from bbn.core.network import Network, Node


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BranchTerms:
    """Unnormalized joint terms for both values of the query node."""
    target: str
    true_term: float
    false_term: float

    @property
    def total(self) -> float:
        return self.true_term + self.false_term


def resolve_target(network: Network, target) -> tuple[str, str | bool | None]:
    """
    Split a target into (name, value).

    A target is either a bare node name or a mapping with exactly one entry.
    The value is None for a bare name.
    """
    if isinstance(target, str):
        name, value = target, None
    elif isinstance(target, Mapping):
        if len(target) != 1:
            raise MultipleOrZeroTargetsError(len(target))
        name, value = next(iter(target.items()))
    else:
        raise TypeError(f"Target must be a node name or a mapping, got {type(target).__name__}")

    # raises UnknownNodeError
    network.get(name)
    return name, value


def _value_of(name: str, query: str, query_value: bool, evidence: Mapping) -> bool:
    if name == query:
        return query_value
    if name not in evidence or evidence[name] is None:
        raise MissingEvidenceError(name)
    return parse_value(evidence[name])


def assignment_key(network: Network, node: Node, query: str, query_value: bool, evidence: Mapping) -> Assignment:
    """Own value first, then each parent's value in declared order."""
    own = _value_of(node.name, query, query_value, evidence)
    parents = tuple(
        _value_of(network.nodes[i].name, query, query_value, evidence)
        for i in node.parents
    )
    return (own,) + parents


def _joint(network: Network, query: str, query_value: bool, evidence: Mapping) -> float:
    prob = 1.0
    for node in network.nodes:
        key = assignment_key(network, node, query, query_value, evidence)
        prob *= node.probability(key)
    logger.debug("P(%s=%s, evidence) = %g", query, format_key((query_value,)), prob)
    return prob


def joint_term_product(network: Network, target: Mapping, evidence: Mapping) -> float:
    """
    Unnormalized probability of evidence ∪ target.

    The target's value is used as given, so it must be T or F.
    """
    name, value = resolve_target(network, target)
    if value is None:
        raise MultipleOrZeroTargetsError(0)
    return _joint(network, name, parse_value(value), evidence)


def branch_terms(network: Network, target, evidence: Mapping) -> BranchTerms:
    """Joint terms with the query forced to T and to F. The target's value is ignored."""
    name, _ = resolve_target(network, target)
    return BranchTerms(
        target=name,
        true_term=_joint(network, name, True, evidence),
        false_term=_joint(network, name, False, evidence),
    )


def normalization_factor(network: Network, target, evidence: Mapping) -> float:
    """Marginal probability of the evidence: sum over both query values."""
    return branch_terms(network, target, evidence).total


def normalized_posterior(network: Network, target: Mapping, evidence: Mapping) -> float:
    """P(target = given value | evidence)."""
    name, value = resolve_target(network, target)
    if value is None:
        raise MultipleOrZeroTargetsError(0)
    value = parse_value(value)

    terms = branch_terms(network, name, evidence)
    if terms.total == 0.0:
        raise ImpossibleEvidenceError(name)

    numerator = terms.true_term if value else terms.false_term
    return numerator / terms.total


def posterior_distribution(network: Network, target, evidence: Mapping) -> dict[str, float]:
    """{"T": P(q=T | e), "F": P(q=F | e)}"""
    terms = branch_terms(network, target, evidence)
    if terms.total == 0.0:
        raise ImpossibleEvidenceError(terms.target)
    return {"T": terms.true_term / terms.total, "F": terms.false_term / terms.total}


def predict_outcome(network: Network, target, evidence: Mapping) -> str:
    """
    MAP value of the query node: "true" or "false".

    Normalization is skipped since only the larger term matters.
    Ties go to "false".
    """
    terms = branch_terms(network, target, evidence)
    outcome = "true" if terms.true_term > terms.false_term else "false"
    logger.info("The outcome is likely to be: %s", outcome)
    return outcome


def format_probability(value: float) -> str:
    return f"Probability = {value}."


def format_outcome(outcome: str) -> str:
    return f"The outcome is likely to be: {outcome}"
