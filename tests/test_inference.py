# tests/test_inference.py
"""Tests for full-evidence inference."""

import copy
import logging

import pytest

from bbn.core.errors import (
    ImpossibleEvidenceError,
    InvalidValueError,
    MissingEntryError,
    MissingEvidenceError,
    MultipleOrZeroTargetsError,
    UnknownNodeError,
)
from bbn.core.examples import BURGLARY_SCENARIOS, burglary_network
from bbn.core.inference import (
    branch_terms,
    format_outcome,
    format_probability,
    joint_term_product,
    normalization_factor,
    normalized_posterior,
    posterior_distribution,
    predict_outcome,
)
from bbn.core.network import Network


EARTHQUAKE_EVIDENCE = {"burglary": "T", "alarm": "T", "p1Calls": "T", "p2Calls": "F"}
ALARM_EVIDENCE = {"earthquake": "T", "burglary": "F", "p1Calls": "T", "p2Calls": "F"}

FULL_ASSIGNMENT = {"burglary": "F", "earthquake": "T", "alarm": "T", "p1Calls": "T", "p2Calls": "F"}


@pytest.fixture
def network():
    return burglary_network()


def coin(p_true: float) -> Network:
    net = Network(name="coin")
    q = net.add_node("q")
    q.cpt.add_entry("T", p_true)
    q.cpt.add_entry("F", 1.0 - p_true)
    return net


# === Joint terms ===

def test_joint_term_true_branch(network):
    p = joint_term_product(network, {"earthquake": "T"}, EARTHQUAKE_EVIDENCE)
    assert p == pytest.approx(5.13e-7)


def test_joint_term_false_branch(network):
    p = joint_term_product(network, {"earthquake": "F"}, EARTHQUAKE_EVIDENCE)
    assert p == pytest.approx(2.532924e-4)


def test_joint_term_target_as_parent(network):
    # alarm is the query and a parent of both callers
    p = joint_term_product(network, {"alarm": "T"}, ALARM_EVIDENCE)
    assert p == pytest.approx(1.564434e-4)


def test_joint_term_needs_a_value(network):
    with pytest.raises(InvalidValueError):
        joint_term_product(network, {"alarm": "?"}, ALARM_EVIDENCE)


def test_bool_values_match_letters(network):
    letters = joint_term_product(network, {"earthquake": "T"}, EARTHQUAKE_EVIDENCE)
    bools = joint_term_product(
        network,
        {"earthquake": True},
        {k: v == "T" for k, v in EARTHQUAKE_EVIDENCE.items()},
    )
    assert letters == bools


def test_target_overrides_evidence_entry(network):
    evidence = dict(EARTHQUAKE_EVIDENCE, earthquake="F")
    p = joint_term_product(network, {"earthquake": "T"}, evidence)
    assert p == pytest.approx(5.13e-7)


# === Normalization ===

def test_branch_terms(network):
    terms = branch_terms(network, {"earthquake": "?"}, EARTHQUAKE_EVIDENCE)
    assert terms.target == "earthquake"
    assert terms.true_term == pytest.approx(5.13e-7)
    assert terms.false_term == pytest.approx(2.532924e-4)
    assert terms.total == pytest.approx(2.538054e-4)


def test_normalization_factor(network):
    z = normalization_factor(network, {"earthquake": "T"}, EARTHQUAKE_EVIDENCE)
    assert z == pytest.approx(2.538054e-4)


def test_normalization_factor_accepts_name(network):
    assert normalization_factor(network, "earthquake", EARTHQUAKE_EVIDENCE) == \
        normalization_factor(network, {"earthquake": "?"}, EARTHQUAKE_EVIDENCE)


# === Posterior ===

def test_earthquake_posterior(network):
    p = normalized_posterior(network, {"earthquake": "T"}, EARTHQUAKE_EVIDENCE)
    assert p == pytest.approx(0.00202, abs=1e-5)


@pytest.mark.parametrize("target", list(FULL_ASSIGNMENT))
def test_normalization_law(network, target):
    evidence = {k: v for k, v in FULL_ASSIGNMENT.items() if k != target}
    p_true = normalized_posterior(network, {target: "T"}, evidence)
    p_false = normalized_posterior(network, {target: "F"}, evidence)
    assert p_true + p_false == pytest.approx(1.0, abs=1e-9)
    assert 0.0 <= p_true <= 1.0


def test_posterior_distribution(network):
    dist = posterior_distribution(network, "earthquake", EARTHQUAKE_EVIDENCE)
    assert dist["T"] == pytest.approx(0.00202, abs=1e-5)
    assert dist["T"] + dist["F"] == pytest.approx(1.0)


def test_deterministic(network):
    first = normalized_posterior(network, {"earthquake": "T"}, EARTHQUAKE_EVIDENCE)
    second = normalized_posterior(network, {"earthquake": "T"}, EARTHQUAKE_EVIDENCE)
    assert first == second


def test_impossible_evidence():
    net = coin(0.5)
    c = net.add_node("c")
    c.add_parent(net["q"])
    c.cpt.add_entry("TT", 0.0)
    c.cpt.add_entry("TF", 0.0)
    c.cpt.add_entry("FT", 1.0)
    c.cpt.add_entry("FF", 1.0)

    with pytest.raises(ImpossibleEvidenceError):
        normalized_posterior(net, {"q": "T"}, {"c": "T"})
    assert predict_outcome(net, "q", {"c": "T"}) == "false"


# === Prediction ===

def test_alarm_prediction(network):
    assert predict_outcome(network, {"alarm": "?"}, ALARM_EVIDENCE) == "true"


def test_prediction_matches_branch_terms(network):
    terms = branch_terms(network, "alarm", ALARM_EVIDENCE)
    assert terms.true_term == pytest.approx(1.564434e-4)
    assert terms.false_term == pytest.approx(7.0220e-5, rel=1e-4)


def test_prediction_false():
    assert predict_outcome(coin(0.3), "q", {}) == "false"


def test_prediction_true():
    assert predict_outcome(coin(0.7), "q", {}) == "true"


def test_prediction_tie_is_false():
    assert predict_outcome(coin(0.5), "q", {}) == "false"


def test_prediction_logged(network, caplog):
    caplog.set_level(logging.INFO, logger="bbn.core.inference")
    predict_outcome(network, {"alarm": "?"}, ALARM_EVIDENCE)
    assert "The outcome is likely to be: true" in caplog.text


# === Order sensitivity ===

def test_parent_order_changes_result(network):
    baseline = normalized_posterior(network, {"earthquake": "T"}, EARTHQUAKE_EVIDENCE)

    swapped = network.copy()
    swapped["alarm"].parents.reverse()
    result = normalized_posterior(swapped, {"earthquake": "T"}, EARTHQUAKE_EVIDENCE)

    assert result != pytest.approx(baseline)


# === Caller state ===

@pytest.mark.parametrize("fn", [joint_term_product, normalization_factor, normalized_posterior, predict_outcome])
def test_caller_maps_unchanged(network, fn):
    target = {"earthquake": "T"}
    evidence = dict(EARTHQUAKE_EVIDENCE)
    before = (copy.deepcopy(target), copy.deepcopy(evidence), network.to_dict())

    fn(network, target, evidence)

    assert (target, evidence, network.to_dict()) == before


# === Errors ===

def test_missing_evidence(network):
    evidence = dict(EARTHQUAKE_EVIDENCE)
    del evidence["p2Calls"]
    with pytest.raises(MissingEvidenceError) as exc:
        normalized_posterior(network, {"earthquake": "T"}, evidence)
    assert exc.value.node == "p2Calls"


def test_missing_evidence_none_value(network):
    evidence = dict(EARTHQUAKE_EVIDENCE, burglary=None)
    with pytest.raises(MissingEvidenceError):
        joint_term_product(network, {"earthquake": "T"}, evidence)


def test_missing_entry(network):
    del network["alarm"].cpt.entries[(True, True, False)]
    with pytest.raises(MissingEntryError) as exc:
        normalization_factor(network, "earthquake", EARTHQUAKE_EVIDENCE)
    assert exc.value.node == "alarm"
    assert exc.value.key == "TTF"


@pytest.mark.parametrize("target", [{}, {"earthquake": "T", "alarm": "T"}])
def test_target_count(network, target):
    with pytest.raises(MultipleOrZeroTargetsError):
        normalized_posterior(network, target, EARTHQUAKE_EVIDENCE)


def test_posterior_needs_target_value(network):
    with pytest.raises(MultipleOrZeroTargetsError):
        normalized_posterior(network, "earthquake", EARTHQUAKE_EVIDENCE)


def test_unknown_target(network):
    with pytest.raises(UnknownNodeError):
        predict_outcome(network, {"tornado": "?"}, EARTHQUAKE_EVIDENCE)


def test_invalid_evidence_value(network):
    evidence = dict(EARTHQUAKE_EVIDENCE, alarm="yes")
    with pytest.raises(InvalidValueError):
        normalized_posterior(network, {"earthquake": "T"}, evidence)


def test_network_reusable_after_failure(network):
    with pytest.raises(MissingEvidenceError):
        normalized_posterior(network, {"earthquake": "T"}, {})
    p = normalized_posterior(network, {"earthquake": "T"}, EARTHQUAKE_EVIDENCE)
    assert p == pytest.approx(0.00202, abs=1e-5)


# === Example scenarios ===

def test_burglary_scenarios(network):
    posterior, prediction = BURGLARY_SCENARIOS
    p = normalized_posterior(network, posterior.target, posterior.evidence)
    assert format_probability(p).startswith("Probability = 0.00202")

    outcome = predict_outcome(network, prediction.target, prediction.evidence)
    assert format_outcome(outcome) == "The outcome is likely to be: true"
