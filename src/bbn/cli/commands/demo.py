"""Run the burglary example."""

from bbn.cli.commands.common import console
from bbn.core.examples import BURGLARY_SCENARIOS, burglary_network
from bbn.core.inference import (
    format_outcome,
    format_probability,
    normalized_posterior,
    predict_outcome,
)


def add_subparser(subparsers):
    parser = subparsers.add_parser("demo", help="Run the burglary network scenarios")
    parser.set_defaults(func=run_demo)


def run_demo(args):
    network = burglary_network()

    for scenario in BURGLARY_SCENARIOS:
        console.print(f"[dim]{scenario.description}[/dim]")
        if scenario.predict:
            outcome = predict_outcome(network, scenario.target, scenario.evidence)
            console.print(format_outcome(outcome))
        else:
            p = normalized_posterior(network, scenario.target, scenario.evidence)
            console.print(format_probability(p))
        console.print()
