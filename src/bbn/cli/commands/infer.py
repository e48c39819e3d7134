"""
Inference commands.
"""

from bbn.cli.commands.common import console, fail, load_document
from bbn.core.errors import InferenceError
from bbn.core.inference import (
    branch_terms,
    format_outcome,
    format_probability,
    normalized_posterior,
    predict_outcome,
)
from bbn.core.network_lang import format_query


def add_subparser(subparsers):
    parser = subparsers.add_parser("infer", help="Run every query in a .bbn file")
    parser.add_argument("file", help="Path to .bbn file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show branch terms")
    parser.set_defaults(func=run_infer)


def run_infer(args):
    doc = load_document(args.file)
    network = doc.network

    stats = network.stats()
    console.print(f"[dim]Loaded {network.name}: {stats['nodes']} nodes, {stats['edges']} edges, {stats['entries']} entries[/dim]")

    if not doc.queries:
        console.print("No queries.")
        return

    failures = 0
    for q in doc.queries:
        console.print(f"\n[bold]{format_query(q)}[/bold]")
        try:
            if args.verbose:
                terms = branch_terms(network, q.target, q.evidence)
                console.print(f"  [dim]T-term = {terms.true_term:.6g}, F-term = {terms.false_term:.6g}, sum = {terms.total:.6g}[/dim]")

            if q.is_prediction:
                outcome = predict_outcome(network, q.target_mapping(), q.evidence)
                console.print(f"  {format_outcome(outcome)}")
            else:
                p = normalized_posterior(network, q.target_mapping(), q.evidence)
                console.print(f"  {format_probability(p)}")
        except InferenceError as e:
            failures += 1
            console.print(f"  [red]✗ {e}[/red]")

    if failures:
        fail(f"{failures} of {len(doc.queries)} queries failed")
