"""Validate a network file."""

from bbn.cli.commands.common import console, fail, load_document
from bbn.core.network import DEFAULT_TOLERANCE


def add_subparser(subparsers):
    parser = subparsers.add_parser("check", help="Check CPTs and acyclicity")
    parser.add_argument("file", help="Path to .bbn file")
    parser.add_argument("--tolerance", type=float, default=DEFAULT_TOLERANCE, help="Sum-to-one tolerance")
    parser.set_defaults(func=run_check)


def run_check(args):
    doc = load_document(args.file)
    problems = doc.network.validate(args.tolerance)

    if not problems:
        console.print(f"[green]✓ {doc.network.name}: {len(doc.network)} nodes OK[/green]")
        return

    for problem in problems:
        console.print(f"  [yellow]{problem}[/yellow]")
    fail(f"{len(problems)} problems in {doc.network.name}")
