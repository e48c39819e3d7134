"""Print a network's structure and CPTs."""

from rich.table import Table

from bbn.cli.commands.common import console, fail, load_document
from bbn.core.cpt import format_value
from bbn.core.errors import CyclicNetworkError


def add_subparser(subparsers):
    parser = subparsers.add_parser("show", help="Show nodes and CPT tables")
    parser.add_argument("file", help="Path to .bbn file")
    parser.set_defaults(func=run_show)


def run_show(args):
    doc = load_document(args.file)
    network = doc.network

    try:
        order = network.topological_order()
    except CyclicNetworkError as e:
        fail(str(e))

    console.print(f"[bold]{network.name}[/bold]")
    for node in order:
        parents = network.parents_of(node)

        table = Table(title=node.name if not parents else f"{node.name} | {', '.join(p.name for p in parents)}")
        table.add_column(node.name)
        for p in parents:
            table.add_column(p.name)
        table.add_column("P", justify="right")

        for key, prob in node.cpt.items():
            table.add_row(*(format_value(v) for v in key), f"{prob:.4g}")

        console.print(table)
