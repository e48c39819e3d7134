"""
Ad hoc query against a network file, locally or through the API.
"""

import httpx

from bbn.cli import client
from bbn.cli.commands.common import console, fail, load_document, parse_assignment, read_text
from bbn.core.errors import InferenceError
from bbn.core.inference import (
    format_outcome,
    format_probability,
    normalized_posterior,
    predict_outcome,
)


def add_subparser(subparsers):
    parser = subparsers.add_parser("query", help="Posterior or prediction for one node")
    parser.add_argument("file", help="Path to .bbn file")
    parser.add_argument("target", help="NAME=T|F for a posterior, NAME alone for a prediction")
    parser.add_argument("--evidence", "-e", action="append", default=[], help="NAME=T|F (repeatable)")
    parser.add_argument("--remote", action="store_true", help="Send the query to the API server")
    parser.add_argument("--url", help=f"API base URL (default: {client.BASE_URL})")
    parser.set_defaults(func=run_query)


def run_query(args):
    name, value = parse_assignment(args.target, allow_bare=True)
    evidence = dict(parse_assignment(e) for e in args.evidence)
    target = {name: value or "?"}

    if args.remote:
        _run_remote(args, target, evidence, predict=value is None)
        return

    doc = load_document(args.file)
    try:
        if value is None:
            outcome = predict_outcome(doc.network, target, evidence)
            console.print(format_outcome(outcome))
        else:
            p = normalized_posterior(doc.network, target, evidence)
            console.print(format_probability(p))
    except InferenceError as e:
        fail(str(e))


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return response.text


def _run_remote(args, target: dict, evidence: dict, predict: bool):
    dsl = read_text(args.file)
    http = httpx.Client(base_url=args.url, timeout=60) if args.url else None

    try:
        if predict:
            result = client.predict(dsl, target, evidence, http=http)
            console.print(format_outcome(result["outcome"]))
        else:
            result = client.posterior(dsl, target, evidence, http=http)
            console.print(format_probability(result["probability"]))
    except httpx.HTTPStatusError as e:
        fail(f"Server error: {_error_detail(e.response)}")
    except httpx.HTTPError as e:
        fail(f"Error: {e}")
    finally:
        if http is not None:
            http.close()
