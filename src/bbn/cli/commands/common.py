"""Helpers shared by CLI commands."""

import re
import sys
from pathlib import Path

from rich.console import Console

from bbn.core.cpt import VALUE_LETTERS
from bbn.core.errors import InferenceError
from bbn.core.network_lang import NetworkDocument, ParseError, parse_network

console = Console()


def fail(message: str):
    console.print(f"[red]✗ {message}[/red]")
    sys.exit(1)


def read_text(file: str) -> str:
    path = Path(file)
    if not path.exists():
        fail(f"File not found: {file}")
    return path.read_text()


def load_document(file: str) -> NetworkDocument:
    text = read_text(file)
    try:
        return parse_network(text)
    except (ParseError, InferenceError) as e:
        fail(f"Parse error: {e}")


def parse_assignment(text: str, allow_bare: bool = False) -> tuple[str, str | None]:
    """'alarm=T' -> ('alarm', 'T'). With allow_bare, 'alarm' -> ('alarm', None)."""
    match = re.fullmatch(r"\s*([\w\-]+)\s*(?:=\s*(\S+))?\s*", text)
    if not match:
        fail(f"Expected NAME=T|F, got: {text}")

    name, value = match.groups()
    if value is None and not allow_bare:
        fail(f"Missing value in: {text}")
    if value is not None and value not in VALUE_LETTERS:
        fail(f"Value for '{name}' must be T or F, got: {value}")
    return name, value
