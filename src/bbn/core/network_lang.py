# src/bbn/core/network_lang.py
"""
A small line-oriented language for defining networks.

Syntax:
  network <name>
  node <name> [| <parent>, <parent>, ...]
  cpt <name>: <key>=<prob> <key>=<prob> ...
  ? <target>[=T|F] [| <node>=<T|F>, ...]

Keys are T/F strings: the node's own value, then its parents in the order
listed on the node line. A query with a value asks for a posterior; a query
without one asks for a prediction.
"""

import re
from dataclasses import dataclass, field

from bbn.core.cpt import VALUE_LETTERS, format_key
from bbn.core.network import Network


NAME = r"[A-Za-z_][\w\-]*"


@dataclass
class Query:
    target: str
    value: str | None = None
    evidence: dict[str, str] = field(default_factory=dict)

    @property
    def is_prediction(self) -> bool:
        return self.value is None

    def target_mapping(self) -> dict[str, str]:
        return {self.target: self.value or "?"}

    def to_dict(self) -> dict:
        return {"target": self.target, "value": self.value, "evidence": dict(self.evidence)}


@dataclass
class NetworkDocument:
    """Parsed network file."""
    network: Network
    queries: list[Query] = field(default_factory=list)


class ParseError(Exception):
    def __init__(self, message: str, line_num: int, line: str):
        self.line_num = line_num
        self.line = line
        super().__init__(f"Line {line_num}: {message}\n  {line}")


@dataclass
class _NodeDecl:
    name: str
    parents: list[str]
    line_num: int
    line: str


@dataclass
class _CPTDecl:
    name: str
    entries: list[tuple[str, float]]
    line_num: int
    line: str


class NetworkParser:
    def __init__(self):
        self._reset()

    def _reset(self):
        self.name = "network"
        self.nodes: list[_NodeDecl] = []
        self.cpts: list[_CPTDecl] = []
        self.queries: list[Query] = []
        self.query_lines: list[tuple[int, str]] = []

    def parse(self, text: str) -> NetworkDocument:
        self._reset()

        lines = text.split("\n")
        for i, line in enumerate(lines, 1):
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            try:
                self.parse_line(line, i)
            except ValueError as e:
                raise ParseError(str(e), i, line)

        return NetworkDocument(network=self.build(), queries=self.queries)

    def parse_line(self, line: str, line_num: int):
        if line.startswith("network "):
            self.parse_network(line)
        elif line.startswith("node "):
            self.parse_node(line, line_num)
        elif line.startswith("cpt "):
            self.parse_cpt(line, line_num)
        elif line.startswith("?"):
            self.parse_query(line, line_num)
        else:
            raise ValueError(f"Unknown syntax: {line}")

    def parse_network(self, line: str):
        match = re.fullmatch(rf"network\s+({NAME})", line)
        if not match:
            raise ValueError("Expected: network <name>")
        self.name = match.group(1)

    def parse_node(self, line: str, line_num: int):
        match = re.fullmatch(rf"node\s+({NAME})\s*(?:\|\s*(.*))?", line)
        if not match:
            raise ValueError("Expected: node <name> [| <parent>, ...]")

        name, parents_str = match.groups()
        parents = []
        if parents_str is not None:
            for part in parents_str.split(","):
                part = part.strip()
                if not re.fullmatch(NAME, part):
                    raise ValueError(f"Bad parent name: '{part}'")
                parents.append(part)

        if any(n.name == name for n in self.nodes):
            raise ValueError(f"Duplicate node: '{name}'")

        self.nodes.append(_NodeDecl(name, parents, line_num, line))

    def parse_cpt(self, line: str, line_num: int):
        match = re.fullmatch(rf"cpt\s+({NAME})\s*:\s*(.*)", line)
        if not match:
            raise ValueError("Expected: cpt <name>: <key>=<prob> ...")

        name, body = match.groups()
        entries = []
        for part in re.split(r"[\s,]+", body.strip()):
            if not part:
                continue
            em = re.fullmatch(r"([TF]+)=(\d*\.?\d+(?:[eE][-+]?\d+)?)", part)
            if not em:
                raise ValueError(f"Expected <key>=<prob>, got: {part}")
            entries.append((em.group(1), float(em.group(2))))

        if not entries:
            raise ValueError(f"No entries for cpt '{name}'")

        self.cpts.append(_CPTDecl(name, entries, line_num, line))

    def parse_assignments(self, text: str) -> dict[str, str]:
        result = {}
        for part in text.split(","):
            part = part.strip()
            if not part:
                continue
            am = re.fullmatch(rf"({NAME})\s*=\s*(\S+)", part)
            if not am:
                raise ValueError(f"Expected <node>=<T|F>, got: {part}")
            name, value = am.groups()
            if value not in VALUE_LETTERS:
                raise ValueError(f"Value for '{name}' must be T or F, got: {value}")
            result[name] = value
        return result

    def parse_query(self, line: str, line_num: int):
        body = line[1:].strip()
        target_str, _, evidence_str = body.partition("|")

        tm = re.fullmatch(rf"({NAME})\s*(?:=\s*(\S+))?", target_str.strip())
        if not tm:
            raise ValueError("Expected: ? <target>[=T|F] [| <node>=<T|F>, ...]")

        target, value = tm.groups()
        if value is not None and value not in VALUE_LETTERS:
            raise ValueError(f"Target value must be T or F, got: {value}")

        evidence = self.parse_assignments(evidence_str)
        self.queries.append(Query(target=target, value=value, evidence=evidence))
        self.query_lines.append((line_num, line))

    def build(self) -> Network:
        network = Network(name=self.name)

        for decl in self.nodes:
            network.add_node(decl.name)

        for decl in self.nodes:
            for parent in decl.parents:
                if parent not in network:
                    raise ParseError(f"Unknown parent: '{parent}'", decl.line_num, decl.line)
                network.add_parent(decl.name, parent)

        for decl in self.cpts:
            if decl.name not in network:
                raise ParseError(f"cpt for unknown node: '{decl.name}'", decl.line_num, decl.line)
            node = network[decl.name]
            for key, prob in decl.entries:
                node.cpt.add_entry(key, prob)

        for query, (line_num, line) in zip(self.queries, self.query_lines):
            if query.target not in network:
                raise ParseError(f"Query on unknown node: '{query.target}'", line_num, line)

        return network


def parse_network(text: str) -> NetworkDocument:
    parser = NetworkParser()
    return parser.parse(text)


def format_query(query: Query) -> str:
    target = query.target if query.value is None else f"{query.target}={query.value}"
    if not query.evidence:
        return f"? {target}"
    evidence = ", ".join(f"{k}={v}" for k, v in query.evidence.items())
    return f"? {target} | {evidence}"


def format_network(network: Network, queries: list[Query] | None = None) -> str:
    lines = [f"network {network.name}", ""]

    lines.append("# Nodes")
    for node in network:
        parents = network.parents_of(node)
        if parents:
            lines.append(f"node {node.name} | {', '.join(p.name for p in parents)}")
        else:
            lines.append(f"node {node.name}")
    lines.append("")

    lines.append("# CPTs")
    for node in network:
        if len(node.cpt):
            entries = " ".join(f"{format_key(k)}={p}" for k, p in node.cpt.items())
            lines.append(f"cpt {node.name}: {entries}")
    lines.append("")

    if queries:
        lines.append("# Queries")
        for query in queries:
            lines.append(format_query(query))
        lines.append("")

    return "\n".join(lines)
