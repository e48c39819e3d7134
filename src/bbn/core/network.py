# src/bbn/core/network.py
"""
Nodes and networks.

The Network is an arena: it owns every Node in a list, and a node refers
to its parents by their index in that list. Parent order is significant
because it fixes the position of each parent's value in CPT keys.
"""

import copy
import logging
from dataclasses import dataclass, field

from bbn.core.cpt import CPT, Assignment, all_assignments, format_key
from bbn.core.errors import CyclicNetworkError, UnknownNodeError


logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-9


@dataclass
class Node:
    """A binary variable with ordered parents and one CPT."""
    name: str
    index: int = -1  # handle in the owning network; -1 until added
    parents: list[int] = field(default_factory=list)
    cpt: CPT = field(default_factory=CPT)

    def __post_init__(self):
        self.cpt.owner = self.name

    def add_parent(self, parent: "Node") -> None:
        if parent.index < 0:
            raise ValueError(f"Parent '{parent.name}' is not part of a network")
        self.parents.append(parent.index)

    def probability(self, assignment: Assignment) -> float:
        return self.cpt.lookup(assignment)


@dataclass
class Network:
    name: str = "network"
    nodes: list[Node] = field(default_factory=list)
    index: dict[str, int] = field(default_factory=dict)

    def add_node(self, name: str) -> Node:
        if name in self.index:
            raise ValueError(f"Duplicate node: '{name}'")
        node = Node(name=name, index=len(self.nodes))
        self.nodes.append(node)
        self.index[name] = node.index
        return node

    def add_parent(self, child, parent) -> None:
        """Attach parent to child; both given as names or Nodes."""
        child_node = self._resolve(child)
        parent_node = self._resolve(parent)
        child_node.add_parent(parent_node)

    def _resolve(self, ref) -> Node:
        if isinstance(ref, Node):
            ref = ref.name
        return self.get(ref)

    def get(self, name: str) -> Node:
        if name not in self.index:
            raise UnknownNodeError(name)
        return self.nodes[self.index[name]]

    def __getitem__(self, name: str) -> Node:
        return self.get(name)

    def __contains__(self, name) -> bool:
        return name in self.index

    def __iter__(self):
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def names(self) -> list[str]:
        return [n.name for n in self.nodes]

    def parents_of(self, node) -> list[Node]:
        node = self._resolve(node)
        return [self.nodes[i] for i in node.parents]

    def children_of(self, node) -> list[Node]:
        node = self._resolve(node)
        return [n for n in self.nodes if node.index in n.parents]

    def topological_order(self) -> list[Node]:
        """
        Parents before children, ties broken by insertion order.

        Raises CyclicNetworkError naming one cycle if the graph has any.
        """
        visited: set[int] = set()
        on_path: set[int] = set()
        order: list[Node] = []

        for root in self.nodes:
            if root.index in visited:
                continue
            # (node, iterator over the parents not yet visited)
            stack = [(root.index, iter(root.parents))]
            on_path.add(root.index)
            while stack:
                i, parents = stack[-1]
                for p in parents:
                    if p in on_path:
                        path = [j for j, _ in stack]
                        start = path.index(p)
                        cycle = [self.nodes[j].name for j in path[start:]] + [self.nodes[p].name]
                        raise CyclicNetworkError(cycle)
                    if p not in visited:
                        on_path.add(p)
                        stack.append((p, iter(self.nodes[p].parents)))
                        break
                else:
                    stack.pop()
                    on_path.discard(i)
                    visited.add(i)
                    order.append(self.nodes[i])

        return order

    def validate(self, tolerance: float = DEFAULT_TOLERANCE) -> list[str]:
        """
        Check the modeling contract the engine relies on but never enforces.

        Returns a list of human-readable problems; empty means valid.
        """
        problems = []

        try:
            self.topological_order()
        except CyclicNetworkError as e:
            problems.append(str(e))

        for node in self.nodes:
            expected = len(node.parents) + 1
            bad_lengths = sorted(node.cpt.key_lengths() - {expected})
            for length in bad_lengths:
                problems.append(
                    f"{node.name}: keys of length {length}, expected {expected} "
                    f"(own value + {len(node.parents)} parents)"
                )

            missing = [a for a in all_assignments(len(node.parents)) if a not in node.cpt.entries]
            if missing:
                keys = ", ".join(format_key(a) for a in missing)
                problems.append(f"{node.name}: missing entries {keys}")

            for suffix, total in node.cpt.complement_violations(tolerance):
                if len(suffix) != len(node.parents):
                    continue  # already reported as a length problem
                problems.append(
                    f"{node.name}: T/F entries for parents '{format_key(suffix)}' sum to {total:.6g}"
                )

        if problems:
            logger.debug("Network %s has %d problems", self.name, len(problems))
        return problems

    def stats(self) -> dict:
        return {
            "nodes": len(self.nodes),
            "edges": sum(len(n.parents) for n in self.nodes),
            "entries": sum(len(n.cpt) for n in self.nodes),
        }

    def copy(self) -> "Network":
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "nodes": [
                {
                    "name": n.name,
                    "parents": [self.nodes[i].name for i in n.parents],
                    "cpt": n.cpt.to_dict(),
                }
                for n in self.nodes
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Network":
        network = cls(name=data.get("name", "network"))

        for ndata in data["nodes"]:
            node = network.add_node(ndata["name"])
            for key, prob in ndata.get("cpt", {}).items():
                node.cpt.add_entry(key, prob)

        # parents may be listed before they are defined
        for ndata in data["nodes"]:
            for parent in ndata.get("parents", []):
                network.add_parent(ndata["name"], parent)

        return network
