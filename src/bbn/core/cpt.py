# src/bbn/core/cpt.py
"""
Conditional probability tables.

A CPT maps an assignment to a probability:

  (own value, parent_1 value, ..., parent_n value) -> P(own | parents)

Parents appear in the order they were declared on the node. Tables are
authored with T/F strings ("TFT") and stored as tuples of booleans.
"""

from dataclasses import dataclass, field
from itertools import product

from bbn.core.errors import InvalidValueError, MissingEntryError


Assignment = tuple[bool, ...]

VALUE_LETTERS = {"T": True, "F": False}


def parse_value(value) -> bool:
    """Accept True/False or "T"/"F"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value in VALUE_LETTERS:
        return VALUE_LETTERS[value]
    raise InvalidValueError(value)


def format_value(value: bool) -> str:
    return "T" if value else "F"


def parse_key(key) -> Assignment:
    """'TFT' -> (True, False, True). Tuples pass through."""
    if isinstance(key, str):
        return tuple(parse_value(ch) for ch in key)
    return tuple(parse_value(v) for v in key)


def format_key(assignment: Assignment) -> str:
    return "".join(format_value(v) for v in assignment)


def all_assignments(n_parents: int) -> list[Assignment]:
    """Every full key for a node with n parents, T before F."""
    return list(product((True, False), repeat=n_parents + 1))


@dataclass
class CPT:
    """P(node | parents) as a lookup table. No entry is ever computed."""
    owner: str = ""
    entries: dict[Assignment, float] = field(default_factory=dict)

    def add_entry(self, key, probability: float) -> None:
        self.entries[parse_key(key)] = float(probability)

    def lookup(self, key) -> float:
        assignment = parse_key(key)
        if assignment not in self.entries:
            raise MissingEntryError(self.owner, format_key(assignment))
        return self.entries[assignment]

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key) -> bool:
        return parse_key(key) in self.entries

    def items(self) -> list[tuple[Assignment, float]]:
        # True sorts after False, so invert for T-first ordering
        return sorted(self.entries.items(), key=lambda kv: tuple(not v for v in kv[0]))

    def key_lengths(self) -> set[int]:
        return {len(k) for k in self.entries}

    def complement_violations(self, tolerance: float = 1e-9) -> list[tuple[Assignment, float]]:
        """
        Parent suffixes whose T/F pair does not sum to 1.

        Returns (suffix, total) for each offending suffix. A suffix with only
        one of its two entries present is reported with the partial total.
        """
        totals: dict[Assignment, float] = {}
        counts: dict[Assignment, int] = {}
        for key, prob in self.entries.items():
            suffix = key[1:]
            totals[suffix] = totals.get(suffix, 0.0) + prob
            counts[suffix] = counts.get(suffix, 0) + 1

        violations = []
        for suffix in sorted(totals, key=lambda s: tuple(not v for v in s)):
            total = totals[suffix]
            if counts[suffix] != 2 or abs(total - 1.0) > tolerance:
                violations.append((suffix, total))
        return violations

    def to_dict(self) -> dict[str, float]:
        return {format_key(k): p for k, p in self.items()}

    @classmethod
    def from_dict(cls, data: dict, owner: str = "") -> "CPT":
        cpt = cls(owner=owner)
        for key, prob in data.items():
            cpt.add_entry(key, prob)
        return cpt
