# src/bbn/core/errors.py
"""
Errors raised by network construction and inference.

Every failure is a lookup failure against the network or the caller's
assignments. None of them are retried: inputs have to change first.
"""


class InferenceError(Exception):
    """Base class for everything the engine raises."""


class MissingEvidenceError(InferenceError):
    """A non-target node has no value in the evidence."""

    def __init__(self, node: str):
        self.node = node
        super().__init__(f"No evidence for node '{node}'")


class MissingEntryError(InferenceError, KeyError):
    """A CPT has no probability for the assignment that was looked up."""

    def __init__(self, node: str, key: str):
        self.node = node
        self.key = key
        super().__init__(f"CPT of '{node}' has no entry for key '{key}'")

    def __str__(self) -> str:
        return self.args[0]


class MultipleOrZeroTargetsError(InferenceError):
    """The target assignment does not name exactly one query node."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Expected exactly one target node, got {count}")


class CyclicNetworkError(InferenceError):
    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__(f"Network contains a cycle: {' -> '.join(cycle)}")


class UnknownNodeError(InferenceError, KeyError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown node: '{name}'")

    def __str__(self) -> str:
        return self.args[0]


class InvalidValueError(InferenceError, ValueError):
    """A value is neither T nor F."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Expected 'T' or 'F', got {value!r}")


class ImpossibleEvidenceError(InferenceError):
    """The evidence has probability 0, so no posterior exists."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Evidence has zero probability; cannot normalize over '{target}'")
