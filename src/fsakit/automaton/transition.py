"""Labeled transitions between automaton states."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Tuple

# Reserved label for transitions that consume no input.
EPSILON = "ε"


@dataclass(frozen=True, eq=False)
class Transition:
    """A labeled hyper-edge from one source state to one or more targets.

    Attributes:
        source: The state the transition leaves.
        symbol: The input symbol consumed, or EPSILON.
        targets: Destination states in declaration order, without duplicates.
    """

    source: str
    symbol: str
    targets: Tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.targets, list):
            object.__setattr__(self, "targets", tuple(self.targets))

    @classmethod
    def create(cls, source: str, symbol: str, targets: Sequence[str]) -> "Transition":
        """Validate the arguments and build a transition.

        Raises:
            InvalidAutomatonError: If any field is malformed or a target
                is repeated.
        """
        from fsakit.automaton.validator import validate_transition

        validate_transition(source, symbol, targets)
        return cls(source=source, symbol=symbol, targets=tuple(targets))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Transition":
        """Build a transition from a ``{"from", "input", "to"}`` mapping."""
        return cls.create(data.get("from"), data.get("input"), data.get("to"))

    def is_deterministic(self) -> bool:
        """Return True if the transition has exactly one target."""
        return len(self.targets) == 1

    def is_epsilon(self) -> bool:
        return self.symbol == EPSILON

    def equals(self, other: "Transition") -> bool:
        """Structural equality; target order is irrelevant."""
        return (
            self.source == other.source
            and self.symbol == other.symbol
            and frozenset(self.targets) == frozenset(other.targets)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transition):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.source, self.symbol, frozenset(self.targets)))

    def to_dict(self) -> Dict[str, Any]:
        return {"from": self.source, "input": self.symbol, "to": list(self.targets)}

    def __str__(self) -> str:
        return f"{self.source} --{self.symbol}--> [{', '.join(self.targets)}]"
