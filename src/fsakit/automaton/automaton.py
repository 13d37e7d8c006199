"""Immutable finite automaton value object."""

import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from fsakit.automaton.transition import Transition
from fsakit.automaton.validator import validate

logger = logging.getLogger(__name__)


class Automaton:
    """A validated, immutable finite automaton.

    The same type represents both DFAs and NFAs; the kind is derived from
    the structure with ``is_dfa()`` / ``is_nfa()``. Construction validates
    the configuration once and builds a ``source -> symbol -> targets``
    index used by simulation and subset construction.

    Example:
        >>> automaton = Automaton({
        ...     "states": ["q0", "q1"],
        ...     "alphabet": ["a"],
        ...     "transitions": [{"from": "q0", "input": "a", "to": ["q1"]}],
        ...     "start_states": ["q0"],
        ...     "accept_states": ["q1"],
        ... })
        >>> automaton.is_dfa()
        True
    """

    def __init__(self, config: Mapping[str, Any]) -> None:
        validate(config)

        self._state_order: Tuple[str, ...] = tuple(config["states"])
        self._symbol_order: Tuple[str, ...] = tuple(config["alphabet"])
        self._transitions: Tuple[Transition, ...] = tuple(
            self._to_transition(t) for t in config["transitions"]
        )
        self._start_order: Tuple[str, ...] = tuple(dict.fromkeys(config["start_states"]))
        self._accept_order: Tuple[str, ...] = tuple(dict.fromkeys(config["accept_states"]))

        self._states = frozenset(self._state_order)
        self._alphabet = frozenset(self._symbol_order)
        self._start_states = frozenset(self._start_order)
        self._accept_states = frozenset(self._accept_order)

        self._index: Dict[str, Dict[str, Tuple[str, ...]]] = {}
        self._by_source: Dict[str, List[Transition]] = {}
        self._build_index()

        logger.debug(
            "Built %s with %d states, %d symbols, %d transitions",
            "DFA" if self.is_dfa() else "NFA",
            len(self._states),
            len(self._alphabet),
            len(self._transitions),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Automaton":
        """Build an automaton from the mapping produced by ``to_dict()``."""
        return cls(data)

    @staticmethod
    def _to_transition(entry: Union[Transition, Mapping[str, Any]]) -> Transition:
        if isinstance(entry, Transition):
            return entry
        return Transition(
            source=entry["from"], symbol=entry["input"], targets=tuple(entry["to"])
        )

    def _build_index(self) -> None:
        for trans in self._transitions:
            self._by_source.setdefault(trans.source, []).append(trans)
            by_symbol = self._index.setdefault(trans.source, {})
            existing = by_symbol.get(trans.symbol, ())
            # Several transitions may share (source, symbol); keep one copy of each target.
            by_symbol[trans.symbol] = tuple(dict.fromkeys(existing + trans.targets))

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def states(self) -> FrozenSet[str]:
        return self._states

    @property
    def alphabet(self) -> FrozenSet[str]:
        return self._alphabet

    @property
    def symbols(self) -> Tuple[str, ...]:
        """Alphabet symbols in declaration order."""
        return self._symbol_order

    @property
    def transitions(self) -> Tuple[Transition, ...]:
        return self._transitions

    @property
    def start_states(self) -> FrozenSet[str]:
        return self._start_states

    @property
    def accept_states(self) -> FrozenSet[str]:
        return self._accept_states

    def get_transitions(self, state: str, symbol: str) -> Tuple[str, ...]:
        """Return the targets reachable from ``state`` on ``symbol``.

        Returns an empty tuple if there is no such transition.
        """
        return self._index.get(state, {}).get(symbol, ())

    def transitions_from(
        self, state: str, symbol: Optional[str] = None
    ) -> List[Transition]:
        """Return the transitions leaving ``state``, optionally filtered by symbol."""
        leaving = self._by_source.get(state, [])
        if symbol is None:
            return list(leaving)
        return [t for t in leaving if t.symbol == symbol]

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def is_dfa(self) -> bool:
        """Return True if this automaton is deterministic.

        A DFA has exactly one start state, no epsilon transitions, and
        every transition has a single target.
        """
        if len(self._start_states) != 1:
            return False
        for trans in self._transitions:
            if trans.is_epsilon() or not trans.is_deterministic():
                return False
        return True

    def is_nfa(self) -> bool:
        return not self.is_dfa()

    # ------------------------------------------------------------------
    # Equality and serialization
    # ------------------------------------------------------------------

    def equals(self, other: "Automaton") -> bool:
        """Compare membership sets and transitions, ignoring order."""
        if not isinstance(other, Automaton):
            return False
        return (
            self._states == other._states
            and self._alphabet == other._alphabet
            and self._start_states == other._start_states
            and self._accept_states == other._accept_states
            and frozenset(self._transitions) == frozenset(other._transitions)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Automaton):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(
            (
                self._states,
                self._alphabet,
                self._start_states,
                self._accept_states,
                frozenset(self._transitions),
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to the mapping shape accepted by the constructor."""
        return {
            "states": list(self._state_order),
            "alphabet": list(self._symbol_order),
            "transitions": [t.to_dict() for t in self._transitions],
            "start_states": list(self._start_order),
            "accept_states": list(self._accept_order),
        }

    def __repr__(self) -> str:
        kind = "DFA" if self.is_dfa() else "NFA"
        return (
            f"Automaton({kind}, states={list(self._state_order)!r}, "
            f"alphabet={list(self._symbol_order)!r}, "
            f"transitions={len(self._transitions)})"
        )

    # ------------------------------------------------------------------
    # Derived automata
    # ------------------------------------------------------------------

    def with_state(self, state: str) -> "Automaton":
        """Return a copy with an extra state.

        Raises:
            InvalidAutomatonError: If the state is already declared or empty.
        """
        config = self.to_dict()
        config["states"].append(state)
        return Automaton(config)

    def with_transition(
        self, transition: Union[Transition, Mapping[str, Any]]
    ) -> "Automaton":
        """Return a copy with an extra transition, revalidated."""
        config = self.to_dict()
        config["transitions"].append(
            transition.to_dict() if isinstance(transition, Transition) else transition
        )
        return Automaton(config)

    def with_start_states(self, states: Iterable[str]) -> "Automaton":
        """Return a copy whose start states are replaced by ``states``."""
        config = self.to_dict()
        config["start_states"] = list(states)
        return Automaton(config)

    def with_accept_states(self, states: Iterable[str]) -> "Automaton":
        """Return a copy whose accept states are replaced by ``states``."""
        config = self.to_dict()
        config["accept_states"] = list(states)
        return Automaton(config)
