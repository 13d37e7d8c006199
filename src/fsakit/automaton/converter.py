"""NFA to DFA conversion by subset construction."""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple, Union

from fsakit.automaton.automaton import Automaton
from fsakit.automaton.simulation import SimulationEngine
from fsakit.automaton.transition import Transition
from fsakit.config import Config
from fsakit.exceptions import ConversionError

logger = logging.getLogger(__name__)


@dataclass
class ConversionStep:
    """Record of one (subset, symbol) pair processed during conversion.

    Attributes:
        current_subset: Name of the subset being expanded.
        symbol: Alphabet symbol that was followed.
        next_subset: Name of the resulting subset, or None if it is empty.
        is_new_subset: Whether the resulting subset was discovered here.
        transitions: DFA transitions recorded by this step.
    """

    current_subset: str
    symbol: str
    next_subset: Optional[str] = None
    is_new_subset: bool = False
    transitions: List[Transition] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_subset": self.current_subset,
            "symbol": self.symbol,
            "next_subset": self.next_subset,
            "is_new_subset": self.is_new_subset,
            "transitions": [t.to_dict() for t in self.transitions],
        }


@dataclass
class ConversionResult:
    """A converted DFA together with the steps that produced it."""

    dfa: Automaton
    steps: List[ConversionStep] = field(default_factory=list)


class NFAToDFAConverter:
    """Converts NFAs to equivalent DFAs using subset construction.

    Only subsets reachable from the epsilon closure of the start states are
    materialized, explored breadth-first. The resulting transition function
    is partial: a subset with no successor on a symbol has no transition
    for it, and the missing move means rejection. No trap state is added.
    """

    def __init__(self, config: Config = None):
        self.config = config or Config.default()

    def convert(
        self, nfa: Automaton, step_by_step: bool = False
    ) -> Union[Automaton, ConversionResult]:
        """Convert an NFA to an equivalent DFA.

        Args:
            nfa: The automaton to convert. Must be classified as an NFA.
            step_by_step: Also return one ConversionStep per processed
                (subset, symbol) pair.

        Returns:
            The DFA, or a ConversionResult when ``step_by_step`` is set.

        Raises:
            ConversionError: If ``nfa`` is already a DFA, two distinct
                subsets share a name, or the subset limit is exceeded.
        """
        if not nfa.is_nfa():
            raise ConversionError("Input automaton is not an NFA.")

        steps: Optional[List[ConversionStep]] = [] if step_by_step else None
        dfa = self._construct(nfa, steps)
        if steps is not None:
            return ConversionResult(dfa=dfa, steps=steps)
        return dfa

    def generate_subset_state_name(self, states: Iterable[str]) -> str:
        """Return the canonical name of a subset of NFA states.

        Members are sorted so that equal sets always share a name.
        """
        members = sorted(set(states))
        if not members:
            return self.config.empty_subset_name
        return self.config.subset_delimiter.join(members)

    @staticmethod
    def _move(nfa: Automaton, subset: Iterable[str], symbol: str) -> Set[str]:
        targets: Set[str] = set()
        for state in subset:
            targets.update(nfa.get_transitions(state, symbol))
        return targets

    def _construct(
        self, nfa: Automaton, steps: Optional[List[ConversionStep]]
    ) -> Automaton:
        start = SimulationEngine.compute_epsilon_closure(nfa, nfa.start_states)
        start_name = self.generate_subset_state_name(start)

        queue: Deque[Tuple[str, FrozenSet[str]]] = deque([(start_name, start)])
        visited: Dict[str, FrozenSet[str]] = {start_name: start}
        transitions: List[Transition] = []

        while queue:
            subset_name, subset = queue.popleft()

            for symbol in nfa.symbols:
                next_subset = SimulationEngine.compute_epsilon_closure(
                    nfa, self._move(nfa, subset, symbol)
                )
                if not next_subset:
                    if steps is not None:
                        steps.append(ConversionStep(subset_name, symbol))
                    continue

                next_name = self.generate_subset_state_name(next_subset)
                known = visited.get(next_name)
                is_new = known is None
                if is_new:
                    if len(visited) >= self.config.max_dfa_states:
                        raise ConversionError(
                            f"DFA exceeds {self.config.max_dfa_states} states."
                        )
                    visited[next_name] = next_subset
                    queue.append((next_name, next_subset))
                    logger.debug("Discovered subset {%s}", next_name)
                elif known != next_subset:
                    raise ConversionError(
                        f"Subsets {sorted(known)} and {sorted(next_subset)} "
                        f"share the name '{next_name}'."
                    )

                trans = Transition(source=subset_name, symbol=symbol, targets=(next_name,))
                transitions.append(trans)
                if steps is not None:
                    steps.append(
                        ConversionStep(
                            current_subset=subset_name,
                            symbol=symbol,
                            next_subset=next_name,
                            is_new_subset=is_new,
                            transitions=[trans],
                        )
                    )

        accept_states = [
            name
            for name, members in visited.items()
            if not members.isdisjoint(nfa.accept_states)
        ]
        logger.debug(
            "Converted NFA with %d states into DFA with %d states",
            len(nfa.states),
            len(visited),
        )
        return Automaton(
            {
                "states": list(visited),
                "alphabet": list(nfa.symbols),
                "transitions": transitions,
                "start_states": [start_name],
                "accept_states": accept_states,
            }
        )


def convert_nfa_to_dfa(
    nfa: Automaton, step_by_step: bool = False, config: Config = None
) -> Union[Automaton, ConversionResult]:
    """Convenience function to convert an NFA with a fresh converter.

    Args:
        nfa: The NFA to convert.
        step_by_step: Also return the conversion steps.
        config: Optional configuration.

    Returns:
        The DFA, or a ConversionResult when ``step_by_step`` is set.
    """
    converter = NFAToDFAConverter(config)
    return converter.convert(nfa, step_by_step=step_by_step)
