"""Simulation of finite automata over input strings.

An automaton is run as a parallel exploration of its active state set:
the set starts as the epsilon closure of the start states and each input
symbol maps it to the closure of the union of matching targets. The same
loop serves DFAs and NFAs.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence, Union

from fsakit.automaton.automaton import Automaton
from fsakit.automaton.transition import EPSILON, Transition
from fsakit.exceptions import SimulationError

logger = logging.getLogger(__name__)

SimulationInput = Union[str, Sequence[str]]


@dataclass(frozen=True)
class SimulationStep:
    """One entry of a simulation trace.

    Attributes:
        current_states: Active states after the step.
        input_symbol: Symbol consumed, or None for the initial step.
        transition: The single transition explaining the move, if exactly
            one transition applied.
    """

    current_states: FrozenSet[str]
    input_symbol: Optional[str] = None
    transition: Optional[Transition] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_states": sorted(self.current_states),
            "input_symbol": self.input_symbol,
            "transition": self.transition.to_dict() if self.transition else None,
        }


SimulationResult = Union[bool, List[SimulationStep]]


class SimulationEngine:
    """Stateless operations for running an automaton over an input."""

    @staticmethod
    def compute_epsilon_closure(
        automaton: Automaton, states: Iterable[str]
    ) -> FrozenSet[str]:
        """Return every state reachable from ``states`` via epsilon moves only.

        The input states are always part of the result.
        """
        closure = set(states)
        stack = list(closure)
        while stack:
            state = stack.pop()
            for target in automaton.get_transitions(state, EPSILON):
                if target not in closure:
                    closure.add(target)
                    stack.append(target)
        return frozenset(closure)

    @staticmethod
    def simulate_step(
        automaton: Automaton, current_states: Iterable[str], symbol: str
    ) -> FrozenSet[str]:
        """Consume one symbol from ``current_states``.

        Raises:
            SimulationError: If ``symbol`` is not in the alphabet.
        """
        if symbol not in automaton.alphabet:
            raise SimulationError(
                f"Input symbol '{symbol}' not in automaton alphabet.", symbol=symbol
            )
        closure = SimulationEngine.compute_epsilon_closure(automaton, current_states)
        return SimulationEngine._advance(automaton, closure, symbol)

    @staticmethod
    def find_applicable_transitions(
        automaton: Automaton, current_states: Iterable[str], symbol: str
    ) -> List[Transition]:
        """Return all transitions on ``symbol`` leaving the closure of ``current_states``."""
        closure = SimulationEngine.compute_epsilon_closure(automaton, current_states)
        return SimulationEngine._transitions_on(automaton, closure, symbol)

    @staticmethod
    def simulate(
        automaton: Automaton, input: SimulationInput, step_by_step: bool = False
    ) -> SimulationResult:
        """Run ``automaton`` over ``input``.

        Args:
            automaton: The automaton to run.
            input: A string (one symbol per character) or a sequence of
                symbols.
            step_by_step: Return a trace instead of a verdict.

        Returns:
            True/False for acceptance, or a list of SimulationStep when
            ``step_by_step`` is set. The trace starts with the initial
            closure and ends early if the active set becomes empty.

        Raises:
            SimulationError: If any input symbol is not in the alphabet.
        """
        symbols = SimulationEngine._checked_symbols(automaton, input)
        current = SimulationEngine.compute_epsilon_closure(
            automaton, automaton.start_states
        )

        if step_by_step:
            steps = [SimulationStep(current_states=current)]
            for symbol in symbols:
                # current is already closed under epsilon moves.
                applicable = SimulationEngine._transitions_on(automaton, current, symbol)
                current = SimulationEngine._advance(automaton, current, symbol)
                steps.append(
                    SimulationStep(
                        current_states=current,
                        input_symbol=symbol,
                        transition=applicable[0] if len(applicable) == 1 else None,
                    )
                )
                if not current:
                    break
            return steps

        for position, symbol in enumerate(symbols):
            current = SimulationEngine._advance(automaton, current, symbol)
            if not current:
                logger.debug("No active states after position %d; rejecting", position)
                return False
        return not current.isdisjoint(automaton.accept_states)

    @staticmethod
    def accepts(automaton: Automaton, input: SimulationInput) -> bool:
        """Return True if ``automaton`` accepts ``input``."""
        return bool(SimulationEngine.simulate(automaton, input))

    @staticmethod
    def _advance(
        automaton: Automaton, closure: FrozenSet[str], symbol: str
    ) -> FrozenSet[str]:
        next_states = set()
        for state in closure:
            next_states.update(automaton.get_transitions(state, symbol))
        return SimulationEngine.compute_epsilon_closure(automaton, next_states)

    @staticmethod
    def _transitions_on(
        automaton: Automaton, closure: FrozenSet[str], symbol: str
    ) -> List[Transition]:
        result: List[Transition] = []
        for state in sorted(closure):
            result.extend(automaton.transitions_from(state, symbol))
        return result

    @staticmethod
    def _checked_symbols(automaton: Automaton, input: SimulationInput) -> List[str]:
        symbols = list(input)
        for position, symbol in enumerate(symbols):
            if symbol not in automaton.alphabet:
                raise SimulationError(
                    f"Input symbol '{symbol}' not in automaton alphabet.",
                    symbol=symbol,
                    position=position,
                )
        return symbols


def simulate(
    automaton: Automaton, input: SimulationInput, step_by_step: bool = False
) -> SimulationResult:
    """Convenience function to run an automaton over an input.

    Args:
        automaton: The automaton to run.
        input: The input string or symbol sequence.
        step_by_step: Return a trace instead of a verdict.

    Returns:
        Acceptance verdict or simulation trace.
    """
    return SimulationEngine.simulate(automaton, input, step_by_step=step_by_step)
