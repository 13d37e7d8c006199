"""
fsakit - Finite-state automata for Python.

This library models deterministic and non-deterministic finite automata,
runs them over input strings (including epsilon transitions) and converts
NFAs to equivalent DFAs by subset construction.

Example usage:
    >>> from fsakit import Automaton, simulate
    >>> nfa = Automaton({
    ...     "states": ["q0", "q1", "q2"],
    ...     "alphabet": ["a", "b"],
    ...     "transitions": [
    ...         {"from": "q0", "input": "a", "to": ["q0", "q1"]},
    ...         {"from": "q0", "input": "b", "to": ["q0"]},
    ...         {"from": "q1", "input": "b", "to": ["q2"]},
    ...     ],
    ...     "start_states": ["q0"],
    ...     "accept_states": ["q2"],
    ... })
    >>> simulate(nfa, "aab")
    True

For conversion:
    >>> from fsakit import convert_nfa_to_dfa
    >>> dfa = convert_nfa_to_dfa(nfa)
    >>> dfa.is_dfa()
    True
"""

import logging

from fsakit.automaton import (
    EPSILON,
    Automaton,
    ConversionResult,
    ConversionStep,
    NFAToDFAConverter,
    SimulationEngine,
    SimulationStep,
    Transition,
    convert_nfa_to_dfa,
    simulate,
    validate,
)
from fsakit.config import Config
from fsakit.exceptions import (
    AutomataError,
    ConversionError,
    InvalidAutomatonError,
    SimulationError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Model
    "EPSILON",
    "Transition",
    "Automaton",
    "validate",
    # Simulation
    "SimulationEngine",
    "SimulationStep",
    "simulate",
    # Conversion
    "NFAToDFAConverter",
    "ConversionStep",
    "ConversionResult",
    "convert_nfa_to_dfa",
    # Configuration
    "Config",
    # Exceptions
    "AutomataError",
    "InvalidAutomatonError",
    "SimulationError",
    "ConversionError",
    # Version
    "__version__",
]
