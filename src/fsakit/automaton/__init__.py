"""Automaton model, simulation and subset construction."""

from fsakit.automaton.transition import EPSILON, Transition
from fsakit.automaton.validator import validate, validate_transition
from fsakit.automaton.automaton import Automaton
from fsakit.automaton.simulation import SimulationEngine, SimulationStep, simulate
from fsakit.automaton.converter import (
    ConversionResult,
    ConversionStep,
    NFAToDFAConverter,
    convert_nfa_to_dfa,
)

__all__ = [
    "EPSILON",
    "Transition",
    "validate",
    "validate_transition",
    "Automaton",
    "SimulationEngine",
    "SimulationStep",
    "simulate",
    "ConversionResult",
    "ConversionStep",
    "NFAToDFAConverter",
    "convert_nfa_to_dfa",
]
