"""
Pytest configuration and fixtures for fsakit tests.

Provides the reference automata used across the suite.
"""

import pytest

from fsakit import Automaton


def build(states, alphabet, transitions, start_states, accept_states):
    """Build an automaton from compact ``(source, symbol, targets)`` triples."""
    return Automaton(
        {
            "states": list(states),
            "alphabet": list(alphabet),
            "transitions": [
                {"from": source, "input": symbol, "to": list(targets)}
                for source, symbol, targets in transitions
            ],
            "start_states": list(start_states),
            "accept_states": list(accept_states),
        }
    )


@pytest.fixture
def ends_with_ab():
    """
    NFA over {a, b} accepting strings that end in "ab".
    """
    return build(
        ["q0", "q1", "q2"],
        ["a", "b"],
        [
            ("q0", "a", ["q0", "q1"]),
            ("q0", "b", ["q0"]),
            ("q1", "b", ["q2"]),
        ],
        ["q0"],
        ["q2"],
    )


@pytest.fixture
def even_zeros():
    """
    DFA over {0, 1} accepting strings with an even number of 0s.
    """
    return build(
        ["q0", "q1"],
        ["0", "1"],
        [
            ("q0", "1", ["q0"]),
            ("q0", "0", ["q1"]),
            ("q1", "0", ["q0"]),
            ("q1", "1", ["q1"]),
        ],
        ["q0"],
        ["q0"],
    )


@pytest.fixture
def epsilon_then_b():
    """
    NFA where q0 reaches q1 by epsilon and q1 reads 'b' into q2.
    """
    return build(
        ["q0", "q1", "q2"],
        ["b"],
        [
            ("q0", "ε", ["q1"]),
            ("q1", "b", ["q2"]),
        ],
        ["q0"],
        ["q2"],
    )


@pytest.fixture
def epsilon_loops():
    """
    NFA with an epsilon cycle between q0 and q1 and an epsilon exit from q2.

    Accepts strings containing at least one 'b' after any number of 'a's.
    """
    return build(
        ["q0", "q1", "q2"],
        ["a", "b"],
        [
            ("q0", "ε", ["q1"]),
            ("q1", "b", ["q2"]),
            ("q0", "a", ["q0"]),
            ("q1", "a", ["q1"]),
            ("q2", "a", ["q2"]),
            ("q2", "b", ["q2"]),
        ],
        ["q0"],
        ["q2"],
    )
