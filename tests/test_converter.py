"""Tests for NFA to DFA subset construction."""

import pytest

from fsakit import (
    Config,
    ConversionError,
    ConversionResult,
    ConversionStep,
    NFAToDFAConverter,
    Transition,
    convert_nfa_to_dfa,
    simulate,
)

from conftest import build


def kth_from_last_is_a(k):
    """NFA for strings over {a, b} whose k-th symbol from the end is 'a'."""
    states = [f"q{i}" for i in range(k + 1)]
    transitions = [("q0", "a", ["q0", "q1"]), ("q0", "b", ["q0"])]
    for i in range(1, k):
        transitions.append((f"q{i}", "a", [f"q{i + 1}"]))
        transitions.append((f"q{i}", "b", [f"q{i + 1}"]))
    return build(states, ["a", "b"], transitions, ["q0"], [f"q{k}"])


class TestConvert:
    def test_ends_with_ab_structure(self, ends_with_ab):
        dfa = convert_nfa_to_dfa(ends_with_ab)
        expected = build(
            ["q0", "q0, q1", "q0, q2"],
            ["a", "b"],
            [
                ("q0", "a", ["q0, q1"]),
                ("q0", "b", ["q0"]),
                ("q0, q1", "a", ["q0, q1"]),
                ("q0, q1", "b", ["q0, q2"]),
                ("q0, q2", "a", ["q0, q1"]),
                ("q0, q2", "b", ["q0"]),
            ],
            ["q0"],
            ["q0, q2"],
        )
        assert dfa.is_dfa()
        assert dfa == expected

    @pytest.mark.parametrize(
        "word,expected",
        [("", False), ("a", False), ("ab", True), ("aab", True), ("abab", True)],
    )
    def test_ends_with_ab_language(self, ends_with_ab, word, expected):
        dfa = convert_nfa_to_dfa(ends_with_ab)
        assert simulate(dfa, word) is expected
        assert simulate(ends_with_ab, word) is expected

    def test_epsilon_start_closure(self, epsilon_loops):
        dfa = convert_nfa_to_dfa(epsilon_loops)
        assert dfa.is_dfa()
        assert dfa.start_states == frozenset({"q0, q1"})
        for word in ["", "a", "b", "ab", "aab", "ba", "bba", "aabbb"]:
            assert simulate(dfa, word) == simulate(epsilon_loops, word), word

    def test_unreachable_states_are_dropped(self):
        nfa = build(
            ["q0", "q1", "q2", "dead"],
            ["0", "1"],
            [("q0", "0", ["q0", "q1"]), ("q1", "1", ["q2"]), ("dead", "0", ["q2"])],
            ["q0"],
            ["q2"],
        )
        dfa = convert_nfa_to_dfa(nfa)
        assert dfa.states == frozenset({"q0", "q0, q1", "q2"})
        assert not any("dead" in state for state in dfa.states)

    def test_partial_transition_function(self):
        nfa = build(
            ["q0", "q1", "q2"],
            ["0", "1"],
            [("q0", "0", ["q0", "q1"]), ("q1", "1", ["q2"])],
            ["q0"],
            ["q2"],
        )
        dfa = convert_nfa_to_dfa(nfa)
        assert dfa.get_transitions("q0", "1") == ()
        assert dfa.get_transitions("q2", "0") == ()
        assert "∅" not in dfa.states
        assert simulate(dfa, "01") is True
        assert simulate(dfa, "1") is False

    def test_multiple_start_states(self):
        nfa = build(
            ["s", "t", "f"],
            ["a", "b"],
            [("s", "a", ["f"]), ("t", "b", ["f"])],
            ["s", "t"],
            ["f"],
        )
        dfa = convert_nfa_to_dfa(nfa)
        assert dfa.start_states == frozenset({"s, t"})
        assert dfa.accept_states == frozenset({"f"})

    def test_start_subset_accepting(self):
        nfa = build(["q0", "q1"], ["a"], [("q0", "ε", ["q1"])], ["q0"], ["q1"])
        dfa = convert_nfa_to_dfa(nfa)
        assert dfa.states == frozenset({"q0, q1"})
        assert dfa.accept_states == frozenset({"q0, q1"})
        assert dfa.transitions == ()

    def test_exponential_family(self):
        dfa = convert_nfa_to_dfa(kth_from_last_is_a(3))
        assert len(dfa.states) == 8

    def test_does_not_modify_input(self, ends_with_ab):
        before = ends_with_ab.to_dict()
        convert_nfa_to_dfa(ends_with_ab)
        assert ends_with_ab.to_dict() == before

    def test_rejects_dfa(self, even_zeros):
        with pytest.raises(ConversionError, match="not an NFA"):
            convert_nfa_to_dfa(even_zeros)

    def test_rejects_dfa_step_by_step(self, even_zeros):
        with pytest.raises(ConversionError):
            NFAToDFAConverter().convert(even_zeros, step_by_step=True)


class TestSubsetNames:
    converter = NFAToDFAConverter()

    def test_sorted(self):
        assert self.converter.generate_subset_state_name(["q2", "q0", "q1"]) == "q0, q1, q2"

    def test_enumeration_order(self):
        names = {
            self.converter.generate_subset_state_name(order)
            for order in [("a", "b", "c"), ("c", "b", "a"), ("b", "c", "a")]
        }
        assert names == {"a, b, c"}

    def test_accepts_sets_and_generators(self):
        name = self.converter.generate_subset_state_name({"y", "x"})
        assert name == self.converter.generate_subset_state_name(s for s in "xy")

    def test_empty(self):
        assert self.converter.generate_subset_state_name([]) == "∅"

    def test_custom_config(self):
        converter = NFAToDFAConverter(Config(subset_delimiter="|", empty_subset_name="{}"))
        assert converter.generate_subset_state_name(["q1", "q0"]) == "q0|q1"
        assert converter.generate_subset_state_name(set()) == "{}"

    def test_collision(self):
        nfa = build(
            ["s", "a", "b", "a, b"],
            ["x", "y"],
            [("s", "x", ["a", "b"]), ("s", "y", ["a, b"])],
            ["s"],
            ["a"],
        )
        with pytest.raises(ConversionError, match="share the name 'a, b'"):
            convert_nfa_to_dfa(nfa)

    def test_collision_avoided_by_delimiter(self):
        nfa = build(
            ["s", "a", "b", "a, b"],
            ["x", "y"],
            [("s", "x", ["a", "b"]), ("s", "y", ["a, b"])],
            ["s"],
            ["a"],
        )
        dfa = convert_nfa_to_dfa(nfa, config=Config(subset_delimiter="+"))
        assert dfa.states == frozenset({"s", "a+b", "a, b"})


class TestLimits:
    def test_max_dfa_states(self, ends_with_ab):
        with pytest.raises(ConversionError, match="exceeds 2 states"):
            convert_nfa_to_dfa(ends_with_ab, config=Config(max_dfa_states=2))

    def test_limit_reached_exactly(self, ends_with_ab):
        dfa = convert_nfa_to_dfa(ends_with_ab, config=Config(max_dfa_states=3))
        assert len(dfa.states) == 3

    @pytest.mark.parametrize(
        "kwargs", [{"max_dfa_states": 0}, {"max_dfa_states": -1}, {"subset_delimiter": ""}]
    )
    def test_invalid_config(self, kwargs):
        with pytest.raises(ValueError):
            Config(**kwargs)

    def test_default_config(self):
        config = Config.default()
        assert config.max_dfa_states == 100000
        assert config.subset_delimiter == ", "
        assert config.empty_subset_name == "∅"


class TestStepByStep:
    def test_result(self, ends_with_ab):
        result = convert_nfa_to_dfa(ends_with_ab, step_by_step=True)
        assert isinstance(result, ConversionResult)
        assert result.dfa == convert_nfa_to_dfa(ends_with_ab)

    def test_steps_in_processing_order(self, ends_with_ab):
        steps = NFAToDFAConverter().convert(ends_with_ab, step_by_step=True).steps
        summary = [
            (s.current_subset, s.symbol, s.next_subset, s.is_new_subset) for s in steps
        ]
        assert summary == [
            ("q0", "a", "q0, q1", True),
            ("q0", "b", "q0", False),
            ("q0, q1", "a", "q0, q1", False),
            ("q0, q1", "b", "q0, q2", True),
            ("q0, q2", "a", "q0, q1", False),
            ("q0, q2", "b", "q0", False),
        ]
        assert steps[3].transitions == [Transition.create("q0, q1", "b", ["q0, q2"])]

    def test_empty_successor_step(self):
        nfa = build(
            ["q0", "q1"], ["a", "b"], [("q0", "a", ["q0", "q1"])], ["q0"], ["q1"]
        )
        steps = convert_nfa_to_dfa(nfa, step_by_step=True).steps
        assert steps[1] == ConversionStep(current_subset="q0", symbol="b")
        assert steps[1].next_subset is None
        assert steps[1].transitions == []

    def test_one_step_per_pair(self, epsilon_loops):
        result = convert_nfa_to_dfa(epsilon_loops, step_by_step=True)
        assert len(result.steps) == len(result.dfa.states) * len(result.dfa.alphabet)
        assert any("q1" in step.current_subset for step in result.steps)

    def test_to_dict(self, ends_with_ab):
        step = convert_nfa_to_dfa(ends_with_ab, step_by_step=True).steps[0]
        assert step.to_dict() == {
            "current_subset": "q0",
            "symbol": "a",
            "next_subset": "q0, q1",
            "is_new_subset": True,
            "transitions": [{"from": "q0", "input": "a", "to": ["q0, q1"]}],
        }
