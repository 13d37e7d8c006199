"""Structural and referential checks for automaton definitions.

Checks run in a fixed order and stop at the first failure:

1. states
2. alphabet
3. transition structure
4. transition state references
5. start and accept state membership
6. transition symbols against the alphabet
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from fsakit.automaton.transition import EPSILON, Transition
from fsakit.exceptions import InvalidAutomatonError

_SEQUENCE_TYPES = (list, tuple)

TransitionFields = Tuple[Any, Any, Any]


def validate(config: Mapping[str, Any]) -> None:
    """Validate an automaton configuration.

    Args:
        config: Mapping with ``states``, ``alphabet``, ``transitions``,
            ``start_states`` and ``accept_states`` entries.

    Raises:
        InvalidAutomatonError: On the first violated invariant.
    """
    if not isinstance(config, Mapping):
        raise InvalidAutomatonError("Automaton configuration must be a mapping.")

    states = config.get("states")
    alphabet = config.get("alphabet")
    transitions = config.get("transitions")

    _validate_states(states)
    _validate_alphabet(alphabet)
    fields = _validate_transitions(transitions)
    _validate_state_references(states, fields)
    _validate_start_and_accept_states(
        states, config.get("start_states"), config.get("accept_states")
    )
    _validate_transition_symbols(alphabet, fields)


def validate_transition(source: Any, symbol: Any, targets: Any) -> None:
    """Validate the structure of a single transition.

    Raises:
        InvalidAutomatonError: If the source or symbol is not a non-empty
            string, or the targets are not a non-empty list of unique,
            non-empty state ids.
    """
    if not _is_name(source):
        raise InvalidAutomatonError(
            "Transition source must be a non-empty string."
        )
    if not _is_name(symbol):
        raise InvalidAutomatonError(
            f"Transition from '{source}' must have a non-empty input symbol."
        )
    if not isinstance(targets, _SEQUENCE_TYPES) or len(targets) == 0:
        raise InvalidAutomatonError(
            f"Transition '{source}' --{symbol}--> must have a non-empty list of targets."
        )
    seen: Set[str] = set()
    for target in targets:
        if not _is_name(target):
            raise InvalidAutomatonError(
                f"Transition '{source}' --{symbol}--> has an invalid target {target!r}."
            )
        if target in seen:
            raise InvalidAutomatonError(
                f"Transition '{source}' --{symbol}--> repeats target '{target}'."
            )
        seen.add(target)


def _is_name(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def _validate_unique_names(values: Any, what: str) -> None:
    if not isinstance(values, _SEQUENCE_TYPES) or len(values) == 0:
        raise InvalidAutomatonError(f"{what} must be a non-empty list.")
    seen: Set[str] = set()
    for value in values:
        if not _is_name(value):
            raise InvalidAutomatonError(f"{what} must contain non-empty strings.")
        if value in seen:
            raise InvalidAutomatonError(f"Duplicate entry '{value}' in {what.lower()}.")
        seen.add(value)


def _validate_states(states: Any) -> None:
    _validate_unique_names(states, "States")


def _validate_alphabet(alphabet: Any) -> None:
    _validate_unique_names(alphabet, "Alphabet")
    if EPSILON in alphabet:
        raise InvalidAutomatonError(
            f"Alphabet must not contain the epsilon marker '{EPSILON}'."
        )


def _transition_fields(entry: Any) -> Optional[TransitionFields]:
    if isinstance(entry, Transition):
        return entry.source, entry.symbol, entry.targets
    if isinstance(entry, Mapping):
        return entry.get("from"), entry.get("input"), entry.get("to")
    return None


def _validate_transitions(transitions: Any) -> List[TransitionFields]:
    if not isinstance(transitions, _SEQUENCE_TYPES):
        raise InvalidAutomatonError("Transitions must be a list.")
    fields: List[TransitionFields] = []
    for entry in transitions:
        entry_fields = _transition_fields(entry)
        if entry_fields is None:
            raise InvalidAutomatonError(f"Invalid transition structure: {entry!r}.")
        validate_transition(*entry_fields)
        fields.append(entry_fields)
    return fields


def _validate_state_references(
    states: Sequence[str], fields: Iterable[TransitionFields]
) -> None:
    declared = set(states)
    for source, _, targets in fields:
        if source not in declared:
            raise InvalidAutomatonError(f"Transition from unknown state '{source}'.")
        for target in targets:
            if target not in declared:
                raise InvalidAutomatonError(f"Transition to unknown state '{target}'.")


def _validate_start_and_accept_states(
    states: Sequence[str], start_states: Any, accept_states: Any
) -> None:
    if not isinstance(start_states, _SEQUENCE_TYPES) or len(start_states) == 0:
        raise InvalidAutomatonError("Start states must be a non-empty list.")
    if not isinstance(accept_states, _SEQUENCE_TYPES):
        raise InvalidAutomatonError("Accept states must be a list.")

    declared = set(states)
    for state in start_states:
        if not _is_name(state):
            raise InvalidAutomatonError("Start states must be non-empty strings.")
        if state not in declared:
            raise InvalidAutomatonError(f"Start state '{state}' not in states.")
    for state in accept_states:
        if not _is_name(state):
            raise InvalidAutomatonError("Accept states must be non-empty strings.")
        if state not in declared:
            raise InvalidAutomatonError(f"Accept state '{state}' not in states.")


def _validate_transition_symbols(
    alphabet: Sequence[str], fields: Iterable[TransitionFields]
) -> None:
    symbols = set(alphabet)
    for source, symbol, _ in fields:
        if symbol != EPSILON and symbol not in symbols:
            raise InvalidAutomatonError(
                f"Transition input '{symbol}' from '{source}' not in alphabet."
            )
