"""Configuration for NFA to DFA conversion."""

from dataclasses import dataclass


@dataclass
class Config:
    """Settings used by the subset construction.

    Attributes:
        max_dfa_states: Upper bound on the number of subsets discovered
            before conversion is abandoned.
        subset_delimiter: Separator placed between member states when
            naming a subset.
        empty_subset_name: Name given to the empty subset.
    """

    max_dfa_states: int = 100000
    subset_delimiter: str = ", "
    empty_subset_name: str = "∅"

    def __post_init__(self) -> None:
        if self.max_dfa_states <= 0:
            raise ValueError("max_dfa_states must be positive")
        if not self.subset_delimiter:
            raise ValueError("subset_delimiter must be a non-empty string")

    @classmethod
    def default(cls) -> "Config":
        """Return the default configuration."""
        return cls()
