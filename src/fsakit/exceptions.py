"""Custom exceptions for fsakit."""

from typing import Optional


class AutomataError(Exception):
    """Base exception for all fsakit errors."""

    pass


class InvalidAutomatonError(AutomataError):
    """Raised when an automaton definition violates a structural invariant."""

    pass


class SimulationError(AutomataError):
    """Raised when an input symbol is not part of the automaton's alphabet."""

    def __init__(
        self, message: str, symbol: Optional[str] = None, position: int = -1
    ) -> None:
        self.symbol = symbol
        self.position = position
        super().__init__(message)

    def __str__(self) -> str:
        if self.position >= 0:
            return f"{super().__str__()} at position {self.position}"
        return super().__str__()


class ConversionError(AutomataError):
    """Raised when subset construction cannot be applied to an automaton."""

    pass
