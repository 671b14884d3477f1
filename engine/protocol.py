"""Board contract consumed by the search core."""

from __future__ import annotations

from typing import Hashable, Protocol, Sequence, runtime_checkable

from engine.players import Side

Move = Hashable


@runtime_checkable
class SearchBoard(Protocol):
    """
    Mutable game state searched by :class:`ai.search.MinimaxCalculator`.

    ``legal_moves`` must return moves in a deterministic order for a given
    state; the search breaks ties in favor of the earliest move. ``undo``
    reverses exactly the most recent successful ``apply``.
    """

    def legal_moves(self, side: Side) -> Sequence[Move]:
        ...

    def apply(self, move: Move) -> bool:
        ...

    def undo(self) -> None:
        ...

    def is_terminal(self) -> bool:
        ...

    def evaluate(self, side: Side) -> int:
        ...

    def min_strength(self) -> int:
        ...

    def max_strength(self) -> int:
        ...
