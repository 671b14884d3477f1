"""One-row K-in-a-row toy game used to check search values by hand."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from engine.players import EMPTY_SYMBOL, Side, side_from_symbol

WIN_SCORE = 10


@dataclass(frozen=True)
class StripMove:
    """A mark placed on one cell of the strip."""

    index: int
    side: Side


class StripBoard:
    """
    A 1 x length strip. Players mark any empty cell; ``connect`` adjacent
    marks of one side win. Strength is terminal-only: +10 for a win, -10
    for a loss, 0 otherwise.
    """

    def __init__(self, length: int = 4, connect: int = 3) -> None:
        if connect < 1 or connect > length:
            raise ValueError(f"connect={connect} cannot fit on a strip of length {length}")
        self.length = length
        self.connect = connect
        self.cells: List[Optional[Side]] = [None] * length
        self._history: List[Tuple[StripMove, Optional[Side]]] = []

    @classmethod
    def from_string(cls, text: str, connect: int = 3) -> "StripBoard":
        """Build a strip from text such as ``"XX.."``."""
        board = cls(length=len(text), connect=connect)
        for index, cell in enumerate(text):
            if cell == EMPTY_SYMBOL:
                continue
            board.apply(StripMove(index=index, side=side_from_symbol(cell)))
        return board

    def legal_moves(self, side: Side) -> List[StripMove]:
        if self.winner() is not None:
            return []
        return [StripMove(index=i, side=side) for i, cell in enumerate(self.cells) if cell is None]

    def apply(self, move: StripMove) -> bool:
        if not 0 <= move.index < self.length or self.cells[move.index] is not None:
            return False
        self.cells[move.index] = move.side
        winner = self.winner()
        if winner is None and self._run_through(move.index, move.side) >= self.connect:
            winner = move.side
        self._history.append((move, winner))
        return True

    def undo(self) -> None:
        if not self._history:
            raise IndexError("undo() called with no move to take back")
        move, _ = self._history.pop()
        self.cells[move.index] = None

    def _run_through(self, index: int, side: Side) -> int:
        run = 1
        left = index - 1
        while left >= 0 and self.cells[left] is side:
            run += 1
            left -= 1
        right = index + 1
        while right < self.length and self.cells[right] is side:
            run += 1
            right += 1
        return run

    def winner(self) -> Optional[Side]:
        return self._history[-1][1] if self._history else None

    def is_terminal(self) -> bool:
        return self.winner() is not None or all(cell is not None for cell in self.cells)

    def evaluate(self, side: Side) -> int:
        winner = self.winner()
        if winner is None:
            return 0
        return WIN_SCORE if winner is side else -WIN_SCORE

    def min_strength(self) -> int:
        return -WIN_SCORE

    def max_strength(self) -> int:
        return WIN_SCORE

    def snapshot(self) -> Tuple[Tuple[Optional[Side], ...], Tuple[Tuple[StripMove, Optional[Side]], ...]]:
        return (tuple(self.cells), tuple(self._history))

    def render(self) -> str:
        return "".join(EMPTY_SYMBOL if cell is None else cell.symbol for cell in self.cells)
