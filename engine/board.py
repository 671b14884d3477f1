"""Connect-Four board state, move generation, and strength evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from engine.players import EMPTY, EMPTY_SYMBOL, SIDE_CODE, Side, side_from_symbol
from engine.rules import (
    DEFAULT_COLS,
    DEFAULT_CONNECT,
    DEFAULT_ROWS,
    strength_bounds,
    window_weight_table,
    winning_windows,
)


@dataclass(frozen=True)
class Move:
    """A disc dropped into a column by one side."""

    column: int
    side: Side


@dataclass(frozen=True)
class Placement:
    """History record for one applied move."""

    move: Move
    row: int
    winner: Optional[Side]


class ConnectFourBoard:
    """Vertical-drop board with LIFO apply/undo for in-place search."""

    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        connect: int = DEFAULT_CONNECT,
    ) -> None:
        if rows < 1 or cols < 1:
            raise ValueError(f"Board needs at least one row and column, got {rows}x{cols}")
        if connect > max(rows, cols):
            raise ValueError(f"connect={connect} cannot fit on a {rows}x{cols} board")
        self.rows = rows
        self.cols = cols
        self.connect = connect

        # Row 0 is the top of the board; discs settle at the highest free row index.
        self.grid = np.full((rows, cols), EMPTY, dtype=np.int8)
        self._heights = np.zeros(cols, dtype=np.int64)
        self._history: List[Placement] = []

        self._windows = winning_windows(rows, cols, connect)
        self._weights = window_weight_table(connect)
        self._min_strength, self._max_strength = strength_bounds(rows, cols, connect)

    @classmethod
    def from_rows(cls, rows_text: Sequence[str], connect: int = DEFAULT_CONNECT) -> "ConnectFourBoard":
        """
        Build a board from text rows, top row first.

        ``X`` is red, ``O`` is yellow, ``.`` is empty. Discs are replayed
        bottom-up so the history is valid for undo, but the text does not
        record move order.

        Text where both sides already hold a complete line is rejected with
        ``ValueError``, since no game reaches it and the recorded winner
        would only reflect the replay order.
        """
        lines = [line.strip() for line in rows_text if line.strip()]
        if not lines:
            raise ValueError("Board text has no rows.")
        cols = len(lines[0])
        if any(len(line) != cols for line in lines):
            raise ValueError("Board rows have different widths.")

        board = cls(rows=len(lines), cols=cols, connect=connect)
        for col in range(cols):
            floating = False
            for line in reversed(lines):
                cell = line[col]
                if cell == EMPTY_SYMBOL:
                    floating = True
                    continue
                if floating:
                    raise ValueError(f"Disc floats above an empty cell in column {col}.")
                if not board.apply(Move(column=col, side=side_from_symbol(cell))):
                    raise ValueError(f"Could not place disc in column {col}.")
        if all(board._has_line(side) for side in Side):
            raise ValueError("Both sides already have a complete line.")
        return board

    @property
    def move_count(self) -> int:
        return len(self._history)

    @property
    def last_move(self) -> Optional[Move]:
        return self._history[-1].move if self._history else None

    def column_height(self, column: int) -> int:
        return int(self._heights[column])

    def is_column_full(self, column: int) -> bool:
        return self._heights[column] >= self.rows

    def is_full(self) -> bool:
        return bool(np.all(self._heights >= self.rows))

    def legal_moves(self, side: Side) -> List[Move]:
        """Open columns for ``side``, left to right."""
        if self.winner() is not None:
            return []
        return [Move(column=col, side=side) for col in range(self.cols) if not self.is_column_full(col)]

    def apply(self, move: Move) -> bool:
        """Drop a disc. Returns False, leaving the board unchanged, if the column is full or invalid."""
        col = move.column
        if not 0 <= col < self.cols or self.is_column_full(col):
            return False
        row = self.rows - 1 - int(self._heights[col])
        self.grid[row, col] = SIDE_CODE[move.side]
        self._heights[col] += 1

        winner = self.winner()
        if winner is None and self._completes_line(row, col, move.side):
            winner = move.side
        self._history.append(Placement(move=move, row=row, winner=winner))
        return True

    def undo(self) -> None:
        """Remove the most recently dropped disc."""
        if not self._history:
            raise IndexError("undo() called with no move to take back")
        placement = self._history.pop()
        col = placement.move.column
        self.grid[placement.row, col] = EMPTY
        self._heights[col] -= 1

    def _completes_line(self, row: int, col: int, side: Side) -> bool:
        flat_index = row * self.cols + col
        touching = self._windows[np.any(self._windows == flat_index, axis=1)]
        if touching.size == 0:
            return False
        cells = self.grid.ravel()[touching]
        return bool(np.any(np.all(cells == SIDE_CODE[side], axis=1)))

    def _has_line(self, side: Side) -> bool:
        if self._windows.size == 0:
            return False
        cells = self.grid.ravel()[self._windows]
        return bool(np.any(np.all(cells == SIDE_CODE[side], axis=1)))

    def winner(self) -> Optional[Side]:
        """Side that completed a line, if any."""
        return self._history[-1].winner if self._history else None

    def is_terminal(self) -> bool:
        return self.winner() is not None or self.is_full()

    def min_strength(self) -> int:
        return self._min_strength

    def max_strength(self) -> int:
        return self._max_strength

    def evaluate(self, side: Side) -> int:
        """
        Strength of the position for ``side``.

        Wins and losses score the strength bounds. Otherwise every window
        holding only one side's discs adds (or, for the opponent, subtracts)
        a weight that grows with the number of discs in it.
        """
        winner = self.winner()
        if winner is side:
            return self._max_strength
        if winner is not None:
            return self._min_strength
        if self._windows.size == 0:
            return 0

        cells = self.grid.ravel()[self._windows]
        own = np.count_nonzero(cells == SIDE_CODE[side], axis=1)
        opp = np.count_nonzero(cells == SIDE_CODE[side.opponent()], axis=1)
        own_score = self._weights[own[opp == 0]].sum()
        opp_score = self._weights[opp[own == 0]].sum()
        return int(own_score - opp_score)

    def snapshot(self) -> Tuple[bytes, Tuple[int, ...], Tuple[Placement, ...]]:
        """Hashable full-state key, used to check that searches restore the board."""
        return (self.grid.tobytes(), tuple(int(h) for h in self._heights), tuple(self._history))

    def render_ascii(self) -> str:
        """Return a simple human-readable board representation."""
        symbols = {EMPTY: EMPTY_SYMBOL}
        symbols.update({code: side.symbol for side, code in SIDE_CODE.items()})
        lines: List[str] = [" ".join(symbols[int(cell)] for cell in row) for row in self.grid]
        lines.append(" ".join(str(col % 10) for col in range(self.cols)))
        return "\n".join(lines)
