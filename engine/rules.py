"""Rules helpers for Connect-Four style drop games."""

from __future__ import annotations

from typing import Dict, List, Tuple

import numpy as np

DEFAULT_ROWS = 6
DEFAULT_COLS = 7
DEFAULT_CONNECT = 4

# Line directions as (row step, col step): horizontal, vertical, two diagonals.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))

# Score for a window holding n of one side's discs and none of the opponent's.
# A full window is a win and is scored through the strength bounds instead.
WINDOW_WEIGHTS: Dict[int, int] = {
    1: 1,
    2: 10,
    3: 100,
}
WIN_STRENGTH = 100_000

Position = Tuple[int, int]


def in_bounds(pos: Position, rows: int, cols: int) -> bool:
    """Return whether a position is inside a rows x cols grid."""
    row, col = pos
    return 0 <= row < rows and 0 <= col < cols


def winning_windows(rows: int, cols: int, connect: int) -> np.ndarray:
    """
    Enumerate every straight line of ``connect`` cells.

    Returns an int array of shape (n_windows, connect) holding flattened
    (row-major) cell indices.
    """
    if connect < 1:
        raise ValueError(f"connect must be positive, got {connect}")
    windows: List[List[int]] = []
    for row in range(rows):
        for col in range(cols):
            for dr, dc in DIRECTIONS:
                end = (row + dr * (connect - 1), col + dc * (connect - 1))
                if not in_bounds(end, rows, cols):
                    continue
                windows.append([(row + dr * k) * cols + (col + dc * k) for k in range(connect)])
    if not windows:
        return np.zeros((0, connect), dtype=np.int64)
    return np.asarray(windows, dtype=np.int64)


def window_weight_table(connect: int) -> np.ndarray:
    """Lookup table indexed by disc count in an uncontested window."""
    table = np.zeros(connect + 1, dtype=np.int64)
    for count in range(1, connect):
        # Longer connect lengths reuse the top weight for every near-complete count.
        table[count] = WINDOW_WEIGHTS.get(count, WINDOW_WEIGHTS[max(WINDOW_WEIGHTS)])
    return table


def heuristic_bound(n_windows: int) -> int:
    """Largest absolute heuristic score a non-terminal position can reach."""
    return n_windows * max(WINDOW_WEIGHTS.values())


def strength_bounds(rows: int, cols: int, connect: int) -> Tuple[int, int]:
    """Return (min, max) strength, keeping wins above any heuristic score."""
    n_windows = len(winning_windows(rows, cols, connect))
    top = max(WIN_STRENGTH, heuristic_bound(n_windows) + 1)
    return -top, top
