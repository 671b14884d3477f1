"""Minimax AI with alpha-beta pruning for two-player drop games."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from ai.base_ai import BaseAI
from ai.search import CancellationToken, MinimaxCalculator, SearchResult
from engine.players import Side
from engine.protocol import Move, SearchBoard

LOGGER = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """Running totals over every search an agent has run."""

    total_nodes_expanded: int = 0
    total_elapsed: float = 0.0
    total_calls: int = 0

    def record(self, result: SearchResult) -> None:
        self.total_nodes_expanded += result.nodes_expanded
        self.total_elapsed += result.elapsed
        self.total_calls += 1

    def reset(self) -> None:
        self.total_nodes_expanded = 0
        self.total_elapsed = 0.0
        self.total_calls = 0

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


class MinimaxAI(BaseAI):
    """
    Picks moves by searching ``depth`` plies ahead with minimax.

    Search cost grows exponentially with depth, so deep searches on wide
    boards can run for a long time. A running search can be
    stopped with :meth:`cancel`; it then returns a ``CANCELLED`` result with
    no move. An agent runs one search at a time; use one agent per thread
    for concurrent searches.
    """

    def __init__(
        self,
        side: Side,
        opponent: Optional[Side] = None,
        depth: int = 1,
        pruning: bool = True,
        poll_every_node: bool = False,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(side=side, name=name)
        self.opponent = opponent if opponent is not None else side.opponent()
        self.pruning = pruning
        self.poll_every_node = poll_every_node
        self.stats = SearchStats()
        self._depth = 1
        self._active_token: Optional[CancellationToken] = None
        self.set_depth(depth)

    @property
    def depth(self) -> int:
        return self._depth

    @depth.setter
    def depth(self, value: int) -> None:
        self.set_depth(value)

    def get_depth(self) -> int:
        """Number of plies the next search will look ahead."""
        return self._depth

    def set_depth(self, depth: int) -> None:
        """Set the lookahead used from the next search on."""
        if depth < 1:
            LOGGER.warning("%s: depth %d is invalid; searches will return no move until it is raised.", self.name, depth)
        self._depth = depth

    def request_move(self, board: SearchBoard, cancel_token: Optional[CancellationToken] = None) -> SearchResult:
        """Run one search on ``board`` and fold its figures into the running stats."""
        token = cancel_token if cancel_token is not None else CancellationToken()
        self._active_token = token
        try:
            calculator = MinimaxCalculator(
                board,
                max_side=self.side,
                min_side=self.opponent,
                pruning=self.pruning,
                poll_every_node=self.poll_every_node,
            )
            result = calculator.calculate_move(self._depth, token)
        finally:
            self._active_token = None

        self.stats.record(result)
        LOGGER.debug(
            "%s totals: nodes=%d time=%.3fs calls=%d",
            self.name,
            self.stats.total_nodes_expanded,
            self.stats.total_elapsed,
            self.stats.total_calls,
        )
        return result

    def choose_move(self, board: SearchBoard) -> Optional[Move]:
        """Choose move via depth-limited alpha-beta search."""
        return self.request_move(board).move

    def cancel(self) -> None:
        """
        Ask the in-flight search, if any, to stop.

        Only one search per agent is tracked. If ``request_move`` is called
        concurrently on the same agent, this reaches at most one of them;
        cancel the token passed to ``request_move`` to target a
        specific search.
        """
        token = self._active_token
        if token is None:
            LOGGER.debug("%s: cancel() with no search running.", self.name)
            return
        token.cancel()

    def get_stats(self) -> Dict[str, float]:
        return self.stats.as_dict()

    def reset_stats(self) -> None:
        self.stats.reset()
