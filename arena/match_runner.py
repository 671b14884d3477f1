"""Agent-vs-agent Connect Four series with per-agent search statistics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ai.config import AgentConfig, MatchConfig
from ai.minimax_ai import MinimaxAI
from engine.board import ConnectFourBoard, Move
from engine.players import Side

LOGGER = logging.getLogger(__name__)


@dataclass
class GameRecord:
    """Summary from one game."""

    first: Side
    winner: Optional[Side]
    moves: List[Move]
    aborted: bool = False

    @property
    def is_draw(self) -> bool:
        return self.winner is None and not self.aborted


@dataclass
class MatchReport:
    """Result of a series between the red and yellow agents."""

    red_wins: int = 0
    yellow_wins: int = 0
    draws: int = 0
    aborted: int = 0
    games: List[GameRecord] = field(default_factory=list)
    stats: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def add(self, record: GameRecord) -> None:
        self.games.append(record)
        if record.aborted:
            self.aborted += 1
        elif record.winner is Side.RED:
            self.red_wins += 1
        elif record.winner is Side.YELLOW:
            self.yellow_wins += 1
        else:
            self.draws += 1


def build_agent(side: Side, config: AgentConfig) -> MinimaxAI:
    return MinimaxAI(
        side=side,
        depth=config.depth,
        pruning=config.pruning,
        poll_every_node=config.poll_every_node,
    )


def play_game(agents: Dict[Side, MinimaxAI], board: ConnectFourBoard, first: Side = Side.RED) -> GameRecord:
    """Alternate agent moves on ``board`` until the game ends."""
    turn = first
    moves: List[Move] = []
    while not board.is_terminal():
        result = agents[turn].request_move(board)
        if result.move is None:
            # A non-terminal board always has a move, so this is a cancel or a bad depth.
            LOGGER.warning("Game aborted: %s returned %s", agents[turn].name, result.status.value)
            return GameRecord(first=first, winner=None, moves=moves, aborted=True)
        if not board.apply(result.move):
            raise RuntimeError(f"Search chose an unplayable move: {result.move}")
        moves.append(result.move)
        LOGGER.debug("%s plays column %d (score %s)", turn.value, result.move.column, result.score)
        turn = turn.opponent()
    return GameRecord(first=first, winner=board.winner(), moves=moves)


class MatchRunner:
    """Plays a configured series and aggregates results."""

    def __init__(self, config: MatchConfig) -> None:
        self.config = config
        self.agents: Dict[Side, MinimaxAI] = {
            Side.RED: build_agent(Side.RED, config.red),
            Side.YELLOW: build_agent(Side.YELLOW, config.yellow),
        }

    def run(self) -> MatchReport:
        report = MatchReport()
        for game_idx in range(self.config.games):
            first = Side.RED
            if self.config.alternate_first and game_idx % 2 == 1:
                first = Side.YELLOW
            board = ConnectFourBoard(rows=self.config.rows, cols=self.config.cols, connect=self.config.connect)
            record = play_game(self.agents, board, first=first)
            report.add(record)
            if (game_idx + 1) % max(1, self.config.log_every) == 0:
                LOGGER.info(
                    "Game %d/%d first=%s winner=%s plies=%d | R:%d Y:%d D:%d",
                    game_idx + 1,
                    self.config.games,
                    first.value,
                    "draw" if record.winner is None else record.winner.value,
                    len(record.moves),
                    report.red_wins,
                    report.yellow_wins,
                    report.draws,
                )

        report.stats = {side.value: agent.get_stats() for side, agent in self.agents.items()}
        return report

