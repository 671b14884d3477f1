"""CLI entrypoint for playing Connect Four against the minimax AI."""

from __future__ import annotations

import argparse
import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import Optional

from ai.minimax_ai import MinimaxAI
from ai.search import CancellationToken, SearchResult, SearchStatus
from engine.board import ConnectFourBoard, Move
from engine.players import Side
from engine.rules import DEFAULT_COLS, DEFAULT_CONNECT, DEFAULT_ROWS


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Connect Four in terminal.")
    parser.add_argument("--depth", type=int, default=5, help="Minimax depth")
    parser.add_argument(
        "--human-side",
        type=str,
        default="red",
        choices=["red", "yellow"],
        help="Which side the human controls (red moves first)",
    )
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Board rows")
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Board columns")
    parser.add_argument("--connect", type=int, default=DEFAULT_CONNECT, help="Discs in a row needed to win")
    parser.add_argument("--no-pruning", action="store_true", help="Search full width without alpha-beta")
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    return parser.parse_args(argv)


def parse_user_move(command: str, side: Side) -> Optional[Move]:
    parts = command.strip().split()
    if len(parts) != 1:
        return None
    return Move(column=int(parts[0]), side=side)


def search_with_interrupt(
    ai: MinimaxAI,
    board: ConnectFourBoard,
    cancel_token: Optional[CancellationToken] = None,
) -> SearchResult:
    """
    Run the search in a worker thread so Ctrl+C can cancel it.

    The token is created here, before the worker starts, so an interrupt
    that lands before the search begins still cancels it. Later interrupts
    while the worker winds down only re-cancel the same token.
    """
    token = cancel_token if cancel_token is not None else CancellationToken()
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(ai.request_move, board, token)
        while True:
            try:
                return future.result(timeout=0.1)
            except FuturesTimeout:
                continue
            except KeyboardInterrupt:
                token.cancel()


def run_cli(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    logger = logging.getLogger("connect4.cli")

    board = ConnectFourBoard(rows=args.rows, cols=args.cols, connect=args.connect)
    human_side = Side.RED if args.human_side == "red" else Side.YELLOW
    ai = MinimaxAI(side=human_side.opponent(), depth=args.depth, pruning=not args.no_pruning)
    turn = Side.RED

    logger.info("Starting Connect Four. Human=%s AI=%s depth=%d", human_side.value, ai.side.value, ai.get_depth())
    print("Commands: <column> | help | quit   (Ctrl+C interrupts the AI)")

    while True:
        print()
        print(board.render_ascii())

        if board.is_terminal():
            winner = board.winner()
            if winner is None:
                print("Game ended in draw.")
            else:
                print(f"Winner: {winner.value}")
            break

        print(f"Turn: {turn.value} ({turn.symbol})")
        if turn is human_side:
            user_input = input("Your move> ").strip()
            if user_input.lower() in {"quit", "exit"}:
                print("Exiting game.")
                break
            if user_input.lower() == "help":
                print(f"Enter a column number from 0 to {board.cols - 1}.")
                continue

            try:
                move = parse_user_move(user_input, human_side)
            except ValueError:
                print("Invalid numeric input.")
                continue
            if move is None:
                print("Invalid command format.")
                continue
            if not board.apply(move):
                print("Illegal move for current state.")
                continue
        else:
            result = search_with_interrupt(ai, board)
            if result.status is SearchStatus.CANCELLED:
                print("AI search interrupted. Exiting game.")
                break
            if result.move is None:
                print(f"AI has no move ({result.status.value}).")
                break
            board.apply(result.move)
            print(f"AI move: column {result.move.column} (score {result.score}, {result.nodes_expanded} moves tried)")
        turn = turn.opponent()

    stats = ai.get_stats()
    logger.info(
        "AI totals: nodes=%d time=%.3fs searches=%d",
        stats["total_nodes_expanded"],
        stats["total_elapsed"],
        stats["total_calls"],
    )


if __name__ == "__main__":
    run_cli()
