from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional, TextIO

import numpy as np

from .board import Board
from .errors import MoveError
from .game_basics import Difficulty, GameStatus, Player, parse_player
from .solver import get_next_move, move_for, seed_default_rng

DIFFICULTY_CHOICES = [d.value for d in Difficulty]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tictactoe-engine", description="Tic-tac-toe engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Global seed for reproducibility")

    p_play = sub.add_parser("play", help="Play an interactive game against the engine")
    p_play.add_argument(
        "--first", choices=["human", "engine"], default="human", help="Who moves first (default: human)"
    )
    p_play.add_argument("--human", choices=["X", "O"], default="X", help="Human's mark (default: X)")
    p_play.add_argument(
        "--difficulty", choices=DIFFICULTY_CHOICES, default="hard", help="Engine difficulty (default: hard)"
    )

    p_move = sub.add_parser("move", help="Replay moves on a fresh board and print the engine's reply")
    p_move.add_argument("--moves", default="", help='Comma-separated cell indices, e.g. "0,4,1"')
    p_move.add_argument("--start", choices=["X", "O"], default="X", help="Starting player (default: X)")
    p_move.add_argument("--difficulty", choices=DIFFICULTY_CHOICES, default="hard")

    p_self = sub.add_parser("selfplay", help="Play engines against each other and report the tally")
    p_self.add_argument("--games", type=int, default=10, help="Number of games (default: 10)")
    p_self.add_argument("--x-difficulty", choices=DIFFICULTY_CHOICES, default="medium")
    p_self.add_argument("--o-difficulty", choices=DIFFICULTY_CHOICES, default="medium")
    p_self.add_argument(
        "--alternate-start", action="store_true", help="Alternate the starting player between games"
    )

    return p


def _set_global_seed(seed: Optional[int]) -> None:
    if seed is None:
        return
    import random

    random.seed(seed)
    seed_default_rng(seed)


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _parse_moves(raw: str) -> List[int]:
    out: List[int] = []
    for tok in raw.split(','):
        tok = tok.strip()
        if not tok:
            continue
        out.append(int(tok))
    return out


def _announce_result(board: Board, out: TextIO) -> None:
    if board.status() is GameStatus.RESULTED:
        print(f"{board.winner().symbol} wins", file=out)
    else:
        print("Draw", file=out)


def play_interactive(board: Board, human: Player, inp: TextIO, out: TextIO) -> GameStatus:
    """Drive one game: read human moves from ``inp``, answer with engine moves."""
    while not board.is_over():
        print(board.render(), file=out)
        if board.current_turn() is human:
            print(f"{human.symbol} to move (0-8): ", end="", file=out, flush=True)
            line = inp.readline()
            if not line:
                logging.warning("Input closed before the game finished")
                return board.status()
            raw = line.strip()
            try:
                pos = int(raw)
            except ValueError:
                logging.error("Not a cell index: %r", raw)
                continue
            try:
                board.apply_move(pos)
            except MoveError as e:
                logging.error("%s", e)
                continue
        else:
            mv = get_next_move(board)
            logging.info("engine plays %d", mv)
            board.apply_move(mv)
    print(board.render(), file=out)
    _announce_result(board, out)
    return board.status()


def run_selfplay(
    games: int,
    x_difficulty: Difficulty,
    o_difficulty: Difficulty,
    alternate_start: bool = False,
    rng: Optional[np.random.Generator] = None,
) -> Dict[str, int]:
    tally = {"x_wins": 0, "o_wins": 0, "draws": 0}
    levels = {Player.X: x_difficulty, Player.O: o_difficulty}
    for g in range(games):
        start = Player.O if alternate_start and g % 2 == 1 else Player.X
        # the board's own difficulty is unused: each side picks with its own level
        board = Board(start, x_difficulty)
        while not board.is_over():
            board.apply_move(move_for(board, levels[board.current_turn()], rng))
        if board.status() is GameStatus.DRAW:
            tally["draws"] += 1
        elif board.winner() is Player.X:
            tally["x_wins"] += 1
        else:
            tally["o_wins"] += 1
        logging.debug("game %d: %s history=%s", g, board.status().value, list(board.history))
    return tally


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tictactoe-engine"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    _set_global_seed(getattr(ns, "seed", None))

    if ns.cmd == "play":
        human = parse_player(ns.human)
        start = human if ns.first == "human" else human.opponent()
        board = Board(start, Difficulty(ns.difficulty))
        play_interactive(board, human, sys.stdin, sys.stdout)
        return 0

    if ns.cmd == "move":
        try:
            moves = _parse_moves(ns.moves)
        except ValueError:
            logging.error("Invalid move list: %r", ns.moves)
            return 2
        board = Board(parse_player(ns.start), Difficulty(ns.difficulty))
        for mv in moves:
            try:
                board.apply_move(mv)
            except MoveError as e:
                logging.error("Cannot replay move %s: %s", mv, e)
                return 2
        if board.is_over():
            logging.error("Game already over: %s", board.status().value)
            return 2
        mv = get_next_move(board)
        logging.info("to_move=%s move=%d", board.current_turn().symbol, mv)
        print(mv)
        return 0

    if ns.cmd == "selfplay":
        if ns.games < 1:
            logging.error("--games must be positive: %s", ns.games)
            return 2
        tally = run_selfplay(
            ns.games,
            Difficulty(ns.x_difficulty),
            Difficulty(ns.o_difficulty),
            alternate_start=ns.alternate_start,
        )
        logging.info("x_wins=%d o_wins=%d draws=%d", tally["x_wins"], tally["o_wins"], tally["draws"])
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
