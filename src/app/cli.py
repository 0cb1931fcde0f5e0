from __future__ import annotations

import argparse
import sys

from commit_reveal import RandomnessUnavailable, verify_commitment
from help_table import format_help_table, format_menu
from logger import LEVEL_NAMES, configure_logging, default_level, get_logger
from protocol import MoveSet, Round
from session import GameSession
from validation import USAGE_EXAMPLE, InvalidMoveChoice, InvalidMoveSet, parse_choice, validate_moves

log = get_logger(__name__)

RESULT_TEXT = {"win": "You win!", "lose": "You lose!", "draw": "Draw!"}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="rps")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LEVEL_NAMES,
        help=f"Log level (default: $RPS_LOG_LEVEL or {default_level()})",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play one provably-fair round against the computer")
    play.add_argument("moves", nargs="*", metavar="MOVE", help="An odd number (>= 3) of distinct moves")

    table = sub.add_parser("table", help="Print the outcome table for a move list")
    table.add_argument("moves", nargs="*", metavar="MOVE")

    verify = sub.add_parser("verify", help="Check a revealed key and move against a published HMAC")
    verify.add_argument("--hmac", required=True, help="HMAC printed before you chose your move")
    verify.add_argument("--key", required=True, help="HMAC key printed after the round (hex)")
    verify.add_argument("--move", required=True, help="Computer move printed after the round")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.cmd == "verify":
        ok = verify_commitment(expected_digest=args.hmac, key_hex=args.key, move=args.move)
        print("OK" if ok else "MISMATCH")
        return 0 if ok else 1

    try:
        moves = validate_moves(args.moves)
    except InvalidMoveSet as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(USAGE_EXAMPLE, file=sys.stderr)
        return 1

    if args.cmd == "table":
        print(format_help_table(moves))
        return 0

    if args.cmd == "play":
        try:
            session = GameSession(moves)
        except RandomnessUnavailable as exc:
            log.error("cannot start a fair game: %s", exc)
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        return _play(session)

    raise SystemExit("unhandled command")


def _play(session: GameSession) -> int:
    print(f"HMAC: {session.digest}")

    human_index = _prompt_for_move(session.moves)
    if human_index is None:
        print("Exiting...")
        return 0

    result = session.play(human_index)
    _show_game_result(session.moves, result)
    print(f"HMAC key: {session.reveal().key}")
    return 0


def _prompt_for_move(moves: MoveSet) -> int | None:
    """Interactive prompt; returns a zero-based index, or None to abort."""
    while True:
        print(format_menu(moves))
        try:
            answer = input("Enter your move: ")
        except EOFError:
            return None

        try:
            choice = parse_choice(answer, moves)
        except InvalidMoveChoice:
            log.debug("rejected input %r", answer)
            print("Error: Invalid move.")
            continue

        if choice.kind == "exit":
            return None
        if choice.kind == "help":
            print(format_help_table(moves))
            continue
        return choice.index


def _show_game_result(moves: MoveSet, result: Round) -> None:
    print(f"Your move: {moves.label_at(result.human_index)}")
    print(f"Computer move: {moves.label_at(result.opponent_index)}")
    print(RESULT_TEXT[result.outcome])


if __name__ == "__main__":
    raise SystemExit(main())
