"""
Command line driver.

    bullscows guess 0123 --secret 1234     -> bulls=1 cows=3
    bullscows solve --secret 5678          -> every solver guess, then the count
    bullscows solve --trials 1000          -> solve 1000 random secrets, print a summary
    bullscows reset --length 5             -> fresh solver for 5 digits
    bullscows play                         -> interactive game on stdin

Exit codes: 0 ok, 1 invalid input, 2 solver ran out of candidates.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from . import config
from .engine import is_win, score_guess, validate_digits, validate_length
from .errors import AlreadySolvedError, ExhaustedCandidatesError, ValidationError
from .random_client import fetch_secret
from .solver import Solver

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_EXHAUSTED = 2


def _length_for(args) -> int:
    if args.length is not None:
        return args.length
    if getattr(args, "secret", None):
        return len(args.secret)
    return config.SECRET_LENGTH


# ---------------- Commands ----------------

def cmd_guess(args) -> int:
    try:
        length = validate_length(_length_for(args))
        secret = validate_digits(args.secret, length) if args.secret else fetch_secret(length)
        guess = validate_digits(args.digits, length)
    except ValidationError as exc:
        logger.debug("Rejected guess %r: %s", args.digits, exc)
        print("invalid")
        return EXIT_INVALID

    bulls, cows = score_guess(secret, guess)
    print(f"bulls={bulls} cows={cows}")
    if is_win(secret, guess):
        print("solved")
    return EXIT_OK


def _solve_one(solver: Solver, secret: str, verbose: bool) -> int:
    def show(guess, bulls, cows):
        print(f"{guess} {bulls} {cows}")

    steps = solver.solve(secret, on_guess=show if verbose else None)
    return len(steps)


def cmd_solve(args) -> int:
    try:
        length = validate_length(_length_for(args))
        if args.secret:
            validate_digits(args.secret, length)
    except ValidationError as exc:
        print(f"invalid: {exc}")
        return EXIT_INVALID

    solver = Solver(length, strict=args.strict or config.STRICT_SOLVER)

    if args.trials <= 1:
        secret = args.secret or fetch_secret(length)
        try:
            used = _solve_one(solver, secret, verbose=True)
        except ExhaustedCandidatesError as exc:
            print(f"exhausted: {exc}")
            return EXIT_EXHAUSTED
        print(f"Secret is {secret}, took {used} guesses.")
        return EXIT_OK

    # Many games: only the summary is printed
    counts: List[int] = []
    for _ in range(args.trials):
        secret = args.secret or fetch_secret(length)
        solver.reset()
        try:
            counts.append(_solve_one(solver, secret, verbose=False))
        except ExhaustedCandidatesError as exc:
            print(f"exhausted on {secret}: {exc}")
            return EXIT_EXHAUSTED

    print(f"Solved {len(counts)} games: average {sum(counts) / len(counts):.2f}, "
          f"best {min(counts)}, worst {max(counts)} guesses.")
    return EXIT_OK


def cmd_reset(args) -> int:
    try:
        length = validate_length(_length_for(args))
    except ValidationError as exc:
        print(f"invalid: {exc}")
        return EXIT_INVALID

    solver = Solver(length)
    print(f"length={solver.length} candidates={solver.remaining_count()}")
    return EXIT_OK


PLAY_HELP = "Commands: <digits> to guess, 'hint', 'solve', 'reset', 'quit'."


def play(length: int, read: Callable[[str], str] = input, secret: Optional[str] = None) -> int:
    """
    Interactive game. Player guesses feed the solver too, so 'hint'
    always suggests something consistent with everything seen so far.
    """
    secret = secret or fetch_secret(length)
    solver = Solver(length, strict=config.STRICT_SOLVER)
    print(f"New game: {length} distinct digits. {PLAY_HELP}")

    while True:
        try:
            line = read("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            return EXIT_OK

        try:
            if line in ("q", "quit", "exit"):
                return EXIT_OK
            elif line == "reset":
                secret = fetch_secret(length)
                solver.reset()
                print("New secret chosen.")
            elif line == "hint":
                print(f"Solver suggests {solver.next_guess()} ({solver.remaining_count()} candidates left)")
            elif line == "solve":
                used = solver.guess_count
                for guess, bulls, cows in solver.solve(secret):
                    print(f"{guess} {bulls} {cows}")
                print(f"Secret is {secret}, took {solver.guess_count - used} solver guesses.")
            else:
                guess = validate_digits(line, length)
                bulls, cows = score_guess(secret, guess)
                solver.apply_feedback(guess, bulls, cows)
                print(f"bulls={bulls} cows={cows}")
                if is_win(secret, guess):
                    print(f"You win! It took you {solver.guess_count} attempts. Type 'reset' to play again.")
        except ValidationError as exc:
            print(f"invalid: {exc}")
        except AlreadySolvedError as exc:
            print(str(exc))
        except ExhaustedCandidatesError as exc:
            print(f"exhausted: {exc}")
            return EXIT_EXHAUSTED


def cmd_play(args) -> int:
    try:
        length = validate_length(_length_for(args))
    except ValidationError as exc:
        print(f"invalid: {exc}")
        return EXIT_INVALID
    return play(length)


# ---------------- Parser ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bullscows",
        description="Play Bulls and Cows, or watch the elimination solver find a secret.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=config.LOG_LEVELS,
        help=f"Logging level (default: {config.LOG_LEVEL})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_guess = sub.add_parser("guess", help="Score one guess against a secret")
    p_guess.add_argument("digits", help="The guess, e.g. 0123")
    p_guess.add_argument("--secret", default=None, help="Secret to score against (random when omitted)")
    p_guess.add_argument("--length", type=int, default=None, help="Secret length (default: from config)")
    p_guess.set_defaults(func=cmd_guess)

    p_solve = sub.add_parser("solve", help="Run the solver until the secret is found")
    p_solve.add_argument("--secret", default=None, help="Secret to find (random when omitted)")
    p_solve.add_argument("--length", type=int, default=None, help="Secret length (default: from config)")
    p_solve.add_argument("--trials", type=int, default=1, help="Number of games to solve (default: 1)")
    p_solve.add_argument("--strict", action="store_true", help="Exact-score elimination")
    p_solve.set_defaults(func=cmd_solve)

    p_reset = sub.add_parser("reset", help="Reinitialise the solver state")
    p_reset.add_argument("--length", type=int, default=None, help="Secret length (default: from config)")
    p_reset.set_defaults(func=cmd_reset)

    p_play = sub.add_parser("play", help="Interactive game")
    p_play.add_argument("--length", type=int, default=None, help="Secret length (default: from config)")
    p_play.set_defaults(func=cmd_play)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config.configure_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
