"""
In-memory store
Holds game state in memory, one Game (secret + solver + history) per id.
Nothing is persisted: restarting the process forgets every game.
"""

import logging
from dataclasses import dataclass, field
from threading import RLock
from time import time
from typing import Dict, List, Optional
from uuid import uuid4

from .engine import score_guess, validate_digits, validate_length
from .errors import AlreadySolvedError, ValidationError
from .solver import Solver
from .types import DEFAULT_LENGTH, Digits, GameStatus, Guesser

logger = logging.getLogger(__name__)


@dataclass
class GuessEntry:
    guess: Digits
    bulls: int
    cows: int
    message: str
    guesser: Guesser
    timestamp: float


@dataclass
class Game:
    id: str
    secret: Optional[Digits]  # None when the player keeps the secret to themselves
    solver: Solver
    status: GameStatus = "in_progress"
    solved_by: Optional[Guesser] = None
    history: List[GuessEntry] = field(default_factory=list)
    created_at: float = field(default_factory=time)
    updated_at: float = field(default_factory=time)

    @property
    def length(self) -> int:
        return self.solver.length

    @property
    def guesses_used(self) -> int:
        return len(self.history)


@dataclass
class Stats:
    games_started: int = 0
    games_solved: int = 0

    solved_by_player: int = 0
    solved_by_solver: int = 0

    total_guesses_in_solved: int = 0
    fastest_solve: Optional[int] = None


def feedback_message(bulls: int, cows: int, length: int) -> str:
    if bulls == length:
        return "solved"
    if bulls == 0 and cows == 0:
        return "no bulls, no cows"
    return f"{bulls} bull(s) and {cows} cow(s)"


class GameStore:
    def __init__(self, strict_solver: bool = False) -> None:
        self._games: Dict[str, Game] = {}
        self._lock = RLock()
        self._stats = Stats()
        self.strict_solver = strict_solver

    def create(self, secret: Optional[Digits], length: Optional[int] = None) -> Game:
        """
        secret=None starts a game where the player holds the secret and
        reports scores back through feedback().
        """
        if length is None:
            length = len(secret) if secret is not None else DEFAULT_LENGTH
        validate_length(length)
        if secret is not None:
            validate_digits(secret, length)

        game = Game(id=str(uuid4()), secret=secret, solver=Solver(length, strict=self.strict_solver))
        with self._lock:
            self._games[game.id] = game
            self._stats.games_started += 1
        logger.debug("Created game %s (length=%d)", game.id, length)
        return game

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._games.get(game_id)

    # --- Player side ---

    def guess(self, game_id: str, attempt: Digits) -> Optional[Game]:
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                return None
            self._ensure_in_progress(game)
            if game.secret is None:
                raise ValidationError("This game has no stored secret to guess against.")

            validate_digits(attempt, game.length)
            bulls, cows = score_guess(game.secret, attempt)
            self._record(game, attempt, bulls, cows, "player")
            return game

    # --- Solver side ---

    def solver_guess(self, game_id: str) -> Optional[Digits]:
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                return None
            self._ensure_in_progress(game)
            return game.solver.next_guess()

    def solver_step(self, game_id: str) -> Optional[Game]:
        """One solver guess, scored against the stored secret."""
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                return None
            self._ensure_in_progress(game)
            if game.secret is None:
                raise ValidationError("This game has no stored secret; report scores with feedback().")

            attempt = game.solver.next_guess()
            bulls, cows = score_guess(game.secret, attempt)
            self._record(game, attempt, bulls, cows, "solver")
            return game

    def solve(self, game_id: str) -> Optional[Game]:
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                return None
            while game.status == "in_progress":
                self.solver_step(game_id)
            return game

    def feedback(self, game_id: str, attempt: Digits, bulls: int, cows: int) -> Optional[Game]:
        """
        Score reported by whoever holds the secret.
        With a stored secret the reported score must match the real one.
        """
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                return None
            self._ensure_in_progress(game)
            validate_digits(attempt, game.length)
            if game.secret is not None and (bulls, cows) != score_guess(game.secret, attempt):
                raise ValidationError("Reported score does not match the stored secret.")
            self._record(game, attempt, bulls, cows, "solver")
            return game

    def reset(self, game_id: str, secret: Optional[Digits] = None, length: Optional[int] = None) -> Optional[Game]:
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                return None

            if length is None:
                length = len(secret) if secret is not None else game.length
            validate_length(length)
            if secret is not None:
                validate_digits(secret, length)

            game.secret = secret
            game.solver.reset(length)
            game.status = "in_progress"
            game.solved_by = None
            game.history = []
            game.updated_at = time()
            self._stats.games_started += 1
            return game

    # --- Helpers ---

    def _ensure_in_progress(self, game: Game) -> None:
        if game.status != "in_progress":
            raise AlreadySolvedError()

    def _record(self, game: Game, attempt: Digits, bulls: int, cows: int, guesser: Guesser) -> None:
        # Validates the score before anything is written to history
        game.solver.apply_feedback(attempt, bulls, cows)

        game.history.append(
            GuessEntry(
                guess=attempt,
                bulls=bulls,
                cows=cows,
                message=feedback_message(bulls, cows, game.length),
                guesser=guesser,
                timestamp=time(),
            )
        )
        game.updated_at = time()

        if game.solver.is_solved():
            game.status = "solved"
            game.solved_by = guesser
            self._update_stats_on_solve(game)

    def _update_stats_on_solve(self, game: Game) -> None:
        self._stats.games_solved += 1
        if game.solved_by == "player":
            self._stats.solved_by_player += 1
        else:
            self._stats.solved_by_solver += 1

        used = game.guesses_used
        self._stats.total_guesses_in_solved += used
        if self._stats.fastest_solve is None or used < self._stats.fastest_solve:
            self._stats.fastest_solve = used

    def get_stats(self) -> Stats:
        return self._stats

    def reset_stats(self) -> None:
        with self._lock:
            self._stats = Stats()
