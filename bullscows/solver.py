"""
Elimination solver (no HTTP, no storage).

The solver keeps every digit string that could still be the secret.
After each guess + feedback, it removes the strings that the feedback rules out.

Guess order:
1. Opening guesses: overlapping windows over the alphabet ("0123", "2345", ...),
   as long as they are still candidates.
2. Then one of first / middle / last remaining candidate, picked by the
   guess counter. Cheap, and it avoids walking the list in one direction.

Elimination rules for a guess with (bulls, cows):
- (0, 0)  -> drop every candidate containing any digit of the guess
- (0, c)  -> drop every candidate sharing a digit at the same index as the guess
- (b, _)  -> drop candidates with fewer than b exact matches,
             and if c > 0, candidates sharing fewer than b + c digits with the guess

These filters are looser than "must score exactly (b, c)". The true secret
always survives them, and every guess is removed once tried, so the solver
still finishes. strict=True switches to exact-score filtering.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .engine import generate_candidates, score_guess, validate_digits, validate_length
from .errors import AlreadySolvedError, ExhaustedCandidatesError, ValidationError
from .types import ALPHABET, DEFAULT_LENGTH, Digits, Score

logger = logging.getLogger(__name__)


def opening_guesses(length: int) -> Tuple[Digits, ...]:
    """
    Windows of `length` consecutive alphabet digits (wrapping after 9),
    starting every length // 2 digits.
      length=4 -> ("0123", "2345", "4567", "6789", "8901")
    """
    validate_length(length)
    size = len(ALPHABET)
    step = max(1, length // 2)

    openers = []
    start = 0
    while start < size:
        opener = "".join(ALPHABET[(start + k) % size] for k in range(length))
        if opener not in openers:
            openers.append(opener)
        start += step
    return tuple(openers)


# ---------------- Filters ----------------
# Each filter returns a new list; the solver swaps it in afterwards.

def _exact_matches(candidate: Digits, guess: Digits) -> int:
    return sum(1 for a, b in zip(candidate, guess) if a == b)


def _shared_symbols(candidate: Digits, guess: Digits) -> int:
    return sum(1 for char in guess if char in candidate)


def eliminate_containing_any(candidates: Sequence[Digits], guess: Digits) -> List[Digits]:
    """Keep only candidates that use none of the guess digits."""
    banned = set(guess)
    return [c for c in candidates if banned.isdisjoint(c)]


def eliminate_matching_index(candidates: Sequence[Digits], guess: Digits) -> List[Digits]:
    """Keep only candidates that differ from the guess at every index."""
    return [c for c in candidates if _exact_matches(c, guess) == 0]


def eliminate_not_hard_matching(candidates: Sequence[Digits], guess: Digits, required: int) -> List[Digits]:
    """Keep candidates with at least `required` exact-position matches (bulls)."""
    return [c for c in candidates if _exact_matches(c, guess) >= required]


def eliminate_not_soft_matching(candidates: Sequence[Digits], guess: Digits, required: int) -> List[Digits]:
    """Keep candidates containing at least `required` of the guess digits, anywhere."""
    return [c for c in candidates if _shared_symbols(c, guess) >= required]


def eliminate_inconsistent(candidates: Sequence[Digits], guess: Digits, score: Score) -> List[Digits]:
    """Keep candidates that would have produced exactly this score."""
    return [c for c in candidates if score_guess(c, guess) == score]


class Solver:
    """
    Owns the candidate set for one game. Nothing else mutates it.

        solver = Solver(4)
        guess = solver.next_guess()
        solver.apply_feedback(guess, bulls, cows)
    """

    def __init__(
        self,
        length: int = DEFAULT_LENGTH,
        strict: bool = False,
        openers: Optional[Sequence[Digits]] = None,
    ) -> None:
        self.length = validate_length(length)
        self.strict = strict
        self._custom_openers = tuple(openers) if openers is not None else None
        self._candidates: List[Digits] = []
        self._guess_index = 1
        self._solved = False
        self.reset()

    # --- Setup ---

    def reset(self, length: Optional[int] = None) -> None:
        if length is not None:
            self.length = validate_length(length)

        if self._custom_openers is not None:
            for opener in self._custom_openers:
                validate_digits(opener, self.length)
            self.openers = self._custom_openers
        else:
            self.openers = opening_guesses(self.length)

        self._candidates = generate_candidates(self.length)
        self._guess_index = 1
        self._solved = False
        logger.debug("Solver reset: length=%d, %d candidates", self.length, len(self._candidates))

    # --- Queries ---

    def is_solved(self) -> bool:
        return self._solved

    def remaining_count(self) -> int:
        return len(self._candidates)

    @property
    def guess_count(self) -> int:
        """How many guesses have been fed back so far."""
        return self._guess_index - 1

    @property
    def candidates(self) -> Tuple[Digits, ...]:
        return tuple(self._candidates)

    # --- Guess selection ---

    def next_guess(self) -> Digits:
        if self._solved:
            raise AlreadySolvedError()

        size = len(self._candidates)
        if size == 0:
            raise ExhaustedCandidatesError()

        # 1. Opening guesses that have not been ruled out yet
        for opener in self.openers:
            if opener in self._candidates:
                return opener

        # 2. Last / middle / first, depending on the guess counter
        if self._guess_index % 3 == 0:
            index = size - 1
        elif self._guess_index % 2 == 0:
            index = size // 2
        else:
            index = 0
        return self._candidates[index]

    # --- Feedback ---

    def apply_feedback(self, guess: Digits, bulls: int, cows: int) -> int:
        """
        Records the score of `guess` and removes every candidate it rules out.
        Returns how many candidates were removed.
        """
        if self._solved:
            raise AlreadySolvedError()

        validate_digits(guess, self.length)
        self._check_score(bulls, cows)

        before = len(self._candidates)
        self._guess_index += 1

        if bulls == self.length:
            self._solved = True
            self._candidates = []  # nothing left to narrow down
            logger.debug("Solved with %s after %d guesses", guess, self.guess_count)
            return before

        # The tried guess is never a candidate again
        candidates = [c for c in self._candidates if c != guess]

        if self.strict:
            candidates = eliminate_inconsistent(candidates, guess, (bulls, cows))
        elif bulls == 0:
            if cows == 0:
                candidates = eliminate_containing_any(candidates, guess)
            else:
                candidates = eliminate_matching_index(candidates, guess)
        else:
            candidates = eliminate_not_hard_matching(candidates, guess, bulls)
            if cows > 0:
                candidates = eliminate_not_soft_matching(candidates, guess, bulls + cows)

        self._candidates = candidates
        removed = before - len(candidates)
        logger.debug(
            "Guess #%d %s -> bulls=%d cows=%d: removed %d, %d left",
            self.guess_count, guess, bulls, cows, removed, len(candidates),
        )
        if not candidates:
            logger.warning("Candidate set exhausted after %s (%d, %d); feedback is inconsistent", guess, bulls, cows)
        return removed

    def _check_score(self, bulls: int, cows: int) -> None:
        for value in (bulls, cows):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError("Bulls and cows must be integers.")
        if bulls < 0 or cows < 0:
            raise ValidationError("Bulls and cows cannot be negative.")
        if bulls + cows > self.length:
            raise ValidationError(f"Bulls + cows cannot exceed {self.length}.")

    # --- Driving loop ---

    def solve(
        self,
        secret: Digits,
        max_guesses: Optional[int] = None,
        on_guess: Optional[Callable[[Digits, int, int], None]] = None,
    ) -> List[Tuple[Digits, int, int]]:
        """
        Plays against a known secret until solved.
        Returns [(guess, bulls, cows), ...]; the last entry is the secret.
        Raises ExhaustedCandidatesError if the set empties first.
        """
        if self._solved:
            raise AlreadySolvedError()
        validate_digits(secret, self.length)

        steps: List[Tuple[Digits, int, int]] = []
        while not self._solved:
            if max_guesses is not None and len(steps) >= max_guesses:
                break
            guess = self.next_guess()
            bulls, cows = score_guess(secret, guess)
            self.apply_feedback(guess, bulls, cows)
            steps.append((guess, bulls, cows))
            if on_guess is not None:
                on_guess(guess, bulls, cows)
        return steps
