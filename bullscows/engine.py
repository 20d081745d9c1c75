"""
Pure game logic (no HTTP, no storage).
We compute two feedback numbers for each guess:
- bulls: how many indices are exactly correct (right digit, right place)
- cows: how many digits appear in the secret but at a different index

Secrets and guesses never repeat a digit, so a digit is either a bull,
a cow, or absent. Nothing is counted twice.
"""

from functools import lru_cache
from itertools import permutations
from typing import List, Tuple

from .errors import ValidationError
from .types import ALPHABET, MAX_LENGTH, MIN_LENGTH, Digits, Score


def _check_same_length(secret: Digits, guess: Digits) -> int:
    n = len(secret)
    if n == 0 or len(guess) != n:
        raise ValueError("Secret and guess must be the same non-zero length.")
    return n


def get_bulls(secret: Digits, guess: Digits) -> int:
    n = _check_same_length(secret, guess)

    bulls = 0
    i = 0
    while i < n:
        if secret[i] == guess[i]:
            bulls += 1
        i += 1
    return bulls


def get_cows(secret: Digits, guess: Digits) -> int:
    n = _check_same_length(secret, guess)

    cows = 0
    i = 0
    while i < n:
        secret_char = secret[i]
        # same index would be a bull, not a cow
        if secret_char != guess[i] and secret_char in guess:
            cows += 1
        i += 1
    return cows


def score_guess(secret: Digits, guess: Digits) -> Score:
    """
    Example:
      secret = "1234"
      guess  = "1243"
      bulls = 2  (1 and 2 are in place)
      cows  = 2  (4 and 3 are present, but swapped)
      Returns a tuple: (bulls, cows)

    Inputs are assumed valid (see validate_digits); only lengths are checked.
    """
    return (get_bulls(secret, guess), get_cows(secret, guess))


def is_win(secret: Digits, guess: Digits) -> bool:
    """Win = all digits match in order. False on a length mismatch."""
    n = len(secret)
    if n == 0 or len(guess) != n:
        return False
    return secret == guess


# ---------------- Validation ----------------

def has_duplicate_symbols(text: str) -> bool:
    return len(set(text)) != len(text)


def validate_length(length: int) -> int:
    if isinstance(length, bool) or not isinstance(length, int):
        raise ValidationError("Length must be an integer.")
    if length < MIN_LENGTH or length > MAX_LENGTH:
        raise ValidationError(f"Length must be between {MIN_LENGTH} and {MAX_LENGTH}.")
    return length


def validate_digits(text, length: int) -> Digits:
    """
    Checks that text is usable as a secret or a guess:
    exactly `length` characters, digits only, no digit used twice.
    Returns the text unchanged, or raises ValidationError.
    """
    if text is None or not isinstance(text, str):
        raise ValidationError("Expected a string of digits.")
    if len(text) != length:
        raise ValidationError(f"Must have exactly {length} digits.")

    for char in text:
        if char not in ALPHABET:
            raise ValidationError("Only the digits 0-9 are allowed.")

    if has_duplicate_symbols(text):
        raise ValidationError("Digits must not repeat.")
    return text


def is_valid_digits(text, length: int) -> bool:
    try:
        validate_digits(text, length)
    except ValidationError:
        return False
    return True


# ---------------- Candidate generation ----------------

@lru_cache(maxsize=None)
def _all_candidates(length: int) -> Tuple[Digits, ...]:
    # permutations() walks the alphabet in order, so "0123" < "0124" < ... < "9876"
    return tuple("".join(p) for p in permutations(ALPHABET, length))


def generate_candidates(length: int) -> List[Digits]:
    """
    Every digit string of the given length with no repeated digit,
    in ascending order. Leading zeros are allowed.
    length=4 -> 10*9*8*7 = 5040 strings.
    The caller owns the returned list.
    """
    validate_length(length)
    return list(_all_candidates(length))
