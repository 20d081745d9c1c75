"""
Labels for clarity.
"""

from typing import Literal, Tuple

Digits = str  # "0123" -> distinct symbols from ALPHABET
Score = Tuple[int, int]  # (bulls, cows)
GameStatus = Literal["in_progress", "solved"]
Guesser = Literal["player", "solver"]

ALPHABET = "0123456789"
DEFAULT_LENGTH = 4
MIN_LENGTH = 2
MAX_LENGTH = len(ALPHABET)
