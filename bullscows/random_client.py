"""
- HTTP call with clear fallback
Get a shuffled 0..9 sequence from random.org and keep the first `length` digits.
If anything goes wrong (no internet, timeout, bad response), we fall back to a
local secure shuffle so the game still works.
"""

import logging
import random
from secrets import SystemRandom
from typing import Optional

import requests

from . import config
from .engine import is_valid_digits, validate_length
from .types import ALPHABET, Digits

logger = logging.getLogger(__name__)

RANDOM_URL = "https://www.random.org/sequences/"


def generate_secret(length: int = 4, rng: Optional[random.Random] = None) -> Digits:
    """Local generator: `length` distinct digits. Pass a seeded rng for repeatable secrets."""
    validate_length(length)
    rng = rng or SystemRandom()
    return "".join(rng.sample(ALPHABET, length))


def _fetch_from_random_org(length: int) -> Digits:
    # Parameters to send to random.org
    params = {
        "min": 0,           # smallest value in the sequence
        "max": 9,           # largest value -> every digit exactly once
        "col": 1,           # one number per line
        "format": "plain",  # plain text response
        "rnd": "new",       # always generate a new sequence
    }

    # keep network quick; if it takes too long, we will just fallback
    response = requests.get(RANDOM_URL, params=params, timeout=3.0)
    response.raise_for_status()

    # The body looks like:
    #   7\n0\n3\n9\n...
    values = [line.strip() for line in response.text.splitlines() if line.strip() != ""]

    if len(values) != len(ALPHABET):
        raise ValueError(f"random.org returned {len(values)} values, expected {len(ALPHABET)}.")
    sequence = "".join(values)
    # a two-digit value or a repeat breaks the 0..9 permutation
    if not is_valid_digits(sequence, len(ALPHABET)):
        raise ValueError(f"random.org sequence is not a permutation of 0..9: {values}")

    return sequence[:length]


def fetch_secret(length: int = 4, use_network: Optional[bool] = None) -> Digits:
    validate_length(length)
    if use_network is None:
        use_network = config.USE_RANDOM_ORG

    if use_network:
        try:
            return _fetch_from_random_org(length)
        except (requests.RequestException, ValueError) as exc:
            logger.info("random.org unavailable (%s); using local random secret", exc)

    return generate_secret(length)
