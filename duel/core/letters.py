from __future__ import annotations

import math
import random

from duel.core.errors import QuotaError
from duel.core.models import ALPHABET, LetterQuota
from duel.core.predicates import is_vowel
from duel.core.sampling import DEFAULT_MAX_ATTEMPTS, draw_batch


DEFAULT_REBALANCE_ITERATIONS = 64


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -0.5 -> -1)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def letter_quota(
    count: int,
    vowel_likelihood: int,
    max_iterations: int = DEFAULT_REBALANCE_ITERATIONS,
) -> LetterQuota:
    """Split ``count`` letters into vowels, 'y's and consonants.

    The base ratio is one consonant to ``vowel_likelihood`` vowels to twice as
    many 'y's. Rounding leaves a remainder, which is handed out half to the
    vowels and half to the 'y's until the three counts add up to ``count``.
    """
    factor = round_half_away(count / (3 * vowel_likelihood + 1))
    consonants = factor
    vowels = vowel_likelihood * factor
    y_count = 2 * vowels

    remainder = count - (consonants + vowels + y_count)
    iterations = 0
    while remainder != 0:
        if iterations >= max_iterations:
            raise QuotaError(
                f"letter quota for count={count}, vowel_likelihood={vowel_likelihood} "
                f"did not settle after {max_iterations} iterations (remainder {remainder})"
            )
        iterations += 1

        vowels = max(vowels + round_half_away(remainder / 2), 0)
        remainder = count - (consonants + vowels + y_count)
        if remainder != 0:
            y_count = max(y_count + round_half_away(remainder / 2), 0)
            remainder = count - (consonants + vowels + y_count)

    return LetterQuota(vowels=vowels, y_count=y_count, consonants=consonants)


def generate_letters(
    quota: LetterQuota,
    rng: random.Random,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> list[str]:
    """Vowels first, then the run of 'y's, then consonants.

    The consonant batch only rejects vowels, so 'y' may turn up there too.
    """
    vowels = draw_batch(rng, is_vowel, ALPHABET, quota.vowels, max_attempts)
    consonants = draw_batch(rng, lambda c: not is_vowel(c), ALPHABET, quota.consonants, max_attempts)
    return vowels + ["y"] * quota.y_count + consonants
