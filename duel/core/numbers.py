from __future__ import annotations

import random

from duel.core.models import NUMBER_RANGE, NumberQuota
from duel.core.predicates import is_perfect_square, is_prime
from duel.core.sampling import DEFAULT_MAX_ATTEMPTS, draw, draw_batch


POPULATION = tuple(NUMBER_RANGE)


def number_quota(count: int, prime_likelihood: int) -> NumberQuota:
    """Split ``count`` numbers into primes and non-primes.

    Primes must outnumber non-primes by more than ``prime_likelihood`` to one,
    and a third of the primes (rounded down) are drawn as perfect squares.
    """
    non_primes = count // prime_likelihood
    primes = count - non_primes
    while non_primes * prime_likelihood >= primes:
        non_primes -= 1
        primes += 1
    return NumberQuota(primes=primes, non_primes=non_primes, squares=primes // 3)


def _is_odd_square(n: int) -> bool:
    return is_perfect_square(n) and is_prime(n)


def _is_plain_prime(n: int) -> bool:
    return is_prime(n) and not is_perfect_square(n)


def _is_plain_non_prime(n: int) -> bool:
    return not is_prime(n) and not is_perfect_square(n)


def generate_numbers(
    quota: NumberQuota,
    rng: random.Random,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> list[int]:
    """Squares first, then odd non-squares, then even non-squares."""
    primes_left = quota.primes
    non_primes_left = quota.non_primes

    squares: list[int] = []
    for _ in range(quota.squares):
        if non_primes_left > 0:
            accept = is_perfect_square
        else:
            # even squares would count against an exhausted non-prime bucket
            accept = _is_odd_square
        value = draw(rng, accept, POPULATION, max_attempts)
        if is_prime(value):
            primes_left -= 1
        else:
            non_primes_left -= 1
        squares.append(value)

    primes = draw_batch(rng, _is_plain_prime, POPULATION, primes_left, max_attempts)
    non_primes = draw_batch(rng, _is_plain_non_prime, POPULATION, non_primes_left, max_attempts)
    return squares + primes + non_primes
