from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any


NUMBER_RANGE = range(1, 100)
ALPHABET = string.ascii_lowercase


@dataclass(frozen=True)
class Challenge:
    number: int
    letter: str

    @property
    def letter_value(self) -> int:
        return ALPHABET.index(self.letter) + 1


ChallengeSet = tuple[Challenge, ...]


def pair_challenges(numbers: list[int], letters: list[str]) -> ChallengeSet:
    if len(numbers) != len(letters):
        raise ValueError(f"cannot pair {len(numbers)} numbers with {len(letters)} letters")
    return tuple(Challenge(number=n, letter=c) for n, c in zip(numbers, letters))


@dataclass(frozen=True)
class WinRecord:
    letter_won: bool
    number_won: bool

    @classmethod
    def for_letters(cls, won: bool) -> "WinRecord":
        return cls(letter_won=won, number_won=not won)


@dataclass(frozen=True)
class SideTally:
    wins: int
    streak: int

    def to_dict(self) -> dict[str, int]:
        return {"wins": self.wins, "streak": self.streak}


@dataclass(frozen=True)
class Result:
    letters: SideTally
    numbers: SideTally

    def to_dict(self) -> dict[str, Any]:
        return {"letters": self.letters.to_dict(), "numbers": self.numbers.to_dict()}


@dataclass(frozen=True)
class NumberQuota:
    primes: int
    non_primes: int
    squares: int


@dataclass(frozen=True)
class LetterQuota:
    vowels: int
    y_count: int
    consonants: int

    @property
    def total(self) -> int:
        return self.vowels + self.y_count + self.consonants
