from __future__ import annotations

from typing import Iterable

from duel.core.models import ChallengeSet, Result, SideTally, WinRecord, pair_challenges


def score(challenges: ChallengeSet) -> list[WinRecord]:
    """Letters win a pair when their alphabet position does not exceed the number."""
    return [WinRecord.for_letters(c.letter_value <= c.number) for c in challenges]


def score_sequences(numbers: list[int], letters: list[str]) -> list[WinRecord]:
    return score(pair_challenges(numbers, letters))


def longest_streaks(records: Iterable[WinRecord]) -> tuple[int, int]:
    """Return the longest (letters, numbers) runs of consecutive wins."""
    letter_run = number_run = 0
    letter_best = number_best = 0
    for record in records:
        letter_run = letter_run + 1 if record.letter_won else 0
        number_run = number_run + 1 if record.number_won else 0
        letter_best = max(letter_best, letter_run)
        number_best = max(number_best, number_run)
    return letter_best, number_best


def tally(records: list[WinRecord]) -> Result:
    letter_wins = sum(1 for r in records if r.letter_won)
    number_wins = sum(1 for r in records if r.number_won)
    letter_streak, number_streak = longest_streaks(records)
    return Result(
        letters=SideTally(wins=letter_wins, streak=letter_streak),
        numbers=SideTally(wins=number_wins, streak=number_streak),
    )
