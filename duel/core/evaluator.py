from __future__ import annotations

import json
import random
from dataclasses import dataclass

from duel.core.config import DuelSettings
from duel.core.errors import InvalidInputError
from duel.core.letters import generate_letters, letter_quota
from duel.core.models import ChallengeSet, LetterQuota, NumberQuota, Result, WinRecord, pair_challenges
from duel.core.numbers import generate_numbers, number_quota
from duel.core.scoring import score, tally


@dataclass(frozen=True)
class DuelInputs:
    challenges: int
    prime_likelihood: int
    vowel_likelihood: int

    def validate(self) -> None:
        for name, value in (
            ("challenges", self.challenges),
            ("prime_likelihood", self.prime_likelihood),
            ("vowel_likelihood", self.vowel_likelihood),
        ):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidInputError(f"{name} must be a positive integer, got {value!r}")

    def header(self) -> str:
        return (
            f"challenges={self.challenges} "
            f"prime_likelihood={self.prime_likelihood} "
            f"vowel_likelihood={self.vowel_likelihood}"
        )


@dataclass(frozen=True)
class Evaluation:
    inputs: DuelInputs
    number_quota: NumberQuota
    letter_quota: LetterQuota
    challenges: ChallengeSet
    records: list[WinRecord]
    result: Result


def compute_quotas(inputs: DuelInputs, settings: DuelSettings | None = None) -> tuple[NumberQuota, LetterQuota]:
    settings = settings or DuelSettings()
    inputs.validate()
    return (
        number_quota(inputs.challenges, inputs.prime_likelihood),
        letter_quota(inputs.challenges, inputs.vowel_likelihood, settings.rebalance_max_iterations),
    )


def evaluate(
    inputs: DuelInputs,
    rng: random.Random | None = None,
    settings: DuelSettings | None = None,
) -> Evaluation:
    settings = settings or DuelSettings()
    if rng is None:
        rng = random.Random(settings.seed)
    numbers_q, letters_q = compute_quotas(inputs, settings)

    numbers = generate_numbers(numbers_q, rng, settings.max_attempts)
    letters = generate_letters(letters_q, rng, settings.max_attempts)
    challenges = pair_challenges(numbers, letters)
    records = score(challenges)
    return Evaluation(
        inputs=inputs,
        number_quota=numbers_q,
        letter_quota=letters_q,
        challenges=challenges,
        records=records,
        result=tally(records),
    )


def format_result(result: Result) -> str:
    return json.dumps(result.to_dict(), indent=2)
