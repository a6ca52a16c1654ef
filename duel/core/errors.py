from __future__ import annotations


class DuelError(Exception):
    """Base exception for all duel errors"""


class InvalidInputError(DuelError):
    pass


class QuotaError(DuelError):
    """Letter quota rebalancing did not converge"""


class SamplingError(DuelError):
    """A rejection-sampling draw ran out of attempts"""


class ConfigError(DuelError):
    pass
