from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
import yaml

from duel.core.errors import ConfigError
from duel.core.letters import DEFAULT_REBALANCE_ITERATIONS
from duel.core.sampling import DEFAULT_MAX_ATTEMPTS


CONFIG_FILENAME = "duel.yaml"
CONFIG_ENV = "DUEL_CONFIG"
DEFAULT_LOG_PATH = "./duel_runs.jsonl"


@dataclass(frozen=True)
class DuelSettings:
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    rebalance_max_iterations: int = DEFAULT_REBALANCE_ITERATIONS
    seed: int | None = None
    log_path: str = DEFAULT_LOG_PATH


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file {p} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {p} must contain a mapping")
    return raw


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{name} must be a mapping, got {section!r}")
    return section


def _positive_int(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{key} must be a positive integer, got {value!r}")
    return value


def load_settings(path: str | Path | None) -> DuelSettings:
    if path is None:
        return DuelSettings()

    settings_path = Path(path).resolve()
    raw = load_yaml(settings_path)
    sampling = _section(raw, "sampling")
    log = _section(raw, "log")

    seed = sampling.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ConfigError(f"seed must be an integer, got {seed!r}")

    log_path = str(log.get("path", DEFAULT_LOG_PATH))
    if not Path(log_path).is_absolute():
        log_path = str((settings_path.parent / log_path).resolve())

    return DuelSettings(
        max_attempts=_positive_int(sampling, "max_attempts", DEFAULT_MAX_ATTEMPTS),
        rebalance_max_iterations=_positive_int(
            sampling, "rebalance_max_iterations", DEFAULT_REBALANCE_ITERATIONS
        ),
        seed=seed,
        log_path=log_path,
    )


def resolve_config_path(config_path: str | None) -> Path | None:
    if config_path:
        return Path(config_path)

    env_path = os.getenv(CONFIG_ENV)
    if env_path:
        env_candidate = Path(env_path)
        if env_candidate.exists():
            return env_candidate

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / CONFIG_FILENAME
        if candidate.exists():
            return candidate

    return None
