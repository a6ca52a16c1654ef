from __future__ import annotations

import random
import typer
from importlib import metadata
from rich.console import Console
from rich.table import Table

from duel.core.audit import append_audit
from duel.core.config import DuelSettings, load_settings, resolve_config_path
from duel.core.errors import DuelError
from duel.core.evaluator import DuelInputs, Evaluation, compute_quotas, evaluate, format_result


app = typer.Typer(add_completion=False, help="Duel: letters against numbers under weighted-random rules")
console = Console()


def _get_version() -> str:
    try:
        return metadata.version("duel")
    except metadata.PackageNotFoundError:
        return "0.0.0+local"


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the Duel version and exit.",
        is_eager=True,
    ),
):
    if version:
        console.print(_get_version())
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


def _get_settings(config: str | None) -> DuelSettings:
    path = resolve_config_path(config)
    try:
        return load_settings(path)
    except (FileNotFoundError, DuelError) as e:
        console.print(f"❌ Could not load settings: {e}")
        raise typer.Exit(code=3)


def _challenges_option():
    return typer.Option(..., "--challenges", "-x", min=1, help="Number of challenge pairs to generate")


def _prime_option():
    return typer.Option(..., "--prime-likelihood", "-y", min=1, help="How strongly odd numbers outweigh even ones")


def _vowel_option():
    return typer.Option(..., "--vowel-likelihood", "-z", min=1, help="How strongly vowels outweigh consonants")


def _config_option():
    return typer.Option(None, "--config", help="Path to duel.yaml settings")


def _render_pools(evaluation: Evaluation) -> None:
    table = Table(title="Challenge Pairs")
    table.add_column("#", justify="right")
    table.add_column("Number", justify="right")
    table.add_column("Letter", justify="center")
    table.add_column("Value", justify="right")
    table.add_column("Winner", style="bold")
    for i, (challenge, record) in enumerate(zip(evaluation.challenges, evaluation.records), start=1):
        winner = "letters" if record.letter_won else "numbers"
        table.add_row(str(i), str(challenge.number), challenge.letter, str(challenge.letter_value), winner)
    console.print(table)


@app.command("run")
def run(
    challenges: int = _challenges_option(),
    prime_likelihood: int = _prime_option(),
    vowel_likelihood: int = _vowel_option(),
    seed: int | None = typer.Option(None, "--seed", help="Seed for the random source"),
    show_pools: bool = typer.Option(False, "--show-pools", help="Print every generated pair"),
    log: str | None = typer.Option(None, "--log", help="Run log (JSONL) to append the result to"),
    config: str | None = _config_option(),
):
    settings = _get_settings(config)
    inputs = DuelInputs(challenges, prime_likelihood, vowel_likelihood)
    if seed is None:
        seed = settings.seed
    if seed is None:
        seed = random.SystemRandom().randrange(2**32)

    try:
        evaluation = evaluate(inputs, random.Random(seed), settings)
    except DuelError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(code=3)

    if show_pools:
        _render_pools(evaluation)
    console.print(f"{inputs.header()} seed={seed}", highlight=False, soft_wrap=True)
    console.print_json(format_result(evaluation.result))

    result = evaluation.result.to_dict()
    log_path = log or settings.log_path
    try:
        append_audit(
            {
                "event": "duel_run",
                "challenges": inputs.challenges,
                "prime_likelihood": inputs.prime_likelihood,
                "vowel_likelihood": inputs.vowel_likelihood,
                "seed": seed,
                "result": result,
            },
            path=log_path,
        )
    except OSError as e:
        console.print(f"❌ Could not append to run log {log_path}: {e}")
        raise typer.Exit(code=3)


@app.command("quotas")
def quotas(
    challenges: int = _challenges_option(),
    prime_likelihood: int = _prime_option(),
    vowel_likelihood: int = _vowel_option(),
    config: str | None = _config_option(),
):
    settings = _get_settings(config)
    inputs = DuelInputs(challenges, prime_likelihood, vowel_likelihood)
    try:
        numbers_q, letters_q = compute_quotas(inputs, settings)
    except DuelError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(code=3)

    table = Table(title="Duel Quotas")
    table.add_column("Pool", style="bold")
    table.add_column("Bucket")
    table.add_column("Count", justify="right")
    table.add_row("numbers", "squares", str(numbers_q.squares))
    table.add_row("numbers", "primes (odd)", str(numbers_q.primes))
    table.add_row("numbers", "non-primes (even)", str(numbers_q.non_primes))
    table.add_row("letters", "vowels", str(letters_q.vowels))
    table.add_row("letters", "y", str(letters_q.y_count))
    table.add_row("letters", "consonants", str(letters_q.consonants))
    console.print(table)
