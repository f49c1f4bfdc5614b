"""flashlearn CLI — scheduling diagnostics and configuration."""

import asyncio
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Annotated, NoReturn

import typer

from flashlearn.application.config import AppConfig, resolve_config
from flashlearn.application.scheduler import compute_next_review
from flashlearn.consts import VERSION
from flashlearn.domain.errors import FlashlearnError
from flashlearn.domain.models import CardReviewState, ReviewStatus

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="flashlearn: spaced-repetition scheduling for flashcards.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage flashlearn configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _configure_logging(verbose: int) -> None:
    logging.getLogger("flashlearn").setLevel(LOG_LEVELS.get(verbose, logging.DEBUG))


def _state_to_dict(state: CardReviewState, now: datetime) -> dict:
    return {
        "status": state.status.value,
        "interval": state.interval,
        "ease_factor": round(state.ease_factor, 4),
        "streak": state.streak,
        "due_date": state.due_date.isoformat() if state.due_date else None,
        "due_in_minutes": (
            int((state.due_date - now).total_seconds() // 60) if state.due_date else None
        ),
    }


def _fail(err: Exception) -> NoReturn:
    typer.secho(f"Error: {err}", fg="red", err=True)
    raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


def _version_callback(value: bool):
    if value:
        typer.echo(f"flashlearn {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version."),
    ] = False,
):
    """Global settings for flashlearn."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def schedule(
    quality: Annotated[
        int, typer.Option("--quality", "-q", min=0, max=5, help="Recall quality, 0-5.")
    ],
    status: Annotated[
        ReviewStatus, typer.Option(help="Current card status.")
    ] = ReviewStatus.NEW,
    interval: Annotated[float, typer.Option(help="Current interval in days.")] = 0.0,
    ease: Annotated[float, typer.Option(help="Current ease factor.")] = 2.5,
    streak: Annotated[int, typer.Option(help="Current streak.")] = 0,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Compute the next review of a single card state."""
    state = CardReviewState(ease_factor=ease, interval=interval, streak=streak, status=status)
    now = datetime.now(timezone.utc)

    try:
        config = resolve_config()
        result = compute_next_review(state, quality, now, config.scheduler_settings())
    except (FlashlearnError, ValueError) as e:
        _fail(e)

    data = _state_to_dict(result, now)
    if json_output:
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"Status: {status.value} -> {result.status.value}")
    typer.echo(f"Interval: {interval} -> {result.interval} days")
    typer.echo(f"Ease: {ease:.2f} -> {result.ease_factor:.2f}")
    typer.echo(f"Streak: {result.streak}")
    typer.echo(f"Due in: {data['due_in_minutes']} min")


@app.command()
def simulate(
    qualities: Annotated[
        list[int], typer.Argument(help="Quality ratings to apply, in order.")
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """[bold green]Simulate[/bold green] a sequence of reviews of one new card.

    Each review happens exactly when the card becomes due.
    """
    from flashlearn.application.factory import create_store

    async def run(config: AppConfig) -> list[dict]:
        clock = {"now": datetime.now(timezone.utc)}
        store = create_store(config, clock=lambda: clock["now"])
        deck = await store.create_deck("Simulation")
        card = await store.create_flashcard(deck.id, "front", "back")

        rows = []
        for i, quality in enumerate(qualities, start=1):
            now = clock["now"]
            outcome = await store.review_card(card.id, quality, now=now)
            row = _state_to_dict(outcome.card.state, now)
            row["review"] = i
            row["quality"] = quality
            rows.append(row)
            clock["now"] = outcome.card.due_date

        stats = await store.get_user_stats()
        logger.info(f"Simulated {stats.total_reviews} reviews, accuracy {stats.accuracy}%")
        return rows

    try:
        rows = asyncio.run(run(resolve_config()))
    except (FlashlearnError, ValueError) as e:
        _fail(e)

    if json_output:
        typer.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        typer.echo(
            f"#{row['review']} q={row['quality']} {row['status']:<9} "
            f"interval={row['interval']} ease={row['ease_factor']:.2f} "
            f"streak={row['streak']} due_in={row['due_in_minutes']}m"
        )


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    try:
        config: AppConfig = resolve_config()
    except ValueError as e:
        _fail(e)
    typer.echo(json.dumps(config.model_dump(), indent=2))
