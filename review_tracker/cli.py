"""Command-line interface for the review tracker."""

import signal
from typing import Optional

import typer
from loguru import logger
from typing_extensions import Annotated

from review_tracker.api.client import PretalxClient
from review_tracker.config import Settings, load_settings
from review_tracker.core.pipeline import ReviewPipeline
from review_tracker.core.scheduler import ReportScheduler
from review_tracker.exceptions import ConfigError
from review_tracker.storage.csv_sink import CatalogCsvSink, ReviewCsvSink
from review_tracker.utils.logging import setup_logging

app = typer.Typer(help="pretalx Review Tracker - Report proposals that still lack reviews")

# Global reference to the running scheduler for signal handling
_scheduler: Optional[ReportScheduler] = None

ConfigOption = Annotated[
    Optional[str], typer.Option("--config", "-c", help="Path to YAML configuration file")
]
EventOption = Annotated[
    Optional[str], typer.Option("--event", "-e", help="pretalx event slug (overrides configuration)")
]
LogLevelOption = Annotated[str, typer.Option("--loglevel", "-l", help="Logging level")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output")]


def prepare(config: Optional[str], loglevel: str, verbose: bool, **overrides) -> Settings:
    """
    Load and validate settings and set up logging.

    Exits with status 1 when the configuration is invalid.
    """
    try:
        settings = load_settings(config, **overrides)
    except (ConfigError, ValueError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1)

    setup_logging("DEBUG" if verbose else loglevel, settings=settings)

    validation_errors = settings.validate_settings()
    if validation_errors:
        for error in validation_errors:
            logger.error(f"Configuration error: {error}")
        logger.critical("Invalid configuration, aborting")
        raise typer.Exit(code=1)

    return settings


def build_pipeline(settings: Settings) -> ReviewPipeline:
    """Create the API client and pipeline, exiting with status 1 on a configuration error."""
    try:
        client = PretalxClient.from_settings(settings)
    except ConfigError as e:
        logger.critical(str(e))
        raise typer.Exit(code=1)
    return ReviewPipeline(client, settings)


def handle_shutdown_signal(signum, frame):
    """Handle shutdown signals (SIGTERM, SIGINT)."""
    signal_name = signal.Signals(signum).name
    logger.info(f"Received {signal_name} signal, initiating graceful shutdown")
    if _scheduler is not None:
        _scheduler.stop()


@app.command()
def report(
    config: ConfigOption = None,
    output: Annotated[
        Optional[str], typer.Option("--output", "-o", help="HTML report path")
    ] = None,
    event: EventOption = None,
    loglevel: LogLevelOption = "INFO",
    verbose: VerboseOption = False,
) -> None:
    """
    Run a single poll cycle and write the missing-reviews report.
    """
    settings = prepare(config, loglevel, verbose, event_name=event, output_html=output)
    pipeline = build_pipeline(settings)

    try:
        scheduler = ReportScheduler(pipeline, settings, echo=typer.echo)
        result = scheduler.run_once()
    finally:
        pipeline.client.close()

    if not result.complete:
        raise typer.Exit(code=2)


@app.command()
def watch(
    config: ConfigOption = None,
    output: Annotated[
        Optional[str], typer.Option("--output", "-o", help="HTML report path")
    ] = None,
    interval: Annotated[
        Optional[int], typer.Option("--interval", "-i", help="Seconds between poll cycles")
    ] = None,
    event: EventOption = None,
    loglevel: LogLevelOption = "INFO",
    verbose: VerboseOption = False,
) -> None:
    """
    Keep polling and regenerating the missing-reviews report until interrupted.
    """
    global _scheduler

    settings = prepare(
        config, loglevel, verbose,
        event_name=event, output_html=output, poll_interval=interval,
    )
    pipeline = build_pipeline(settings)
    logger.info(f"Selecting event {pipeline.event.name} and dumping to {settings.output_html}")

    _scheduler = ReportScheduler(pipeline, settings, echo=typer.echo)
    signal.signal(signal.SIGTERM, handle_shutdown_signal)
    signal.signal(signal.SIGINT, handle_shutdown_signal)

    try:
        _scheduler.run_forever()
    except ConfigError as e:
        logger.critical(str(e))
        raise typer.Exit(code=1)
    finally:
        _scheduler = None
        pipeline.client.close()


@app.command()
def export(
    output: Annotated[str, typer.Option("--output", "-o", help="CSV output path")] = "submissions.csv",
    config: ConfigOption = None,
    event: EventOption = None,
    loglevel: LogLevelOption = "INFO",
    verbose: VerboseOption = False,
) -> None:
    """
    Export the submission catalog with review counts and review texts to CSV.
    """
    settings = prepare(config, loglevel, verbose, event_name=event)
    pipeline = build_pipeline(settings)

    try:
        result = pipeline.run_cycle()
    finally:
        pipeline.client.close()

    rows = CatalogCsvSink(output).write(result.catalog)
    typer.echo(f"Exported {rows} submissions to {output}")
    if not result.complete:
        typer.echo("Warning: some pages could not be fetched, export is incomplete", err=True)
        raise typer.Exit(code=2)


@app.command()
def reviews(
    output: Annotated[str, typer.Option("--output", "-o", help="CSV output path")] = "reviews.csv",
    config: ConfigOption = None,
    event: EventOption = None,
    loglevel: LogLevelOption = "INFO",
    verbose: VerboseOption = False,
) -> None:
    """
    Export all scored reviews to CSV.

    Reviews on submissions of the token holder are never returned by the API.
    """
    settings = prepare(config, loglevel, verbose, event_name=event)
    pipeline = build_pipeline(settings)

    try:
        records, error = pipeline.fetch_reviews()
    finally:
        pipeline.client.close()

    rows = ReviewCsvSink(output).write(records)
    typer.echo(f"Exported {rows} reviews to {output}")
    if error is not None:
        typer.echo(f"Warning: review export is incomplete: {error}", err=True)
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
