"""Polling loop that keeps the missing-reviews report up to date."""

import threading
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from loguru import logger

from ..config import Settings
from ..exceptions import ConfigError
from ..reporting.renderer import format_console, write_html
from .pipeline import CycleResult, ReviewPipeline


class ReportScheduler:
    """
    Runner for periodic report regeneration.

    Runs the pipeline at a fixed interval until its stop event is set. The
    inter-cycle wait is on the event itself, so a shutdown request ends the
    wait immediately.
    """

    def __init__(
        self,
        pipeline: ReviewPipeline,
        settings: Settings,
        output_path: Optional[str] = None,
        echo: Callable[[str], Any] = print,
        stop_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the scheduler.

        Args:
            pipeline: Pipeline run once per cycle
            settings: Configuration (poll interval, partial-data policy)
            output_path: HTML report path (defaults to settings.output_html)
            echo: Callable receiving each console summary line
            stop_event: Event that cancels the loop (a fresh one by default)
        """
        self.pipeline = pipeline
        self.settings = settings
        self.output_path = output_path or settings.output_html
        self.echo = echo
        self.stop_event = stop_event or threading.Event()
        # Number of the current poll cycle, bound to its log records as ``cycle``
        self.cycle = 0
        self.stats: Dict[str, int] = {
            "runs_completed": 0,
            "runs_rendered": 0,
            "runs_incomplete": 0,
            "runs_failed": 0,
        }

    def run_once(self) -> CycleResult:
        """
        Run a single cycle and render its report.

        An incomplete cycle is only rendered when ``settings.render_partial``
        is set; otherwise the previous report file is left in place.

        Returns:
            The cycle result
        """
        self.cycle += 1
        with logger.contextualize(cycle=self.cycle):
            self.echo(datetime.now(timezone.utc).isoformat())
            result = self.pipeline.run_cycle()
            self.stats["runs_completed"] += 1

            if not result.complete:
                self.stats["runs_incomplete"] += 1
                if not self.settings.render_partial:
                    logger.warning(
                        f"Skipping report for incomplete cycle ({len(result.errors)} failed walks), "
                        f"keeping previous {self.output_path}"
                    )
                    return result
                logger.warning("Rendering report from incomplete data")

            write_html(self.output_path, result.stats)
            for line in format_console(result.stats):
                self.echo(line)
            self.stats["runs_rendered"] += 1
            return result

    def run_forever(self) -> None:
        """Run cycles every ``poll_interval`` seconds until stopped."""
        interval = self.settings.poll_interval
        logger.info(f"Starting report loop for {self.output_path}, interval: {interval}s")

        try:
            while not self.stop_event.is_set():
                cycle_start = time.time()

                try:
                    self.run_once()
                except ConfigError:
                    raise
                except Exception as e:
                    self.stats["runs_failed"] += 1
                    logger.exception(f"Error in report cycle: {e}")

                elapsed = time.time() - cycle_start
                sleep_time = max(0.0, interval - elapsed)
                if sleep_time > 0:
                    logger.info(f"Sleeping for {sleep_time:.2f}s until next cycle")
                if self.stop_event.wait(sleep_time):
                    break
        finally:
            logger.info(
                f"Report loop stopped after {self.stats['runs_completed']} cycles "
                f"({self.stats['runs_rendered']} rendered)"
            )

    def stop(self) -> None:
        """Stop the loop after the current cycle."""
        logger.info("Stopping report loop")
        self.stop_event.set()
