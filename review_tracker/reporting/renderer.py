"""
Report rendering.

Turns CoverageStats into the HTML page organizers keep open in a browser and
into the console summary printed after every cycle.
"""

import html
import os
from datetime import datetime, timezone
from typing import List, Optional

from loguru import logger

from ..models.records import CoverageStats


def percent(value: Optional[float]) -> str:
    """Format a percentage, or "n/a" when there is no data."""
    if value is None:
        return "n/a"
    return f"{value:3.1f}%"


def format_timestamp(moment: datetime) -> str:
    """Format a timestamp the way ``date --utc`` does."""
    return moment.astimezone(timezone.utc).strftime("%a %b %d %H:%M:%S UTC %Y")


def render_html(stats: CoverageStats, generated_at: datetime) -> str:
    """
    Render the missing-reviews page.

    Args:
        stats: Coverage statistics to render
        generated_at: Timestamp shown as the last update

    Returns:
        The complete HTML document
    """
    lines = [
        "<html><body>",
        "<table><tr><th>Submission</th><th>Code</th><th>n_reviews</th></tr>",
    ]
    for submission in stats.missing_submissions:
        url = html.escape(submission.review_url, quote=True)
        title = html.escape(submission.title)
        code = html.escape(submission.code)
        lines.extend([
            "<tr>",
            f"    <td><a href=\"{url}\">{title}</a></td>",
            f"    <td>{code}</td><td>{submission.review_count}</td>",
            "</tr>",
        ])
    lines.append("</table>")

    lines.extend([
        "<p>",
        f"Proposals done: {stats.n_proposals_done}  ({percent(stats.proposals_done_pct)})<br />",
        f"Reviews done: {stats.n_reviews_done}  ({percent(stats.reviews_done_pct)})",
        "</p>",
        f"<p>Last update: {format_timestamp(generated_at)}</p></body></html>",
    ])
    return "\n".join(lines) + "\n"


def write_html(path: str, stats: CoverageStats, generated_at: Optional[datetime] = None) -> None:
    """
    Write the missing-reviews page to a file.

    Args:
        path: Output file path; parent directories are created
        stats: Coverage statistics to render
        generated_at: Timestamp shown as the last update (defaults to now)
    """
    moment = generated_at or datetime.now(timezone.utc)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, "w", encoding="utf-8") as fp:
        fp.write(render_html(stats, moment))
    logger.info(f"Wrote report with {stats.n_proposals_missing} rows to {path}")


def format_console(stats: CoverageStats) -> List[str]:
    """Summary lines for the console, including per-bin counts for non-empty bins."""
    lines = [
        f"Proposals missing reviews: {stats.n_proposals_missing}/{stats.n_all} "
        f"{percent(stats.proposals_missing_pct)}",
        f"Number of reviews missing: {stats.n_reviews_missing}/{stats.n_total_desired} "
        f"{percent(stats.reviews_missing_pct)}",
    ]
    for nbin in sorted(stats.count_in_bin):
        count = stats.count_in_bin[nbin]
        if count == 0:
            continue
        lines.append(f"    with {nbin} reviews: {count}")
    return lines
