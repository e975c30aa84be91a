"""Report rendering for the review tracker."""

from .renderer import format_console, render_html, write_html

__all__ = ["format_console", "render_html", "write_html"]
