"""
Review Tracker - review coverage reports for pretalx conference events.

This package polls the pretalx REST API for submissions and reviews, joins
them, and reports which proposals still lack the desired number of reviews.
"""

__version__ = "1.0.0"
