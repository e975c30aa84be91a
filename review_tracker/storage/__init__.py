"""Storage package for exporting pipeline output."""

from .csv_sink import CatalogCsvSink, CsvSink, ReviewCsvSink

__all__ = ["CatalogCsvSink", "CsvSink", "ReviewCsvSink"]
