"""CSV export of the submission catalog and of the extracted reviews."""

import os
from typing import Sequence

import pandas as pd
from loguru import logger

from ..models.records import ReviewRecord, SubmissionRecord


class CsvSink:
    """Writes a sequence of records to a CSV file, replacing any previous export."""

    COLUMNS: Sequence[str] = ()
    RENAME: dict = {}

    def __init__(self, csv_path: str):
        """
        Initialize the CSV sink with a file path.

        Args:
            csv_path: Path to the CSV file
        """
        self.csv_path = csv_path
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        """Ensure the directory for the CSV file exists."""
        directory = os.path.dirname(self.csv_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    def to_frame(self, records: Sequence) -> pd.DataFrame:
        df = pd.DataFrame([record.model_dump() for record in records], columns=list(self.COLUMNS))
        return df.rename(columns=self.RENAME)

    def write(self, records: Sequence) -> int:
        """
        Write records to the CSV file.

        Args:
            records: Records to write

        Returns:
            Number of records written
        """
        df = self.to_frame(records)
        df.to_csv(self.csv_path, index=False, encoding="utf-8")
        logger.info(f"Wrote {len(df)} rows to {self.csv_path}")
        return len(df)


class CatalogCsvSink(CsvSink):
    """CSV export of the aggregated submission catalog."""

    COLUMNS = list(SubmissionRecord.model_fields)
    RENAME = {"submission_type": "type"}


class ReviewCsvSink(CsvSink):
    """CSV export of the scored reviews."""

    COLUMNS = list(ReviewRecord.model_fields)
    RENAME = {"submission_code": "submission", "reviewer_id": "reviewer"}
