"""
CSV reading helpers for the padel league imports.
"""

import logging
import pandas as pd
from typing import List
from padel_league.exceptions import CsvFileError, MissingColumnsError

logger = logging.getLogger(__name__)


class CsvUtils:
    """Utilities for loading import files."""

    @staticmethod
    def read_csv(csv_file: str, required_columns: List[str]) -> pd.DataFrame:
        """
        Read a CSV file as text with lowercased, trimmed column names.
        Raises CsvFileError if the file cannot be read and MissingColumnsError
        if any of the required columns is absent.
        """
        try:
            df = pd.read_csv(csv_file, dtype=str, keep_default_na=False)
        except (OSError, UnicodeDecodeError, pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise CsvFileError(f"Cannot read CSV file {csv_file}: {e}") from e

        df.columns = [str(column).strip().lower() for column in df.columns]
        missing = [column for column in required_columns if column not in df.columns]
        if missing:
            raise MissingColumnsError(f"CSV file {csv_file} is missing columns: {', '.join(missing)}")

        logger.info(f"Loaded CSV with {len(df)} rows from {csv_file}")
        return df
