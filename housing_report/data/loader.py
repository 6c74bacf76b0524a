"""Data loading module for the Ames housing report."""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)


class DataIngestor:
    """Handles validated loading of the housing CSV.

    Args:
        file_path: Path to the CSV file. Falls back to the DATA_PATH env var
            or 'data/train.csv' if not provided.
    """

    def __init__(self, file_path: Optional[Union[str, Path]] = None) -> None:
        self.file_path = Path(file_path or os.getenv("DATA_PATH", "data/train.csv"))

    def load_csv_data(self, **read_csv_kwargs: Any) -> pd.DataFrame:
        """Load the CSV file into a DataFrame with validation.

        Args:
            **read_csv_kwargs: Forwarded to :func:`pandas.read_csv`.

        Returns:
            Loaded DataFrame.

        Raises:
            FileNotFoundError: If the file path does not exist.
            ValueError: If the loaded DataFrame is empty.
        """
        logger.info("Attempting to load data from: %s", self.file_path)

        if not self.file_path.exists():
            msg = f"File not found: {self.file_path}"
            logger.error(msg)
            raise FileNotFoundError(msg)

        try:
            df = pd.read_csv(self.file_path, **read_csv_kwargs)
        except Exception as exc:
            logger.error("Failed to read CSV file: %s", exc)
            raise

        if df.empty:
            raise ValueError(f"Loaded DataFrame from '{self.file_path}' is empty.")

        logger.info("Successfully loaded %d rows and %d columns.", *df.shape)
        return df
