"""Train-partition cleaning for the housing dataset.

The :class:`HousingCleaner` is sklearn-compatible (``fit`` /
``transform``) so that its statistics are learned *only* on training
data, preventing leakage from the held-out rows.

Cleaning steps, in order:
    1. Outlier trim: rows whose living area reaches the threshold are
       removed.  This runs before any statistic is computed.
    2. Median imputation of one numeric column, using the median of the
       trimmed training rows.

Stateful parameters learned during ``fit``:
    - ``impute_median_``: Median of ``impute_column`` over the trimmed
      training rows.
    - ``n_trimmed_``: Number of training rows removed by the trim.
"""

import logging
from typing import Optional

import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin

logger = logging.getLogger(__name__)


class HousingCleaner(BaseEstimator, TransformerMixin):
    """Trim living-area outliers and impute one numeric column.

    Args:
        impute_column: Numeric column whose missing values are filled
            with the training median.
        area_column: Living-area column used for the outlier trim.
        area_threshold: Rows with ``area_column >= area_threshold`` are
            dropped from the training fold.
    """

    def __init__(
        self,
        impute_column: str = "LotFrontage",
        area_column: str = "GrLivArea",
        area_threshold: float = 4000,
    ) -> None:
        self.impute_column = impute_column
        self.area_column = area_column
        self.area_threshold = area_threshold

    # ------------------------------------------------------------------
    # Sklearn API
    # ------------------------------------------------------------------

    def fit(self, df: pd.DataFrame, y: Optional[pd.Series] = None) -> "HousingCleaner":
        """Learn the imputation median from the trimmed training rows.

        Args:
            df: Training partition.
            y: Ignored; present for sklearn compatibility.

        Returns:
            Fitted transformer (self).

        Raises:
            ValueError: If every ``impute_column`` value in the trimmed
                rows is missing, leaving no median to impute with.
        """
        df_trim = self._trim_outliers(df)
        self.n_trimmed_: int = len(df) - len(df_trim)

        if df_trim[self.impute_column].notna().sum() == 0:
            raise ValueError(
                f"Cannot impute {self.impute_column}: no non-missing values remain "
                f"in the training rows after the {self.area_column} trim."
            )
        self.impute_median_: float = float(df_trim[self.impute_column].median())
        logger.info(
            "Learned %s median: %.3f (from %d trimmed training rows)",
            self.impute_column,
            self.impute_median_,
            len(df_trim),
        )
        return self

    def transform(
        self,
        df: pd.DataFrame,
        filter_outliers: bool = True,
    ) -> pd.DataFrame:
        """Apply the cleaning steps to a DataFrame.

        Args:
            df: Partition to clean.
            filter_outliers: When ``True`` rows at or above the living-area
                threshold are removed before imputation.

        Returns:
            Cleaned copy of ``df``.
        """
        df = df.copy()

        if filter_outliers:
            before = len(df)
            df = self._trim_outliers(df)
            logger.info(
                "Outlier filter removed %d rows (%s >= %s).",
                before - len(df),
                self.area_column,
                self.area_threshold,
            )

        n_missing = int(df[self.impute_column].isnull().sum())
        df[self.impute_column] = df[self.impute_column].fillna(self.impute_median_)
        logger.info(
            "Imputed %d missing %s values with %.3f.",
            n_missing,
            self.impute_column,
            self.impute_median_,
        )

        logger.info("Cleaning complete: %d rows × %d columns.", *df.shape)
        return df

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _trim_outliers(self, df: pd.DataFrame) -> pd.DataFrame:
        return df[df[self.area_column] < self.area_threshold].copy()
