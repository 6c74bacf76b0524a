"""Feature engineering for the housing regression.

Two derived columns are added, identically for the train and test
partitions:

    - ``LogPrice``: natural log of ``SalePrice``; the regression target.
    - ``BathComposite``: ``FullBath + 0.5 * HalfBath``, a usable bathroom
      count entering the extended model.

The :class:`FeatureEngineer` holds no learned state, so fitting it on the
training fold and reusing it on the test fold cannot leak information.
"""

import logging
from typing import Optional

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin

logger = logging.getLogger(__name__)

PRICE_COL = "SalePrice"
LOG_PRICE_COL = "LogPrice"
BATH_COMPOSITE_COL = "BathComposite"

HALF_BATH_WEIGHT = 0.5


# ---------------------------------------------------------------------------
# Helper functions (pure, no state)
# ---------------------------------------------------------------------------


def add_log_price(df: pd.DataFrame) -> pd.DataFrame:
    """Add ``LogPrice = ln(SalePrice)``.

    Args:
        df: DataFrame with a ``SalePrice`` column.

    Returns:
        Copy of ``df`` with ``LogPrice`` added.

    Raises:
        ValueError: If any sale price is missing or not strictly positive.
    """
    price = df[PRICE_COL]
    bad = price.isnull() | (price <= 0)
    if bad.any():
        raise ValueError(
            f"{PRICE_COL} must be strictly positive to take its log; "
            f"{int(bad.sum())} invalid row(s) found."
        )
    df = df.copy()
    df[LOG_PRICE_COL] = np.log(price.astype(float))
    return df


def add_bath_composite(df: pd.DataFrame) -> pd.DataFrame:
    """Add ``BathComposite = FullBath + 0.5 * HalfBath``."""
    df = df.copy()
    df[BATH_COMPOSITE_COL] = df["FullBath"] + HALF_BATH_WEIGHT * df["HalfBath"]
    return df


# ---------------------------------------------------------------------------
# Transformer
# ---------------------------------------------------------------------------


class FeatureEngineer(BaseEstimator, TransformerMixin):
    """Derive the regression target and the composite bathroom count.

    ``LogPrice`` is only derived when ``SalePrice`` is present, so the
    same transformer prepares frames for inference.
    """

    def fit(self, df: pd.DataFrame, y: Optional[pd.Series] = None) -> "FeatureEngineer":
        return self

    def transform(self, df: pd.DataFrame, y: Optional[pd.Series] = None) -> pd.DataFrame:
        """Apply all feature engineering steps.

        Args:
            df: Cleaned train partition or raw test partition.
            y: Ignored; present for sklearn compatibility.

        Returns:
            Copy of ``df`` with the derived columns added.
        """
        df = add_bath_composite(df)
        if PRICE_COL in df.columns:
            df = add_log_price(df)

        logger.info("Feature engineering complete: %d rows × %d columns.", *df.shape)
        return df
