"""Seeded random train/test partitioning."""

import logging
from typing import Tuple

import pandas as pd
from sklearn.model_selection import train_test_split

logger = logging.getLogger(__name__)


def split_train_test(
    df: pd.DataFrame,
    train_fraction: float = 0.7,
    random_state: int = 42,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Randomly partition rows into train and test sets.

    Rows are sampled without replacement and keep their original index,
    so partition membership can be checked by index identity.

    Args:
        df: Full dataset.
        train_fraction: Share of rows assigned to the train partition.
        random_state: Seed for the shuffle; the same seed always yields
            the same partition.

    Returns:
        ``(train, test)`` DataFrames.

    Raises:
        ValueError: If ``train_fraction`` is not strictly between 0 and 1.
    """
    if not 0.0 < train_fraction < 1.0:
        raise ValueError(
            f"train_fraction must be strictly between 0 and 1, got {train_fraction}."
        )

    train, test = train_test_split(
        df,
        train_size=train_fraction,
        random_state=random_state,
        shuffle=True,
    )
    logger.info(
        "Random split (seed=%d) → train: %d | test: %d",
        random_state,
        len(train),
        len(test),
    )
    return train, test
