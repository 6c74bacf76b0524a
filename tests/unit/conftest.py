"""Shared fixtures: a synthetic frame with the Ames column schema."""

import numpy as np
import pandas as pd
import pytest

NEIGHBORHOODS = ["CollgCr", "Edwards", "NAmes", "OldTown", "Somerst"]

_NEIGHBORHOOD_EFFECT = {
    "CollgCr": 0.0,
    "Edwards": -0.15,
    "NAmes": -0.05,
    "OldTown": -0.20,
    "Somerst": 0.10,
}


def make_housing_df(n: int = 200, seed: int = 0, noise: float = 0.05) -> pd.DataFrame:
    """Return a frame whose log price is linear in the model predictors.

    The first two rows are living-area outliers (4,500 and 5,000 sq ft)
    and roughly 15 % of ``LotFrontage`` values are missing.
    """
    rng = np.random.default_rng(seed)

    qual = rng.integers(3, 10, n)
    area = rng.uniform(800, 3000, n)
    area[:2] = [4500.0, 5000.0]
    garage = rng.integers(0, 4, n)
    full_bath = rng.integers(1, 4, n)
    half_bath = rng.integers(0, 2, n)
    neighborhood = np.array(NEIGHBORHOODS)[np.arange(n) % len(NEIGHBORHOODS)]
    rng.shuffle(neighborhood)

    lot = rng.uniform(40, 120, n)
    lot[rng.random(n) < 0.15] = np.nan

    log_price = (
        10.5
        + 0.10 * qual
        + 0.0004 * area
        + 0.05 * garage
        + 0.03 * (full_bath + 0.5 * half_bath)
        + pd.Series(neighborhood).map(_NEIGHBORHOOD_EFFECT).to_numpy()
        + rng.normal(0.0, noise, n)
    )

    return pd.DataFrame(
        {
            "Id": np.arange(1, n + 1),
            "LotFrontage": lot,
            "Neighborhood": neighborhood,
            "OverallQual": qual,
            "GrLivArea": area,
            "FullBath": full_bath,
            "HalfBath": half_bath,
            "GarageCars": garage,
            "SalePrice": np.exp(log_price),
        }
    )


@pytest.fixture()
def housing_df() -> pd.DataFrame:
    return make_housing_df()


@pytest.fixture()
def housing_factory():
    return make_housing_df
