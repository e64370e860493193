from __future__ import annotations
from typing import Iterable, Literal, Optional, Sequence

import pandas as pd

from ..config import SAMPLE_KEYS

# -------------------------------
# Validation / Safety
# -------------------------------

def assert_unique_keys(df: pd.DataFrame, keys: Sequence[str] = SAMPLE_KEYS, name: str = "frame") -> None:
    missing = [c for c in keys if c not in df.columns]
    if missing:
        raise KeyError(f"{name} lacks key columns: {missing}. Available: {list(df.columns)[:20]}...")
    dup = df.duplicated(subset=list(keys), keep=False)
    if dup.any():
        first = df.loc[dup, list(keys)].head(10).to_records(index=False).tolist()
        raise ValueError(f"{name} has duplicate key values (first 10): {first}")


# -------------------------------
# Per-sample helpers
# -------------------------------

def group_by_sample(df: pd.DataFrame, keys: Sequence[str] = SAMPLE_KEYS):
    """Group rows by sample key, keeping first-appearance order and missing key parts."""
    return df.groupby(list(keys), sort=False, dropna=False)


def first_per_sample(
    df: pd.DataFrame,
    columns: Optional[Iterable[str]] = None,
    keys: Sequence[str] = SAMPLE_KEYS,
) -> pd.DataFrame:
    """
    One row per sample key holding the first observed value of each column.

    Row order follows the first appearance of each key in df.
    """
    keys = list(keys)
    cols = [c for c in (columns if columns is not None else df.columns) if c not in keys]
    out = df.loc[~df.duplicated(subset=keys, keep="first"), keys + cols]
    return out.reset_index(drop=True)


# -------------------------------
# Merge helpers
# -------------------------------

JoinHow = Literal["inner", "outer", "left"]

def merge_on_sample_keys(
    left: pd.DataFrame,
    right: pd.DataFrame,
    how: JoinHow = "left",
    keys: Sequence[str] = SAMPLE_KEYS,
    validate: str = "one_to_one",
) -> pd.DataFrame:
    """
    Join two per-sample frames on the sample key.

    Parameters
    ----------
    left, right : pd.DataFrame
        Frames holding the key columns.
    how : {'inner', 'outer', 'left'}
        Join type; 'left' keeps left row order.
    validate : str
        Passed to pandas.merge to reject fan-out on duplicated keys.
    """
    overlap = [c for c in right.columns if c in left.columns and c not in keys]
    if overlap:
        raise ValueError(f"Columns already exist in left frame: {overlap[:10]}")
    return left.merge(right, on=list(keys), how=how, validate=validate)


def project_columns(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Select columns by name in the given order; missing names are an error."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found for projection: {missing}")
    return df.loc[:, list(columns)].reset_index(drop=True)
