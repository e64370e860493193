from __future__ import annotations
import logging
from typing import Iterable

import pandas as pd

logger = logging.getLogger(__name__)

_YES_VALUES = {"yes", "y", "true", "1"}


def harmonize_text(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    """
    Strip surrounding whitespace from text columns, leaving missing values as-is.

    Args:
        df: Input DataFrame
        cols: Names of the text columns to clean (absent columns are skipped)

    Returns:
        Copy of df with the cleaned columns
    """
    df = df.copy()
    for col in cols:
        if col in df.columns:
            df[col] = df[col].where(df[col].isna(), df[col].astype(str).str.strip())
    return df


def drop_duplicates_on_keys(df: pd.DataFrame, keys: list[str], name: str = "frame") -> pd.DataFrame:
    """
    Remove duplicate rows based on specified key columns, keeping the first.

    Args:
        df: Input DataFrame
        keys: List of column names to use for duplicate detection
        name: Label used in the warning when rows are dropped

    Returns:
        DataFrame with duplicates removed
    """
    subset = keys[0] if len(keys) == 1 else keys
    dup = df.duplicated(subset=subset, keep="first")
    if dup.any():
        logger.warning("%s: dropping %d rows duplicated on %s", name, int(dup.sum()), keys)
    return df.loc[~dup]


def yes_no_flag(values: pd.Series) -> pd.Series:
    """Map Yes/No style markers to booleans; anything else (including NaN) is False."""
    return values.map(lambda v: not pd.isna(v) and str(v).strip().lower() in _YES_VALUES).astype(bool)
