from __future__ import annotations
import numpy as np
import pandas as pd

def relative_abundance(abundance: pd.Series, totals: pd.Series) -> pd.Series:
    """
    Abundance as a percentage (0-100) of its sample total.
    Rows of zero-total samples get 0 rather than NaN.
    """
    a = abundance.to_numpy(dtype=float)
    t = totals.to_numpy(dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        rel = np.where(t > 0, a / t * 100.0, 0.0)
    return pd.Series(rel, index=abundance.index, name="Rel_abun")

def zscore_standardize(df: pd.DataFrame) -> pd.DataFrame:
    """
    Z-score by column (ddof=1). Constant columns are centred only.
    """
    X = df.to_numpy(dtype=float, copy=True)
    mu = X.mean(axis=0, keepdims=True)
    sd = X.std(axis=0, ddof=1, keepdims=True)
    sd[~np.isfinite(sd) | (sd == 0)] = 1.0
    Z = (X - mu) / sd
    return pd.DataFrame(Z, index=df.index, columns=df.columns)
