"""
AMBI disturbance scoring.

AMBI = sum over ecological groups of (summed relative abundance x group
weight) / 100, with weights I:0, II:1.5, III:3, IV:4.5, V:6 and 0 for
unassigned taxa. Samples with no animals get the sentinel 7.0.
"""
from __future__ import annotations
import numpy as np
import pandas as pd

from ..config import AMBI_AZOIC_SENTINEL, EG_WEIGHTS, SAMPLE_KEYS
from ..data_process.dataframe_ops import group_by_sample
from ..data_process.transform import relative_abundance


def add_abundance_shares(df: pd.DataFrame) -> pd.DataFrame:
    """Add per-sample total abundance ('Tot_abun') and row share ('Rel_abun', 0-100)."""
    out = df.copy()
    out["Tot_abun"] = group_by_sample(out)["Abundance"].transform("sum")
    out["Rel_abun"] = relative_abundance(out["Abundance"], out["Tot_abun"])
    return out


def ambi_scores(classified: pd.DataFrame) -> pd.DataFrame:
    """
    Compute AMBI per sample from EG-classified taxon rows.

    Parameters:
    - classified: pd.DataFrame with SAMPLE_KEYS, 'EG', 'Tot_abun' and 'Rel_abun'.

    Returns:
    - pd.DataFrame with SAMPLE_KEYS, 'Tot_abun' and 'AMBI_Score', one row per sample.
    """
    weights = classified["EG"].map(EG_WEIGHTS)
    if weights.isna().any():
        bad = sorted(classified.loc[weights.isna(), "EG"].astype(str).unique())
        raise ValueError(f"EG codes without an AMBI weight: {bad}")

    frame = classified[SAMPLE_KEYS].copy()
    frame["Tot_abun"] = classified["Tot_abun"]
    frame["weighted"] = classified["Rel_abun"] * weights

    scores = group_by_sample(frame).agg(
        Tot_abun=("Tot_abun", "first"),
        weighted=("weighted", "sum"),
    ).reset_index()
    scores["AMBI_Score"] = np.where(
        scores["Tot_abun"] == 0, AMBI_AZOIC_SENTINEL, scores["weighted"] / 100.0
    )
    return scores.drop(columns="weighted")
