"""
Applicability flags for AMBI and M-AMBI.

Use_AMBI depends on the share of abundance without an EG assignment (NoEG%);
Use_MAMBI only on whether a salinity zone could be assigned. The flags
annotate results and never block computation.
"""
from __future__ import annotations
from typing import Optional

import numpy as np
import pandas as pd

from ..config import (
    SAMPLE_KEYS, UNASSIGNED_EG, USE_AMBI_CARE_MAX, USE_AMBI_YES_MAX, USE_MAMBI_NO_SALINITY,
)
from ..data_process.dataframe_ops import group_by_sample


def use_ambi_label(noeg_pct: Optional[float]) -> str:
    """Step function of NoEG%: Yes (<=20 or undefined), With Care (<=50), Not Recommended."""
    if noeg_pct is None or pd.isna(noeg_pct) or noeg_pct <= USE_AMBI_YES_MAX:
        return "Yes"
    if noeg_pct <= USE_AMBI_CARE_MAX:
        return "With Care"
    return "Not Recommended"


def ambi_applicability(classified: pd.DataFrame) -> pd.DataFrame:
    """
    NoEG%, YesEG% and Use_AMBI per sample.

    NoEG% is undefined (NaN) for samples with zero total abundance.
    """
    frame = classified[SAMPLE_KEYS].copy()
    frame["Tot_abun"] = classified["Tot_abun"]
    frame["noeg_rel"] = np.where(classified["EG"] == UNASSIGNED_EG, classified["Rel_abun"], 0.0)

    out = group_by_sample(frame).agg(
        Tot_abun=("Tot_abun", "first"),
        NoEG=("noeg_rel", "sum"),
    ).reset_index()
    out["NoEG"] = out["NoEG"].where(out["Tot_abun"] > 0)
    out["YesEG"] = 100.0 - out["NoEG"]
    out["Use_AMBI"] = [use_ambi_label(v) for v in out["NoEG"]]
    return out[SAMPLE_KEYS + ["NoEG", "YesEG", "Use_AMBI"]]


def mambi_applicability(sample_info: pd.DataFrame) -> pd.DataFrame:
    """Use_MAMBI per sample from a one-row-per-sample frame holding 'SalZone'."""
    out = sample_info[SAMPLE_KEYS].copy()
    out["Use_MAMBI"] = np.where(sample_info["SalZone"].isna(), USE_MAMBI_NO_SALINITY, "Yes")
    return out
