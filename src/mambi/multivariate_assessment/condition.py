from __future__ import annotations
from typing import Optional

import pandas as pd

from ..config import (
    DISTURBANCE_HIGH_MAX, DISTURBANCE_LOW_MAX, DISTURBANCE_MODERATE_MAX,
    ORIGINAL_CONDITION_BREAKS, ORIGINAL_CONDITION_LABELS,
)


def original_condition(score: Optional[float]) -> Optional[str]:
    """Bad < 0.2 <= Poor < 0.39 <= Moderate < 0.53 <= Good < 0.77 <= High."""
    if score is None or pd.isna(score):
        return None
    for upper, label in zip(ORIGINAL_CONDITION_BREAKS, ORIGINAL_CONDITION_LABELS):
        if score < upper:
            return label
    return ORIGINAL_CONDITION_LABELS[-1]


def disturbance_condition(score: Optional[float]) -> Optional[str]:
    """High Disturbance <= 0.387 < Moderate < 0.483 <= Low < 0.578 <= Reference."""
    if score is None or pd.isna(score):
        return None
    if score <= DISTURBANCE_HIGH_MAX:
        return "High Disturbance"
    if score < DISTURBANCE_MODERATE_MAX:
        return "Moderate Disturbance"
    if score < DISTURBANCE_LOW_MAX:
        return "Low Disturbance"
    return "Reference"


def classify_conditions(scores: pd.Series) -> pd.DataFrame:
    """Both condition labels for a Series of M-AMBI scores."""
    return pd.DataFrame({
        "Orig_MAMBI_Condition": [original_condition(s) for s in scores],
        "New_MAMBI_Condition": [disturbance_condition(s) for s in scores],
    }, index=scores.index)
