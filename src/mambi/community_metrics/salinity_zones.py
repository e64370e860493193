"""
Salinity zone classification.

A sample's stratum is a pure function of its salinity (PSU) and its coast,
where the coast is derived from longitude. Bands are half-open (lower
exclusive, upper inclusive) and do not overlap; the polyhaline and euhaline
bands are split by coast. Missing salinity leaves the zone undefined.
"""
from __future__ import annotations
from typing import Optional

import numpy as np
import pandas as pd

from ..config import (
    COAST_GULF_EAST, COAST_WEST, SALINITY_BANDS, WEST_COAST_MAX_LONGITUDE,
)


def classify_coast(longitude: float) -> str:
    return COAST_WEST if longitude <= WEST_COAST_MAX_LONGITUDE else COAST_GULF_EAST


def classify_salinity_zone(salinity: Optional[float], coast: str) -> Optional[str]:
    """Return the zone code for one salinity/coast pair, or None when undefined."""
    if salinity is None or pd.isna(salinity):
        return None
    for zone, lower, upper, band_coast in SALINITY_BANDS:
        if lower < salinity <= upper and (band_coast is None or band_coast == coast):
            return zone
    return None


def assign_salinity_zones(df: pd.DataFrame,
                          salinity_col: str = "Salinity",
                          longitude_col: str = "Longitude") -> pd.DataFrame:
    """
    Add 'Coast' and 'SalZone' columns to a copy of df.

    SalZone is missing (None or NaN, depending on the pandas string dtype)
    where salinity is missing or outside every band.
    """
    out = df.copy()
    lon = out[longitude_col].to_numpy(dtype=float)
    sal = out[salinity_col].to_numpy(dtype=float)
    coast = np.where(lon <= WEST_COAST_MAX_LONGITUDE, COAST_WEST, COAST_GULF_EAST)

    zones = np.full(len(out), None, dtype=object)
    for zone, lower, upper, band_coast in SALINITY_BANDS:
        mask = (sal > lower) & (sal <= upper)
        if band_coast is not None:
            mask &= coast == band_coast
        zones[mask] = zone

    out["Coast"] = coast
    out["SalZone"] = zones
    return out
