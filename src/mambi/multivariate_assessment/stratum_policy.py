"""
Stratum policies.

Saline strata and the tidal-fresh stratum run the same ordination, EQR and
classification steps; they differ only in the metric triple, the benchmark
table and which benchmark rows belong to a stratum. A StratumPolicy holds
exactly those differences.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import pandas as pd

from ..config import SAMPLE_KEYS, TIDAL_FRESH_ZONE
from ..validators import validate_benchmarks

SALINE_METRICS = ("AMBI_Score", "S", "H")
TIDAL_FRESH_METRICS = ("AMBI_Score", "H", "Oligo_pct")

# sign of each metric's association with good condition
SALINE_QUALITY_DIRECTION = (-1.0, 1.0, 1.0)
TIDAL_FRESH_QUALITY_DIRECTION = (-1.0, 1.0, -1.0)


@dataclass(frozen=True, eq=False)
class StratumPolicy:
    name: str
    metrics: tuple
    quality_direction: tuple
    benchmarks: pd.DataFrame = field(repr=False)
    tidal_fresh: bool = False

    def applies_to(self, stratum: str) -> bool:
        return (stratum == TIDAL_FRESH_ZONE) == self.tidal_fresh

    def benchmark_rows(self, stratum: str) -> pd.DataFrame:
        """Benchmark rows pooled with the samples of one stratum."""
        b = self.benchmarks
        if self.tidal_fresh and "SalZone" in b.columns:
            mask = b["SalZone"].isna() | (b["SalZone"] == stratum)
        elif self.tidal_fresh:
            # a tidal-fresh table without zone labels belongs entirely to TF
            mask = pd.Series(True, index=b.index)
        else:
            mask = b["SalZone"] == stratum
        rows = b.loc[mask]
        cols = ["StationID"] + [c for c in ("Replicate",) if c in rows.columns] + list(self.metrics)
        out = rows[cols].copy()
        out["SalZone"] = stratum
        return out.reset_index(drop=True)

    def pool(self, stratum: str, sample_metrics: pd.DataFrame) -> pd.DataFrame:
        """
        Stack a stratum's sample metrics over its benchmark rows.

        Sample rows come first, in the given order, flagged is_benchmark=False.
        """
        real = sample_metrics[SAMPLE_KEYS + list(self.metrics)].copy()
        real["SalZone"] = stratum
        real["is_benchmark"] = False
        bench = self.benchmark_rows(stratum)
        bench["is_benchmark"] = True
        parts = [p for p in (real, bench) if not p.empty]
        if not parts:
            return real.reset_index(drop=True)
        return pd.concat(parts, ignore_index=True)

    def excluded(self, pooled: pd.DataFrame) -> pd.Series:
        """Rows to drop from reported output."""
        # by flag, not StationID: a real sample named like a benchmark is kept
        return pooled["is_benchmark"].astype(bool)

    @property
    def direction(self) -> np.ndarray:
        return np.asarray(self.quality_direction, dtype=float)


def saline_policy(benchmarks: pd.DataFrame) -> StratumPolicy:
    return StratumPolicy(
        name="saline",
        metrics=SALINE_METRICS,
        quality_direction=SALINE_QUALITY_DIRECTION,
        benchmarks=validate_benchmarks(benchmarks, tidal_fresh=False),
    )


def tidal_fresh_policy(benchmarks: pd.DataFrame) -> StratumPolicy:
    return StratumPolicy(
        name="tidal_fresh",
        metrics=TIDAL_FRESH_METRICS,
        quality_direction=TIDAL_FRESH_QUALITY_DIRECTION,
        benchmarks=validate_benchmarks(benchmarks, tidal_fresh=True),
        tidal_fresh=True,
    )


def select_policy(stratum: str, policies: list[StratumPolicy]) -> Optional[StratumPolicy]:
    for policy in policies:
        if policy.applies_to(stratum):
            return policy
    return None
