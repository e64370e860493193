"""
Ecological Quality Ratio (EQR) normalizers.

An EQR normalizer maps the dominant ordination projection of a pooled stratum
(samples + benchmarks) to a quality ratio where the "bad" benchmark anchor sits
at 0 and the "good" anchor at 1. Any object implementing EQRNormalizer (or a
plain callable with the same signature) can be passed to the pipeline.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np
import pandas as pd


class EQRNormalizer(ABC):
    """Strategy interface: monotonic, deterministic projection -> EQR mapping."""

    @abstractmethod
    def __call__(self, projection: pd.Series, is_benchmark: pd.Series) -> pd.Series:
        """Return one EQR per pooled row, indexed like projection."""


class BenchmarkAnchoredEQR(EQRNormalizer):
    """
    Linear rescale between benchmark percentiles of the projection.

    The bad anchor is the bad_quantile of the benchmark projections, the good
    anchor their good_quantile; EQR = (x - bad) / (good - bad). Values are not
    clipped, so samples beyond the anchors fall outside [0, 1].
    """

    def __init__(self, bad_quantile: float = 0.0, good_quantile: float = 1.0):
        if not 0.0 <= bad_quantile < good_quantile <= 1.0:
            raise ValueError(
                f"Quantiles must satisfy 0 <= bad < good <= 1 (got {bad_quantile}, {good_quantile})"
            )
        self.bad_quantile = bad_quantile
        self.good_quantile = good_quantile

    def anchors(self, projection: pd.Series, is_benchmark: pd.Series) -> Tuple[float, float]:
        bench = projection[is_benchmark.astype(bool)].dropna()
        if bench.empty:
            raise ValueError("No benchmark rows to anchor the EQR")
        bad = float(bench.quantile(self.bad_quantile))
        good = float(bench.quantile(self.good_quantile))
        if not np.isfinite(good - bad) or good - bad <= 0:
            raise ValueError(f"Degenerate EQR anchors (bad={bad:.6g}, good={good:.6g})")
        return bad, good

    def __call__(self, projection: pd.Series, is_benchmark: pd.Series) -> pd.Series:
        bad, good = self.anchors(projection, is_benchmark)
        eqr = (projection.astype(float) - bad) / (good - bad)
        eqr.name = "MAMBI_Score"
        return eqr

    def __repr__(self):
        return f"BenchmarkAnchoredEQR(bad_quantile={self.bad_quantile}, good_quantile={self.good_quantile})"
