"""
M-AMBI assessment pipeline

This module chains the community metrics with the per-stratum ordination into
the final per-sample report.

Main entry points:
- prepare_samples: validate, normalize taxa, classify salinity zones and EGs
- run_stratum: pooled ordination, EQR and condition labels for one stratum
- assemble_report: merge stratum outputs with metrics and applicability flags
- MAMBICalculator / compute_mambi: the full run
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Union

import numpy as np
import pandas as pd

from ..config import (
    EGScheme, MAMBIConfig, REPORT_COLUMNS, SAMPLE_KEYS, TIDAL_FRESH_ZONE,
)
from ..exceptions import StratumComputationError
from ..validators import validate_samples
from ..data_process.dataframe_ops import (
    assert_unique_keys, first_per_sample, merge_on_sample_keys, project_columns,
)
from ..community_metrics import (
    add_abundance_shares, ambi_applicability, assign_ecological_groups,
    assign_salinity_zones, build_eg_lookup, community_metrics,
    mambi_applicability, normalize_taxon_names,
)
from .condition import classify_conditions
from .eqr import BenchmarkAnchoredEQR
from .factor_ordination import OrdinationResult, ordinate
from .stratum_policy import StratumPolicy, saline_policy, select_policy, tidal_fresh_policy

logger = logging.getLogger(__name__)

EQRFunction = Callable[[pd.Series, pd.Series], pd.Series]

SAMPLE_INFO_COLUMNS = ["Latitude", "Longitude", "Salinity", "Coast", "SalZone"]
SCORE_COLUMNS = ["MAMBI_Score", "Orig_MAMBI_Condition", "New_MAMBI_Condition"]


class StratumResult:
    """
    Result of the pooled ordination of one salinity stratum.

    Attributes:
        stratum (str): SalZone code
        policy (StratumPolicy): policy used (metric triple, benchmarks)
        pooled (pd.DataFrame): sample rows then benchmark rows with metrics,
            x/y/z scores, MAMBI_Score, both condition labels and is_benchmark
        ordination (OrdinationResult): standardized matrix, loadings, eigenvalues
    """

    def __init__(self, stratum: str, policy: StratumPolicy, pooled: pd.DataFrame,
                 ordination: OrdinationResult, sample_keys: pd.DataFrame):
        self.stratum = stratum
        self.policy = policy
        self.pooled = pooled
        self.ordination = ordination
        self._sample_keys = sample_keys.reset_index(drop=True)
        self.n_samples = int((~pooled["is_benchmark"]).sum())
        self.n_benchmarks = int(pooled["is_benchmark"].sum())

    def samples(self) -> pd.DataFrame:
        """Pooled rows minus benchmarks, with the sample keys as given."""
        real = self.pooled.loc[~self.policy.excluded(self.pooled)].reset_index(drop=True)
        real = real.drop(columns=SAMPLE_KEYS)
        return pd.concat([self._sample_keys, real], axis=1)

    def get_loadings(self) -> pd.DataFrame:
        return self.ordination.rotated_loadings

    def __repr__(self):
        return (
            f"StratumResult(stratum='{self.stratum}', policy='{self.policy.name}', "
            f"samples={self.n_samples}, benchmarks={self.n_benchmarks})"
        )


@dataclass
class MAMBIResult:
    report: pd.DataFrame
    classified: pd.DataFrame
    metrics: pd.DataFrame
    applicability: pd.DataFrame
    strata: Dict[str, StratumResult] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)


def prepare_samples(samples: pd.DataFrame, eg_lookup: pd.DataFrame) -> pd.DataFrame:
    """Validated taxon rows with Taxon, Coast, SalZone, EG, Tot_abun and Rel_abun."""
    out = validate_samples(samples)
    out = normalize_taxon_names(out)
    out = assign_salinity_zones(out)
    out = assign_ecological_groups(out, eg_lookup)
    return add_abundance_shares(out)


def run_stratum(stratum: str, stratum_metrics: pd.DataFrame,
                policy: StratumPolicy, eqr: EQRFunction) -> StratumResult:
    """
    Ordination, EQR and condition labels for one stratum.

    Raises StratumComputationError when the pooled set cannot be ordinated or
    anchored (e.g. fewer than two pooled rows, no benchmarks).
    """
    pooled = policy.pool(stratum, stratum_metrics)
    try:
        ordination = ordinate(pooled[list(policy.metrics)], policy.direction)
        pooled = pd.concat([pooled, ordination.scores], axis=1)
        # only the dominant rotated axis is normalized
        eqr_values = eqr(pooled["x"], pooled["is_benchmark"])
        if isinstance(eqr_values, pd.Series):
            eqr_values = eqr_values.reindex(pooled.index)
        pooled["MAMBI_Score"] = np.asarray(eqr_values, dtype=float)
    except ValueError as e:
        raise StratumComputationError(f"Stratum {stratum!r} ({policy.name}): {e}", stratum=stratum) from e

    pooled = pd.concat([pooled, classify_conditions(pooled["MAMBI_Score"])], axis=1)

    x_share = float((ordination.rotated_loadings["x"] ** 2).sum() / len(policy.metrics))
    logger.info(
        "Stratum %s (%s): %d samples pooled with %d benchmarks; x carries %.1f%% of variance",
        stratum, policy.name, int((~pooled["is_benchmark"]).sum()),
        int(pooled["is_benchmark"].sum()), 100 * x_share,
    )
    return StratumResult(stratum, policy, pooled, ordination,
                         stratum_metrics[SAMPLE_KEYS])


def assemble_report(sample_info: pd.DataFrame, metrics: pd.DataFrame,
                    strata: Dict[str, StratumResult], ambi_flags: pd.DataFrame,
                    mambi_flags: pd.DataFrame) -> pd.DataFrame:
    """
    One row per sample in REPORT_COLUMNS order.

    Samples without a scored stratum keep their AMBI/S/H but have no
    MAMBI_Score or conditions. S is blank for tidal-fresh rows and
    Oligo_pct for all others.
    """
    scored = sample_info[SAMPLE_KEYS].iloc[0:0].copy()
    for col in SCORE_COLUMNS:
        scored[col] = pd.Series(dtype=float if col == "MAMBI_Score" else object)
    parts = [r.samples()[SAMPLE_KEYS + SCORE_COLUMNS] for r in strata.values()]
    if parts:
        scored = pd.concat(parts, ignore_index=True)
        assert_unique_keys(scored, name="stratum scores")

    report = merge_on_sample_keys(sample_info, metrics.drop(columns=["Tot_abun"]))
    report = merge_on_sample_keys(report, scored)
    report = merge_on_sample_keys(report, ambi_flags[SAMPLE_KEYS + ["Use_AMBI", "YesEG"]])
    report = merge_on_sample_keys(report, mambi_flags)

    tidal_fresh = report["SalZone"] == TIDAL_FRESH_ZONE
    report["S"] = report["S"].astype(float).where(~tidal_fresh)
    report["Oligo_pct"] = report["Oligo_pct"].where(tidal_fresh)
    return project_columns(report, REPORT_COLUMNS)


class MAMBICalculator:
    """
    M-AMBI scorer bound to one set of reference tables.

    Parameters:
    - eg_reference: EG table (Taxon, scheme columns, Oligochaeta, Exclude)
    - saline_benchmarks: good/bad benchmark rows per saline SalZone
    - tidal_fresh_benchmarks: good/bad benchmark rows for tidal-fresh waters
    - scheme: EG scheme column to use
    - eqr: EQR normalizer, BenchmarkAnchoredEQR() by default
    - strict: raise on a failed stratum instead of leaving it unscored
    """

    def __init__(self, eg_reference: pd.DataFrame,
                 saline_benchmarks: pd.DataFrame,
                 tidal_fresh_benchmarks: pd.DataFrame,
                 scheme: Union[str, EGScheme] = EGScheme.HYBRID,
                 eqr: Optional[EQRFunction] = None,
                 strict: bool = False):
        self.config = MAMBIConfig(scheme=scheme, strict=strict)
        self.eg_lookup = build_eg_lookup(eg_reference, self.config.scheme)
        self.policies = [saline_policy(saline_benchmarks),
                         tidal_fresh_policy(tidal_fresh_benchmarks)]
        self.eqr = eqr if eqr is not None else BenchmarkAnchoredEQR()
        self.result_ = None

    def fit(self, samples: pd.DataFrame) -> "MAMBICalculator":
        classified = prepare_samples(samples, self.eg_lookup)
        sample_info = first_per_sample(classified, SAMPLE_INFO_COLUMNS)
        n_unzoned = int(sample_info["SalZone"].isna().sum())
        if n_unzoned:
            logger.warning("%d samples have no salinity zone; M-AMBI not computed for them", n_unzoned)

        metrics = community_metrics(classified)
        ambi_flags = ambi_applicability(classified)
        mambi_flags = mambi_applicability(sample_info)

        zoned = merge_on_sample_keys(metrics, sample_info[SAMPLE_KEYS + ["SalZone"]])
        strata, failures = {}, {}
        for stratum in pd.unique(zoned["SalZone"].dropna()):
            policy = select_policy(stratum, self.policies)
            try:
                strata[stratum] = run_stratum(
                    stratum, zoned.loc[zoned["SalZone"] == stratum], policy, self.eqr
                )
            except StratumComputationError as e:
                if self.config.strict:
                    raise
                logger.warning("Skipping stratum %s: %s", stratum, e)
                failures[stratum] = str(e)

        report = assemble_report(sample_info, metrics, strata, ambi_flags, mambi_flags)
        self.result_ = MAMBIResult(
            report=report,
            classified=classified,
            metrics=metrics,
            applicability=merge_on_sample_keys(ambi_flags, mambi_flags),
            strata=strata,
            failures=failures,
        )
        return self

    def fit_transform(self, samples: pd.DataFrame) -> pd.DataFrame:
        return self.fit(samples).result_.report


def compute_mambi(samples: pd.DataFrame,
                  eg_reference: pd.DataFrame,
                  saline_benchmarks: pd.DataFrame,
                  tidal_fresh_benchmarks: pd.DataFrame,
                  scheme: Union[str, EGScheme] = EGScheme.HYBRID,
                  eqr: Optional[EQRFunction] = None,
                  strict: bool = False) -> MAMBIResult:
    """
    Score benthic samples with M-AMBI.

    Args:
        samples: one row per taxon occurrence (StationID, Replicate, SampleDate,
            Latitude, Longitude, Species, Abundance, Salinity)
        eg_reference: EG reference table
        saline_benchmarks: saline good/bad benchmark table
        tidal_fresh_benchmarks: tidal-fresh good/bad benchmark table
        scheme: one of Hybrid, US, Standard, US_East, US_Gulf, US_West
        eqr: EQR normalizer (default BenchmarkAnchoredEQR())
        strict: raise StratumComputationError instead of skipping a stratum

    Returns:
        MAMBIResult with the report and all intermediate tables
    """
    calc = MAMBICalculator(eg_reference, saline_benchmarks, tidal_fresh_benchmarks,
                           scheme=scheme, eqr=eqr, strict=strict)
    return calc.fit(samples).result_
