"""
Multivariate assessment tools for M-AMBI.

This subpackage contains the stratum policies, the factor ordination
(PCA + varimax), EQR normalizers, condition classifiers and the pipeline
that assembles the final report.
"""

from .stratum_policy import (
    StratumPolicy,
    saline_policy,
    tidal_fresh_policy,
    select_policy,
    SALINE_METRICS,
    TIDAL_FRESH_METRICS,
)

from .factor_ordination import (
    OrdinationResult,
    principal_axes,
    varimax,
    orient_axes,
    ordinate,
)

from .eqr import EQRNormalizer, BenchmarkAnchoredEQR

from .condition import original_condition, disturbance_condition, classify_conditions

from .mambi import (
    StratumResult,
    MAMBIResult,
    MAMBICalculator,
    prepare_samples,
    run_stratum,
    assemble_report,
    compute_mambi,
)

__all__ = [
    # Stratum policies
    "StratumPolicy",
    "saline_policy",
    "tidal_fresh_policy",
    "select_policy",
    "SALINE_METRICS",
    "TIDAL_FRESH_METRICS",

    # Ordination
    "OrdinationResult",
    "principal_axes",
    "varimax",
    "orient_axes",
    "ordinate",

    # EQR and conditions
    "EQRNormalizer",
    "BenchmarkAnchoredEQR",
    "original_condition",
    "disturbance_condition",
    "classify_conditions",

    # Pipeline
    "StratumResult",
    "MAMBIResult",
    "MAMBICalculator",
    "prepare_samples",
    "run_stratum",
    "assemble_report",
    "compute_mambi",
]
