"""
M-AMBI (multivariate AZTI Marine Biotic Index) - Benthic Condition Assessment

This package scores benthic macroinvertebrate samples: salinity zone and
ecological group classification, AMBI, richness and Shannon diversity, then a
per-stratum factor ordination normalized against good/bad benchmarks.

Subpackages:
- data_process: Cleaning, per-sample DataFrame operations and transforms
- community_metrics: Salinity zones, ecological groups, AMBI, S/H/Oligo_pct, applicability
- multivariate_assessment: Ordination, EQR, condition labels and report assembly
"""

# Import from subpackages for convenience
from .config import EGScheme, MAMBIConfig, REPORT_COLUMNS, SAMPLE_KEYS
from .exceptions import (
    MAMBIError, ReferenceDataError, UnknownSchemeError, StratumComputationError,
)

from .community_metrics import (
    classify_coast, classify_salinity_zone, assign_salinity_zones,
    build_eg_lookup, ambi_scores, shannon_diversity, community_metrics,
    use_ambi_label,
)

from .multivariate_assessment import (
    EQRNormalizer, BenchmarkAnchoredEQR, StratumResult, MAMBIResult,
    MAMBICalculator, compute_mambi, original_condition, disturbance_condition,
)

__all__ = [
    # Configuration and errors
    "EGScheme", "MAMBIConfig", "REPORT_COLUMNS", "SAMPLE_KEYS",
    "MAMBIError", "ReferenceDataError", "UnknownSchemeError", "StratumComputationError",

    # Community metrics
    "classify_coast", "classify_salinity_zone", "assign_salinity_zones",
    "build_eg_lookup", "ambi_scores", "shannon_diversity", "community_metrics",
    "use_ambi_label",

    # M-AMBI
    "EQRNormalizer", "BenchmarkAnchoredEQR", "StratumResult", "MAMBIResult",
    "MAMBICalculator", "compute_mambi", "original_condition", "disturbance_condition",
]

# Package metadata
__version__ = "0.1.0"
__description__ = "M-AMBI (multivariate AZTI Marine Biotic Index) - Benthic Condition Assessment"
