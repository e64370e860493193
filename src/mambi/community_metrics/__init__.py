"""
Sample-level community metrics for M-AMBI.

This subpackage contains the salinity zone and ecological group classifiers,
AMBI scoring, richness/diversity metrics and applicability flags.
"""

from .salinity_zones import classify_coast, classify_salinity_zone, assign_salinity_zones
from .ecological_groups import normalize_taxon_names, build_eg_lookup, assign_ecological_groups
from .ambi import add_abundance_shares, ambi_scores
from .diversity import shannon_diversity, oligochaete_percent, community_metrics
from .applicability import use_ambi_label, ambi_applicability, mambi_applicability

__all__ = [
    # Classification
    "classify_coast", "classify_salinity_zone", "assign_salinity_zones",
    "normalize_taxon_names", "build_eg_lookup", "assign_ecological_groups",

    # Scoring and metrics
    "add_abundance_shares", "ambi_scores",
    "shannon_diversity", "oligochaete_percent", "community_metrics",

    # Applicability
    "use_ambi_label", "ambi_applicability", "mambi_applicability",
]
