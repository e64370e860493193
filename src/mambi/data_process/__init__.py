"""
Data processing utilities for M-AMBI.

This subpackage contains modules for input cleaning, per-sample DataFrame
operations and numeric transforms.
"""

from .cleaning import harmonize_text, drop_duplicates_on_keys, yes_no_flag
from .dataframe_ops import (
    assert_unique_keys, group_by_sample, first_per_sample,
    merge_on_sample_keys, project_columns,
)
from .transform import relative_abundance, zscore_standardize

__all__ = [
    # Cleaning
    "harmonize_text", "drop_duplicates_on_keys", "yes_no_flag",

    # DataFrame operations
    "assert_unique_keys", "group_by_sample", "first_per_sample",
    "merge_on_sample_keys", "project_columns",

    # Transform functions
    "relative_abundance", "zscore_standardize",
]
