"""
Simple usage example for the M-AMBI assessment.

This script builds a small mock survey (taxon counts per sample, an EG
reference table and good/bad benchmarks) and walks through the report and the
per-stratum ordination results.
"""

import logging
import sys
from pathlib import Path

import numpy as np
import pandas as pd

# Add the src directory to path
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))
from mambi import compute_mambi

EG_TABLE = {
    "Ampelisca abdita": ("I", "No"),
    "Nereis": ("II", "No"),
    "Mediomastus": ("III", "No"),
    "Chironomidae": ("III", "No"),
    "Streblospio benedicti": ("IV", "No"),
    "Capitella capitata": ("V", "No"),
    "Tubificidae": ("V", "Yes"),
}


def simple_usage_example():
    """Score a mock survey and print the main outputs."""

    print("=== M-AMBI Benthic Condition Assessment - Usage Example ===\n")

    print("1. Building mock inputs...")
    samples, eg_reference, saline, tidal_fresh = create_mock_inputs()
    n_samples = samples.drop_duplicates(["StationID", "Replicate", "SampleDate"]).shape[0]
    print(f"   {len(samples)} taxon rows across {n_samples} samples")

    print("\n2. Computing M-AMBI...")
    result = compute_mambi(samples, eg_reference, saline, tidal_fresh, scheme="Hybrid")
    for stratum, res in result.strata.items():
        print(f"   {res}")
    for stratum, reason in result.failures.items():
        print(f"   Stratum {stratum} not scored: {reason}")

    print("\n3. Report (first 10 samples):")
    cols = ["StationID", "SalZone", "AMBI_Score", "S", "H", "Oligo_pct",
            "MAMBI_Score", "Orig_MAMBI_Condition", "New_MAMBI_Condition"]
    print(result.report[cols].head(10).to_string(index=False))

    print("\n4. Condition counts:")
    print(result.report["New_MAMBI_Condition"].value_counts(dropna=False).to_string())

    print("\n5. Rotated loadings of the PH stratum:")
    if "PH" in result.strata:
        print(result.strata["PH"].get_loadings().round(3).to_string())

    print("\n6. Additional outputs:")
    print("   - Taxon-level EG assignments: result.classified")
    print("   - Per-sample metrics: result.metrics")
    print("   - NoEG/YesEG and Use_AMBI/Use_MAMBI flags: result.applicability")
    print("   - Pooled rows with x/y/z scores: result.strata[zone].pooled")

    print("\n=== Example completed successfully! ===")


def create_mock_inputs(n_samples=30, seed=42):
    """Mock sample, EG reference and benchmark tables."""

    rng = np.random.default_rng(seed)
    taxa = list(EG_TABLE)

    rows = []
    for i in range(n_samples):
        tidal_fresh = i % 5 == 0
        salinity = rng.uniform(0.0, 0.2) if tidal_fresh else rng.uniform(18.5, 29.5)
        # disturbed sites are dominated by the opportunistic end of the list
        disturbance = rng.random()
        weights = np.linspace(1 - disturbance, disturbance, len(taxa)) + 0.05
        counts = rng.poisson(40 * weights / weights.sum() * len(taxa) / 2)
        for taxon, count in zip(taxa, counts):
            if count > 0:
                rows.append({
                    "StationID": f"Site_{i:02d}", "Replicate": 1, "SampleDate": "2021-08-15",
                    "Latitude": 30.0 + i * 0.01, "Longitude": -80.5,
                    "Species": taxon, "Abundance": int(count), "Salinity": salinity,
                })
    samples = pd.DataFrame(rows)

    eg_reference = pd.DataFrame(
        [{"Taxon": t, "Hybrid": eg, "Oligochaeta": oligo} for t, (eg, oligo) in EG_TABLE.items()]
    )
    saline = pd.DataFrame({
        "StationID": ["PH_Bad", "PH_Good"],
        "AMBI_Score": [6.0, 1.0], "S": [0.0, 12.0], "H": [0.0, 3.5],
        "SalZone": ["PH", "PH"],
    })
    tidal_fresh = pd.DataFrame({
        "StationID": ["TF_Bad", "TF_Good"],
        "AMBI_Score": [6.0, 1.0], "H": [0.0, 3.0], "Oligo_pct": [100.0, 0.0],
    })
    return samples, eg_reference, saline, tidal_fresh


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    simple_usage_example()
