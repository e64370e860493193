"""
Community metrics: richness (S), Shannon diversity (H, log base 2) and the
Oligochaete share of abundance used in tidal-fresh waters.
"""
from __future__ import annotations
from typing import Optional

import numpy as np
import pandas as pd
from scipy.stats import entropy

from ..config import AMBI_AZOIC_SENTINEL, NO_ORGANISMS_TAXON, SAMPLE_KEYS
from ..data_process.dataframe_ops import first_per_sample, group_by_sample, merge_on_sample_keys
from .ambi import ambi_scores


def shannon_diversity(abundances) -> float:
    """Shannon entropy (base 2) of an abundance vector; 0 for empty or all-zero vectors."""
    x = np.asarray(abundances, dtype=float)
    x = x[x > 0]
    if x.size == 0:
        return 0.0
    return float(entropy(x, base=2))


def oligochaete_percent(oligo_abundance: float, total_abundance: float) -> float:
    if total_abundance <= 0:
        return 0.0
    return float(100.0 * oligo_abundance / total_abundance)


def _per_taxon(classified: pd.DataFrame) -> pd.DataFrame:
    # placeholder rows and zero counts are not taxa
    taxa = classified.loc[
        (classified["Taxon"] != NO_ORGANISMS_TAXON) & (classified["Abundance"] > 0)
    ]
    return taxa.groupby(SAMPLE_KEYS + ["Taxon"], sort=False, dropna=False).agg(
        Abundance=("Abundance", "sum"),
        IsOligochaete=("IsOligochaete", "any"),
    ).reset_index()


def community_metrics(classified: pd.DataFrame, ambi: Optional[pd.DataFrame] = None) -> pd.DataFrame:
    """
    Per-sample metrics table.

    Parameters
    ----------
    classified : pd.DataFrame
        EG-classified taxon rows with 'Tot_abun' and 'Rel_abun' (see ambi.add_abundance_shares).
    ambi : pd.DataFrame, optional
        Output of ambi_scores; computed here when omitted.

    Returns
    -------
    pd.DataFrame
        SAMPLE_KEYS + ['Tot_abun', 'AMBI_Score', 'S', 'H', 'Oligo_pct'], in input order.
        S, H and Oligo_pct are 0 for samples carrying the AMBI sentinel.
    """
    if ambi is None:
        ambi = ambi_scores(classified)

    records = []
    for key, grp in group_by_sample(_per_taxon(classified)):
        ab = grp["Abundance"].to_numpy(dtype=float)
        oligo = float(ab[grp["IsOligochaete"].to_numpy(dtype=bool)].sum())
        records.append((*key, int(len(ab)), shannon_diversity(ab), oligo))
    per_sample = pd.DataFrame(records, columns=SAMPLE_KEYS + ["S", "H", "oligo_abun"])

    base = first_per_sample(classified, [])
    # keep key dtypes of the input for later joins
    per_sample = per_sample.astype({k: base[k].dtype for k in SAMPLE_KEYS}, errors="ignore")
    out = merge_on_sample_keys(base, ambi, how="left")
    out = merge_on_sample_keys(out, per_sample, how="left")

    out["S"] = out["S"].fillna(0).astype(int)
    out["H"] = out["H"].fillna(0.0)
    out["Oligo_pct"] = [
        oligochaete_percent(o, t) for o, t in zip(out["oligo_abun"].fillna(0.0), out["Tot_abun"])
    ]

    azoic = out["AMBI_Score"] == AMBI_AZOIC_SENTINEL
    out.loc[azoic, ["S", "H", "Oligo_pct"]] = 0
    return out[SAMPLE_KEYS + ["Tot_abun", "AMBI_Score", "S", "H", "Oligo_pct"]]
