"""
Taxon name normalization and ecological group (EG) assignment.

The EG column is chosen by scheme through config.SCHEME_ACCESSORS. Taxa
without a usable code in the reference are marked UNASSIGNED_EG, which is
kept distinct from group I (weight zero).
"""
from __future__ import annotations
import logging
from typing import Union

import pandas as pd

from ..config import (
    EG_WEIGHTS, EGScheme, OLIGOCHAETA_TAXON, SCHEME_ACCESSORS, UNASSIGNED_EG,
    resolve_scheme,
)
from ..data_process.cleaning import drop_duplicates_on_keys, harmonize_text, yes_no_flag
from ..validators import validate_eg_reference

logger = logging.getLogger(__name__)

_VALID_CODES = [eg for eg in EG_WEIGHTS if eg != UNASSIGNED_EG]


def normalize_taxon_names(df: pd.DataFrame, species_col: str = "Species") -> pd.DataFrame:
    """Add 'Taxon' (species name without a trailing ' sp') and 'Species_ended_in_sp'."""
    out = harmonize_text(df, [species_col])
    species = out[species_col].astype(str)
    out["Species_ended_in_sp"] = species.str.contains(r" sp$", regex=True)
    out["Taxon"] = species.str.replace(r" sp$", "", regex=True)
    return out


def build_eg_lookup(reference: pd.DataFrame, scheme: Union[str, EGScheme]) -> pd.DataFrame:
    """
    Build the Taxon -> EG lookup for one scheme.

    Returns a DataFrame with columns: Taxon, EG (code or None), Exclude, IsOligochaete.
    """
    scheme = resolve_scheme(scheme)
    ref = validate_eg_reference(reference, scheme)
    ref = harmonize_text(ref, ["Taxon"])
    ref = drop_duplicates_on_keys(ref, ["Taxon"], name="EG reference table")

    codes = SCHEME_ACCESSORS[scheme](ref).map(
        lambda v: None if pd.isna(v) else (str(v).strip().upper() or None)
    ).astype(object)
    unknown = codes.notna() & ~codes.isin(_VALID_CODES)
    if unknown.any():
        logger.warning(
            "EG reference: %d taxa carry unrecognized %s codes %s; treated as unassigned",
            int(unknown.sum()), scheme.value, sorted(codes[unknown].unique().tolist())[:10],
        )
        codes[unknown] = None

    eg = codes.copy()
    eg[ref["Taxon"] == OLIGOCHAETA_TAXON] = "V"

    exclude = ref["Exclude"] if "Exclude" in ref.columns else pd.Series(False, index=ref.index)
    if "Oligochaeta" in ref.columns:
        oligo = ref["Oligochaeta"]
    else:
        logger.warning("EG reference has no 'Oligochaeta' column; no taxon flagged as Oligochaete")
        oligo = pd.Series(False, index=ref.index)

    return pd.DataFrame({
        "Taxon": ref["Taxon"].to_numpy(),
        "EG": eg.to_numpy(),
        "Exclude": yes_no_flag(exclude).to_numpy(),
        "IsOligochaete": yes_no_flag(oligo).to_numpy(),
    })


def assign_ecological_groups(samples: pd.DataFrame, lookup: pd.DataFrame) -> pd.DataFrame:
    """
    Left-join EG information onto taxon rows.

    Unmatched taxa get EG = UNASSIGNED_EG and False flags. The 'Oligochaeta'
    taxon is always group V, matched or not.
    """
    out = samples.merge(lookup, on="Taxon", how="left", validate="many_to_one")
    out.loc[out["Taxon"] == OLIGOCHAETA_TAXON, "EG"] = "V"
    out["EG"] = out["EG"].where(out["EG"].notna(), UNASSIGNED_EG)
    out["Exclude"] = out["Exclude"].eq(True)
    out["IsOligochaete"] = out["IsOligochaete"].eq(True)
    n_unassigned = out.loc[out["EG"] == UNASSIGNED_EG, "Taxon"].nunique()
    if n_unassigned:
        logger.info("%d distinct taxa have no EG assignment", n_unassigned)
    return out
