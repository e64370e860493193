import pandas as pd
import pytest

from mambi.config import EGScheme, MAMBIConfig
from mambi.exceptions import ReferenceDataError, UnknownSchemeError
from mambi.community_metrics.ecological_groups import (
    assign_ecological_groups, build_eg_lookup, normalize_taxon_names,
)


def test_normalize_taxon_names_strips_trailing_sp():
    df = pd.DataFrame({"Species": ["Nereis sp", "Capitella capitata", " Mediomastus sp ", "Spio"]})
    out = normalize_taxon_names(df)
    assert list(out["Taxon"]) == ["Nereis", "Capitella capitata", "Mediomastus", "Spio"]
    assert list(out["Species_ended_in_sp"]) == [True, False, True, False]


def test_lookup_forces_oligochaeta_to_group_v(eg_reference):
    lookup = build_eg_lookup(eg_reference, "Hybrid").set_index("Taxon")
    assert lookup.loc["Oligochaeta", "EG"] == "V"
    assert lookup.loc["Capitella capitata", "EG"] == "V"
    assert pd.isna(lookup.loc["Blankus", "EG"])
    assert bool(lookup.loc["Tubificidae", "IsOligochaete"])
    assert not bool(lookup.loc["Nereis", "IsOligochaete"])


def test_scheme_selects_column(eg_reference):
    hybrid = build_eg_lookup(eg_reference, EGScheme.HYBRID).set_index("Taxon")
    us = build_eg_lookup(eg_reference, "US").set_index("Taxon")
    assert hybrid.loc["Mediomastus", "EG"] == "III"
    assert us.loc["Mediomastus", "EG"] == "II"


def test_unmatched_and_blank_taxa_are_unassigned(eg_reference):
    lookup = build_eg_lookup(eg_reference, "Hybrid")
    df = pd.DataFrame({"Taxon": ["Nereis", "Unknownus", "Blankus", "Oligochaeta"]})
    out = assign_ecological_groups(df, lookup)
    assert list(out["EG"]) == ["II", "NoEG", "NoEG", "V"]
    assert out["IsOligochaete"].dtype == bool
    assert list(out["IsOligochaete"]) == [False, False, False, True]


def test_unrecognized_codes_are_unassigned():
    ref = pd.DataFrame({"Taxon": ["A", "B"], "Hybrid": ["ii", "VII"], "Oligochaeta": ["No", "No"]})
    lookup = build_eg_lookup(ref, "Hybrid").set_index("Taxon")
    assert lookup.loc["A", "EG"] == "II"
    assert pd.isna(lookup.loc["B", "EG"])


def test_duplicate_reference_taxa_keep_first():
    ref = pd.DataFrame({"Taxon": ["A", "A"], "Hybrid": ["I", "V"], "Oligochaeta": ["No", "No"]})
    lookup = build_eg_lookup(ref, "Hybrid")
    assert len(lookup) == 1
    assert lookup["EG"].iloc[0] == "I"


def test_unknown_scheme_rejected(eg_reference):
    with pytest.raises(UnknownSchemeError):
        build_eg_lookup(eg_reference, "Atlantic")
    with pytest.raises(UnknownSchemeError):
        MAMBIConfig(scheme="hybrid")


def test_missing_or_empty_reference_is_fatal(eg_reference):
    with pytest.raises(ReferenceDataError):
        build_eg_lookup(None, "Hybrid")
    with pytest.raises(ReferenceDataError):
        build_eg_lookup(eg_reference.iloc[0:0], "Hybrid")
    with pytest.raises(ReferenceDataError):
        build_eg_lookup(eg_reference.drop(columns=["US_West"]), "US_West")
