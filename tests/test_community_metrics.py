import numpy as np
import pandas as pd
import pytest

from mambi.community_metrics.ambi import add_abundance_shares, ambi_scores
from mambi.community_metrics.diversity import (
    community_metrics, oligochaete_percent, shannon_diversity,
)


def _classified(rows):
    df = pd.DataFrame(rows, columns=["StationID", "Replicate", "SampleDate",
                                     "Taxon", "EG", "Abundance", "IsOligochaete"])
    return add_abundance_shares(df)


def test_shannon_single_taxon_is_zero():
    assert shannon_diversity([12]) == 0.0


def test_shannon_equal_abundances_is_log2_n():
    assert np.isclose(shannon_diversity([5, 5, 5, 5]), 2.0)
    assert np.isclose(shannon_diversity([1, 1, 1, 1, 1, 1, 1, 1]), 3.0)


def test_shannon_empty_or_zero_is_zero():
    assert shannon_diversity([]) == 0.0
    assert shannon_diversity([0, 0]) == 0.0


def test_oligochaete_percent_zero_total():
    assert oligochaete_percent(0.0, 0.0) == 0.0
    assert oligochaete_percent(5.0, 20.0) == 25.0


def test_relative_abundance_within_sample():
    df = _classified([
        ("A", 1, "d", "t1", "I", 30, False),
        ("A", 1, "d", "t2", "V", 10, False),
        ("B", 1, "d", "t1", "I", 5, False),
    ])
    assert list(df["Tot_abun"]) == [40, 40, 5]
    assert np.allclose(df["Rel_abun"], [75.0, 25.0, 100.0])


def test_ambi_weighted_by_group():
    df = _classified([
        ("A", 1, "d", "t1", "I", 10, False),
        ("A", 1, "d", "t2", "II", 10, False),
        ("A", 1, "d", "t3", "III", 10, False),
        ("A", 1, "d", "t4", "V", 10, False),
        ("B", 1, "d", "t5", "V", 30, False),
        ("B", 1, "d", "t6", "IV", 10, False),
    ])
    scores = ambi_scores(df).set_index("StationID")["AMBI_Score"]
    assert np.isclose(scores["A"], 2.625)
    assert np.isclose(scores["B"], 5.625)


def test_unassigned_taxa_contribute_zero():
    df = _classified([
        ("A", 1, "d", "t1", "V", 50, False),
        ("A", 1, "d", "t2", "NoEG", 50, False),
    ])
    assert np.isclose(ambi_scores(df)["AMBI_Score"].iloc[0], 3.0)


def test_azoic_sample_gets_sentinel_and_zero_metrics():
    df = _classified([
        ("A", 1, "d", "NoOrganismsPresent", "NoEG", 0, False),
        ("B", 1, "d", "t1", "I", 4, True),
    ])
    metrics = community_metrics(df).set_index("StationID")
    assert metrics.loc["A", "AMBI_Score"] == 7.0
    assert metrics.loc["A", "S"] == 0
    assert metrics.loc["A", "H"] == 0.0
    assert metrics.loc["A", "Oligo_pct"] == 0.0
    assert metrics.loc["B", "AMBI_Score"] == 0.0


def test_richness_and_diversity_merge_duplicate_taxa():
    df = _classified([
        ("A", 1, "d", "t1", "I", 5, False),
        ("A", 1, "d", "t1", "I", 5, False),
        ("A", 1, "d", "t2", "II", 10, True),
        ("A", 1, "d", "t3", "III", 10, False),
        ("A", 1, "d", "t4", "III", 10, False),
    ])
    m = community_metrics(df).iloc[0]
    assert m["S"] == 4
    assert np.isclose(m["H"], 2.0)
    assert np.isclose(m["Oligo_pct"], 25.0)


def test_metrics_keep_input_sample_order():
    df = _classified([
        ("Z", 2, "d", "t1", "I", 1, False),
        ("A", 1, "d", "t1", "I", 1, False),
    ])
    out = community_metrics(df)
    assert list(out["StationID"]) == ["Z", "A"]
    assert list(out.columns) == ["StationID", "Replicate", "SampleDate",
                                 "Tot_abun", "AMBI_Score", "S", "H", "Oligo_pct"]


def test_ambi_rejects_unknown_group_codes():
    df = _classified([("A", 1, "d", "t1", "VI", 1, False)])
    with pytest.raises(ValueError):
        ambi_scores(df)
