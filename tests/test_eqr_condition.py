import numpy as np
import pandas as pd
import pytest

from mambi.multivariate_assessment.condition import (
    classify_conditions, disturbance_condition, original_condition,
)
from mambi.multivariate_assessment.eqr import BenchmarkAnchoredEQR, EQRNormalizer


def test_eqr_maps_benchmark_extremes_to_zero_and_one():
    x = pd.Series([0.0, 1.0, 2.0, 3.0])
    bench = pd.Series([True, False, False, True])
    eqr = BenchmarkAnchoredEQR()(x, bench)
    assert np.allclose(eqr, [0.0, 1 / 3, 2 / 3, 1.0])
    assert eqr.name == "MAMBI_Score"
    assert isinstance(BenchmarkAnchoredEQR(), EQRNormalizer)


def test_eqr_is_not_clipped():
    x = pd.Series([-1.0, 0.0, 2.0, 4.0])
    bench = pd.Series([False, True, True, False])
    assert np.allclose(BenchmarkAnchoredEQR()(x, bench), [-0.5, 0.0, 1.0, 2.0])


def test_eqr_percentile_anchors():
    x = pd.Series([0.0, 1.0, 2.0, 3.0, 4.0])
    bench = pd.Series([True] * 5)
    norm = BenchmarkAnchoredEQR(bad_quantile=0.25, good_quantile=0.75)
    assert norm.anchors(x, bench) == (1.0, 3.0)


def test_eqr_swapping_projections_swaps_ranking():
    x = pd.Series([0.0, 0.3, 0.8, 1.0])
    bench = pd.Series([True, False, False, True])
    eqr = BenchmarkAnchoredEQR()(x, bench)
    swapped = BenchmarkAnchoredEQR()(x[[0, 2, 1, 3]].set_axis(x.index), bench)
    assert eqr[2] > eqr[1]
    assert swapped[1] > swapped[2]
    assert np.isclose(swapped[1], eqr[2]) and np.isclose(swapped[2], eqr[1])
    labels = classify_conditions(eqr)
    swapped_labels = classify_conditions(swapped)
    assert swapped_labels.loc[1, "Orig_MAMBI_Condition"] == labels.loc[2, "Orig_MAMBI_Condition"]


def test_eqr_degenerate_inputs():
    x = pd.Series([1.0, 1.0, 2.0])
    with pytest.raises(ValueError):
        BenchmarkAnchoredEQR()(x, pd.Series([True, True, False]))
    with pytest.raises(ValueError):
        BenchmarkAnchoredEQR()(x, pd.Series([False, False, False]))
    with pytest.raises(ValueError):
        BenchmarkAnchoredEQR(bad_quantile=0.8, good_quantile=0.2)


@pytest.mark.parametrize("score, expected", [
    (-0.3, "Bad"), (0.19, "Bad"), (0.2, "Poor"), (0.389, "Poor"), (0.39, "Moderate"),
    (0.53, "Good"), (0.769, "Good"), (0.77, "High"), (1.4, "High"),
])
def test_original_condition(score, expected):
    assert original_condition(score) == expected


@pytest.mark.parametrize("score, expected", [
    (0.0, "High Disturbance"), (0.387, "High Disturbance"), (0.3871, "Moderate Disturbance"),
    (0.4829, "Moderate Disturbance"), (0.483, "Low Disturbance"), (0.5779, "Low Disturbance"),
    (0.578, "Reference"), (1.2, "Reference"),
])
def test_disturbance_condition(score, expected):
    assert disturbance_condition(score) == expected


def test_missing_score_has_no_condition():
    out = classify_conditions(pd.Series([np.nan, 0.9]))
    assert pd.isna(out.loc[0, "Orig_MAMBI_Condition"])
    assert pd.isna(out.loc[0, "New_MAMBI_Condition"])
    assert out.loc[1, "Orig_MAMBI_Condition"] == "High"
