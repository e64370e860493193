import pandas as pd
import pytest

SCHEME_COLS = ["Hybrid", "US", "Standard", "US_East", "US_Gulf", "US_West"]


def _eg_row(taxon, hybrid, us=None, oligo="No", exclude="No"):
    us = hybrid if us is None else us
    row = {"Taxon": taxon, "Exclude": exclude, "Oligochaeta": oligo}
    for col in SCHEME_COLS:
        row[col] = us if col == "US" else hybrid
    return row


def sample_rows(station, taxa, *, replicate=1, date="2020-07-01",
                lat=30.0, lon=-80.0, salinity=25.0):
    """Taxon rows of one sample; taxa maps species name -> abundance."""
    return [
        {"StationID": station, "Replicate": replicate, "SampleDate": date,
         "Latitude": lat, "Longitude": lon, "Species": species,
         "Abundance": abundance, "Salinity": salinity}
        for species, abundance in taxa.items()
    ]


@pytest.fixture
def eg_reference():
    return pd.DataFrame([
        _eg_row("Ampelisca abdita", "I"),
        _eg_row("Nereis", "II"),
        _eg_row("Mediomastus", "III", us="II"),
        _eg_row("Streblospio benedicti", "IV"),
        _eg_row("Capitella capitata", "V"),
        _eg_row("Chironomidae", "III"),
        _eg_row("Tubificidae", "V", oligo="Yes"),
        _eg_row("Oligochaeta", "", oligo="Yes"),
        _eg_row("Blankus", ""),
    ])


@pytest.fixture
def saline_benchmarks():
    return pd.DataFrame({
        "StationID": ["PH_Bad", "PH_Good", "MH_Bad", "MH_Good"],
        "Replicate": [1, 1, 1, 1],
        "AMBI_Score": [6.0, 1.0, 6.0, 1.0],
        "S": [0.0, 10.0, 0.0, 8.0],
        "H": [0.0, 3.3, 0.0, 3.0],
        "SalZone": ["PH", "PH", "MH", "MH"],
    })


@pytest.fixture
def tidal_fresh_benchmarks():
    return pd.DataFrame({
        "StationID": ["TF_Bad", "TF_Good"],
        "Replicate": [1, 1],
        "AMBI_Score": [6.0, 1.0],
        "H": [0.0, 3.5],
        "Oligo_pct": [100.0, 0.0],
        "SalZone": ["TF", "TF"],
    })


@pytest.fixture
def samples():
    rows = []
    rows += sample_rows("A", {"Ampelisca abdita": 10, "Mediomastus": 10,
                              "Nereis": 10, "Capitella capitata": 10})
    rows += sample_rows("B", {"Capitella capitata": 30, "Streblospio benedicti": 10})
    rows += sample_rows("C", {"NoOrganismsPresent": 0})
    rows += sample_rows("D", {"Ampelisca abdita": 50, "Nereis": 20,
                              "Mediomastus": 20, "Unknownus": 10})
    rows += sample_rows("E", {"Mediomastus": 5}, salinity=None)
    rows += sample_rows("F", {"Tubificidae": 20, "Chironomidae": 20}, salinity=0.1)
    rows += sample_rows("G", {"Chironomidae": 10, "Ampelisca abdita": 10,
                              "Mediomastus": 10}, salinity=0.1)
    rows += sample_rows("H", {"Ampelisca abdita": 7, "Unknownus": 3})
    return pd.DataFrame(rows)
