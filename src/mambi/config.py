from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

import pandas as pd

from .exceptions import UnknownSchemeError

# keys
SAMPLE_KEYS = ["StationID", "Replicate", "SampleDate"]  # one sample = one key tuple

# placeholder taxon for samples with no animals (abundance 0)
NO_ORGANISMS_TAXON = "NoOrganismsPresent"
OLIGOCHAETA_TAXON = "Oligochaeta"

# -------------------------------
# Ecological groups
# -------------------------------

UNASSIGNED_EG = "NoEG"
EG_WEIGHTS = {
    "I": 0.0,
    "II": 1.5,
    "III": 3.0,
    "IV": 4.5,
    "V": 6.0,
    UNASSIGNED_EG: 0.0,
}
AMBI_AZOIC_SENTINEL = 7.0


class EGScheme(str, Enum):
    """EG value columns available in the reference table."""
    HYBRID = "Hybrid"
    US = "US"
    STANDARD = "Standard"
    US_EAST = "US_East"
    US_GULF = "US_Gulf"
    US_WEST = "US_West"


# scheme -> accessor returning that scheme's EG column of the reference table
SCHEME_ACCESSORS: dict[EGScheme, Callable[[pd.DataFrame], pd.Series]] = {
    EGScheme.HYBRID: lambda ref: ref["Hybrid"],
    EGScheme.US: lambda ref: ref["US"],
    EGScheme.STANDARD: lambda ref: ref["Standard"],
    EGScheme.US_EAST: lambda ref: ref["US_East"],
    EGScheme.US_GULF: lambda ref: ref["US_Gulf"],
    EGScheme.US_WEST: lambda ref: ref["US_West"],
}


def resolve_scheme(scheme: Union[str, EGScheme]) -> EGScheme:
    """Validate a scheme selector against the closed EGScheme enumeration."""
    if isinstance(scheme, EGScheme):
        return scheme
    try:
        return EGScheme(scheme)
    except ValueError:
        allowed = [s.value for s in EGScheme]
        raise UnknownSchemeError(f"Unknown EG scheme {scheme!r}. Allowed: {allowed}") from None


# -------------------------------
# Salinity zones
# -------------------------------

WEST_COAST_MAX_LONGITUDE = -115.0
COAST_WEST = "West"
COAST_GULF_EAST = "Gulf-East"

TIDAL_FRESH_ZONE = "TF"
# (zone, lower exclusive, upper inclusive, coast or None for any coast)
SALINITY_BANDS = [
    ("EH", 30.0, 40.0, COAST_GULF_EAST),
    ("PH", 18.0, 30.0, COAST_GULF_EAST),
    ("WEH", 30.0, 40.0, COAST_WEST),
    ("WPH", 18.0, 30.0, COAST_WEST),
    ("MH", 5.0, 18.0, None),
    ("OH", 0.2, 5.0, None),
    (TIDAL_FRESH_ZONE, float("-inf"), 0.2, None),
    ("HH", 40.0, float("inf"), None),
]

# -------------------------------
# Applicability
# -------------------------------

USE_AMBI_YES_MAX = 20.0        # NoEG% at or below -> "Yes"
USE_AMBI_CARE_MAX = 50.0       # NoEG% at or below -> "With Care"
USE_MAMBI_NO_SALINITY = "No - No Salinity"

# -------------------------------
# Condition cut points
# -------------------------------

ORIGINAL_CONDITION_BREAKS = [0.2, 0.39, 0.53, 0.77]
ORIGINAL_CONDITION_LABELS = ["Bad", "Poor", "Moderate", "Good", "High"]
DISTURBANCE_HIGH_MAX = 0.387   # inclusive
DISTURBANCE_MODERATE_MAX = 0.483
DISTURBANCE_LOW_MAX = 0.578

# -------------------------------
# Output schema
# -------------------------------

REPORT_COLUMNS = [
    "StationID", "Replicate", "SampleDate", "Latitude", "Longitude",
    "SalZone", "AMBI_Score", "S", "H", "Oligo_pct", "MAMBI_Score",
    "Orig_MAMBI_Condition", "New_MAMBI_Condition",
    "Use_MAMBI", "Use_AMBI", "YesEG",
]


@dataclass(frozen=True)
class MAMBIConfig:
    """Runtime options of an M-AMBI run.

    - scheme: EG column used for AMBI weights (validated on construction)
    - strict: re-raise per-stratum failures instead of recording them
    """
    scheme: EGScheme = EGScheme.HYBRID
    strict: bool = False

    def __post_init__(self):
        object.__setattr__(self, "scheme", resolve_scheme(self.scheme))
