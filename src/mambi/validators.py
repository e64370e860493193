from __future__ import annotations
from typing import Iterable, Optional

import pandas as pd
import pandera as pa
from pandera import Column, DataFrameSchema, Check

from .config import EGScheme, SCHEME_ACCESSORS
from .exceptions import ReferenceDataError

schema_samples = DataFrameSchema({
    "StationID": Column(nullable=False),
    "Replicate": Column(nullable=False),
    "SampleDate": Column(nullable=True),
    "Latitude": Column(float, Check.in_range(-90, 90), nullable=True, coerce=True),
    "Longitude": Column(float, Check.in_range(-180, 180), nullable=False, coerce=True),
    "Species": Column(str, nullable=False),
    "Abundance": Column(float, Check.ge(0), nullable=False, coerce=True),
    "Salinity": Column(float, nullable=True, coerce=True),
})

schema_eg_reference = DataFrameSchema({
    "Taxon": Column(str, nullable=False),
    "Exclude": Column(nullable=True, required=False),
    **{s.value: Column(nullable=True, required=False) for s in EGScheme},
    "Oligochaeta": Column(nullable=True, required=False),
})

schema_saline_benchmarks = DataFrameSchema({
    "StationID": Column(nullable=False),
    "Replicate": Column(nullable=True, required=False),
    "AMBI_Score": Column(float, Check.in_range(0, 7), nullable=False, coerce=True),
    "S": Column(float, Check.ge(0), nullable=False, coerce=True),
    "H": Column(float, Check.ge(0), nullable=False, coerce=True),
    "SalZone": Column(str, nullable=False),
})

schema_tidal_fresh_benchmarks = DataFrameSchema({
    "StationID": Column(nullable=False),
    "Replicate": Column(nullable=True, required=False),
    "AMBI_Score": Column(float, Check.in_range(0, 7), nullable=False, coerce=True),
    "H": Column(float, Check.ge(0), nullable=False, coerce=True),
    "Oligo_pct": Column(float, Check.in_range(0, 100), nullable=False, coerce=True),
    "SalZone": Column(nullable=True, required=False),
})


def _require_table(df: Optional[pd.DataFrame], name: str, columns: Iterable[str] = ()) -> None:
    if df is None or not isinstance(df, pd.DataFrame) or df.empty:
        raise ReferenceDataError(f"{name} is missing or empty.")
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ReferenceDataError(f"{name} lacks required columns: {missing}")


def validate_samples(df: pd.DataFrame) -> pd.DataFrame:
    """Validate the benthic sample table; returns the coerced copy."""
    return schema_samples.validate(df, lazy=True)


def validate_eg_reference(df: pd.DataFrame, scheme: EGScheme) -> pd.DataFrame:
    """
    Validate the EG reference table for the selected scheme.

    Raises ReferenceDataError when the table is absent, empty, lacks the
    scheme column, or fails the schema.
    """
    _require_table(df, "EG reference table", ["Taxon"])
    try:
        SCHEME_ACCESSORS[scheme](df)
    except KeyError:
        raise ReferenceDataError(
            f"EG reference table has no column for scheme {scheme.value!r}"
        ) from None
    try:
        return schema_eg_reference.validate(df, lazy=True)
    except pa.errors.SchemaErrors as e:
        raise ReferenceDataError(f"EG reference table failed validation:\n{e}") from e


def validate_benchmarks(df: pd.DataFrame, *, tidal_fresh: bool = False) -> pd.DataFrame:
    """Validate a saline or tidal-fresh benchmark table."""
    if tidal_fresh:
        name, schema = "Tidal-fresh benchmark table", schema_tidal_fresh_benchmarks
    else:
        name, schema = "Saline benchmark table", schema_saline_benchmarks
    _require_table(df, name)
    try:
        return schema.validate(df, lazy=True)
    except pa.errors.SchemaErrors as e:
        raise ReferenceDataError(f"{name} failed validation:\n{e}") from e
