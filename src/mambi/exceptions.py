"""Error types raised by the M-AMBI computation."""
from __future__ import annotations
from typing import Optional


class MAMBIError(Exception):
    """Base class for M-AMBI errors."""


class ReferenceDataError(MAMBIError, ValueError):
    """EG reference or benchmark table is missing, empty or malformed."""


class UnknownSchemeError(MAMBIError, ValueError):
    """EG scheme selector is not one of the known schemes."""


class StratumComputationError(MAMBIError, RuntimeError):
    """Ordination or EQR could not be computed for one salinity stratum."""

    def __init__(self, message: str, stratum: Optional[str] = None):
        super().__init__(message)
        self.stratum = stratum
