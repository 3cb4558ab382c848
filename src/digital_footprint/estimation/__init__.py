"""Footprint estimation package.

Provides the high-level :class:`FootprintEstimator` API along with the
normalisation tables, formulas and currency conversion behind it.
"""

from __future__ import annotations

from .currency import kg_to_currency
from .engine import EstimationEngine
from .estimator import FootprintEstimator
from .normalization import NormalizedResponse, normalize_response

__all__ = [
    "EstimationEngine",
    "FootprintEstimator",
    "NormalizedResponse",
    "kg_to_currency",
    "normalize_response",
]
