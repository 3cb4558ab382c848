"""Digital Footprint - carbon estimates for personal digital device usage."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "EmissionBreakdown",
    "EmissionFactorConfig",
    "ExportRecord",
    "FootprintEstimator",
    "kg_to_currency",
    "submit_survey",
]

if TYPE_CHECKING:
    from .config_loader import EmissionFactorConfig
    from .estimation import FootprintEstimator, kg_to_currency
    from .models import EmissionBreakdown
    from .schemas import ExportRecord
    from .submission import submit_survey


def __getattr__(name: str) -> Any:
    """Lazily import submodules to avoid eager dependency loading."""

    module_map = {
        "EmissionBreakdown": "models",
        "EmissionFactorConfig": "config_loader",
        "ExportRecord": "schemas",
        "FootprintEstimator": "estimation",
        "kg_to_currency": "estimation",
        "submit_survey": "submission",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
