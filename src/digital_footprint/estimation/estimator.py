"""High-level footprint estimation orchestration."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from digital_footprint.config_loader import (
    EmissionFactorConfig,
    load_config,
    resolve_config,
)
from digital_footprint.estimation.currency import kg_to_currency
from digital_footprint.estimation.engine import EstimationEngine
from digital_footprint.estimation.normalization import normalize_response
from digital_footprint.estimation.tables import TABLE_VERSION
from digital_footprint.models import EmissionBreakdown
from digital_footprint.settings import FootprintSettings
from digital_footprint.types import EmissionBreakdownDict, SurveyResponse


class FootprintEstimator:
    """Estimate a respondent's annual digital carbon footprint.

    The estimator is stateless with respect to responses: every call
    normalises the response afresh and never modifies it.
    """

    def __init__(
        self,
        config: EmissionFactorConfig | None = None,
        *,
        overrides: Mapping[str, object] | None = None,
    ) -> None:
        """Initialise the estimator with optional emission-factor overrides.

        Args:
            config: Base emission factors. Built-in defaults when ``None``.
            overrides: Operator overrides using camelCase config keys.
        """

        self.logger = logging.getLogger("digital_footprint.estimator")
        self.config = resolve_config(config, overrides)
        self._engine = EstimationEngine(config=self.config, logger=self.logger)

        self.logger.info(
            "FootprintEstimator initialised",
            extra={
                "grid_intensity": self.config.grid_intensity,
                "data_transfer_intensity": self.config.data_transfer_intensity,
                "annualization": self.config.annualization,
                "ai_model": self.config.ai_model,
            },
        )

    @classmethod
    def from_environment(
        cls,
        path: str | None = None,
        *,
        settings: FootprintSettings | None = None,
    ) -> "FootprintEstimator":
        """Build an estimator from environment settings and config files."""

        return cls(load_config(path, settings=settings))

    def with_overrides(self, overrides: Mapping[str, object]) -> "FootprintEstimator":
        """Return a new estimator with ``overrides`` applied to this config."""

        return type(self)(self.config, overrides=overrides)

    def estimate(self, response: SurveyResponse | None) -> EmissionBreakdown:
        """Estimate annual emissions for a survey response.

        Args:
            response: Raw survey answers keyed by form field name.

        Returns:
            The device/data/AI breakdown with a consistent total.
        """

        normalized = normalize_response(response)
        return self._engine.estimate(normalized)

    def estimate_dict(
        self, response: SurveyResponse | None
    ) -> EmissionBreakdownDict:
        """Return :meth:`estimate` in the export results shape."""

        return self.estimate(response).to_dict()

    def to_currency(self, emissions: EmissionBreakdown | float) -> float:
        """Convert a breakdown (or a kg total) using the configured price.

        Args:
            emissions: Breakdown whose rounded ``total_kg`` is converted, or
                a plain kg CO2 amount.

        Returns:
            Monetary value in ``config.currency`` rounded to two decimals.
        """

        total_kg = (
            emissions.total_kg
            if isinstance(emissions, EmissionBreakdown)
            else emissions
        )
        return kg_to_currency(
            total_kg,
            self.config.carbon_price,
            self.config.social_cost_multiplier,
        )

    def summarize(self, response: SurveyResponse | None) -> dict[str, object]:
        """Return results, monetary value and diagnostics for display.

        Args:
            response: Raw survey answers keyed by form field name.

        Returns:
            Mapping with ``results``, ``cost`` and ``details`` sections.
        """

        breakdown = self.estimate(response)
        return {
            "results": breakdown.to_dict(),
            "cost": {
                "value": self.to_currency(breakdown),
                "currency": self.config.currency,
                "carbonPrice": self.config.carbon_price,
                "socialCostMultiplier": self.config.social_cost_multiplier,
            },
            "details": {
                "devices": dict(breakdown.device_entries),
                "dataVolumeGb": breakdown.data_volume.to_dict(),
                "aiQueriesPerYear": breakdown.ai_queries_per_year,
                "shares": breakdown.shares(),
                "tableVersion": TABLE_VERSION,
            },
        }
