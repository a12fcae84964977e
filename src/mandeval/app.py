"""Session state tying the support model to costs, settings and saved scenarios."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from mandeval.config.mandate import CostInputs, DrawConfig, MandateConfig, Settings
from mandeval.mixed_logit.coefficients import DEFAULT_COEFFICIENTS, CoefficientTable
from mandeval.mixed_logit.draws import RandomDrawPanel, make_draw_panel
from mandeval.mixed_logit.estimator import SupportEstimator
from mandeval.mixed_logit.mrs import MRSRow, lives_saved_equivalents
from mandeval.scenarios.export import export_scenarios
from mandeval.scenarios.metrics import DerivedMetrics, compute_derived
from mandeval.scenarios.store import Scenario, ScenarioStore

logger = logging.getLogger(__name__)


class MandateSession:
    """One user's working session.

    The draw panel is built once here and reused for every estimate, so the
    same configuration always gets the same predicted support.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        draws: DrawConfig | None = None,
        table: CoefficientTable = DEFAULT_COEFFICIENTS,
        store: ScenarioStore | None = None,
        panel: RandomDrawPanel | None = None,
    ):
        self.settings = settings or Settings()
        self.draws = draws or DrawConfig()
        panel = panel if panel is not None else make_draw_panel(self.draws)
        self.estimator = SupportEstimator(table, panel)
        self.store = store or ScenarioStore()
        self.config: Optional[MandateConfig] = None
        self.costs: Optional[CostInputs] = None
        self.derived: Optional[DerivedMetrics] = None

    @property
    def panel(self) -> RandomDrawPanel:
        return self.estimator.panel

    def _recompute(self) -> Optional[DerivedMetrics]:
        if self.config is None:
            self.derived = None
            return None
        support = self.estimator.estimate(self.config)
        if support is None:
            logger.info(
                "Support unavailable for %s / %s",
                self.config.country,
                self.config.outbreak,
            )
        self.derived = compute_derived(self.settings, self.config, self.costs, support)
        return self.derived

    def apply_config(self, config: MandateConfig) -> Optional[DerivedMetrics]:
        self.config = config
        return self._recompute()

    def apply_costs(self, costs: CostInputs | None) -> Optional[DerivedMetrics]:
        self.costs = costs
        return self._recompute()

    def apply_settings(self, settings: Settings) -> Optional[DerivedMetrics]:
        self.settings = settings
        return self._recompute()

    def lives_saved_equivalents(self) -> Optional[List[MRSRow]]:
        if self.config is None:
            return None
        return lives_saved_equivalents(self.config, self.estimator.table)

    def save_scenario(self) -> Scenario:
        if self.config is None or self.derived is None:
            raise RuntimeError("Apply a configuration before saving a scenario")
        scenario = self.store.add(self.settings, self.config, self.costs, self.derived)
        logger.info("Saved scenario %d", scenario.id)
        return scenario

    def export(self, out_dir: Path | str, kind: str = "csv") -> Path:
        return export_scenarios(self.store.scenarios, out_dir, kind)

    def clear_scenarios(self) -> None:
        self.store.clear()
