"""Benefit-cost metrics, saved scenarios, exports and narrative text."""

from mandeval.scenarios.export import export_scenarios, scenarios_frame
from mandeval.scenarios.metrics import (
    DerivedMetrics,
    bcr_status,
    compute_derived,
    support_status,
)
from mandeval.scenarios.store import Scenario, ScenarioStore

__all__ = [
    "DerivedMetrics",
    "Scenario",
    "ScenarioStore",
    "bcr_status",
    "compute_derived",
    "export_scenarios",
    "scenarios_frame",
    "support_status",
]
