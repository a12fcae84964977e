"""Saved scenarios and their local JSON store."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from mandeval.config.mandate import CostInputs, MandateConfig, Settings
from mandeval.scenarios.metrics import DerivedMetrics

logger = logging.getLogger(__name__)

STORAGE_KEY = "mandeValScenarios"


@dataclass(frozen=True)
class Scenario:
    id: int
    timestamp: str
    settings: Settings
    config: MandateConfig
    costs: Optional[CostInputs]
    derived: DerivedMetrics

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "settings": self.settings.to_dict(),
            "config": self.config.to_dict(),
            "costs": self.costs.to_dict() if self.costs is not None else None,
            "derived": self.derived.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Scenario":
        costs = d.get("costs")
        return cls(
            id=int(d["id"]),
            timestamp=str(d["timestamp"]),
            settings=Settings(**d["settings"]),
            config=MandateConfig(**d["config"]),
            costs=CostInputs(**costs) if costs is not None else None,
            derived=DerivedMetrics.from_dict(d["derived"]),
        )


class ScenarioStore:
    """List of scenarios persisted under a single key of a JSON file."""

    def __init__(self, path: Path | str | None = None, key: str = STORAGE_KEY):
        self.path = Path(path) if path is not None else None
        self.key = key
        self._scenarios: List[Scenario] = []

    @property
    def scenarios(self) -> Tuple[Scenario, ...]:
        return tuple(self._scenarios)

    def __len__(self) -> int:
        return len(self._scenarios)

    def get(self, scenario_id: int) -> Optional[Scenario]:
        for s in self._scenarios:
            if s.id == scenario_id:
                return s
        return None

    def _read(self) -> dict:
        if self.path is None or not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object in {self.path}")
        return data

    def load(self) -> Tuple[Scenario, ...]:
        """Load saved scenarios; unreadable storage leaves the list empty."""
        try:
            raw = self._read().get(self.key, [])
            self._scenarios = [Scenario.from_dict(d) for d in raw]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Could not load scenarios from %s: %s", self.path, e)
            self._scenarios = []
        return self.scenarios

    def save(self) -> bool:
        if self.path is None:
            return False
        try:
            data = self._read() if self.path.exists() else {}
        except (OSError, ValueError) as e:
            logger.warning("Overwriting unreadable store %s: %s", self.path, e)
            data = {}
        data[self.key] = [s.to_dict() for s in self._scenarios]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning("Could not save scenarios to %s: %s", self.path, e)
            return False
        return True

    def add(
        self,
        settings: Settings,
        config: MandateConfig,
        costs: Optional[CostInputs],
        derived: DerivedMetrics,
    ) -> Scenario:
        scenario = Scenario(
            id=len(self._scenarios) + 1,
            timestamp=datetime.now(timezone.utc).isoformat(),
            settings=Settings(**settings.to_dict()),
            config=config,
            costs=CostInputs(**costs.to_dict()) if costs is not None else None,
            derived=derived,
        )
        self._scenarios.append(scenario)
        self.save()
        return scenario

    def clear(self) -> None:
        self._scenarios = []
        self.save()
