from mandeval.config.config import get_args
from mandeval.config.mandate import (
    Config,
    CostInputs,
    DrawConfig,
    MandateConfig,
    Settings,
)

__all__ = [
    "Config",
    "CostInputs",
    "DrawConfig",
    "MandateConfig",
    "Settings",
    "get_args",
]
