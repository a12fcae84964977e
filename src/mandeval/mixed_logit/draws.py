"""
Standard-normal draw panel for simulating the mixed logit population.

Every simulated respondent gets one independent N(0, 1) value per
coefficient. The panel is built once per session and reused read-only by
every support estimate, so identical configurations always give identical
answers within a session (and across sessions when seeded).

Normals come from the Box-Muller transform on a uniform source. Only the
cosine branch is used; the sine branch is discarded, so two uniforms are
consumed per normal.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, Sequence, Tuple

import numpy as np

from mandeval.config.mandate import DrawConfig
from mandeval.mixed_logit.coefficients import COEFFICIENT_NAMES

logger = logging.getLogger(__name__)

UniformSource = Callable[[], float]


def mulberry32(seed: int) -> UniformSource:
    """32-bit Mulberry generator returning floats in [0, 1).

    Integer arithmetic is masked to 32 bits, so a given seed yields the same
    stream on every platform.
    """
    state = seed & 0xFFFFFFFF

    def _imul(a: int, b: int) -> int:
        return (a * b) & 0xFFFFFFFF

    def _next() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & 0xFFFFFFFF
        t = state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & 0xFFFFFFFF
        return ((t ^ (t >> 14)) & 0xFFFFFFFF) / 4294967296.0

    return _next


def numpy_uniform_source(seed: Optional[int] = None) -> UniformSource:
    """Uniform source backed by a numpy Generator; seed None -> OS entropy."""
    rng = np.random.default_rng(seed)
    return lambda: float(rng.random())


def standard_normal(uniform: UniformSource) -> float:
    """One N(0, 1) sample via Box-Muller, rejecting exact zeros."""
    u = 0.0
    v = 0.0
    while u == 0.0:
        u = uniform()
    while v == 0.0:
        v = uniform()
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


@dataclass(frozen=True)
class RandomDrawPanel:
    """Fixed (n_draws, n_coefficients) matrix of standard-normal draws."""

    values: np.ndarray
    names: Tuple[str, ...] = COEFFICIENT_NAMES
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=np.float64)
        if values.ndim != 2 or values.shape[1] != len(self.names):
            raise ValueError(
                f"values must have shape (n_draws, {len(self.names)}), got {values.shape}"
            )
        values.flags.writeable = False
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "names", tuple(self.names))

    @property
    def seeded(self) -> bool:
        return self.seed is not None

    def __len__(self) -> int:
        return self.values.shape[0]

    def __getitem__(self, r: int) -> Dict[str, float]:
        row = self.values[r]
        return {name: float(z) for name, z in zip(self.names, row)}

    def __iter__(self) -> Iterator[Dict[str, float]]:
        for r in range(len(self)):
            yield self[r]

    def column(self, name: str) -> np.ndarray:
        return self.values[:, self.names.index(name)]

    def aligned(self, names: Sequence[str]) -> np.ndarray:
        """Draw matrix with columns reordered to `names`."""
        idx = [self.names.index(n) for n in names]
        return self.values[:, idx]


def generate_draw_panel(
    n_draws: int = 1000,
    names: Sequence[str] = COEFFICIENT_NAMES,
    uniform: UniformSource | None = None,
    seed: Optional[int] = None,
) -> RandomDrawPanel:
    """Build a panel one normal at a time, draw-major then name-minor.

    `seed` is recorded on the panel only; the caller seeds `uniform`.
    """
    if n_draws <= 0:
        raise ValueError("n_draws must be a positive integer")
    if not names:
        raise ValueError("names must not be empty")
    if uniform is None:
        uniform = numpy_uniform_source(seed)

    values = np.empty((n_draws, len(names)), dtype=np.float64)
    for r in range(n_draws):
        for k in range(len(names)):
            values[r, k] = standard_normal(uniform)
    return RandomDrawPanel(values=values, names=tuple(names), seed=seed)


def batch_draw_panel(
    n_draws: int = 1000,
    names: Sequence[str] = COEFFICIENT_NAMES,
    seed: Optional[int] = None,
) -> RandomDrawPanel:
    """Vectorised panel: one (N, K, 2) uniform block through Box-Muller.

    Uniforms fill the block in the sequential builder's u-then-v order, but
    exact zeros are replaced by draws taken after the whole block rather than
    in place. The two builders agree for a numpy seed unless a zero occurs.
    """
    if n_draws <= 0:
        raise ValueError("n_draws must be a positive integer")
    if not names:
        raise ValueError("names must not be empty")

    rng = np.random.default_rng(seed)
    uv = rng.random((n_draws, len(names), 2))
    zeros = uv == 0.0
    while zeros.any():
        uv[zeros] = rng.random(int(zeros.sum()))
        zeros = uv == 0.0

    u, v = uv[..., 0], uv[..., 1]
    values = np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)
    return RandomDrawPanel(values=values, names=tuple(names), seed=seed)


def make_draw_panel(cfg: DrawConfig) -> RandomDrawPanel:
    """Build the session panel from a DrawConfig."""
    seed = cfg.seed if cfg.seeded else None

    if cfg.vectorised:
        panel = batch_draw_panel(cfg.n_draws, COEFFICIENT_NAMES, seed=seed)
    elif cfg.source == "mulberry32":
        # unseeded mulberry32 still needs a 32-bit start state
        start = seed
        if start is None:
            start = int(np.random.SeedSequence().generate_state(1)[0])
        panel = generate_draw_panel(
            cfg.n_draws, COEFFICIENT_NAMES, uniform=mulberry32(start), seed=seed
        )
    else:
        panel = generate_draw_panel(
            cfg.n_draws,
            COEFFICIENT_NAMES,
            uniform=numpy_uniform_source(seed),
            seed=seed,
        )

    logger.info(
        "Built %d-draw panel (%s, source=%s%s)",
        len(panel),
        cfg.mode,
        cfg.source,
        ", vectorised" if cfg.vectorised else "",
    )
    if not cfg.seeded:
        logger.warning(
            "Draw panel is unseeded: support estimates are reproducible "
            "only within this session"
        )
    return panel
