from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter
import numpy as np

from mandeval.config.mandate import CostInputs, MandateConfig, Settings
from mandeval.misc import (
    country_label,
    coverage_label,
    exemptions_label,
    format_bcr,
    format_currency,
    format_short_currency,
    format_support,
    outbreak_label,
    scope_label,
)
from mandeval.mixed_logit.mrs import MRSRow
from mandeval.scenarios.metrics import DerivedMetrics, bcr_status, support_status
from mandeval.scenarios.narrative import cost_summary
from mandeval.scenarios.store import Scenario

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
SCENARIO_HEADERS = (
    "#",
    "Country",
    "Outbreak",
    "Scope",
    "Exemptions",
    "Coverage",
    "Lives/100k",
    "Lives total",
    "Benefit",
    "Cost",
    "Net benefit",
    "BCR",
    "Support",
)
MRS_HEADERS = ("Attribute change", "Lives/100k equivalent", "Interpretation")
LEVEL_COLOURS = {"good": "green", "med": "yellow", "bad": "red", "neutral": ""}
SUPPORT_BAR_COLOURS = {"good": "#059669", "med": "#f59e0b", "bad": "#ef4444"}


def _strip_ansi(s: str) -> str:
    """Remove ANSI escape sequences to measure visible width."""
    return ANSI_RE.sub("", s)


def colour(text: str, fg: str = "") -> str:
    """Wrap text with ANSI colour codes when a colour is provided."""
    COLOURS = {
        "red": "\033[31m",
        "yellow": "\033[33m",
        "green": "\033[32m",
    }
    reset = "\033[0m"
    return f"{COLOURS.get(fg, '')}{text}{reset}" if fg else text


def colour_support(support: float | None) -> str:
    _, level = support_status(support)
    return colour(format_support(support), LEVEL_COLOURS[level])


def colour_bcr(bcr: float | None) -> str:
    text = "–" if bcr is None else format_bcr(bcr)
    _, level = bcr_status(bcr)
    return colour(text, LEVEL_COLOURS[level])


def build_summary_rows(
    settings: Settings,
    config: MandateConfig,
    derived: DerivedMetrics,
    costs: CostInputs | None = None,
) -> list[list[str]]:
    """Two-column rows describing the current configuration and its results."""
    cur = settings.currency_label
    _, main_cost = cost_summary(settings, costs)
    return [
        ["Country", country_label(config.country)],
        ["Outbreak", outbreak_label(config.outbreak)],
        ["Scope", scope_label(config.scope)],
        ["Exemptions", exemptions_label(config.exemptions)],
        ["Coverage", coverage_label(config.coverage)],
        ["Lives saved", f"{config.lives_per_100k:.1f} per 100,000"],
        ["Total lives saved", f"{derived.lives_total:.1f}"],
        ["Benefit", format_currency(derived.benefit, cur)],
        [
            "Cost",
            format_currency(derived.cost_total, cur)
            if derived.cost_total > 0
            else "Costs not entered",
        ],
        ["Main cost component", main_cost],
        ["Net benefit", format_currency(derived.net_benefit, cur)],
        ["BCR", colour_bcr(derived.bcr)],
        ["Predicted support", colour_support(derived.support)],
    ]


def build_scenario_rows(scenarios: Sequence[Scenario]) -> list[list[str]]:
    rows: list[list[str]] = []
    for idx, s in enumerate(scenarios, start=1):
        c, d = s.config, s.derived
        rows.append(
            [
                str(idx),
                country_label(c.country),
                outbreak_label(c.outbreak),
                scope_label(c.scope),
                exemptions_label(c.exemptions),
                coverage_label(c.coverage),
                f"{c.lives_per_100k:.1f}",
                f"{d.lives_total:.1f}",
                format_short_currency(d.benefit),
                format_short_currency(d.cost_total),
                format_short_currency(d.net_benefit),
                colour_bcr(d.bcr),
                colour_support(d.support),
            ]
        )
    return rows


def build_mrs_rows(rows: Sequence[MRSRow] | None) -> list[list[str]]:
    if not rows:
        return []
    return [[r.attribute, f"{r.value:.1f}", r.interpretation] for r in rows]


def print_table(
    title: str,
    rows: list[list[str]],
    headers: Sequence[str] | None = None,
) -> None:
    """Render a simple aligned ASCII table."""
    if not rows:
        return

    header_values = list(headers) if headers is not None else ["Item", "Value"]

    col_widths: list[int] = []
    for col_idx in range(len(header_values)):
        max_len = len(header_values[col_idx])
        for row in rows:
            vis_len = len(_strip_ansi(str(row[col_idx])))
            if vis_len > max_len:
                max_len = vis_len
        col_widths.append(max_len)

    def _fmt_cell(value: str, width: int) -> str:
        s = str(value)
        pad = max(0, width - len(_strip_ansi(s)))
        return s + " " * pad

    def _fmt_row(values: list[str]) -> str:
        return " | ".join(
            _fmt_cell(v, w) for v, w in zip(values, col_widths, strict=True)
        )

    sep = "-+-".join("-" * w for w in col_widths)

    print(f"\n{title}")
    print(_fmt_row(header_values))
    print(sep)
    for row in rows:
        print(_fmt_row(row))


def plot_cost_benefit(
    derived: DerivedMetrics, settings: Settings, out_path: Path | str
) -> Path:
    """Bar chart of benefit, cost and net benefit."""
    cur = settings.currency_label
    labels = ["Benefit", "Cost", "Net benefit"]
    values = [derived.benefit, derived.cost_total, derived.net_benefit]
    x = np.arange(len(labels))

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.bar(x, values, color=["#1f6feb", "#e5e7eb", "#00a3a3"])
    ax.set_xticks(x, labels)
    ax.set_ylabel(f"Values ({cur})")
    ax.yaxis.set_major_formatter(
        FuncFormatter(lambda v, _pos: format_short_currency(v))
    )
    ax.set_title("Benefit, cost and net benefit")
    fig.tight_layout()

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def plot_support(derived: DerivedMetrics, out_path: Path | str) -> Path | None:
    """Single-bar chart of predicted support; nothing is drawn when unknown."""
    if derived.support is None:
        return None

    pct = derived.support * 100.0
    _, level = support_status(derived.support)

    fig, ax = plt.subplots(figsize=(4, 4))
    ax.bar([0], [round(pct, 1)], color=SUPPORT_BAR_COLOURS[level])
    ax.set_xticks([0], ["Predicted public support"])
    ax.set_ylim(0.0, 100.0)
    ax.set_ylabel("Support (%)")
    ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _pos: f"{v:.0f}%"))
    fig.tight_layout()

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path
