"""CSV and Word-compatible exports of saved scenarios."""

from __future__ import annotations

import html
import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from mandeval.misc import (
    country_label,
    coverage_label,
    exemptions_label,
    format_bcr,
    format_currency,
    format_support,
    outbreak_label,
    scope_label,
)
from mandeval.scenarios.store import Scenario

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "id",
    "country",
    "outbreak",
    "scope",
    "exemptions",
    "coverage",
    "lives_per_100k",
    "lives_total",
    "benefit",
    "cost",
    "net_benefit",
    "bcr",
    "support",
    "currency",
    "timestamp",
]

EXPORT_FILENAMES = {
    "csv": "mandeval_scenarios.csv",
    "excel": "mandeval_scenarios.xlsx.csv",
    "pdf": "mandeval_scenarios_summary.csv",
    "word": "mandeval_scenarios.doc",
}


def scenarios_frame(scenarios: Sequence[Scenario]) -> pd.DataFrame:
    """One row per scenario with readable labels; unknown values stay empty."""
    rows = []
    for s in scenarios:
        c, d = s.config, s.derived
        rows.append(
            {
                "id": s.id,
                "country": country_label(c.country),
                "outbreak": outbreak_label(c.outbreak),
                "scope": scope_label(c.scope),
                "exemptions": exemptions_label(c.exemptions),
                "coverage": coverage_label(c.coverage),
                "lives_per_100k": c.lives_per_100k,
                "lives_total": d.lives_total,
                "benefit": d.benefit,
                "cost": d.cost_total,
                "net_benefit": d.net_benefit,
                "bcr": d.bcr,
                "support": d.support,
                "currency": s.settings.currency_label,
                "timestamp": s.timestamp,
            }
        )
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def _word_document(scenarios: Sequence[Scenario]) -> str:
    esc = html.escape
    parts = [
        "<html><head><meta charset='utf-8'><title>Mandate scenarios</title>",
        "<style>body { font-family: Arial, sans-serif; } .label { font-weight: bold; }</style>",
        "</head><body>",
        "<h1>Vaccine mandate scenarios</h1>",
    ]
    for s in scenarios:
        c, d, st = s.config, s.derived, s.settings
        cur = st.currency_label
        items = [
            ("Scope", scope_label(c.scope)),
            ("Exemptions", exemptions_label(c.exemptions)),
            ("Coverage requirement to lift mandate", coverage_label(c.coverage)),
            ("Expected lives saved", f"{c.lives_per_100k:.1f} per 100,000 people"),
            ("Population covered", f"{st.population:,.0f} people"),
            ("Total lives saved (approx.)", f"{d.lives_total:.1f}"),
            ("Value per life saved", format_currency(st.vsl_value, cur)),
            ("Monetary benefit of lives saved", format_currency(d.benefit, cur)),
            ("Total implementation cost (as entered)", format_currency(d.cost_total, cur)),
            ("Net benefit (benefit - cost)", format_currency(d.net_benefit, cur)),
            ("Benefit-cost ratio (BCR)", format_bcr(d.bcr)),
            ("Predicted public support", format_support(d.support)),
        ]
        parts.append(
            f"<h2>Scenario {s.id}: {esc(country_label(c.country))} - "
            f"{esc(outbreak_label(c.outbreak))}</h2>"
        )
        parts.append(f"<p><span class='label'>Time stamp:</span> {esc(s.timestamp)}</p>")
        parts.append("<ul>")
        for label, value in items:
            parts.append(f"<li><span class='label'>{esc(label)}:</span> {esc(value)}</li>")
        parts.append("</ul>")
    parts.append("</body></html>")
    return "\n".join(parts)


def export_scenarios(
    scenarios: Sequence[Scenario], out_dir: Path | str, kind: str = "csv"
) -> Path:
    """Write scenarios to out_dir and return the written file path."""
    if not scenarios:
        raise ValueError("No scenarios to export")
    if kind not in EXPORT_FILENAMES:
        raise ValueError(f"kind must be one of {set(EXPORT_FILENAMES)}")

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / EXPORT_FILENAMES[kind]

    if kind == "word":
        path.write_text(_word_document(scenarios), encoding="utf-8")
    else:
        scenarios_frame(scenarios).to_csv(path, index=False)

    logger.info("Exported %d scenario(s) to %s", len(scenarios), path)
    return path
