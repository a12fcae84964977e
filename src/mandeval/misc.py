from __future__ import annotations

import math
from typing import Optional

MISSING = "–"

COUNTRY_LABELS = {"AU": "Australia", "FR": "France", "IT": "Italy"}
OUTBREAK_LABELS = {"mild": "Mild / endemic", "severe": "Severe outbreak"}
SCOPE_LABELS = {
    "high_risk": "High-risk occupations only",
    "all": "All occupations & public spaces",
}
EXEMPTION_LABELS = {
    "medical": "Medical only",
    "medical_religious": "Medical + religious",
    "medical_religious_personal": "Medical + religious + personal belief",
}


def _is_number(x) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def format_currency(value, currency_label: str) -> str:
    v = value if _is_number(value) else 0.0
    if not math.isfinite(v):
        return f"{currency_label} ?"

    abs_v = abs(v)
    if abs_v >= 1e9:
        formatted = f"{v / 1e9:.2f} B"
    elif abs_v >= 1e6:
        formatted = f"{v / 1e6:.2f} M"
    elif abs_v >= 1e3:
        formatted = f"{v / 1e3:.1f} K"
    else:
        formatted = f"{v:.0f}"
    return f"{currency_label} {formatted}"


def format_short_currency(value) -> str:
    v = value if _is_number(value) else 0.0
    if not math.isfinite(v):
        return "?"

    abs_v = abs(v)
    if abs_v >= 1e9:
        return f"{v / 1e9:.1f}B"
    if abs_v >= 1e6:
        return f"{v / 1e6:.1f}M"
    if abs_v >= 1e3:
        return f"{v / 1e3:.1f}K"
    return f"{v:.0f}"


def format_percent(value: Optional[float]) -> str:
    """Format a value already on the 0-100 scale; None/NaN -> dash."""
    if value is None or not _is_number(value) or not math.isfinite(value):
        return MISSING
    return f"{value:.1f}%"


def format_support(support: Optional[float]) -> str:
    """Format a 0-1 support share, keeping 'unknown' distinct from 0%."""
    if support is None:
        return MISSING
    return format_percent(support * 100.0)


def format_bcr(bcr: Optional[float]) -> str:
    return "not defined" if bcr is None else f"{bcr:.2f}"


def country_label(code: str | None) -> str:
    return COUNTRY_LABELS.get(code, code or MISSING)


def outbreak_label(code: str | None) -> str:
    return OUTBREAK_LABELS.get(code, code or MISSING)


def scope_label(code: str | None) -> str:
    return SCOPE_LABELS.get(code, code or MISSING)


def exemptions_label(code: str | None) -> str:
    return EXEMPTION_LABELS.get(code, code or MISSING)


def coverage_label(val) -> str:
    for level in (0.5, 0.7, 0.9):
        if str(val) == str(level) or (_is_number(val) and math.isclose(val, level)):
            return f"{int(round(level * 100))}% population vaccinated"
    return str(val)
