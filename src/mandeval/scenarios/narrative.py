"""Plain-language summaries of a mandate configuration and its results."""

from __future__ import annotations

from typing import Sequence

from mandeval.config.mandate import CostInputs, MandateConfig, Settings
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
from mandeval.scenarios.metrics import DerivedMetrics
from mandeval.scenarios.store import Scenario

SUPPORT_UNAVAILABLE = "not available for this country and outbreak setting"


def _support_text(derived: DerivedMetrics) -> str:
    if derived.support is None:
        return f"Predicted public support is {SUPPORT_UNAVAILABLE}."
    return f"Predicted public support is approximately {format_support(derived.support)}."


def _rating(derived: DerivedMetrics) -> str:
    bcr = derived.bcr
    if derived.support is None:
        return (
            "Public support for this mandate option cannot be predicted, so only "
            "the economic valuation of lives saved can be assessed."
        )
    supp = derived.support * 100.0
    if supp >= 70 and bcr is not None and bcr >= 1:
        return (
            "This mandate option combines high predicted public support with a "
            "favourable benefit-cost profile given the current assumptions."
        )
    if supp >= 60 and bcr is not None and bcr >= 1:
        return (
            "This mandate option has broadly favourable support and a positive "
            "benefit-cost profile, but still involves important trade-offs."
        )
    if supp < 50 and (bcr is None or bcr < 1):
        return (
            "This mandate option has limited predicted support and a weak "
            "benefit-cost profile; it may be difficult to justify without "
            "additional measures."
        )
    return (
        "This mandate option involves trade-offs between public support and the "
        "economic valuation of lives saved. It warrants careful deliberation."
    )


def headline_recommendation(
    settings: Settings, derived: DerivedMetrics | None
) -> str:
    if derived is None:
        return (
            "No configuration applied yet. Configure country, outbreak scenario "
            "and design, then apply the configuration to see a summary."
        )
    cur = settings.currency_label
    if derived.cost_total > 0:
        cost_text = (
            f"Indicative implementation cost is about "
            f"{format_currency(derived.cost_total, cur)} over the selected horizon."
        )
    else:
        cost_text = (
            "Implementation costs have not yet been entered, so the benefit-cost "
            "profile is incomplete."
        )
    return (
        f"{_rating(derived)} {_support_text(derived)} The monetary valuation of "
        f"lives saved is about {format_currency(derived.benefit, cur)}. {cost_text}"
    )


def results_narrative(settings: Settings, derived: DerivedMetrics) -> str:
    cur = settings.currency_label
    if derived.support is None:
        supp_text = f"Predicted public support for this configuration is {SUPPORT_UNAVAILABLE}."
    else:
        supp_text = (
            f"Predicted public support for this configuration is approximately "
            f"{format_support(derived.support)}."
        )
    benefit_text = (
        f"The configuration is expected to save around {derived.lives_total:.1f} "
        f"lives saved in the exposed population, valued at approximately "
        f"{format_currency(derived.benefit, cur)}."
    )
    if derived.cost_total > 0:
        cost_text = (
            f"Total implementation cost is around "
            f"{format_currency(derived.cost_total, cur)}, giving a net benefit of "
            f"{format_currency(derived.net_benefit, cur)} and a BCR of "
            f"{format_bcr(derived.bcr)}."
        )
    else:
        cost_text = "Costs have not been entered, so the BCR is not defined."
    return f"{supp_text} {benefit_text} {cost_text}"


def cost_summary(settings: Settings, costs: CostInputs | None) -> tuple[str, str]:
    """(total, main component) display strings."""
    if costs is None:
        return "–", "–"
    cur = settings.currency_label
    main = costs.main_component()
    if main is None:
        return "Not yet entered", "–"
    label, value = main
    return format_currency(costs.total, cur), f"{label} ({format_currency(value, cur)})"


def _config_lines(c: MandateConfig) -> str:
    return (
        f"Country: {country_label(c.country)}; outbreak scenario: "
        f"{outbreak_label(c.outbreak)}.\n"
        f"Mandate scope: {scope_label(c.scope)}; exemption policy: "
        f"{exemptions_label(c.exemptions)}; coverage threshold to lift mandate: "
        f"{coverage_label(c.coverage)}.\n"
        f"Expected lives saved: {c.lives_per_100k:.1f} per 100,000 people.\n"
    )


def scenario_briefing(scenario: Scenario) -> str:
    c, d, s = scenario.config, scenario.derived, scenario.settings
    cur = s.currency_label
    cost = format_currency(d.cost_total, cur) if d.cost_total > 0 else "costs not entered"
    support = (
        f"approximately {format_support(d.support)}"
        if d.support is not None
        else SUPPORT_UNAVAILABLE
    )
    return (
        f"Scenario {scenario.id} ({scenario.timestamp})\n"
        + _config_lines(c)
        + f"Population covered: {s.population:,.0f} people; horizon: "
        f"{s.horizon_years:g} year(s).\n"
        f"Total lives saved: {d.lives_total:.1f}.\n"
        f"Monetary benefit of lives saved (using the chosen value-per-life "
        f"metric): {format_currency(d.benefit, cur)}.\n"
        f"Total implementation cost: {cost}, giving a net benefit of "
        f"{format_currency(d.net_benefit, cur)} and a BCR of {format_bcr(d.bcr)}.\n"
        f"Model-based predicted public support for this mandate is {support}.\n"
    )


def briefing_template(
    settings: Settings, config: MandateConfig, derived: DerivedMetrics
) -> str:
    cur = settings.currency_label
    if derived.support is None:
        balance = (
            "Predicted public support could not be estimated for this setting, so "
            "the balance between benefit, cost and acceptability is incomplete."
        )
    else:
        favour = "a favourable" if derived.bcr is not None and derived.bcr >= 1 else "an uncertain"
        balance = (
            f"This configuration appears to offer {favour} balance between "
            f"epidemiological benefit and implementation cost, with predicted "
            f"public support at around {format_support(derived.support)}."
        )
    return (
        f"Purpose\n"
        f"Summarise the expected public support, epidemiological benefits and "
        f"indicative economic value of a specific COVID-19 vaccine mandate "
        f"configuration in {country_label(config.country)} under a "
        f"{outbreak_label(config.outbreak).lower()} scenario.\n\n"
        f"Mandate configuration\n"
        f"• Country: {country_label(config.country)}\n"
        f"• Outbreak scenario: {outbreak_label(config.outbreak)}\n"
        f"• Mandate scope: {scope_label(config.scope)}\n"
        f"• Exemption policy: {exemptions_label(config.exemptions)}\n"
        f"• Coverage requirement to lift mandate: {coverage_label(config.coverage)}\n"
        f"• Expected lives saved: {config.lives_per_100k:.1f} per 100,000 people\n\n"
        f"Economic valuation\n"
        f"• Value per life saved (VSL or related metric): "
        f"{format_currency(settings.vsl_value, cur)}\n"
        f"• Total lives saved: {derived.lives_total:.1f}\n"
        f"• Monetary benefit: {format_currency(derived.benefit, cur)}\n"
        f"• Implementation cost: {format_currency(derived.cost_total, cur)}\n"
        f"• Net benefit: {format_currency(derived.net_benefit, cur)}\n"
        f"• BCR: {format_bcr(derived.bcr)}\n\n"
        f"Model-based public support\n"
        f"• Predicted public support for this mandate configuration: "
        f"{format_support(derived.support)}\n\n"
        f"Interpretation (to be tailored)\n"
        f"{balance} These results should be interpreted alongside distributional, "
        f"ethical and legal considerations that are not captured in the preference "
        f"study or the simple economic valuation used here."
    )


def ai_prompt(settings: Settings, config: MandateConfig, derived: DerivedMetrics) -> str:
    """Prompt text for drafting a policy briefing with an external assistant."""
    cur = settings.currency_label
    support = (
        format_support(derived.support) if derived.support is not None else "not available"
    )
    return (
        "You are helping a public health policy team design a COVID-19 vaccine mandate.\n\n"
        "CURRENT MANDATE CONFIGURATION\n"
        f"- Country: {country_label(config.country)}\n"
        f"- Outbreak scenario: {outbreak_label(config.outbreak)}\n"
        f"- Scope: {scope_label(config.scope)}\n"
        f"- Exemption policy: {exemptions_label(config.exemptions)}\n"
        f"- Coverage threshold to lift mandate: {coverage_label(config.coverage)}\n"
        f"- Expected lives saved: {config.lives_per_100k:.1f} per 100,000 people\n\n"
        "SETTINGS\n"
        f"- Analysis horizon: {settings.horizon_years:g} year(s)\n"
        f"- Population covered: {settings.population:,.0f} people\n"
        f"- Currency label: {cur}\n"
        f"- Value per life saved (VSL or related metric): "
        f"{format_currency(settings.vsl_value, cur)}\n\n"
        "COST-BENEFIT SUMMARY FOR CURRENT CONFIGURATION\n"
        f"- Total implementation cost: {format_currency(derived.cost_total, cur)}\n"
        f"- Estimated total lives saved: {derived.lives_total:.1f}\n"
        f"- Monetary benefit of lives saved: {format_currency(derived.benefit, cur)}\n"
        f"- Net benefit: {format_currency(derived.net_benefit, cur)}\n"
        f"- Benefit-cost ratio (BCR): {format_bcr(derived.bcr)}\n"
        f"- Predicted public support (from mixed logit model): {support}\n\n"
        "TASK FOR YOU:\n"
        "Draft a short, neutral and clear policy briefing that:\n"
        "1. Summarises this mandate option in plain language.\n"
        "2. Highlights the trade-offs between public health impact, costs and public support.\n"
        "3. Flags key uncertainties or assumptions.\n"
        "4. Suggests up to three points for ministers or senior officials to consider "
        "when comparing this option with alternatives.\n\n"
        "Use British spelling and keep the tone suitable for a government briefing."
    )


BRIEFING_KINDS = ("scenarios", "template", "prompt")


def render_briefing(
    kind: str,
    settings: Settings,
    config: MandateConfig,
    derived: DerivedMetrics,
    scenarios: Sequence[Scenario] = (),
) -> str:
    """Briefing text for the CLI: saved-scenario briefings, template or prompt."""
    if kind == "scenarios":
        if not scenarios:
            return "No saved scenarios to brief."
        return "\n".join(scenario_briefing(s) for s in scenarios)
    if kind == "template":
        return briefing_template(settings, config, derived)
    if kind == "prompt":
        return ai_prompt(settings, config, derived)
    raise ValueError(f"kind must be one of {set(BRIEFING_KINDS)}")
