"""Evaluate one vaccine-mandate configuration and optionally save/export scenarios."""

from __future__ import annotations

import logging
from pathlib import Path

from mandeval.app import MandateSession
from mandeval.config import Config, get_args
from mandeval.scenarios.narrative import (
    headline_recommendation,
    render_briefing,
    results_narrative,
)
from mandeval.scenarios.store import ScenarioStore
from mandeval.vis import (
    MRS_HEADERS,
    SCENARIO_HEADERS,
    build_mrs_rows,
    build_scenario_rows,
    build_summary_rows,
    plot_cost_benefit,
    plot_support,
    print_table,
)

BRIEFING_TITLES = {
    "scenarios": "Scenario briefings",
    "template": "Briefing template",
    "prompt": "Assistant prompt",
}


def main():
    args = get_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = Config.from_args(args)
    store = ScenarioStore(args.store)
    store.load()

    session = MandateSession(settings=config.settings, draws=config.draws, store=store)
    session.apply_costs(config.costs)
    derived = session.apply_config(config.mandate)

    print_table(
        "Current configuration",
        build_summary_rows(session.settings, session.config, derived, session.costs),
    )
    print_table(
        "Lives-saved equivalents",
        build_mrs_rows(session.lives_saved_equivalents()),
        headers=MRS_HEADERS,
    )
    print(f"\n{headline_recommendation(session.settings, derived)}")
    print(f"\n{results_narrative(session.settings, derived)}")

    if args.plots_dir:
        plots_dir = Path(args.plots_dir)
        plot_cost_benefit(derived, session.settings, plots_dir / "cost_benefit.png")
        if plot_support(derived, plots_dir / "support.png") is None:
            print("\nSupport chart skipped: predicted support not available.")

    if args.save:
        scenario = session.save_scenario()
        print(f"\nSaved scenario {scenario.id}")

    if store.scenarios:
        print_table(
            "Saved scenarios",
            build_scenario_rows(store.scenarios),
            headers=SCENARIO_HEADERS,
        )

    if args.briefing:
        print(f"\n{BRIEFING_TITLES[args.briefing]}")
        print(
            render_briefing(
                args.briefing,
                session.settings,
                session.config,
                derived,
                store.scenarios,
            )
        )

    if args.export:
        if not store.scenarios:
            print("\nNo scenarios to export.")
        else:
            path = session.export(args.export_dir, args.export)
            print(f"\nExported scenarios to {path}")


if __name__ == "__main__":
    main()
