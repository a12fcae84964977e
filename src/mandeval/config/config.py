import argparse
import sys


def _print_category_help(category: str):
    """Print help for a specific config category."""
    help_text = {
        "draws": """
DrawConfig Arguments (Mixed Logit Simulation):
  --n_draws N                   Number of simulated respondents (default: 1000)
  --seed SEED                   Seed for the fixed draw panel (default: 123456789)
  --unseeded                    Use fresh OS entropy instead of the seed; estimates
                                are then reproducible only within one run
  --source {mulberry32,numpy}   Uniform generator feeding Box-Muller (default: mulberry32)
  --vectorised                  Generate the whole panel in one numpy block
                                (requires --source numpy)
""",
        "mandate": """
MandateConfig Arguments (Mandate Design):
  --country CODE                Country code: AU, IT, FR (default: AU)
  --outbreak {mild,severe}      Outbreak scenario (default: mild)
  --scope {high_risk,all}       Occupations covered (default: high_risk)
  --exemptions {medical,medical_religious,medical_religious_personal}
                                Exemption policy (default: medical)
  --coverage {0.5,0.7,0.9}      Vaccination coverage required to lift the mandate
                                (default: 0.5)
  --lives_per_100k LIVES        Expected lives saved per 100,000 people (default: 0)
""",
        "settings": """
Settings Arguments (Economic Valuation):
  --horizon_years YEARS         Analysis horizon in years (default: 1)
  --population N                Population covered (default: 1000000)
  --currency_label LABEL        Currency label (default: local currency units)
  --vsl_metric {vsl,vsly}       Value-per-life metric (default: vsl)
  --vsl_value VALUE             Value per life saved (default: 5000000)
""",
        "costs": """
CostInputs Arguments (Implementation Costs):
  --it_systems COST             Digital systems & infrastructure
  --communications COST         Communications & public information
  --enforcement COST            Enforcement & compliance
  --compensation COST           Adverse-event monitoring & compensation
  --admin COST                  Administration & programme management
  --other COST                  Other mandate-specific costs
""",
        "output": """
Output Arguments:
  --store PATH                  JSON file holding saved scenarios
  --save                        Save the evaluated configuration as a scenario
  --export {csv,excel,pdf,word} Export all saved scenarios
  --export_dir DIR              Directory for exports (default: results)
  --plots_dir DIR               Save benefit-cost and support charts here
  --briefing {scenarios,template,prompt}
                                Print saved-scenario briefings, a briefing
                                template or an assistant prompt
""",
    }
    print(help_text[category])
    print("\nFor full help: python <script> --help")
    print("For other categories: --help {draws,mandate,settings,costs,output}")


def get_args(argv=None):
    """Build CLI args for the mandate evaluation entrypoint.

    Special help commands:
        --help draws     : Show only DrawConfig arguments
        --help mandate   : Show only MandateConfig arguments
        --help settings  : Show only Settings arguments
        --help costs     : Show only CostInputs arguments
        --help output    : Show only output arguments
    """
    argv = sys.argv[1:] if argv is None else list(argv)

    if len(argv) == 2 and argv[0] == "--help":
        category = argv[1].lower()
        if category in ["draws", "mandate", "settings", "costs", "output"]:
            _print_category_help(category)
            sys.exit(0)

    p = argparse.ArgumentParser(
        description="Vaccine mandate support and benefit-cost evaluation. Use "
        "'--help draws', '--help mandate', '--help settings', '--help costs' or "
        "'--help output' for category-specific help."
    )

    # DrawConfig fields
    p.add_argument(
        "--n_draws",
        type=int,
        default=None,
        help="Number of simulated respondents (default: 1000)",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the fixed draw panel (default: 123456789)",
    )
    p.add_argument(
        "--unseeded",
        action="store_true",
        help="Draw the panel from fresh OS entropy instead of the seed",
    )
    p.add_argument(
        "--source",
        type=str,
        default=None,
        choices=["mulberry32", "numpy"],
        help="Uniform generator for the draws (default: mulberry32)",
    )
    p.add_argument(
        "--vectorised",
        action="store_true",
        help="Generate the panel as one numpy block (requires --source numpy)",
    )

    # MandateConfig fields
    p.add_argument("--country", type=str, default=None, help="Country code (default: AU)")
    p.add_argument(
        "--outbreak",
        type=str,
        default=None,
        help="Outbreak scenario (default: mild)",
    )
    p.add_argument(
        "--scope",
        type=str,
        default=None,
        choices=["high_risk", "all"],
        help="Occupations covered by the mandate (default: high_risk)",
    )
    p.add_argument(
        "--exemptions",
        type=str,
        default=None,
        choices=["medical", "medical_religious", "medical_religious_personal"],
        help="Exemption policy (default: medical)",
    )
    p.add_argument(
        "--coverage",
        type=float,
        default=None,
        choices=[0.5, 0.7, 0.9],
        help="Coverage threshold to lift the mandate (default: 0.5)",
    )
    p.add_argument(
        "--lives_per_100k",
        type=float,
        default=None,
        help="Expected lives saved per 100,000 people (default: 0)",
    )

    # Settings fields
    p.add_argument(
        "--horizon_years",
        type=float,
        default=None,
        help="Analysis horizon in years (default: 1)",
    )
    p.add_argument(
        "--population",
        type=float,
        default=None,
        help="Population covered (default: 1000000)",
    )
    p.add_argument(
        "--currency_label",
        type=str,
        default=None,
        help="Currency label (default: local currency units)",
    )
    p.add_argument(
        "--vsl_metric",
        type=str,
        default=None,
        choices=["vsl", "vsly"],
        help="Value-per-life metric (default: vsl)",
    )
    p.add_argument(
        "--vsl_value",
        type=float,
        default=None,
        help="Value per life saved (default: 5000000)",
    )

    # CostInputs fields
    for name in (
        "it_systems",
        "communications",
        "enforcement",
        "compensation",
        "admin",
        "other",
    ):
        p.add_argument(f"--{name}", type=float, default=None, help=f"{name} cost")

    # Output
    p.add_argument("--store", type=str, default=None, help="Scenario store JSON file")
    p.add_argument(
        "--save",
        action="store_true",
        help="Save the evaluated configuration as a scenario",
    )
    p.add_argument(
        "--export",
        type=str,
        default=None,
        choices=["csv", "excel", "pdf", "word"],
        help="Export all saved scenarios",
    )
    p.add_argument(
        "--export_dir",
        type=str,
        default="results",
        help="Directory for exports",
    )
    p.add_argument(
        "--plots_dir",
        type=str,
        default=None,
        help="Directory for benefit-cost and support charts",
    )
    p.add_argument(
        "--briefing",
        type=str,
        default=None,
        choices=["scenarios", "template", "prompt"],
        help="Print saved-scenario briefings, a briefing template or an assistant prompt",
    )

    args = p.parse_args(argv)

    # Flags map onto DrawConfig fields; None keeps the dataclass default
    args.seeded = False if args.unseeded else None
    args.vectorised = True if args.vectorised else None

    return args
