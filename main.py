"""Entry point for the survival exposure simulation."""

import sys

from survival.config import settings
from survival.simulation import ExposureScenario, run


if __name__ == "__main__":
    runtime_settings = settings.load_runtime_settings(sys.argv[1:])
    settings.apply_runtime_settings(runtime_settings)
    args = settings.parse_scenario_args(sys.argv[1:])
    scenario = ExposureScenario(
        hours=args.hours,
        environment_temp=args.environment_temp,
        insulation=args.insulation,
        activity=args.activity,
        seed=args.seed,
    )
    survivor = run(runtime_settings, scenario)
    for message in survivor.log.messages():
        sys.stdout.write(message + "\n")
    sys.stdout.write("\n")
    for line in survivor.describe():
        sys.stdout.write(line + "\n")
