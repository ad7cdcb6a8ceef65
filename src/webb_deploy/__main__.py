from __future__ import annotations

import argparse
import logging
from pathlib import Path

from webb_deploy.logging_config import setup_logging
from webb_deploy.rules.schedule import DeploymentRules, ScheduleError, default_rules
from webb_deploy.sim.playback import PlaybackController


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m webb_deploy",
        description="Terminal viewer for the telescope deployment sequence.",
    )
    parser.add_argument("--data-dir", default=None, help="Directory holding schedule.json and timeline.json.")
    parser.add_argument("--log-file", default=None, help="Write logs to this file (the terminal is in use).")
    parser.add_argument("--debug", action="store_true", help="Log playback transitions.")
    args = parser.parse_args(argv)

    if args.log_file:
        setup_logging(logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    try:
        rules = DeploymentRules.load(Path(args.data_dir)) if args.data_dir else default_rules()
    except ScheduleError as exc:
        parser.error(f"Failed to load schedule: {exc}")

    from webb_deploy.ui.app import DeploymentApp

    with PlaybackController(rules) as controller:
        DeploymentApp(controller).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
