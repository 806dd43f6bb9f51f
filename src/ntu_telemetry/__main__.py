"""
Entry point for the ntu-telemetry CLI.

Usage:
    ntu-telemetry classify --kind battery --value 25
    ntu-telemetry status --reading '{"internalTemp": 37.9, "batteryLevel": 55}'
    ntu-telemetry synthesize --archetype discharge_curve --current 50
    ntu-telemetry maintenance --next 2026-11-01
    ntu-telemetry --version

Exit Codes:
    0 - Success
    1 - Configuration error (invalid settings, thresholds or arguments)
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from typing import Any, List, Optional

import structlog

from ntu_telemetry import __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    from ntu_telemetry.models.enums import Archetype, MetricKind

    parser = argparse.ArgumentParser(
        prog="ntu-telemetry",
        description="Classify transport unit telemetry and synthesize chart history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0   Success
  1   Configuration error

Environment Variables:
  CONFIG_PATH                      Path to YAML configuration file
  NTU_INTERNAL_TEMP_MIN            Lower edge of the normal internal band (C)
  NTU_BATTERY_WARNING              Battery warning level (percent)
  NTU_MAINTENANCE_DUE_SOON_DAYS    Days before maintenance counted as due soon
  NTU_RANDOM_SEED                  Seed for synthetic history
  NTU_LOG_LEVEL                    Logging level: DEBUG, INFO, WARNING, ERROR
  NTU_LOG_FORMAT                   Log format: json or text
""",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    classify_cmd = subparsers.add_parser("classify", help="Classify one metric value")
    classify_cmd.add_argument(
        "--kind", required=True, choices=[k.value for k in MetricKind]
    )
    classify_cmd.add_argument("--value", required=True, help="Raw reading value")
    classify_cmd.add_argument("--offline", action="store_true", help="Unit is offline")

    status_cmd = subparsers.add_parser("status", help="Roll a full reading up into one badge")
    status_cmd.add_argument("--reading", required=True, help="Telemetry reading as JSON")
    status_cmd.add_argument("--offline", action="store_true", help="Unit is offline")

    synth_cmd = subparsers.add_parser("synthesize", help="Generate synthetic chart history")
    synth_cmd.add_argument(
        "--archetype", required=True, choices=[a.value for a in Archetype]
    )
    synth_cmd.add_argument("--current", type=float, default=0.0, help="Current live value")
    synth_cmd.add_argument("--hours", type=int, default=None, help="History window in hours")
    synth_cmd.add_argument("--min-variance", type=float, default=None)
    synth_cmd.add_argument("--max-variance", type=float, default=None)
    synth_cmd.add_argument("--seed", type=int, default=None, help="Random seed")

    maint_cmd = subparsers.add_parser("maintenance", help="Derive maintenance status")
    maint_cmd.add_argument("--next", required=True, dest="next_date", help="Next maintenance date")
    maint_cmd.add_argument("--due-soon-days", type=int, default=None)

    return parser


def run_command(args: argparse.Namespace, config: Any) -> Any:
    """Execute a parsed subcommand and return a JSON-serializable result."""
    from ntu_telemetry.analysis.maintenance import maintenance_status
    from ntu_telemetry.models.enums import Archetype, Connectivity, MetricKind
    from ntu_telemetry.models.telemetry import TelemetryReading
    from ntu_telemetry.synthesis.generators import SeriesSynthesizer

    connectivity = Connectivity.OFFLINE if getattr(args, "offline", False) else Connectivity.ONLINE

    if args.command == "classify":
        classifier = config.build_classifier()
        severity = classifier.classify(MetricKind(args.kind), args.value, connectivity)
        return {"kind": args.kind, "value": args.value, "severity": severity.value}

    if args.command == "status":
        classifier = config.build_classifier()
        reading = TelemetryReading.from_api_response(json.loads(args.reading))
        fields = classifier.classify_fields(reading, connectivity)
        return {
            "severity": classifier.classify_reading(reading, connectivity).value,
            "fields": {kind.value: severity.value for kind, severity in fields.items()},
        }

    if args.command == "synthesize":
        archetype = Archetype(args.archetype)
        if args.seed is not None:
            synthesizer = SeriesSynthesizer(rng=random.Random(args.seed))
        else:
            synthesizer = config.build_synthesizer()
        hours = args.hours
        if hours is None:
            if archetype is Archetype.DISCHARGE_CURVE:
                hours = config.battery_history_hours
            else:
                hours = config.history_hours
        points = synthesizer.synthesize(
            archetype,
            args.current,
            hours,
            config.min_variance if args.min_variance is None else args.min_variance,
            config.max_variance if args.max_variance is None else args.max_variance,
        )
        return [point.to_dict() for point in points]

    if args.command == "maintenance":
        due_soon_days = args.due_soon_days
        if due_soon_days is None:
            due_soon_days = config.maintenance_due_soon_days
        status = maintenance_status(args.next_date, due_soon_days=due_soon_days)
        return {"next_maintenance": args.next_date, "status": status.value}

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for ntu-telemetry.

    Returns:
        Exit code (0=success, 1=config error)
    """
    args = build_parser().parse_args(argv)

    from ntu_telemetry.config.loader import load_config
    from ntu_telemetry.exceptions import ConfigurationError
    from ntu_telemetry.logging import configure_logging

    try:
        config = load_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except SystemExit as e:
        # Validation errors cause sys.exit(1) in loader
        return e.code if isinstance(e.code, int) else EXIT_CONFIG_ERROR

    configure_logging(log_format=config.log_format, log_level=config.log_level)
    log = structlog.get_logger()
    log.info(
        "thresholds_loaded",
        command=args.command,
        maintenance_due_soon_days=config.maintenance_due_soon_days,
    )

    try:
        result = run_command(args, config)
    except ConfigurationError as e:
        log.error("invalid_request", command=args.command, error=e.message)
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except ValueError as e:
        log.error("invalid_argument", command=args.command, error=str(e))
        print(f"Invalid argument: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print(json.dumps(result, indent=2))
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
