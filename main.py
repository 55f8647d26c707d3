"""
Command-line entry point: update inputs, view risk status, export RiskControl.cfg.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables before other imports that may read them.
load_dotenv()

from config import settings
from core.state import CUSTOM_FIELDS, RiskSession, parse_custom_value
from export.report import render_preset_table, render_report
from infra.logger import get_logger
from infra.notifier import notify_validation
from infra.store import JsonFileStore
from risk.presets import Mode, finite_float

INPUT_SETTERS = {
    "equity": "set_equity",
    "prior-equity": "set_prior_equity",
    "pnl": "set_todays_pnl",
    "halted": "set_halted_exposure",
}


def _amount(value: str) -> float:
    try:
        return finite_float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected a finite dollar amount, got {value!r}") from exc


def _mode(value: str) -> Mode:
    try:
        return Mode.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _field(value: str) -> str:
    name = value.strip().lower().replace("-", "_")
    if name not in CUSTOM_FIELDS:
        raise argparse.ArgumentTypeError(
            f"Unknown setting {value!r}. Choose from: {', '.join(CUSTOM_FIELDS)}"
        )
    return name


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="risk-control",
        description="Derive day-trading risk limits and export a DAS RiskControl.cfg.",
    )
    parser.add_argument(
        "--state",
        default=settings.STATE_PATH,
        help="Path of the persisted session state (default: %(default)s)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the risk dashboard")
    sub.add_parser("presets", help="Compare the built-in presets")

    mode_cmd = sub.add_parser("mode", help="Select the risk mode")
    mode_cmd.add_argument("name", type=_mode, help="Conservative, Standard, Aggressive or Custom")

    set_cmd = sub.add_parser("set", help="Update a session input")
    set_cmd.add_argument("input", choices=sorted(INPUT_SETTERS))
    set_cmd.add_argument("value", type=_amount)

    custom_cmd = sub.add_parser("custom", help="Edit the Custom mode settings")
    custom_sub = custom_cmd.add_subparsers(dest="action", required=True)
    custom_set = custom_sub.add_parser("set", help="Change one setting (limits in percent)")
    custom_set.add_argument("field", type=_field)
    custom_set.add_argument("value")
    custom_sub.add_parser("reset", help="Reset custom settings to defaults")

    export_cmd = sub.add_parser("export", help="Write RiskControl.cfg for the active mode")
    export_cmd.add_argument(
        "--output",
        "-o",
        default=settings.EXPORT_PATH,
        help="Destination file (default: %(default)s); '-' prints to stdout",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger("Main")

    if args.command == "presets":
        print(render_preset_table())
        return 0

    session = RiskSession.load(JsonFileStore(args.state))

    if args.command == "mode":
        session.set_mode(args.name)
    elif args.command == "set":
        getattr(session, INPUT_SETTERS[args.input])(args.value)
    elif args.command == "custom":
        if args.action == "reset":
            session.reset_custom()
        else:
            try:
                value = parse_custom_value(args.field, args.value)
            except ValueError as exc:
                logger.error("Invalid value for %s: %s", args.field, exc)
                return 1
            session.update_custom(**{args.field: value})
    elif args.command == "export":
        notify_validation(session.issues)
        if args.output == "-":
            print(session.render_config())
        else:
            session.export(args.output)
        return 0

    notify_validation(session.issues)
    print(render_report(session.mode, session.settings, session.inputs, session.metrics, session.issues))
    return 0


if __name__ == "__main__":
    sys.exit(main())
