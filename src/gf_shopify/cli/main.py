"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path

from gf_shopify.models.config import RelayConfig


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="gf-shopify",
        description="Relay Gravity Forms submissions into Shopify customers",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (GF_SHOPIFY_* environment variables override it)",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug-level logging on stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # submit
    submit_parser = subparsers.add_parser("submit", help="Relay one form submission")
    submit_parser.add_argument(
        "--form",
        type=Path,
        required=True,
        help="Form JSON: {id, fields: [{id, type}, ...]}",
    )
    submit_parser.add_argument(
        "--entry",
        type=Path,
        required=True,
        help="Entry JSON: field key -> submitted value",
    )

    # logs
    logs_parser = subparsers.add_parser("logs", help="Show or clear the activity log")
    logs_parser.add_argument("action", choices=["list", "clear"], help="List recent entries or clear all")
    logs_parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Entries to show, newest first (default: 20)",
    )

    # status
    subparsers.add_parser("status", help="Show configuration status")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = _load_config(args.config)

    if args.command == "submit":
        _run_submit(args, config)
    elif args.command == "logs":
        _run_logs(args, config)
    elif args.command == "status":
        _run_status(config)
    else:
        parser.print_help()


def _load_config(path: Path | None) -> RelayConfig:
    base = RelayConfig.from_yaml(path) if path else None
    return RelayConfig.from_env(base)


def _run_submit(args: argparse.Namespace, config: RelayConfig) -> None:
    """Run submit command. Exits 1 when the customer was not created or updated."""
    from gf_shopify.handler import handle_submission

    form = json.loads(args.form.read_text())
    entry = json.loads(args.entry.read_text())
    if not isinstance(entry, dict):
        raise SystemExit("--entry must contain a JSON object")

    if handle_submission(entry, form, config):
        print("Customer created/updated.")
    else:
        print("Submission not relayed. Run `gf-shopify logs list` for details.", file=sys.stderr)
        raise SystemExit(1)


def _run_logs(args: argparse.Namespace, config: RelayConfig) -> None:
    """Run logs command."""
    from gf_shopify.store import ActivityLog

    activity_log = ActivityLog.from_config(config)
    if args.action == "clear":
        removed = activity_log.clear()
        print(f"Debug logs cleared ({removed} entries).")
        return

    if not config.logging_enabled:
        print("Logging is currently disabled. Enable it to see debug information.", file=sys.stderr)
        return
    entries = activity_log.recent(args.limit)
    if not entries:
        print("No activity logs yet. Submit a form to see debug information.")
        return
    for entry in entries:
        print(f"{entry.timestamp} [{entry.level.upper()}] {entry.message}")


def _run_status(config: RelayConfig) -> None:
    """Run status command."""
    print("Configuration Status")
    for label, value in config.status().items():
        print(f"  {label}: {value}")


if __name__ == "__main__":
    main()
