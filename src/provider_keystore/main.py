"""Command-line driver for inspecting and storing provider API keys."""

from __future__ import annotations

import argparse
import getpass
import sys

from provider_keystore import __version__
from provider_keystore.config.settings import KeystoreSettings, load_settings
from provider_keystore.enums import KeySource, KeyState
from provider_keystore.keystore import ProviderKeyStore, mask_secret
from provider_keystore.registry import get_provider, registered_providers
from provider_keystore.report import provider_status_report
from provider_keystore.schema.status import ProviderStatus
from provider_keystore.utilities.logger_manager import LoggerConfig, LoggerManager

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

_STATE_LABELS = {
    KeyState.CONFIGURED: "configured",
    KeyState.MISSING: "missing",
    KeyState.NOT_REQUIRED: "not required",
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="provider-keystore",
        description="Check and store API keys for LLM providers.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=__version__,
        help="Show the version and exit.",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Key file to read and update (defaults to .env in the working directory).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional YAML file with a 'keystore' section.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="Show every registered provider and whether its key is configured.",
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the status report as JSON.",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Exit with status 0 when the provider's key is available.",
    )
    check_parser.add_argument("provider", type=str, help="Provider id, e.g. openai.")

    set_parser = subparsers.add_parser(
        "set",
        help="Store a provider's API key in the key file.",
    )
    set_parser.add_argument("provider", type=str, help="Provider id, e.g. openai.")
    set_parser.add_argument(
        "--key",
        type=str,
        default=None,
        help="Key value; prompted for without echo when omitted.",
    )
    return parser.parse_args(argv)


def build_store(args: argparse.Namespace) -> ProviderKeyStore:
    settings: KeystoreSettings = load_settings(args.config)
    if args.env_file:
        settings = settings.with_overrides(env_file=args.env_file)
    return ProviderKeyStore(settings)


def _format_status(status: ProviderStatus, env_file_name: str) -> str:
    label = _STATE_LABELS[status.state]
    if status.source is KeySource.ENVIRONMENT:
        label = f"{label} (environment)"
    elif status.source is KeySource.ENV_FILE:
        label = f"{label} ({env_file_name})"
    variable = status.key_variable or "-"
    return f"{status.provider_id:<12} {status.display_name:<12} {variable:<20} {label}"


def command_list(store: ProviderKeyStore, as_json: bool) -> int:
    report = provider_status_report(store)
    if as_json:
        print(report.model_dump_json(indent=2))
        return EXIT_OK
    print(f"{'PROVIDER':<12} {'NAME':<12} {'VARIABLE':<20} STATUS")
    for status in report.providers:
        print(_format_status(status, store.env_file.name))
    return EXIT_OK


def command_check(store: ProviderKeyStore, provider_id: str) -> int:
    record = get_provider(provider_id)
    if record is None:
        known = ", ".join(r.id for r in registered_providers())
        print(f"Unknown provider '{provider_id}'. Known: {known}", file=sys.stderr)
        return EXIT_USAGE
    if store.key_exists_for_provider(provider_id):
        print(f"{record.display_name}: ready")
        return EXIT_OK
    print(
        f"{record.display_name}: {record.key_variable_name} is not set",
        file=sys.stderr,
    )
    return EXIT_FAILURE


def command_set(store: ProviderKeyStore, provider_id: str, key: str | None) -> int:
    record = get_provider(provider_id)
    if record is None or not record.requires_key:
        name = record.display_name if record else provider_id
        print(f"{name} does not take an API key", file=sys.stderr)
        return EXIT_FAILURE
    if key is None:
        key = getpass.getpass(f"{record.display_name} API key: ")
    value = key.strip()
    if not value:
        print("No key entered; nothing saved", file=sys.stderr)
        return EXIT_USAGE
    if not store.save_key_for_provider(provider_id, value):
        print(
            f"Failed to save {record.key_variable_name} to {store.env_file}",
            file=sys.stderr,
        )
        return EXIT_FAILURE
    print(f"Saved {record.key_variable_name}={mask_secret(value)} to {store.env_file}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the provider-keystore CLI."""
    args = parse_args(argv)
    log_manager = LoggerManager(LoggerConfig(log_level=args.log_level))
    try:
        try:
            store = build_store(args)
        except ValueError as exc:
            print(f"Configuration error: {exc}", file=sys.stderr)
            return EXIT_USAGE
        if args.command == "list":
            return command_list(store, args.json)
        if args.command == "check":
            return command_check(store, args.provider)
        return command_set(store, args.provider, args.key)
    finally:
        log_manager.close()


if __name__ == "__main__":
    raise SystemExit(main())
