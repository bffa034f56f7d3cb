"""Weather CLI: list providers, configure them, and query the default one."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from .codec import ProviderCodec
from .config import Settings, load_settings
from .exceptions import (
    ConfigError,
    ConfigStoreError,
    NotConfiguredError,
    ProviderError,
    UnknownProviderError,
)
from .log_setup import setup_logger
from .registry import ProviderRegistry, default_registry
from .store import ProviderConfig, default_config_path, load_config, save_config

CredentialPrompt = Callable[[str], str]

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_NOT_CONFIGURED = 3
EXIT_PROVIDER_ERROR = 4
EXIT_STORE_ERROR = 5


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r}; expected YYYY-MM-DD"
        ) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather",
        description="Get weather for an address from a configurable provider.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Provider config file (default: next to the executable).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("providers", help="List available providers.")

    configure = commands.add_parser("configure", help="Configure a provider.")
    configure.add_argument("provider", help="Provider name.")

    default = commands.add_parser("default", help="Select the default provider.")
    default.add_argument("provider", help="Name of an already configured provider.")

    get = commands.add_parser("get", help="Get weather.")
    get.add_argument("address", help="Address.")
    get.add_argument(
        "date",
        nargs="?",
        type=_parse_date,
        default=None,
        help="Date in YYYY-MM-DD format, default today.",
    )
    return parser


def _ask_credential(label: str) -> str:
    return Prompt.ask(f"Enter {label}", password=True)


def _print_providers(
    console: Console, registry: ProviderRegistry, config: ProviderConfig
) -> None:
    table = Table(title="Available providers")
    table.add_column("Name")
    table.add_column("Description", overflow="fold")
    table.add_column("Status")

    for entry in registry.entries():
        if entry.name == config.default:
            status = "default"
        elif entry.name in config:
            status = "configured"
        else:
            status = "-"
        table.add_row(entry.name, entry.description, status)
    console.print(table)


def _configure(
    name: str,
    *,
    registry: ProviderRegistry,
    config: ProviderConfig,
    prompt: CredentialPrompt,
    timeout_seconds: float,
) -> bool:
    """Build and store provider ``name``; return True if it became the default."""
    entry = registry.get(name)
    if entry is None:
        raise UnknownProviderError(name)

    provider = entry.factory()
    if "timeout_seconds" in type(provider).model_fields:
        provider = provider.model_copy(update={"timeout_seconds": timeout_seconds})
    if entry.needs_credential:
        label = (provider.credential_field or "credential").replace("_", " ")
        credential = prompt(f"{label} for {entry.name}").strip()
        provider = provider.with_credential(credential)

    config.add(name, provider)
    return config.default == name


def main(
    argv: Sequence[str] | None = None,
    *,
    registry: ProviderRegistry | None = None,
    settings: Settings | None = None,
    console: Console | None = None,
    prompt: CredentialPrompt | None = None,
) -> int:
    """Run the weather CLI and return the process exit code."""
    args = build_parser().parse_args(argv)
    console = console or Console()
    registry = registry or default_registry()
    prompt = prompt or _ask_credential

    try:
        settings = settings or load_settings()
    except ConfigError as exc:
        setup_logger().error("Configuration failure: %s", exc)
        return EXIT_USAGE

    logger = setup_logger(level=logging.DEBUG if args.verbose else settings.log_level)
    logger.debug("Settings: %s", settings.safe_summary())

    codec: ProviderCodec = registry.codec()
    config_path: Path = args.config or settings.config_path or default_config_path()
    config = load_config(config_path, codec, logger)
    logger.debug(
        "Provider config: %s",
        config.safe_summary(codec),
        extra={"config_path": str(config_path), "command": args.command},
    )

    try:
        if args.command == "providers":
            _print_providers(console, registry, config)
            return EXIT_OK

        if args.command == "configure":
            became_default = _configure(
                args.provider,
                registry=registry,
                config=config,
                prompt=prompt,
                timeout_seconds=settings.timeout_seconds,
            )
            save_config(config_path, config, codec)
            logger.info(
                "Configured provider %s in %s",
                args.provider,
                config_path,
                extra={"provider": args.provider, "command": args.command},
            )
            suffix = " (default)" if became_default else ""
            console.print(f"Configured provider {args.provider}{suffix}.")
            return EXIT_OK

        if args.command == "default":
            if not config.set_default(args.provider):
                logger.error("Provider %s is not configured", args.provider)
                console.print(
                    f"Provider {args.provider} is not configured; "
                    f"configured: {', '.join(config.names()) or 'none'}."
                )
                return EXIT_USAGE
            save_config(config_path, config, codec)
            console.print(f"Default provider is now {args.provider}.")
            return EXIT_OK

        provider = config.require_default()
        day = args.date or date.today()
        logger.debug("Querying %s for %s on %s", provider.provider_name, args.address, day)
        report = provider.get_weather(args.address, day)
        console.print(f"{args.address}: {report}", markup=False, highlight=False)
        return EXIT_OK
    except (EOFError, KeyboardInterrupt):
        logger.error("Input aborted", extra={"command": args.command})
        console.print("Aborted; nothing was saved.")
        return EXIT_USAGE
    except UnknownProviderError as exc:
        logger.error("%s", exc)
        console.print(f"{exc}. Run `weather providers` to list them.")
        return EXIT_USAGE
    except NotConfiguredError as exc:
        logger.error("%s", exc)
        console.print(str(exc), markup=False)
        return EXIT_NOT_CONFIGURED
    except ProviderError as exc:
        logger.error(
            "Weather request failed: %s",
            exc,
            extra={"provider": config.default, "command": args.command},
        )
        console.print(f"Failed to get weather: {exc}", markup=False, highlight=False)
        return EXIT_PROVIDER_ERROR
    except ConfigStoreError as exc:
        logger.error("%s", exc)
        console.print(str(exc), markup=False)
        return EXIT_STORE_ERROR


if __name__ == "__main__":
    sys.exit(main())
