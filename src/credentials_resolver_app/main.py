"""Command-line interface and main entry point.

This module provides the CLI used to check, on a deployed host, that a
credentials provider class name resolves and yields credentials.
"""
# ruff: noqa: T201

import sys

import structlog

from credentials_resolver_app.cli_config import (
    config_from_namespace,
    parse_conf_pairs,
    parse_resolve_args,
)
from credentials_resolver_core.configuration import Configuration
from credentials_resolver_core.exceptions import CredentialsResolverError
from credentials_resolver_core.factory import get_provider_class_name
from credentials_resolver_core.observability import configure_logging, log_bind
from credentials_resolver_core.resolver import resolve_with_strategy

VERSION = "0.1.0"

# Get logger for this module
logger = structlog.get_logger(__name__)


def mask_secret(value: str, visible: int = 4) -> str:
    """Mask all but the last few characters of a secret."""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]


def resolve_command(args: list[str] | None = None) -> None:
    """Resolve a credentials provider and report how it was constructed.

    Args:
        args: Arguments following the command name. An optional positional
              argument is the provider class name.
    """
    namespace = parse_resolve_args(args)
    try:
        conf_pairs = parse_conf_pairs(namespace.conf)
        config = config_from_namespace(namespace)

        configure_logging(log_level=config.log_level, dev_mode=config.dev_mode)

        configuration = Configuration.from_env(config.conf_env_prefix)
        for key, value in conf_pairs.items():
            configuration.set(key, value)

        class_name = get_provider_class_name(configuration, config.provider_class)

        with log_bind(class_name=class_name):
            resolved = resolve_with_strategy(class_name, configuration)
            print(f"Provider: {resolved.provider_class.__qualname__}")
            print(f"Strategy: {resolved.strategy}")

            if config.check:
                credentials = resolved.provider.resolve_credentials()
                print(f"Access key id: {mask_secret(credentials.access_key_id)}")
                logger.info("CREDENTIALS_RESOLVED")

    except CredentialsResolverError as e:
        print(f"Error: {e.message}")
        logger.exception("RESOLVE_COMMAND_ERROR", error_code=e.error_code)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e!s}")
        logger.exception("RESOLVE_COMMAND_ERROR", error=str(e))
        sys.exit(1)


def show_help() -> None:
    """Show help information for the CLI."""
    help_text = """
Credentials Resolver

Usage:
    credentials-resolver <command> [options]

Commands:
    resolve [class_name]  Build the credentials provider and report the strategy used
    --help, -h            Show this help message
    --version, -v         Show version information

Options for resolve command:
    --conf <key=value>         Set a Configuration entry (repeatable)
    --conf-env-prefix <prefix> Environment prefix loaded into the Configuration
    --check                    Also resolve credentials and print the masked key id
    --log-level <level>        Log level (DEBUG, INFO, WARNING, ERROR)
    --dev-mode                 Enable development mode

When no class name is given, the io.delta.storage.credentials.provider
Configuration key, then CREDENTIALS_RESOLVER_PROVIDER_CLASS, are used.

Examples:
    credentials-resolver resolve credentials_resolver_core.credentials.environment.EnvironmentCredentialsProvider --check
    credentials-resolver resolve credentials_resolver_core.credentials.conf.ConfigurationCredentialsProvider \\
        --conf fs.s3a.access.key=AKIA... --conf fs.s3a.secret.key=...
"""
    print(help_text)


def main() -> None:
    """Main entry point for the CLI."""
    min_args = 2
    if len(sys.argv) < min_args:
        show_help()
        sys.exit(1)

    command = sys.argv[1]
    args = sys.argv[2:]

    if command == "resolve":
        resolve_command(args)
    elif command in ["--help", "-h", "help"]:
        show_help()
        sys.exit(0)
    elif command in ["--version", "-v", "version"]:
        print(f"credentials-resolver, version {VERSION}")
        sys.exit(0)
    else:
        show_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
