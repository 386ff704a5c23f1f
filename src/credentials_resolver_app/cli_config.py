"""CLI configuration using argparse and environ-config.

This module defines the configuration classes for command-line arguments.
Every option can be given as an environment variable prefixed with
CREDENTIALS_RESOLVER_APP_ or on the command line, the command line taking
precedence.
"""

import argparse
import os
from collections.abc import Mapping

import environ

ENV_PREFIX = "CREDENTIALS_RESOLVER_APP"


@environ.config(prefix=ENV_PREFIX)
class ResolveConfig:
    """Configuration for the resolve command."""

    provider_class: str | None = environ.var(
        default=None, help="Fully-qualified credentials provider class name"
    )
    conf_env_prefix: str = environ.var(
        default="CREDENTIALS_RESOLVER_CONF",
        help="Environment prefix loaded into the provider Configuration",
    )
    check: bool = environ.bool_var(
        default=False, help="Resolve credentials after building the provider"
    )
    log_level: str = environ.var(default="INFO", help="Log level")
    dev_mode: bool = environ.bool_var(
        default=False, help="Enable development mode logging"
    )


def build_resolve_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the resolve command.

    Options default to None so that unset options leave the environment
    value in place.

    Returns:
        argparse.ArgumentParser: Parser for the resolve command arguments
    """
    parser = argparse.ArgumentParser(
        prog="credentials-resolver resolve",
        description="Build a credentials provider and report the strategy used",
    )

    parser.add_argument(
        "class_name",
        nargs="?",
        default=None,
        help="Fully-qualified credentials provider class name",
    )
    parser.add_argument(
        "--conf",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Set a Configuration entry (repeatable)",
    )
    parser.add_argument(
        "--conf-env-prefix",
        default=None,
        help="Environment prefix loaded into the Configuration",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        default=None,
        help="Also resolve credentials and print the masked key id",
    )
    parser.add_argument(
        "--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)"
    )
    parser.add_argument(
        "--dev-mode",
        action="store_true",
        default=None,
        help="Enable development mode logging",
    )
    return parser


def parse_resolve_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse resolve command arguments.

    Raises:
        SystemExit: If the arguments are invalid (argparse reports the error).
    """
    return build_resolve_parser().parse_args(args or [])


def parse_conf_pairs(values: list[str]) -> dict[str, str]:
    """Turn ``key=value`` strings into a dictionary.

    Raises:
        ValueError: If a value is not of the form key=value.
    """
    pairs: dict[str, str] = {}
    for item in values:
        key, separator, value = item.partition("=")
        if not separator or not key.strip():
            msg = f"--conf requires a key=value argument, got: {item!r}"
            raise ValueError(msg)
        pairs[key.strip()] = value
    return pairs


def config_from_namespace(
    namespace: argparse.Namespace, environ_vars: Mapping[str, str] | None = None
) -> ResolveConfig:
    """Overlay parsed arguments on the environment and build a ResolveConfig."""
    source = dict(os.environ if environ_vars is None else environ_vars)
    provided = {
        "provider_class": namespace.class_name,
        "conf_env_prefix": namespace.conf_env_prefix,
        "check": namespace.check,
        "log_level": namespace.log_level,
        "dev_mode": namespace.dev_mode,
    }
    for name, value in provided.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        source[f"{ENV_PREFIX}_{name.upper()}"] = value
    return environ.to_config(ResolveConfig, environ=source)


def create_resolve_config(
    args: list[str] | None = None, environ_vars: Mapping[str, str] | None = None
) -> ResolveConfig:
    """Create a ResolveConfig from command line arguments and environment variables.

    Args:
        args: Command line arguments following the command name.
        environ_vars: Environment mapping. Defaults to os.environ.

    Returns:
        ResolveConfig instance populated from args and environment variables.
    """
    return config_from_namespace(parse_resolve_args(args), environ_vars)
