"""Credentials provider factory functions.

This module picks the provider class name from arguments, configuration or
environment, and resolves it into a provider instance.

Environment Variables:
    CREDENTIALS_RESOLVER_PROVIDER_CLASS: Provider class used when neither an explicit
        class name nor the configuration key is set.
        Default: "credentials_resolver_core.credentials.boto.BotoSessionCredentialsProvider"
"""

import os

from .configuration import Configuration
from .credentials.base import CredentialsProvider
from .resolver import resolve_credentials_provider

PROVIDER_CLASS_KEY = "io.delta.storage.credentials.provider"
PROVIDER_CLASS_ENV_VAR = "CREDENTIALS_RESOLVER_PROVIDER_CLASS"
DEFAULT_PROVIDER_CLASS = (
    "credentials_resolver_core.credentials.boto.BotoSessionCredentialsProvider"
)


def get_provider_class_name(
    configuration: Configuration, class_name: str | None = None
) -> str:
    """Get provider class name with precedence: argument > configuration > env > default."""
    return (
        class_name
        or configuration.get(PROVIDER_CLASS_KEY)
        or os.getenv(PROVIDER_CLASS_ENV_VAR)
        or DEFAULT_PROVIDER_CLASS
    )


def create_credentials_provider(
    configuration: Configuration | None = None,
    class_name: str | None = None,
) -> CredentialsProvider:
    """Create a credentials provider instance.

    Args:
        configuration: Configuration to read the provider class from and to pass
                       to configuration-aware providers. Defaults to empty.
        class_name: Provider class name. Overrides the configuration key.

    Returns:
        Configured credentials provider instance.
    """
    if configuration is None:
        configuration = Configuration()
    return resolve_credentials_provider(
        get_provider_class_name(configuration, class_name), configuration
    )
