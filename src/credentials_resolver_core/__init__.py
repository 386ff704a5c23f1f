"""Resolve credentials providers from a class name and a configuration.

The resolver imports a provider class by name and builds it with the first
construction protocol it supports: a constructor taking a Configuration, a
``builder().build()`` pair, or a ``create()`` factory.
"""

from .configuration import Configuration
from .credentials import Credentials, CredentialsProvider
from .exceptions import (
    CredentialsResolverError,
    InvocationFailureError,
    NoMatchingConstructionStrategyError,
    ProviderContractError,
    TypeNotFoundError,
)
from .factory import create_credentials_provider
from .resolver import (
    ResolvedProvider,
    load_provider_class,
    resolve_credentials_provider,
    resolve_with_strategy,
)

__all__ = [
    "Configuration",
    "Credentials",
    "CredentialsProvider",
    "CredentialsResolverError",
    "InvocationFailureError",
    "NoMatchingConstructionStrategyError",
    "ProviderContractError",
    "ResolvedProvider",
    "TypeNotFoundError",
    "create_credentials_provider",
    "load_provider_class",
    "resolve_credentials_provider",
    "resolve_with_strategy",
]
