"""Credentials value type, provider protocol and bundled providers."""

from .aws import AWSSecretsCredentialsProvider, AWSSecretsCredentialsProviderBuilder
from .base import Credentials, CredentialsProvider
from .boto import BotoSessionCredentialsProvider
from .conf import ConfigurationCredentialsProvider
from .environment import EnvironmentCredentialsProvider
from .static import StaticCredentialsProvider, StaticCredentialsProviderBuilder

__all__ = [
    "AWSSecretsCredentialsProvider",
    "AWSSecretsCredentialsProviderBuilder",
    "BotoSessionCredentialsProvider",
    "ConfigurationCredentialsProvider",
    "Credentials",
    "CredentialsProvider",
    "EnvironmentCredentialsProvider",
    "StaticCredentialsProvider",
    "StaticCredentialsProviderBuilder",
]
