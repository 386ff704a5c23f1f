"""AWS Secrets Manager credentials provider.

This module provides the AWSSecretsCredentialsProvider class for retrieving
access keys stored as a JSON secret in AWS Secrets Manager.

Environment Variables:
    CREDENTIALS_RESOLVER_AWS_SECRET_ID: Secret holding the access keys. Default: "credentials-resolver"
    AWS_REGION: Region for Secrets Manager. Default: "eu-west-2"
    CREDENTIALS_RESOLVER_AWS_ENDPOINT_URL: Endpoint URL for LocalStack testing. Default: None
    CREDENTIALS_RESOLVER_AWS_PROFILE: AWS profile override (falls back to AWS_PROFILE).
"""

import json
import os

import boto3
from botocore.exceptions import ClientError

from .base import Credentials

DEFAULT_SECRET_ID = "credentials-resolver"  # noqa: S105
DEFAULT_REGION = "eu-west-2"


class AWSSecretsCredentialsProvider:
    """Credentials provider that fetches access keys from AWS Secrets Manager.

    The secret must be a JSON object with ``access_key_id`` and
    ``secret_access_key`` keys, and optionally ``session_token``.
    """

    def __init__(
        self,
        secret_id: str,
        region: str | None = None,
        endpoint_url: str | None = None,
        profile_name: str | None = None,
    ) -> None:
        """Initialize the AWS Secrets credentials provider.

        Args:
            secret_id: Name or ARN of the secret holding the access keys.
            region: AWS region to use for Secrets Manager. Defaults to AWS_REGION env var or eu-west-2.
            endpoint_url: Optional custom endpoint URL for testing or local development.
            profile_name: Optional AWS profile used to create the boto3 session.
        """
        if region is None:
            region = os.getenv("AWS_REGION", DEFAULT_REGION)
        self.secret_id = secret_id
        self.region = region
        self.endpoint_url = endpoint_url
        self.profile_name = profile_name
        self._cached: Credentials | None = None

    @staticmethod
    def builder() -> "AWSSecretsCredentialsProviderBuilder":
        """Start building a provider, pre-filled from environment defaults."""
        return AWSSecretsCredentialsProviderBuilder()

    @classmethod
    def create(cls) -> "AWSSecretsCredentialsProvider":
        """Create a provider from environment defaults."""
        return cls.builder().build()

    def resolve_credentials(self) -> Credentials:
        """Get credentials from AWS Secrets Manager.

        Raises:
            ValueError: When the secret cannot be read or is malformed.
        """
        if self._cached is not None:
            return self._cached

        if self.profile_name:
            session = boto3.session.Session(profile_name=self.profile_name)
        else:
            session = boto3.session.Session()
        client_kwargs = {"service_name": "secretsmanager", "region_name": self.region}
        if self.endpoint_url:
            client_kwargs["endpoint_url"] = self.endpoint_url
        client = session.client(**client_kwargs)  # type: ignore[call-overload]

        try:
            response = client.get_secret_value(SecretId=self.secret_id)
        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            if error_code == "ResourceNotFoundException":
                raise ValueError(  # noqa: TRY003
                    f"Secret '{self.secret_id}' not found"
                ) from e
            if error_code == "AccessDeniedException":
                raise ValueError(  # noqa: TRY003
                    f"Access denied to secret '{self.secret_id}'"
                ) from e
            raise ValueError(f"AWS Secrets Manager error: {e}") from e  # noqa: TRY003

        try:
            secret_data = json.loads(response["SecretString"])
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise ValueError(  # noqa: TRY003
                f"Secret '{self.secret_id}' not valid JSON"
            ) from e

        if not isinstance(secret_data, dict):
            raise ValueError(  # noqa: TRY003
                f"Secret '{self.secret_id}' is not a JSON object"
            )

        missing = [
            key
            for key in ("access_key_id", "secret_access_key")
            if not isinstance(secret_data.get(key), str)
        ]
        if missing:
            raise ValueError(  # noqa: TRY003
                f"Key(s) {', '.join(missing)} not found in secret '{self.secret_id}'"
            )

        self._cached = Credentials(
            access_key_id=secret_data["access_key_id"],
            secret_access_key=secret_data["secret_access_key"],
            session_token=secret_data.get("session_token"),
        )
        return self._cached

    def clear(self) -> None:
        """Clear the cached credentials."""
        self._cached = None


class AWSSecretsCredentialsProviderBuilder:
    """Fluent builder for AWSSecretsCredentialsProvider."""

    def __init__(self) -> None:
        self._secret_id = os.getenv(
            "CREDENTIALS_RESOLVER_AWS_SECRET_ID", DEFAULT_SECRET_ID
        )
        self._region: str | None = None
        self._endpoint_url = os.getenv("CREDENTIALS_RESOLVER_AWS_ENDPOINT_URL")
        self._profile_name = os.getenv(
            "CREDENTIALS_RESOLVER_AWS_PROFILE", os.getenv("AWS_PROFILE")
        )

    def secret_id(self, secret_id: str) -> "AWSSecretsCredentialsProviderBuilder":
        """Set the secret holding the access keys."""
        self._secret_id = secret_id
        return self

    def region(self, region: str) -> "AWSSecretsCredentialsProviderBuilder":
        """Set the Secrets Manager region."""
        self._region = region
        return self

    def endpoint_url(self, endpoint_url: str) -> "AWSSecretsCredentialsProviderBuilder":
        """Set a custom endpoint URL, e.g. for LocalStack."""
        self._endpoint_url = endpoint_url
        return self

    def profile_name(self, profile_name: str) -> "AWSSecretsCredentialsProviderBuilder":
        """Set the AWS profile used for the session."""
        self._profile_name = profile_name
        return self

    def build(self) -> AWSSecretsCredentialsProvider:
        """Build the provider."""
        return AWSSecretsCredentialsProvider(
            secret_id=self._secret_id,
            region=self._region,
            endpoint_url=self._endpoint_url,
            profile_name=self._profile_name,
        )
