"""Configuration-backed credentials provider."""

from credentials_resolver_core.configuration import Configuration

from .base import Credentials

ACCESS_KEY_KEY = "fs.s3a.access.key"
SECRET_KEY_KEY = "fs.s3a.secret.key"  # noqa: S105
SESSION_TOKEN_KEY = "fs.s3a.session.token"  # noqa: S105


class ConfigurationCredentialsProvider:
    """Credentials provider that reads access keys from a Configuration."""

    def __init__(self, configuration: Configuration) -> None:
        """Initialize the provider with the configuration holding the keys."""
        self.configuration = configuration

    def resolve_credentials(self) -> Credentials:
        """Read the fs.s3a.* keys from the configuration.

        Raises:
            ValueError: When the access key or secret key is not configured.
        """
        missing = [
            key
            for key in (ACCESS_KEY_KEY, SECRET_KEY_KEY)
            if not self.configuration.get(key)
        ]
        if missing:
            raise ValueError(  # noqa: TRY003
                f"Missing configuration keys: {', '.join(missing)}"
            )
        return Credentials(
            access_key_id=self.configuration[ACCESS_KEY_KEY],
            secret_access_key=self.configuration[SECRET_KEY_KEY],
            session_token=self.configuration.get(SESSION_TOKEN_KEY),
        )
