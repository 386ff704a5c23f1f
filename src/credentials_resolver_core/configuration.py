"""Key/value configuration store handed to credentials providers.

This module provides the Configuration class. The resolver treats it as an
opaque value and only forwards it to providers whose constructor takes a
single Configuration argument.
"""

import os
from collections.abc import Iterator, Mapping

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


class Configuration(Mapping[str, str]):
    """String-keyed, string-valued settings store."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        """Initialize the configuration.

        Args:
            values: Optional initial key/value pairs. The mapping is copied.
        """
        self._values: dict[str, str] = {
            str(key): str(value) for key, value in (values or {}).items()
        }

    @classmethod
    def from_env(
        cls, prefix: str, environ: Mapping[str, str] | None = None
    ) -> "Configuration":
        """Build a configuration from prefixed environment variables.

        ``{prefix}_FS_S3A_ACCESS_KEY`` becomes the key ``fs.s3a.access.key``.

        Args:
            prefix: Environment variable prefix, without the trailing underscore.
            environ: Environment mapping to read. Defaults to os.environ.

        Returns:
            Configuration holding every matching variable.
        """
        source = os.environ if environ is None else environ
        marker = f"{prefix.rstrip('_')}_"
        values = {
            name[len(marker) :].lower().replace("_", "."): value
            for name, value in source.items()
            if name.startswith(marker) and len(name) > len(marker)
        }
        return cls(values)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Configuration(keys={sorted(self._values)!r})"

    def set(self, key: str, value: str) -> None:
        """Set a configuration value."""
        self._values[key] = str(value)

    def unset(self, key: str) -> None:
        """Remove a key if present."""
        self._values.pop(key, None)

    def get_int(self, key: str, default: int) -> int:
        """Get integer value, falling back to default when missing or invalid."""
        try:
            return int(self._values[key])
        except (KeyError, ValueError):
            return default

    def get_bool(self, key: str, *, default: bool) -> bool:
        """Get boolean value, falling back to default when missing or invalid."""
        value = self._values.get(key)
        if value is None:
            return default
        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        return default

    def copy(self) -> "Configuration":
        """Return an independent copy of this configuration."""
        return Configuration(self._values)
