"""PyTest configuration and shared test fixtures.

Environment variables read by the resolver, the bundled providers and the
CLI are removed for every test so a developer's shell cannot leak in.
"""

import os

import pytest

_ISOLATED_PREFIXES = ("CREDENTIALS_RESOLVER_",)
_ISOLATED_VARS = (
    "AWS_PROFILE",
    "AWS_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove resolver and AWS variables from the environment."""
    for name in list(os.environ):
        if name.startswith(_ISOLATED_PREFIXES) or name in _ISOLATED_VARS:
            monkeypatch.delenv(name, raising=False)
