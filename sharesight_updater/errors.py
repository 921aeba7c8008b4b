"""Exception types raised by the price updater.

Every error carries the process exit code the command line front-end reports
for it, so commands can simply raise and let :func:`sharesight_updater.cli.app.main`
translate the failure.
"""

from __future__ import annotations


class SharesightError(RuntimeError):
    """Base class for all failures surfaced to the command line."""

    exit_code: int = 1


class UsageError(SharesightError):
    """Raised for malformed command arguments such as a bad date or price."""

    exit_code = 2


class ConfigurationError(SharesightError):
    """Raised when required configuration (e.g. credentials) is missing."""

    exit_code = 3


class AuthenticationError(SharesightError):
    """Raised when the OAuth2 token endpoint rejects the client credentials."""

    exit_code = 4

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvestmentNotFoundError(SharesightError):
    """Raised when no custom investment matches the requested code."""

    exit_code = 5

    def __init__(self, code: str) -> None:
        super().__init__(f"Can't find investment id for code {code!r}")
        self.code = code


class RemoteError(SharesightError):
    """Raised for transport failures and unexpected remote responses."""

    exit_code = 6
