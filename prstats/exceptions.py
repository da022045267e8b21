"""
Custom exceptions for the pull request statistics report.

Every error the report can raise on purpose derives from PRStatsError so the
command line entry point can turn them into a message and a non-zero exit
status instead of a traceback.
"""


class PRStatsError(Exception):
    """Base exception for all prstats errors."""

    pass


class ConfigError(PRStatsError):
    """Raised when command line or environment configuration is invalid."""

    def __init__(self, message: str, option: str = None):
        self.option = option
        super().__init__(message)


class ProviderError(PRStatsError):
    """Raised when a provider (e.g., GitHub API) operation fails."""

    def __init__(self, message: str, provider: str = None, status_code: int = None):
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)


class NetworkError(ProviderError):
    """Raised when the API is unreachable or answers with a failure."""

    pass


class AuthError(ProviderError):
    """Raised when the API rejects the credentials (or requires some)."""

    pass


class EmptyDatasetError(PRStatsError):
    """Raised when there are no pull requests to compute statistics over."""

    pass


class MalformedDataError(PRStatsError):
    """Raised when a pull request payload lacks a required field."""

    def __init__(self, message: str, field: str = None, value=None):
        self.field = field
        self.value = value
        super().__init__(message)


class ResponseFileError(PRStatsError):
    """Raised when a saved API response file is missing or invalid."""

    def __init__(self, message: str, path: str = None):
        self.path = path
        super().__init__(message)
