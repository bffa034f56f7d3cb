"""Application exception classes."""


class ConfigError(Exception):
    """Raised when settings are invalid or incomplete."""


class ProviderError(Exception):
    """Raised when a weather provider cannot produce a report."""


class AuthenticationFailedError(ProviderError):
    """Raised when the backend rejects the stored credential."""

    def __init__(
        self,
        message: str = "Authentication failed; reconfigure the provider with a valid API key.",
    ) -> None:
        super().__init__(message)


class ApiRejectedError(ProviderError):
    """Raised when the backend explicitly rejects the request."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProviderFailureError(ProviderError):
    """Raised for network, parsing, or unexpected-status failures."""


class UnknownProviderError(Exception):
    """Raised when a provider name is not in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No such provider: {name}")
        self.name = name


class NotConfiguredError(Exception):
    """Raised when a weather query needs a default provider and none exists."""


class DecodeError(Exception):
    """Raised when a persisted provider record or config document is unreadable."""


class UnknownTagError(DecodeError):
    """Raised when a record's provider tag matches no registered provider type."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Unknown provider tag: {tag!r}")
        self.tag = tag


class MalformedDataError(DecodeError):
    """Raised when a record's shape or fields do not parse."""


class ConfigStoreError(Exception):
    """Raised when writing the provider config file fails."""
