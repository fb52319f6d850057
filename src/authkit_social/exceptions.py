"""Social login exceptions."""


class SocialAuthError(Exception):
    """Base exception for social login failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SocialProviderError(SocialAuthError):
    """Raised when a provider call fails or returns an unusable response."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
    ):
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider}: {message}")


class UnsupportedProviderError(SocialAuthError):
    """Raised when no strategy is registered for the requested provider."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"No strategy found for provider: {provider}")
