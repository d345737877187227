"""
JournalFit Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Provider SDKs raise errors in three incompatible shapes. Custom
       exceptions give the rest of the application one vocabulary, and the
       global handlers in main.py one place to turn them into HTTP responses.
How:   Each exception class carries a message and optional context dict.
Who:   Raised by services; caught by the orchestrator and global handlers.

Exception Hierarchy:
    JournalFitError (base)
    ├── ProviderError          → raised by a provider service on infrastructure
    │                            failure; never reaches the client directly
    └── ProviderRequestError   → status from classification (the error envelope)

Two failure classes exist and only one of them is an exception:
    - Model-quality failures (empty / unparseable / schema-invalid output) are
      recovered inside the provider service and never raised.
    - Infrastructure failures (network, auth, rate limit, upstream 5xx) raise
      ProviderError, which DocumentService converts into ProviderRequestError.
"""

from typing import Any, Dict, Optional


class JournalFitError(Exception):
    """
    Base exception for all JournalFit application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ProviderError(JournalFitError):
    """
    Raised by a provider service when the upstream call itself failed.

    What:    Network error, non-2xx response or SDK-level exception.
    When:    Never for malformed model output (that degrades to a default value).

    Attributes:
        provider: Provider tag that raised ("openai", "claude", "gemini").
        status:   HTTP status reported by the SDK, when it reported one.
        error:    The provider's structured error body, when it sent one.
                  Kept as-is so the classifier can prefer its nested message.
    """

    def __init__(
        self,
        provider: str,
        message: str = "Provider request failed",
        status: Optional[int] = None,
        error: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["provider"] = provider
        if status is not None:
            ctx["status"] = status
        super().__init__(message=message, context=ctx)
        self.provider = provider
        self.status = status
        self.error = error


class ProviderRequestError(JournalFitError):
    """
    The uniform error envelope every provider failure is coerced into.

    HTTP:    `status` (4xx/5xx chosen by services.error_classifier)
    Body:    {"message": ..., "provider": ...}
    """

    def __init__(
        self,
        status: int,
        message: str,
        provider: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["provider"] = provider
        ctx["status"] = status
        super().__init__(message=message, context=ctx)
        self.status = status
        self.provider = provider

    def to_envelope(self) -> Dict[str, Any]:
        return {"status": self.status, "message": self.message, "provider": self.provider}
