"""
JournalFit Backend — Provider Error Classification
====================================================

What:  Turns a caught provider failure of unknown shape into (status, message).
Why:   OpenAI, Anthropic and Google each describe failures differently:
         - openai / anthropic APIStatusError: .status_code, .message, .body
         - google.api_core GoogleAPICallError: .code, .message
         - our own ProviderError: .status, .message, .error (raw body)
         - a plain dict from a stub or a re-raised JSON payload
       The client must see one contract regardless of which one failed.
How:   Two prioritized lists of small extractors. Each extractor probes one
       known field path and returns None when the path is absent, so adding a
       new error shape means adding one entry, not another nested cast.

Classification (first match wins):
    1. An explicit integer status in [400, 599] is used verbatim.
    2. The message is the most specific one available:
       error.message > error.error.message > body.error.message
       > body.message > message > str(exception) > "Provider request failed: {provider}".
    3. Without an explicit status, the status is inferred from the message:
       "overloaded" / "503" / "UNAVAILABLE"  → 503
       "401" / "unauthorized" (any case)     → 401
       "429" / "rate limit"                  → 429
       "400"                                 → 400
       anything else                         → 500
"""

from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Tuple

_MISSING = object()


def _field(obj: Any, name: str) -> Any:
    """Read `name` from a mapping key or an attribute, whichever exists."""
    if obj is None:
        return _MISSING
    if isinstance(obj, Mapping):
        return obj.get(name, _MISSING)
    return getattr(obj, name, _MISSING)


def _path(obj: Any, *names: str) -> Any:
    for name in names:
        obj = _field(obj, name)
        if obj is _MISSING:
            return _MISSING
    return obj


# ── Status extractors ─────────────────────────────────────────────────────


def _status_at(*names: str) -> Callable[[Any], Optional[int]]:
    def extract(error: Any) -> Optional[int]:
        value = _path(error, *names)
        # bool is an int subclass; a True "status" is not an HTTP code
        if isinstance(value, int) and not isinstance(value, bool) and 400 <= value <= 599:
            return value
        return None

    return extract


STATUS_EXTRACTORS: List[Callable[[Any], Optional[int]]] = [
    _status_at("status"),          # ProviderError, plain dicts
    _status_at("status_code"),     # openai / anthropic APIStatusError
    _status_at("code"),            # google.api_core GoogleAPICallError
]


# ── Message extractors ────────────────────────────────────────────────────


def _message_at(*names: str) -> Callable[[Any], Optional[str]]:
    def extract(error: Any) -> Optional[str]:
        value = _path(error, *names)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    return extract


def _exception_text(error: Any) -> Optional[str]:
    if isinstance(error, BaseException):
        text = str(error).strip()
        return text or None
    return None


MESSAGE_EXTRACTORS: List[Callable[[Any], Optional[str]]] = [
    _message_at("error", "message"),
    _message_at("error", "error", "message"),
    _message_at("body", "error", "message"),   # SDK error bodies
    _message_at("body", "message"),
    _message_at("message"),
    _exception_text,
]


def extract_status(error: Any) -> Optional[int]:
    """Explicit HTTP status carried by `error`, or None."""
    for extractor in STATUS_EXTRACTORS:
        status = extractor(error)
        if status is not None:
            return status
    return None


def extract_message(error: Any) -> Optional[str]:
    """Most specific message carried by `error`, or None."""
    for extractor in MESSAGE_EXTRACTORS:
        message = extractor(error)
        if message is not None:
            return message
    return None


def infer_status(message: str) -> int:
    """Guess an HTTP status from the text of an error message."""
    lowered = message.lower()
    if "overloaded" in message or "503" in message or "UNAVAILABLE" in message:
        return 503
    if "401" in message or "unauthorized" in lowered:
        return 401
    if "429" in message or "rate limit" in message:
        return 429
    if "400" in message:
        return 400
    return 500


def classify_provider_error(error: Any, provider: str) -> Tuple[int, str]:
    """
    Classify a provider failure into an HTTP-style (status, message).

    Args:
        error:    Anything that was raised or reported: exception, dict, object.
        provider: Provider tag, used in the generic fallback message.

    Returns:
        (status, message), status always in [400, 599].
    """
    message = extract_message(error) or f"Provider request failed: {provider}"
    status = extract_status(error)
    if status is None:
        status = infer_status(message)
    return status, message
