"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error taxonomy shared by every client and runtime module.
"""

from __future__ import annotations

from typing import Any

import httpx


class AIIntegrationsError(Exception):
    """Base error for all ai-integrations failures."""

    default_status: int | None = None

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        status: int | None = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status = status if status is not None else self.default_status
        self.data = data


class AuthenticationError(AIIntegrationsError):
    """Raised when the API key is missing or rejected."""

    default_status = 401


class RateLimitError(AIIntegrationsError):
    """Raised when the provider throttles the request."""

    default_status = 429

    def __init__(
        self,
        message: str,
        *,
        retry_after: float | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class InvalidRequestError(AIIntegrationsError):
    """Raised for malformed requests, locally or by the provider."""

    default_status = 400


class APIError(AIIntegrationsError):
    """Raised for any other non-success provider response."""


class TransportError(AIIntegrationsError):
    """Raised when the connection fails or drops mid-response."""


class RequestTimeoutError(TransportError):
    """Raised when a single HTTP request exceeds its timeout."""


class StreamCancelledError(AIIntegrationsError):
    """Raised to a stream consumer after the stream was cancelled."""


class UnsupportedCapabilityError(AIIntegrationsError):
    """Raised when a model does not support the requested capability."""

    def __init__(
        self,
        capability: str,
        model_id: str,
        provider: str | None = None,
    ) -> None:
        super().__init__(
            f"Model {model_id} from {provider or 'unknown'} does not support "
            f"{capability} capability",
            provider=provider,
        )
        self.capability = capability
        self.model_id = model_id


class TimeoutExceededError(AIIntegrationsError):
    """
    Raised when a polled run is still pending after the configured timeout.

    This is a poller-level failure. Runs that end as ``failed``, ``cancelled``
    or ``expired`` are returned normally and never raise this error.
    """

    def __init__(
        self,
        timeout_s: float,
        *,
        thread_id: str | None = None,
        run_id: str | None = None,
        last_status: str | None = None,
    ) -> None:
        super().__init__(f"Thread run timed out after {timeout_s:g}s")
        self.timeout_s = timeout_s
        self.thread_id = thread_id
        self.run_id = run_id
        self.last_status = last_status


def _error_message(data: Any) -> str | None:
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and isinstance(err.get("message"), str):
            return err["message"]
        if isinstance(err, str):
            return err
    return None


def _retry_after(response: httpx.Response) -> float | None:
    value = response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def error_from_response(
    response: httpx.Response,
    *,
    provider: str | None = None,
    data: Any = None,
) -> AIIntegrationsError:
    """Map one non-success HTTP response into the error taxonomy."""
    status = response.status_code
    if data is None:
        try:
            data = response.json()
        except (ValueError, httpx.ResponseNotRead):
            data = None

    if status == 401:
        return AuthenticationError(
            "Invalid API key or unauthorized",
            provider=provider,
            status=status,
            data=data,
        )

    detail = _error_message(data)
    if detail is None:
        detail = str(data) if data is not None else response.reason_phrase
    message = f"API error {status}: {detail}"

    if status == 429:
        return RateLimitError(
            message,
            retry_after=_retry_after(response),
            provider=provider,
            status=status,
            data=data,
        )
    if status in (400, 404, 422):
        return InvalidRequestError(message, provider=provider, status=status, data=data)
    return APIError(message, provider=provider, status=status, data=data)


def classify_http_error(error: Exception, *, provider: str | None = None) -> AIIntegrationsError:
    """Classify arbitrary exceptions raised around an HTTP call."""
    if isinstance(error, AIIntegrationsError):
        return error
    if isinstance(error, httpx.HTTPStatusError):
        return error_from_response(error.response, provider=provider)
    if isinstance(error, httpx.TimeoutException):
        return RequestTimeoutError(f"Request timed out: {error}", provider=provider)
    if isinstance(error, httpx.TransportError):
        return TransportError(f"Network error: {error}", provider=provider)
    return AIIntegrationsError(f"Network error: {error}", provider=provider)
