"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Shared HTTP plumbing for provider clients.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any

import httpx

from ..config import get_config
from ..errors import (
    APIError,
    AuthenticationError,
    UnsupportedCapabilityError,
    classify_http_error,
    error_from_response,
)
from ..models import model_supports_capability
from ..settings import ClientSettings
from ..utils import drop_none
from .shared import collect_headers, join_url

logger = logging.getLogger("ai_integrations.http")

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class BaseClient:
    """
    Base class for HTTP-backed provider clients.

    Owns one `httpx.AsyncClient` unless the caller injects `http_client`, in
    which case closing the provider client leaves the injected one open.
    """

    provider: str = "openai"
    default_base_url: str = DEFAULT_BASE_URL

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        organization: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_s: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        base = settings if settings is not None else ClientSettings.from_env(self.provider)
        self.settings = base.with_overrides(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            headers=dict(headers) if headers is not None else None,
            timeout_s=timeout_s,
        )
        self._http = http_client
        self._owns_http = http_client is None

    @property
    def base_url(self) -> str:
        return self.settings.base_url or self.default_base_url

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.settings.timeout_s)
            self._owns_http = True
        return self._http

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
        self._http = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _validate_api_key(self) -> str:
        api_key = self.settings.api_key
        if not api_key:
            raise AuthenticationError(
                f"{self.provider} API key is not configured",
                provider=self.provider,
            )
        return api_key

    def _ensure_capability(self, model: str, capability: str) -> None:
        if not model_supports_capability(model, capability):
            raise UnsupportedCapabilityError(capability, model, self.provider)

    def _headers(
        self,
        extra: Mapping[str, str] | None = None,
        *,
        beta: tuple[str, ...] = (),
    ) -> dict[str, str]:
        return collect_headers(
            get_config().headers,
            self.settings.headers,
            extra,
            api_key=self._validate_api_key(),
            organization=self.settings.organization,
            beta=(*self.settings.beta, *beta),
        )

    async def _request_json(
        self,
        method: str,
        endpoint: str,
        *,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        beta: tuple[str, ...] = (),
    ) -> Any:
        """Send one request and return its decoded JSON body."""
        url = join_url(self.base_url, endpoint)
        request_headers = self._headers(headers, beta=beta)
        body = drop_none(json) if json is not None else None
        logger.debug("%s %s", method, url)
        try:
            response = await self._client().request(
                method,
                url,
                json=body,
                params=drop_none(params) if params is not None else None,
                headers=request_headers,
            )
        except httpx.HTTPError as error:
            raise classify_http_error(error, provider=self.provider) from error

        if response.is_error:
            raise error_from_response(response, provider=self.provider)
        logger.debug("%s %s -> %d", method, url, response.status_code)
        try:
            return response.json()
        except ValueError as error:
            raise APIError(
                f"Invalid JSON in {method} {endpoint} response",
                provider=self.provider,
                status=response.status_code,
            ) from error

    async def _stream_lines(
        self,
        endpoint: str,
        *,
        json: Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
    ) -> AsyncIterator[str]:
        """POST `json` and yield the response body line by line."""
        url = join_url(self.base_url, endpoint)
        request_headers = self._headers(
            {"Accept": "text/event-stream", **(headers or {})}
        )
        logger.debug("POST %s (stream)", url)
        try:
            async with self._client().stream(
                "POST", url, json=drop_none(json), headers=request_headers
            ) as response:
                if response.is_error:
                    await response.aread()
                    raise error_from_response(response, provider=self.provider)
                async for line in response.aiter_lines():
                    yield line
        except httpx.HTTPError as error:
            raise classify_http_error(error, provider=self.provider) from error
