"""Async HTTP client for the Vita Wallet business API."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from gateway.client.errors import VitaAPIError
from gateway.metrics.collector import metrics
from gateway.security.headers import RequestAuthenticator
from gateway.security.signable import Endpoint, HttpMethod, resolve_signable_body
from gateway.security.signing import SignableBody

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class VitaClient:
    """Signs and sends requests to the provider.

    The body passed for a POST is both the JSON that is transmitted and the
    payload that is signed, unless ``signable_body`` overrides the latter.
    """

    def __init__(
        self,
        base_url: str,
        authenticator: RequestAuthenticator,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/"
        self._authenticator = authenticator
        self._client = httpx.AsyncClient(timeout=timeout)

    def url_for(self, endpoint: Endpoint, params: Mapping[str, Any] | None = None) -> str:
        return f"{self._base_url}{endpoint.render(params)}"

    async def request(
        self,
        endpoint: Endpoint,
        params: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        body: SignableBody | None = None,
        signable_body: SignableBody | None = None,
    ) -> Any:
        url = self.url_for(endpoint, params)
        query_params = {key: value for key, value in (query or {}).items() if value is not None}
        signable = resolve_signable_body(
            endpoint,
            params,
            query_params,
            body=body,
            override=signable_body,
        )
        headers = self._authenticator.create_headers(signable)
        send_body = endpoint.method is HttpMethod.POST and bool(body)

        logger.info(
            "vita request %s %s signed_keys=%s",
            endpoint.method.value,
            url,
            sorted(signable) if signable else [],
        )
        metrics.signed_requests.labels(endpoint=endpoint.name).inc()
        try:
            response = await self._client.request(
                endpoint.method.value,
                url,
                params=query_params or None,
                json=body if send_body else None,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            metrics.provider_failures.labels(status="transport").inc()
            raise VitaAPIError(f"connection error with Vita Wallet ({url}): {exc}") from exc

        payload = None
        if response.content:
            try:
                payload = response.json()
            except ValueError as exc:
                metrics.provider_failures.labels(status=str(response.status_code)).inc()
                raise VitaAPIError(
                    f"invalid response from Vita Wallet ({url}): {response.text}",
                    status_code=502,
                ) from exc

        logger.info("vita response %s %s status=%s", endpoint.method.value, url, response.status_code)
        if response.is_error:
            metrics.provider_failures.labels(status=str(response.status_code)).inc()
            raise VitaAPIError.from_response(response.status_code, response.reason_phrase, payload)
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()
