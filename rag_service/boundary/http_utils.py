"""
Shared HTTP helpers for provider backends.

Wraps httpx calls so every transport, status and decoding failure is
reported as the caller's UpstreamError subclass with the cause attached.

Dependencies: httpx
System role: Outbound HTTP plumbing for embedding and generation clients
"""

import logging
from typing import Any

import httpx

from rag_service.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

ERROR_BODY_PREVIEW = 500


def bearer_headers(api_key: str | None) -> dict[str, str]:
    """JSON content headers plus bearer auth when a key is given."""
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


def upstream_error_message(payload: Any) -> str | None:
    """
    Extract an error message from a provider JSON body.

    Handles both {"error": {"message": ...}} and {"error": "..."} shapes.

    Returns:
        str | None: Error text, or None when the body reports no error
    """
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not error:
        return None
    if isinstance(error, dict):
        message = error.get("message") or "unknown error"
        code = error.get("code")
        return f"{message} (code: {code})" if code else str(message)
    return str(error)


def raise_for_upstream_status(
    response: httpx.Response,
    error_cls: type[UpstreamError],
    provider: str,
    body: str | None = None,
) -> None:
    """
    Raise error_cls when the response status is not 2xx.

    Args:
        response: httpx response
        error_cls: UpstreamError subclass to raise
        provider: Provider name for error context
        body: Already-read body text (read from response when None)
    """
    if response.is_success:
        return
    text = body if body is not None else response.text
    logger.warning(
        f"{__name__}:raise_for_upstream_status - {provider} returned {response.status_code}",
        extra={"provider": provider, "status_code": response.status_code},
    )
    raise error_cls(
        f"{provider} API returned status {response.status_code}: {text[:ERROR_BODY_PREVIEW]}",
        provider=provider,
        upstream_status=response.status_code,
    )


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    payload: dict[str, Any],
    headers: dict[str, str],
    error_cls: type[UpstreamError],
    provider: str,
    timeout: float | None = None,
) -> Any:
    """
    POST a JSON payload and decode the JSON response.

    Args:
        client: Shared async HTTP client
        url: Endpoint URL
        payload: Request body
        headers: Request headers
        error_cls: UpstreamError subclass raised on any failure
        provider: Provider name for error context
        timeout: Request timeout in seconds (client default when None)

    Returns:
        Any: Decoded JSON body

    Raises:
        UpstreamError: error_cls for transport errors, non-2xx status or invalid JSON
    """
    request_kwargs: dict[str, Any] = {"json": payload, "headers": headers}
    if timeout is not None:
        request_kwargs["timeout"] = timeout

    try:
        response = await client.post(url, **request_kwargs)
    except httpx.HTTPError as e:
        raise error_cls(
            f"failed to execute request to {provider}: {e}",
            provider=provider,
        ) from e

    raise_for_upstream_status(response, error_cls, provider)

    try:
        body = response.json()
    except ValueError as e:
        raise error_cls(
            f"failed to decode {provider} response: {e}",
            provider=provider,
            upstream_status=response.status_code,
        ) from e

    message = upstream_error_message(body)
    if message:
        raise error_cls(
            f"{provider} API error: {message}",
            provider=provider,
            upstream_status=response.status_code,
        )
    return body
