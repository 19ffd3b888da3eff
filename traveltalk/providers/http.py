"""Shared httpx plumbing for provider adapters."""

from typing import Any, Optional

import httpx

from traveltalk.logger import get_logger
from traveltalk.translation.exceptions import ProviderRejectedError, ProviderUnreachableError
from traveltalk.translation.models import ProviderKind, RejectReason

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (applied to every phase) or a dict
            with connect, write, read, pool keys

    Returns:
        httpx.Timeout object
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', DEFAULT_TIMEOUT),
            write=timeout_config.get('write', DEFAULT_TIMEOUT),
            read=timeout_config.get('read', DEFAULT_TIMEOUT),
            pool=timeout_config.get('pool', DEFAULT_TIMEOUT),
        )
    timeout_value = float(timeout_config) if timeout_config else DEFAULT_TIMEOUT
    return httpx.Timeout(timeout_value)


def describe_http_error(e: httpx.HTTPStatusError, provider: ProviderKind) -> str:
    """Build a readable message from an HTTP error response."""
    status_code = e.response.status_code
    error_text = "Unknown error"

    try:
        error_json = e.response.json()
        if isinstance(error_json, dict) and "error" in error_json:
            error_detail = error_json["error"]
            if isinstance(error_detail, dict):
                error_text = error_detail.get("message", str(error_detail))
            else:
                error_text = str(error_detail)
        elif isinstance(error_json, dict) and "responseDetails" in error_json:
            error_text = str(error_json["responseDetails"])
    except ValueError:
        error_text = e.response.text[:500] if e.response.text else "No details"

    return f"{provider.value} API error ({status_code}): {error_text}"


def request_json(
    provider: ProviderKind,
    method: str,
    url: str,
    timeout: Any = DEFAULT_TIMEOUT,
    transport: Optional[httpx.BaseTransport] = None,
    **kwargs,
) -> Any:
    """
    Perform one HTTP request and return the decoded JSON body.

    Raises:
        ProviderUnreachableError: connection failure, timeout or HTTP error status
        ProviderRejectedError: the body is not JSON
    """
    try:
        with httpx.Client(timeout=get_httpx_timeout(timeout), transport=transport) as client:
            response = client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
    except httpx.HTTPStatusError as e:
        message = describe_http_error(e, provider)
        logger.debug(message)
        raise ProviderUnreachableError(
            message, provider=provider, details={"status_code": e.response.status_code}
        )
    except httpx.TimeoutException:
        logger.debug(f"{provider.value} request timeout")
        raise ProviderUnreachableError(f"{provider.value} request timeout", provider=provider)
    except httpx.RequestError as e:
        logger.debug(f"{provider.value} request failed: {e}")
        raise ProviderUnreachableError(f"{provider.value} request failed: {e}", provider=provider)
    except ValueError as e:
        logger.debug(f"{provider.value} returned a non-JSON body: {e}")
        raise ProviderRejectedError(
            f"{provider.value} returned a non-JSON body",
            provider=provider,
            reason=RejectReason.PROVIDER_ERROR,
        )
