"""Abstract base class for IMS credential providers."""

import asyncio
import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import aiohttp

from adobeio.e2e_runner.errors import ConfigurationError, RemoteError, TransportError
from adobeio.e2e_runner.models.credentials import IMS_BASE_URLS


def resolve_ims_base(ims_env: str) -> str:
    """Map an IMS environment selector to its base URL.

    Raises:
        ConfigurationError: If the selector is not one of the known environments

    """
    try:
        return IMS_BASE_URLS[ims_env]
    except KeyError:
        raise ConfigurationError(
            f"Unknown IMS environment: {ims_env}. "
            f"Must be one of: {', '.join(IMS_BASE_URLS)}"
        ) from None


def parse_token_response(status: int, text: str, operation: str) -> dict[str, Any]:
    """Parse a token endpoint response that must carry ``access_token``.

    Args:
        status: HTTP status of the response
        text: Raw response body
        operation: Short description used in the unknown-error message

    Returns:
        Parsed JSON response

    Raises:
        RemoteError: If the body is not JSON or has no access token

    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RemoteError(
            f"Invalid JSON response {operation}: {status} {text}", status, text
        ) from e

    if isinstance(data, dict) and data.get("access_token"):
        return data

    error = data.get("error") if isinstance(data, dict) else None
    description = data.get("error_description") if isinstance(data, dict) else None
    if error and description:
        raise RemoteError(f"{error}: {description}", status, text)

    raise RemoteError(
        f"An unknown error occurred {operation}. "
        f"The response is as follows: {json.dumps(data)}",
        status,
        text,
    )


class CredentialProvider(ABC):
    """Abstract base for flows that produce an IMS access token."""

    @abstractmethod
    async def fetch_token(self) -> Mapping[str, Any]:
        """Run the flow once and return the token endpoint's JSON response.

        The response contains at least an ``access_token`` field.
        """

    async def _post(
        self, url: str, data: Mapping[str, str] | None = None
    ) -> tuple[int, str]:
        """POST a form-encoded body and return status and raw response text.

        Raises:
            TransportError: If the request could not be sent or completed

        """
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(url, data=data) as response:
                    text = await response.text()
                    return response.status, text
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Request to {url} failed: {e}") from e
