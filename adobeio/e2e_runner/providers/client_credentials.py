"""OAuth2 client-credentials (service-to-service) flow against IMS."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from adobeio.e2e_runner.errors import RemoteError
from adobeio.e2e_runner.models.credentials import ClientCredentialsConfig
from adobeio.e2e_runner.providers.base import CredentialProvider, resolve_ims_base

logger = logging.getLogger(__name__)


class ClientCredentialsProvider(CredentialProvider):
    """Fetch an access token with the client-credentials grant."""

    def __init__(self, config: ClientCredentialsConfig) -> None:
        """Initialize provider with configuration."""
        self.config = config

    async def fetch_token(self) -> Mapping[str, Any]:
        """Request a token from ``{ims}/ims/token/v2``."""
        base_url = resolve_ims_base(self.config.ims_env)
        url = f"{base_url}/ims/token/v2"
        data = {
            "grant_type": "client_credentials",
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "org_id": self.config.org_id,
            "scope": self.config.scopes,
        }

        logger.info(f"Requesting client credentials token from {url}")
        status, text = await self._post(url, data)

        if not 200 <= status < 300:
            raise RemoteError(
                f"Failed to fetch client credentials token: {status} {text}",
                status,
                text,
            )

        try:
            response_data: dict[str, Any] = json.loads(text)
        except json.JSONDecodeError as e:
            raise RemoteError(
                f"Invalid JSON in token response: {status} {text}", status, text
            ) from e

        return response_data
