"""Generic OAuth flow: POST to an action URL that returns a token."""

import logging
from collections.abc import Mapping
from typing import Any

from adobeio.e2e_runner.providers.base import CredentialProvider, parse_token_response

logger = logging.getLogger(__name__)


class ActionUrlProvider(CredentialProvider):
    """Fetch an access token from a caller-supplied action URL."""

    def __init__(self, action_url: str) -> None:
        """Initialize provider with the action URL."""
        self.action_url = action_url

    async def exchange(self) -> Mapping[str, Any]:
        """POST with no body and return the token response."""
        logger.info("Requesting oauth token from action URL")
        status, text = await self._post(self.action_url)
        return parse_token_response(status, text, "fetching oauth token")

    async def fetch_token(self) -> Mapping[str, Any]:
        """Run the action URL exchange."""
        return await self.exchange()
