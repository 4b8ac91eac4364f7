"""JWT exchange flow: sign an assertion and swap it for an IMS token."""

import logging
import math
import time
from collections.abc import Mapping
from typing import Any

import jwt
from cryptography.hazmat.primitives import serialization

from adobeio.e2e_runner.errors import ConfigurationError
from adobeio.e2e_runner.models.credentials import JwtOptions
from adobeio.e2e_runner.providers.base import CredentialProvider, parse_token_response

logger = logging.getLogger(__name__)

JWT_EXPIRY_SECONDS = 1200

REQUIRED_FIELDS = (
    "client_id",
    "technical_account_id",
    "org_id",
    "client_secret",
    "private_key",
)


class JwtExchangeProvider(CredentialProvider):
    """Build a signed JWT assertion and exchange it for an access token."""

    def __init__(self, options: JwtOptions) -> None:
        """Initialize provider with JWT options."""
        self.options = options

    def _meta_scopes(self) -> list[str]:
        """Validate options and return meta scopes as a list.

        Raises:
            ConfigurationError: Naming every missing parameter

        """
        missing = [f for f in REQUIRED_FIELDS if not getattr(self.options, f)]

        scopes = self.options.meta_scopes
        if isinstance(scopes, str):
            scopes = scopes.split(",") if scopes else []
        if not scopes:
            missing.append("meta_scopes")

        if missing:
            raise ConfigurationError(
                f"Required parameter(s) {', '.join(missing)} are missing"
            )
        return scopes

    def create_claims(self, now: float) -> dict[str, Any]:
        """Build the JWT claim set for the given UNIX timestamp."""
        scopes = self._meta_scopes()
        ims = self.options.ims

        claims: dict[str, Any] = {
            "aud": f"{ims}/c/{self.options.client_id}",
            "exp": JWT_EXPIRY_SECONDS + math.floor(now),
        }
        for scope in scopes:
            if scope.startswith("https"):
                claims[scope] = True
            else:
                claims[f"{ims}/s/{scope}"] = True
        claims["iss"] = self.options.org_id
        claims["sub"] = self.options.technical_account_id
        return claims

    def build_assertion(self, now: float | None = None) -> str:
        """Sign the claim set with the private key (RS256).

        Args:
            now: UNIX timestamp used for the expiry claim, defaults to the
                current time

        Returns:
            Signed JWT assertion

        Raises:
            ConfigurationError: If parameters are missing or the key is invalid

        """
        claims = self.create_claims(time.time() if now is None else now)
        private_key = self._load_private_key()
        return jwt.encode(claims, private_key, algorithm="RS256")

    def _load_private_key(self) -> Any:
        """Load the PEM private key, decrypting it with the passphrase."""
        passphrase = self.options.passphrase
        password = passphrase.encode() if passphrase else None
        try:
            return serialization.load_pem_private_key(
                str(self.options.private_key).encode(), password=password
            )
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid private key: {e}") from e

    async def exchange(self, signed_assertion: str | None = None) -> Mapping[str, Any]:
        """Exchange a signed assertion for an access token.

        Builds the assertion first when none is given.
        """
        if signed_assertion is None:
            signed_assertion = self.build_assertion()

        url = f"{self.options.ims}/ims/exchange/jwt/"
        data = {
            "client_id": str(self.options.client_id),
            "client_secret": str(self.options.client_secret),
            "jwt_token": signed_assertion,
        }

        logger.info(f"Exchanging JWT assertion at {url}")
        status, text = await self._post(url, data)
        return parse_token_response(status, text, "while swapping jwt")

    async def fetch_token(self) -> Mapping[str, Any]:
        """Build an assertion and exchange it."""
        return await self.exchange()
