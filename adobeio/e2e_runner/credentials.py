"""Acquire one credential per required auth mode and expose it as env vars."""

import json
import logging
from collections.abc import Collection, Mapping
from typing import Any

from adobeio.e2e_runner.context import RunContext
from adobeio.e2e_runner.env_guard import check_required
from adobeio.e2e_runner.errors import ConfigurationError, RemoteError
from adobeio.e2e_runner.models.credentials import (
    ClientCredentialsConfig,
    Credential,
    JwtOptions,
)
from adobeio.e2e_runner.models.test_target import AuthMode
from adobeio.e2e_runner.providers.action_url import ActionUrlProvider
from adobeio.e2e_runner.providers.base import resolve_ims_base
from adobeio.e2e_runner.providers.client_credentials import ClientCredentialsProvider
from adobeio.e2e_runner.providers.jwt_exchange import JwtExchangeProvider

logger = logging.getLogger(__name__)

S2S_REQUIRED_ENV = ("IMS_CLIENT_ID", "IMS_CLIENT_SECRET", "IMS_ORG_ID", "IMS_SCOPES")
JWT_REQUIRED_ENV = (
    "JWT_CLIENT_ID",
    "JWT_CLIENT_SECRET",
    "JWT_TECH_ACC_ID",
    "JWT_ORG_ID",
    "JWT_PRIVATE_KEY",
)
OAUTH_REQUIRED_ENV = ("OAUTH_TOKEN_ACTION_URL",)

# Read from the run's starting directory when JWT_PRIVATE_KEY is not set
PRIVATE_KEY_FILE = "private.key"

ACQUISITION_ORDER = (AuthMode.OAUTH_S2S, AuthMode.JWT, AuthMode.OAUTH)

TOKEN_ENV: dict[AuthMode, str] = {
    AuthMode.OAUTH_S2S: "IMS_TOKEN",
    AuthMode.JWT: "JWT_TOKEN",
    AuthMode.OAUTH: "OAUTH_TOKEN",
}
SIGNED_JWT_ENV = "JWT_SIGNED"


async def acquire_credentials(
    modes: Collection[AuthMode], context: RunContext
) -> dict[AuthMode, Credential]:
    """Acquire a credential for each mode, once, in a fixed order.

    Tokens are written to the context env (``IMS_TOKEN``, ``JWT_TOKEN``,
    ``JWT_SIGNED``, ``OAUTH_TOKEN``) and recorded in ``context.credentials``.

    Raises:
        ConfigurationError: If a mode's required env vars are missing

    """
    for mode in ACQUISITION_ORDER:
        if mode not in modes or mode in context.credentials:
            continue

        logger.info(f"Acquiring {mode.value} credential...")
        credential = await acquire_credential(mode, context)

        context.credentials[mode] = credential
        context.env[TOKEN_ENV[mode]] = credential.access_token
        if credential.signed_assertion is not None:
            context.env[SIGNED_JWT_ENV] = credential.signed_assertion
        logger.info(f"Stored {mode.value} token in {TOKEN_ENV[mode]}")

    return context.credentials


async def acquire_credential(mode: AuthMode, context: RunContext) -> Credential:
    """Run the credential flow for a single auth mode."""
    if mode is AuthMode.OAUTH_S2S:
        return await _acquire_client_credentials(context)
    elif mode is AuthMode.JWT:
        return await _acquire_jwt(context)
    elif mode is AuthMode.OAUTH:
        return await _acquire_oauth(context)
    else:
        raise ConfigurationError(f"Auth mode {mode.value} has no credential flow")


async def _acquire_client_credentials(context: RunContext) -> Credential:
    env = context.env
    check_required(S2S_REQUIRED_ENV, env)

    config = ClientCredentialsConfig(
        ims_env=env.get("IMS_ENV") or "prod",
        client_id=env["IMS_CLIENT_ID"],
        client_secret=env["IMS_CLIENT_SECRET"],
        org_id=env["IMS_ORG_ID"],
        scopes=env["IMS_SCOPES"],
    )
    response = await ClientCredentialsProvider(config).fetch_token()
    return Credential(access_token=_access_token(response))


async def _acquire_jwt(context: RunContext) -> Credential:
    env = context.env
    _load_private_key_file(context)
    check_required(JWT_REQUIRED_ENV, env)

    options: dict[str, Any] = {
        "client_id": env["JWT_CLIENT_ID"],
        "client_secret": env["JWT_CLIENT_SECRET"],
        "technical_account_id": env["JWT_TECH_ACC_ID"],
        "org_id": env["JWT_ORG_ID"],
        "private_key": env["JWT_PRIVATE_KEY"],
        "passphrase": env.get("JWT_PRIVATE_KEY_PASSPHRASE", ""),
        "ims": resolve_ims_base(env.get("IMS_ENV") or "prod"),
    }
    if env.get("JWT_METASCOPES"):
        options["meta_scopes"] = env["JWT_METASCOPES"]

    provider = JwtExchangeProvider(JwtOptions(**options))
    signed_assertion = provider.build_assertion()
    response = await provider.exchange(signed_assertion)
    return Credential(
        access_token=_access_token(response), signed_assertion=signed_assertion
    )


async def _acquire_oauth(context: RunContext) -> Credential:
    check_required(OAUTH_REQUIRED_ENV, context.env)

    provider = ActionUrlProvider(context.env["OAUTH_TOKEN_ACTION_URL"])
    response = await provider.exchange()
    return Credential(access_token=_access_token(response))


def _load_private_key_file(context: RunContext) -> None:
    """Fill JWT_PRIVATE_KEY from the key file when it is not set."""
    if context.env.get("JWT_PRIVATE_KEY"):
        return

    key_file = context.start_dir / PRIVATE_KEY_FILE
    try:
        context.env["JWT_PRIVATE_KEY"] = key_file.read_text()
        logger.info(f"Loaded JWT private key from {key_file}")
    except FileNotFoundError:
        logger.warning(f"JWT_PRIVATE_KEY is not set and {key_file} does not exist")


def _access_token(response: Any) -> str:
    if not isinstance(response, Mapping):
        raise RemoteError(
            f"Token response is not a JSON object: {json.dumps(response)}",
            body=json.dumps(response),
        )

    token = response.get("access_token")
    if not token:
        raise RemoteError(
            "Token response has no access_token", body=json.dumps(dict(response))
        )
    return str(token)
