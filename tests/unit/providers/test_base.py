"""Tests for credential provider base helpers."""

import json

import pytest

from adobeio.e2e_runner.errors import ConfigurationError, RemoteError
from adobeio.e2e_runner.providers.base import parse_token_response, resolve_ims_base


def test_resolve_ims_base_known() -> None:
    """resolve_ims_base maps stage and prod to their hosts."""
    assert resolve_ims_base("prod") == "https://ims-na1.adobelogin.com"
    assert resolve_ims_base("stage") == "https://ims-na1-stg1.adobelogin.com"


def test_resolve_ims_base_unknown() -> None:
    """resolve_ims_base names the valid selectors."""
    with pytest.raises(ConfigurationError, match="Must be one of: stage, prod"):
        resolve_ims_base("bad")


def test_parse_token_response_success() -> None:
    """parse_token_response returns the JSON verbatim."""
    body = {"access_token": "abc", "expires_in": 3600}

    assert parse_token_response(200, json.dumps(body), "testing") == body


def test_parse_token_response_error_and_description() -> None:
    """parse_token_response combines error and error_description."""
    body = json.dumps({"error": "invalid_client", "error_description": "bad id"})

    with pytest.raises(RemoteError, match="invalid_client: bad id") as exc_info:
        parse_token_response(400, body, "testing")

    assert exc_info.value.status == 400
    assert exc_info.value.body == body


def test_parse_token_response_unknown_error() -> None:
    """parse_token_response embeds the raw JSON when error details are partial."""
    body = json.dumps({"error": "invalid_client"})

    with pytest.raises(RemoteError) as exc_info:
        parse_token_response(400, body, "testing")

    message = str(exc_info.value)
    assert message.startswith("An unknown error occurred testing.")
    assert '{"error": "invalid_client"}' in message


def test_parse_token_response_not_json() -> None:
    """parse_token_response rejects non-JSON bodies."""
    with pytest.raises(RemoteError, match="Invalid JSON response"):
        parse_token_response(502, "<html>Bad Gateway</html>", "testing")
