"""Models for IMS credential inputs and acquired credentials."""

from pydantic import BaseModel, Field

IMS_BASE_URLS: dict[str, str] = {
    "stage": "https://ims-na1-stg1.adobelogin.com",
    "prod": "https://ims-na1.adobelogin.com",
}

DEFAULT_IMS = IMS_BASE_URLS["prod"]

DEFAULT_META_SCOPES = [
    f"{DEFAULT_IMS}/s/ent_analytics_bulk_ingest_sdk",
    f"{DEFAULT_IMS}/s/ent_marketing_sdk",
    f"{DEFAULT_IMS}/s/ent_campaign_sdk",
    f"{DEFAULT_IMS}/s/ent_adobeio_sdk",
    f"{DEFAULT_IMS}/s/ent_audiencemanagerplatform_sdk",
]


class ClientCredentialsConfig(BaseModel):
    """Inputs for the OAuth2 client-credentials (service-to-service) flow."""

    ims_env: str = Field(default="prod", description="IMS environment (stage or prod)")
    client_id: str = Field(..., description="OAuth client ID")
    client_secret: str = Field(..., description="OAuth client secret")
    org_id: str = Field(..., description="IMS organization ID")
    scopes: str = Field(..., description="Comma-separated scope list")


class JwtOptions(BaseModel):
    """Inputs for the JWT exchange flow.

    Required fields are optional here so that all missing ones can be
    reported together when the assertion is built.
    """

    client_id: str | None = Field(default=None, description="Integration client ID")
    technical_account_id: str | None = Field(
        default=None, description="Technical account ID (JWT subject)"
    )
    org_id: str | None = Field(default=None, description="IMS organization ID")
    client_secret: str | None = Field(default=None, description="Client secret")
    private_key: str | None = Field(default=None, description="PEM encoded RSA key")
    passphrase: str = Field(default="", description="Private key passphrase")
    meta_scopes: list[str] | str = Field(
        default_factory=lambda: list(DEFAULT_META_SCOPES),
        description="Meta scopes, as a list or comma-separated string",
    )
    ims: str = Field(default=DEFAULT_IMS, description="IMS base URL")


class Credential(BaseModel):
    """Access token acquired for one auth mode."""

    access_token: str = Field(..., description="Bearer access token")
    signed_assertion: str | None = Field(
        default=None, description="Signed JWT exchanged for the token (JWT mode)"
    )
