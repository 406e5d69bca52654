from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="Tag Generation API",
        validation_alias=AliasChoices("APP_NAME", "app_name"),
        description="Service name shown in the OpenAPI docs.",
    )
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="TCP port the HTTP server listens on.",
    )
    max_request_body_bytes: int = Field(
        default=1024 * 1024,
        ge=1,
        validation_alias=AliasChoices("MAX_REQUEST_BODY_BYTES", "max_request_body_bytes"),
        description="Maximum accepted request body size (bytes) for JSON endpoints.",
    )

    # LLM integration (Azure OpenAI)
    # Credentials are optional at startup; the completion client reports them as missing per call.
    azure_openai_endpoint: str | None = Field(
        default=None,
        validation_alias=AliasChoices("AZURE_OPENAI_ENDPOINT", "azure_openai_endpoint"),
        description="Azure OpenAI resource endpoint (e.g. https://my-resource.openai.azure.com).",
    )
    azure_openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("AZURE_OPENAI_API_KEY", "azure_openai_api_key"),
        description="Azure OpenAI API key, sent in the `api-key` header.",
    )
    azure_openai_api_version: str = Field(
        default="2024-08-01-preview",
        validation_alias=AliasChoices("AZURE_OPENAI_API_VERSION", "azure_openai_api_version"),
        description="Value of the `api-version` query parameter.",
    )
    azure_openai_deployment_name: str = Field(
        default="gpt-5-chat",
        validation_alias=AliasChoices(
            "AZURE_OPENAI_API_DEPLOYMENT_NAME",
            "AZURE_OPENAI_DEPLOYMENT_NAME",
            "azure_openai_deployment_name",
        ),
        description="Deployment name; also used as the model identifier for pricing.",
    )

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
