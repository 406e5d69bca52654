from __future__ import annotations

from app.core.llm.azure_client import AzureOpenAIClient, AzureOpenAIConfig
from app.core.settings import get_settings


def get_completion_client() -> AzureOpenAIClient:
    """
    Dependency provider for AzureOpenAIClient.

    Always returns a client: missing credentials surface as a configuration error
    when the call is attempted, after request validation has run.
    """

    settings = get_settings()
    config = AzureOpenAIConfig(
        endpoint=settings.azure_openai_endpoint,
        api_key=settings.azure_openai_api_key,
        api_version=settings.azure_openai_api_version,
        deployment=settings.azure_openai_deployment_name,
    )
    return AzureOpenAIClient(config=config)
