"""Provider configuration model."""
from pydantic import BaseModel, ConfigDict, Field


class ProviderConfig(BaseModel):
    """Connection settings for an upstream service."""

    model_config = ConfigDict(from_attributes=True)

    provider_id: str = Field(description="Provider identifier, e.g. 'openrouter' or 'gemini'")
    name: str = Field(description="Human-readable name of the provider")
    credentials: str = Field("", description="API key for the provider, if any")
    base_url: str = Field(description="Base URL or endpoint of the provider API")
    timeout: float = Field(30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(True, description="Verify TLS certificates")
