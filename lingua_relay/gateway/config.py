"""Gateway configuration with environment variable loading.

Pydantic-based configuration for the hosted model gateway.
Targets Groq's OpenAI-compatible API by default; any OpenAI-compatible
provider can be used via LLM_BASE_URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

# Generation defaults for the two operations
DEFAULT_TEMPERATURE = 0.7
TRANSLATION_MAX_TOKENS = 2048
CHAT_MAX_TOKENS = 1024

# Outbound call policy: single-shot with an explicit timeout
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 0

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"


class GatewayConfig(BaseModel):
    """Configuration for the model gateway.

    Attributes:
        api_key: API key for the model provider.
        base_url: OpenAI-compatible API base URL.
        model_name: Model identifier used for every completion.
        timeout: Outbound request timeout in seconds.
        max_retries: Client-level retries on transport failure.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GROQ_API_KEY", os.getenv("LLM_API_KEY", "")),
        description="API key for LLM provider",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or GROQ_BASE_URL,
        description="OpenAI-compatible API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", DEFAULT_MODEL),
        description="Model to use",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("LLM_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
        gt=0.0,
        description="Outbound request timeout in seconds",
    )
    max_retries: int = Field(
        default_factory=lambda: int(os.getenv("LLM_MAX_RETRIES", DEFAULT_MAX_RETRIES)),
        ge=0,
        description="Retries on transport failure (0 = single-shot)",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GROQ_API_KEY or LLM_API_KEY in .env")
        return v.strip()


def get_gateway_config() -> GatewayConfig:
    """Create gateway configuration from environment.

    Returns:
        Configured GatewayConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return GatewayConfig()
