"""Access to the hosted language model.

Responsibilities:
    - Provider configuration loaded from the environment
    - Two-message chat completions via Agno's OpenAI-compatible model
    - Defensive decoding of the generated text

Maintains clean separation from the HTTP layer.
"""

from lingua_relay.gateway.config import GatewayConfig, get_gateway_config
from lingua_relay.gateway.model_gateway import ModelGateway, get_model_gateway

__all__ = ["GatewayConfig", "ModelGateway", "get_gateway_config", "get_model_gateway"]
