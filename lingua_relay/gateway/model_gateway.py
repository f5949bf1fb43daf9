"""Model gateway: single-shot chat completions through Agno.

Every call is a two-message exchange (system + user) against one
OpenAI-compatible chat-completion endpoint. The response is decoded
defensively: missing generated text becomes an empty string, while
transport and provider failures surface as GatewayError.
"""

import logging
from typing import Any

from agno.agent import Agent
from agno.models.openai.like import OpenAILike
from agno.run.base import RunStatus

from lingua_relay.errors import GatewayError
from lingua_relay.gateway.config import GatewayConfig, get_gateway_config

logger = logging.getLogger(__name__)

# Providers such as Groq only accept the classic chat roles
CHAT_ROLE_MAP = {"system": "system", "user": "user", "assistant": "assistant", "tool": "tool"}


def decode_completion(response: Any) -> str:
    """Extract generated text from a run response.

    Args:
        response: Run output returned by the agent, possibly None.

    Returns:
        The generated text, or "" when none is present.
    """
    content = getattr(response, "content", None)
    if not isinstance(content, str):
        return ""
    return content


class ModelGateway:
    """Wraps the hosted model behind a single `complete` call.

    Holds only immutable configuration; each completion builds its own
    model and agent so requests share no mutable state.
    """

    def __init__(self, config: GatewayConfig | None = None) -> None:
        """Initialize the gateway.

        Args:
            config: Optional gateway configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_gateway_config()

    @property
    def model_name(self) -> str:
        return self._config.model_name

    def _create_model(self, model_id: str, temperature: float, max_tokens: int) -> OpenAILike:
        return OpenAILike(
            id=model_id,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=self._config.timeout,
            max_retries=self._config.max_retries,
            role_map=CHAT_ROLE_MAP,
        )

    def _create_agent(self, system_prompt: str, model: OpenAILike) -> Agent:
        return Agent(
            model=model,
            system_message=system_prompt,
            markdown=False,
            telemetry=False,
        )

    async def complete(
        self,
        system_prompt: str,
        user_content: str,
        model_id: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Run one completion and return the generated text.

        Numeric parameters are passed through unchanged.

        Args:
            system_prompt: Instruction sent as the system message.
            user_content: Text sent as the user message.
            model_id: Provider model identifier.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens in generated response.

        Returns:
            Generated text; "" when the response carries none.

        Raises:
            GatewayError: If the call fails in transport or the provider
                reports an error.
        """
        model = self._create_model(model_id, temperature, max_tokens)
        agent = self._create_agent(system_prompt, model)

        try:
            response = await agent.arun(user_content)
        except Exception as e:
            logger.error(f"Model call to {model_id} failed: {e}")
            raise GatewayError(str(e) or type(e).__name__) from e

        if getattr(response, "status", None) == RunStatus.error:
            message = decode_completion(response) or "Model provider returned an error"
            logger.error(f"Model call to {model_id} returned error status: {message}")
            raise GatewayError(message)

        return decode_completion(response)


# Module-level singleton instance
_model_gateway: ModelGateway | None = None


def get_model_gateway() -> ModelGateway:
    """Get or create the global model gateway.

    Returns:
        The ModelGateway instance.
    """
    global _model_gateway
    if _model_gateway is None:
        _model_gateway = ModelGateway()
    return _model_gateway
