from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel

from flowforge.core.ai_models import AIModelConfig


def get_llm(
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    model: Optional[str] = None,
) -> BaseChatModel:
    """
    Returns the configured chat model for workflow generation.
    Anthropic is the only supported provider; retries are disabled so each
    request makes exactly one backend call.
    """
    if not AIModelConfig.is_anthropic_available():
        raise ValueError("No valid AI Provider found. Set ANTHROPIC_API_KEY.")

    try:
        from langchain_anthropic import ChatAnthropic
    except ImportError as exc:
        raise ImportError("langchain-anthropic is required for workflow generation.") from exc

    if temperature is None:
        temperature = AIModelConfig.GENERATION_TEMPERATURE

    return ChatAnthropic(
        model=model or AIModelConfig.GENERATION_MODEL,
        max_tokens=max_tokens or AIModelConfig.GENERATION_MAX_TOKENS,
        temperature=temperature,
        api_key=AIModelConfig.ANTHROPIC_API_KEY,
        max_retries=AIModelConfig.CLIENT_MAX_RETRIES,
    )
