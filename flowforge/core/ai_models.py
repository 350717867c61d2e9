"""
Centralized AI model configuration for workflow generation.
Every component that talks to the generation backend reads its model
identifier and limits from here.
"""

from flowforge.core.settings import settings


class AIModelConfig:
    # Anthropic Configuration
    ANTHROPIC_API_KEY = settings.ANTHROPIC_API_KEY
    GENERATION_MODEL = settings.GENERATION_MODEL
    GENERATION_MAX_TOKENS = settings.GENERATION_MAX_TOKENS
    GENERATION_TEMPERATURE = settings.GENERATION_TEMPERATURE

    # Single attempt per request; the client must not retry on its own.
    CLIENT_MAX_RETRIES = 0

    @classmethod
    def is_anthropic_available(cls) -> bool:
        return bool(str(cls.ANTHROPIC_API_KEY or "").strip())
