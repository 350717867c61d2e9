"""LangChain adapter implementing the generation provider port."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional

import structlog
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from flowforge.core.llm import get_llm
from flowforge.domain.exceptions import GenerationUnavailable, UnexpectedResponseShape
from flowforge.domain.schemas.workflow import PromptPayload

logger = structlog.get_logger(__name__)


def _compact_error(err: Exception, limit: int = 320) -> str:
    text = str(err or "").replace("\n", " ").strip() or type(err).__name__
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class LangChainGenerationProvider:
    """Sends one system+user exchange to a chat model and returns its text."""

    def __init__(
        self,
        llm: Optional[BaseChatModel] = None,
        llm_factory: Callable[[], BaseChatModel] = get_llm,
    ) -> None:
        self._llm = llm
        self._llm_factory = llm_factory

    def _resolve_llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = self._llm_factory()
        return self._llm

    async def generate(self, payload: PromptPayload) -> str:
        messages = [
            SystemMessage(content=payload.system_instructions),
            HumanMessage(content=payload.user_instructions),
        ]
        try:
            llm = self._resolve_llm()
            response = await llm.ainvoke(messages)
        except Exception as exc:
            logger.error("generation_backend_failed", error=_compact_error(exc))
            raise GenerationUnavailable(
                f"Generation backend unavailable: {_compact_error(exc)}"
            ) from exc

        text = self._response_to_text(response)
        logger.info("generation_backend_responded", chars=len(text), preview=text[:200])
        return text

    @staticmethod
    def _response_to_text(response: Any) -> str:
        content = getattr(response, "content", response)
        if isinstance(content, str):
            return content
        if isinstance(content, list) and content:
            first = content[0]
            if isinstance(first, str):
                return first
            if isinstance(first, Mapping) and first.get("type") == "text":
                return str(first.get("text") or "")
            block_type = first.get("type") if isinstance(first, Mapping) else type(first).__name__
            raise UnexpectedResponseShape(
                f"Unexpected response format from generation backend: {block_type} block"
            )
        raise UnexpectedResponseShape(
            f"Unexpected response format from generation backend: {type(content).__name__}"
        )
