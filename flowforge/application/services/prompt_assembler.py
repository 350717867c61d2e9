from __future__ import annotations

from typing import Optional, Sequence

from flowforge.core.prompts.workflow_generation import (
    CLARIFICATIONS_HEADER,
    CONTEXT_COMPLEXITY_LINE,
    CONTEXT_HEADER,
    CONTEXT_INDUSTRY_LINE,
    CONTEXT_TOOLS_LINE,
    USER_PROMPT_LEAD,
    build_system_prompt,
)
from flowforge.domain.schemas.workflow import GenerationContext, PromptPayload


class PromptAssembler:
    """Pure builder for the system/user instruction pair sent to the generator."""

    def assemble(
        self,
        description: str,
        clarifications: Optional[Sequence[str]],
        context: Optional[GenerationContext],
        knowledge_text: str,
    ) -> PromptPayload:
        return PromptPayload(
            system_instructions=build_system_prompt(knowledge_text),
            user_instructions=self._user_prompt(description, clarifications, context),
        )

    @staticmethod
    def _user_prompt(
        description: str,
        clarifications: Optional[Sequence[str]],
        context: Optional[GenerationContext],
    ) -> str:
        prompt = USER_PROMPT_LEAD + description

        if clarifications:
            prompt += CLARIFICATIONS_HEADER + "\n".join(clarifications)

        if context is not None and context.has_content:
            prompt += CONTEXT_HEADER
            if context.industry:
                prompt += CONTEXT_INDUSTRY_LINE + context.industry
            if context.tools:
                prompt += CONTEXT_TOOLS_LINE + ", ".join(context.tools)
            if context.complexity:
                prompt += CONTEXT_COMPLEXITY_LINE + context.complexity

        return prompt
