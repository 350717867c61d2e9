from __future__ import annotations

from typing import Protocol

from flowforge.domain.schemas.workflow import PromptPayload


class GenerationProvider(Protocol):
    """
    Boundary to the text-generation backend. The only place allowed to
    perform network I/O for generation.

    Implementations raise `GenerationUnavailable` on transport/auth failure
    and `UnexpectedResponseShape` when the backend answers with non-text content.
    """

    async def generate(self, payload: PromptPayload) -> str: ...
