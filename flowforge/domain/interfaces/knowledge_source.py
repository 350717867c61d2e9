from __future__ import annotations

from typing import Protocol


class KnowledgeSource(Protocol):
    """Read-only reference corpus. An empty string means the corpus is unavailable."""

    @property
    def text(self) -> str: ...
