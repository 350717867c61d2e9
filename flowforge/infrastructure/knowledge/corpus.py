from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)


class FileKnowledgeCorpus:
    """
    n8n reference documentation loaded from disk on first read.

    The text is resolved at most once and never mutated afterwards, so a
    single instance can be shared by concurrent requests. A missing or
    unreadable file degrades to an empty corpus.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._text: Optional[str] = None

    @property
    def text(self) -> str:
        if self._text is None:
            self._text = self._load()
        return self._text

    @property
    def is_loaded(self) -> bool:
        return self._text is not None

    def _load(self) -> str:
        try:
            content = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("knowledge_corpus_unavailable", path=str(self._path), error=str(exc))
            return ""
        logger.info("knowledge_corpus_loaded", path=str(self._path), chars=len(content))
        return content
