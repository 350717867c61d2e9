from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

import structlog

from flowforge.domain.schemas.workflow import CandidateDocument

logger = structlog.get_logger(__name__)


_JSON_FENCE_RE = re.compile(r"```json\s*([\s\S]*?)\s*```", flags=re.IGNORECASE)
_GENERIC_FENCE_RE = re.compile(r"```\s*([\s\S]*?)\s*```")

ExtractionStrategy = Callable[[str], Optional[str]]


def from_json_fence(raw: str) -> Optional[str]:
    match = _JSON_FENCE_RE.search(raw)
    return match.group(1).strip() if match else None


def from_generic_fence(raw: str) -> Optional[str]:
    match = _GENERIC_FENCE_RE.search(raw)
    return match.group(1).strip() if match else None


def from_brace_span(raw: str) -> Optional[str]:
    start = raw.find("{")
    end = raw.rfind("}")
    if start != -1 and end > start:
        return raw[start : end + 1]
    return None


def from_whole_text(raw: str) -> Optional[str]:
    return raw.strip()


# Explicit fencing is stronger evidence than brace scanning.
DEFAULT_STRATEGIES: Tuple[Tuple[str, ExtractionStrategy], ...] = (
    ("json_fence", from_json_fence),
    ("generic_fence", from_generic_fence),
    ("brace_span", from_brace_span),
)
FALLBACK_STRATEGY = "whole_text"


class ResponseExtractor:
    """Locates the workflow document inside free-form model output. Never raises."""

    def __init__(
        self,
        strategies: Tuple[Tuple[str, ExtractionStrategy], ...] = DEFAULT_STRATEGIES,
    ):
        self._strategies = strategies

    def extract(self, raw: str) -> CandidateDocument:
        text = raw or ""
        for name, strategy in self._strategies:
            candidate = strategy(text)
            if candidate:
                logger.info("candidate_extracted", strategy=name, chars=len(candidate))
                return CandidateDocument(text=candidate, strategy=name)

        candidate = from_whole_text(text) or ""
        logger.info("candidate_extracted", strategy=FALLBACK_STRATEGY, chars=len(candidate))
        return CandidateDocument(text=candidate, strategy=FALLBACK_STRATEGY)
