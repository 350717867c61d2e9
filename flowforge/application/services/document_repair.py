"""
Syntactic repair of near-valid JSON emitted by the generator.

Each pass is an independent text transform that ignores string literal
contents, so already valid JSON without trailing commas passes through
unchanged. The passes fix syntax only, never semantics, and assume any
truncation happened at the tail of the document.
"""
from __future__ import annotations

import json
from typing import Any, Callable, List, Tuple

import structlog

from flowforge.domain.exceptions import UnrecoverableMalformedDocument

logger = structlog.get_logger(__name__)

RepairPass = Callable[[str], str]


def _scan_strings(text: str) -> Tuple[List[bool], List[int]]:
    """Returns a per-character "outside any string literal" mask and the closing-quote indexes."""
    structural = [False] * len(text)
    closers: List[int] = []
    in_string = False
    escaped = False
    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
                closers.append(index)
        elif char == '"':
            in_string = True
        else:
            structural[index] = True
    return structural, closers


def strip_trailing_commas(text: str) -> str:
    structural, _ = _scan_strings(text)
    length = len(text)
    kept: List[str] = []
    for index, char in enumerate(text):
        if char == "," and structural[index]:
            ahead = index + 1
            while ahead < length and text[ahead].isspace():
                ahead += 1
            if ahead < length and text[ahead] in "}]" and structural[ahead]:
                continue
        kept.append(char)
    return "".join(kept)


def separate_adjacent_strings(text: str) -> str:
    _, closers = _scan_strings(text)
    length = len(text)
    insert_at: List[int] = []
    for closer in closers:
        ahead = closer + 1
        while ahead < length and text[ahead].isspace():
            ahead += 1
        if ahead < length and text[ahead] == '"':
            insert_at.append(closer + 1)

    if not insert_at:
        return text
    parts: List[str] = []
    previous = 0
    for position in insert_at:
        parts.append(text[previous:position])
        parts.append(",")
        previous = position
    parts.append(text[previous:])
    return "".join(parts)


def close_unbalanced_braces(text: str) -> str:
    structural, _ = _scan_strings(text)
    opens = sum(1 for index, char in enumerate(text) if char == "{" and structural[index])
    closes = sum(1 for index, char in enumerate(text) if char == "}" and structural[index])
    if opens > closes:
        return text + "}" * (opens - closes)
    return text


DEFAULT_REPAIR_PASSES: Tuple[Tuple[str, RepairPass], ...] = (
    ("strip_trailing_commas", strip_trailing_commas),
    ("separate_adjacent_strings", separate_adjacent_strings),
    ("close_unbalanced_braces", close_unbalanced_braces),
)


class DocumentRepairEngine:
    def __init__(self, passes: Tuple[Tuple[str, RepairPass], ...] = DEFAULT_REPAIR_PASSES):
        self._passes = passes

    def repair(self, candidate: str) -> str:
        repaired = candidate
        applied: List[str] = []
        for name, repair_pass in self._passes:
            updated = repair_pass(repaired)
            if updated != repaired:
                applied.append(name)
            repaired = updated

        if applied:
            logger.info("document_repaired", passes=applied, chars=len(repaired))
        return repaired

    def parse(self, candidate: str) -> Any:
        """Repairs the candidate and parses it strictly."""
        repaired = self.repair(candidate)
        try:
            return json.loads(repaired)
        except json.JSONDecodeError as exc:
            logger.warning(
                "document_parse_failed",
                error=exc.msg,
                position=exc.pos,
                line=exc.lineno,
                column=exc.colno,
                sample=repaired[max(0, exc.pos - 100) : exc.pos + 100],
            )
            raise UnrecoverableMalformedDocument(
                "Failed to parse workflow JSON from model response: "
                f"{exc.msg} (line {exc.lineno}, column {exc.colno}, char {exc.pos})",
                position=exc.pos,
                line=exc.lineno,
                column=exc.colno,
            ) from exc
