"""
Domain schemas for the workflow generation pipeline.

Requests, prompt payloads and results are immutable once built; the
generated workflow keeps every key the model emitted so it can be
imported into n8n as-is.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from flowforge.domain.exceptions import InvalidInput

Complexity = Literal["simple", "medium", "complex"]


class GenerationContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    industry: Optional[str] = None
    tools: Optional[Tuple[str, ...]] = None
    complexity: Optional[Complexity] = None

    @field_validator("tools", mode="before")
    @classmethod
    def _dedupe_tools(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        cleaned = [str(tool).strip() for tool in value]
        return tuple(dict.fromkeys(tool for tool in cleaned if tool))

    @property
    def has_content(self) -> bool:
        return bool(self.industry or self.tools or self.complexity)


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str = Field(..., min_length=1)
    clarifications: Tuple[str, ...] = ()
    context: Optional[GenerationContext] = None

    @field_validator("description")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value

    @field_validator("clarifications", mode="before")
    @classmethod
    def _none_means_empty(cls, value: Any) -> Any:
        return () if value is None else value


def build_generation_request(
    payload: Mapping[str, Any], *, min_description_length: int = 1
) -> GenerationRequest:
    """Validate a raw request body, raising `InvalidInput` on any shape problem."""
    if not isinstance(payload, Mapping):
        raise InvalidInput("Invalid request data", details="Request body must be a JSON object")
    try:
        request = GenerationRequest.model_validate(dict(payload))
    except ValidationError as exc:
        raise InvalidInput(
            "Invalid request data",
            details=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from exc

    if len(request.description.strip()) < min_description_length:
        raise InvalidInput(
            "Invalid request data",
            details=[
                {
                    "loc": ["description"],
                    "msg": f"Description must be at least {min_description_length} characters",
                    "type": "string_too_short",
                }
            ],
        )
    return request


class PromptPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    system_instructions: str
    user_instructions: str


@dataclass(frozen=True)
class CandidateDocument:
    text: str
    strategy: str


class WorkflowDocument(BaseModel):
    """Parsed n8n workflow. Unknown top-level keys are preserved."""

    model_config = ConfigDict(extra="allow")

    name: Any = None
    nodes: List[Any]
    connections: Any = Field(default_factory=dict)
    settings: Any = Field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class CredentialRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    description: str
    required: bool = True


class GenerationResult(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    success: bool
    workflow: Optional[WorkflowDocument] = None
    documentation: Optional[str] = None
    summary: Optional[str] = None
    required_credentials: Optional[Dict[str, CredentialRequirement]] = None
    estimated_runtime: Optional[int] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def failure(cls, error: str, error_code: str) -> "GenerationResult":
        return cls(success=False, error=error, error_code=error_code)

    def to_response(self) -> Dict[str, Any]:
        payload = self.model_dump(by_alias=True, exclude_none=True, exclude={"workflow"})
        if self.workflow is not None:
            payload["workflow"] = self.workflow.as_dict()
        return payload
