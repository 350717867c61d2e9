from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict

from pydantic import ValidationError

from flowforge.domain.exceptions import InvalidStructure
from flowforge.domain.schemas.workflow import CredentialRequirement, WorkflowDocument

DEFAULT_SUMMARY = "AI-generated n8n workflow"
DEFAULT_DOCUMENTATION = (
    "Workflow generated with comprehensive setup instructions included in sticky notes"
)


@dataclass(frozen=True)
class ValidatedWorkflow:
    workflow: WorkflowDocument
    summary: str
    documentation: str
    required_credentials: Dict[str, CredentialRequirement]


class WorkflowValidator:
    """
    Minimal structural check of a parsed document plus derived metadata.
    Connection graph consistency is not verified.
    """

    def validate(self, parsed: Any) -> ValidatedWorkflow:
        if not isinstance(parsed, Mapping):
            raise InvalidStructure("Generated workflow is not a JSON object")
        if not isinstance(parsed.get("nodes"), list):
            raise InvalidStructure("Generated workflow missing valid nodes array")

        try:
            workflow = WorkflowDocument.model_validate(dict(parsed))
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
            raise InvalidStructure(f"Generated workflow has invalid fields: {fields}") from exc

        return ValidatedWorkflow(
            workflow=workflow,
            summary=self._summary(workflow),
            documentation=DEFAULT_DOCUMENTATION,
            required_credentials=self._required_credentials(workflow),
        )

    @staticmethod
    def _summary(workflow: WorkflowDocument) -> str:
        name = workflow.name
        if isinstance(name, str) and name.strip():
            return name
        return DEFAULT_SUMMARY

    @staticmethod
    def _required_credentials(workflow: WorkflowDocument) -> Dict[str, CredentialRequirement]:
        required: Dict[str, CredentialRequirement] = {}
        for node in workflow.nodes:
            if not isinstance(node, Mapping):
                continue
            credentials = node.get("credentials")
            if not isinstance(credentials, Mapping):
                continue
            label = node.get("name") or node.get("type") or "unnamed node"
            for kind in credentials:
                # Last node declaring a kind wins.
                required[str(kind)] = CredentialRequirement(
                    type=str(kind),
                    description=f"Required for {label}",
                    required=True,
                )
        return required
