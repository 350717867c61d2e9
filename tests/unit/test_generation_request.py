from __future__ import annotations

import pytest

from flowforge.domain.exceptions import InvalidInput
from flowforge.domain.schemas.workflow import (
    CredentialRequirement,
    GenerationResult,
    WorkflowDocument,
    build_generation_request,
)


def test_builds_frozen_request_from_payload() -> None:
    request = build_generation_request(
        {
            "description": "Post new Stripe payments to Slack",
            "clarifications": None,
            "context": {"tools": ["Stripe", " Slack ", "Stripe"], "complexity": "simple"},
        },
        min_description_length=10,
    )

    assert request.clarifications == ()
    assert request.context.tools == ("Stripe", "Slack")
    with pytest.raises(Exception):
        request.description = "changed"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"description": "   "},
        {"description": "too short"},
        {"description": "Long enough description", "context": {"complexity": "extreme"}},
        {"description": "Long enough description", "clarifications": "not a list"},
    ],
)
def test_invalid_payloads_raise_invalid_input(payload) -> None:
    with pytest.raises(InvalidInput) as excinfo:
        build_generation_request(payload, min_description_length=10)

    assert excinfo.value.code == "InvalidInput"
    assert excinfo.value.details


def test_result_response_uses_camel_case_and_omits_nulls() -> None:
    result = GenerationResult(
        success=True,
        workflow=WorkflowDocument.model_validate({"name": "W", "nodes": []}),
        summary="W",
        documentation="docs",
        required_credentials={"smtp": CredentialRequirement(type="smtp", description="Required for Mail")},
        estimated_runtime=1000,
    )

    body = result.to_response()

    assert body == {
        "success": True,
        "workflow": {"name": "W", "nodes": []},
        "summary": "W",
        "documentation": "docs",
        "requiredCredentials": {
            "smtp": {"type": "smtp", "description": "Required for Mail", "required": True}
        },
        "estimatedRuntime": 1000,
    }


def test_failure_result_carries_error_code() -> None:
    body = GenerationResult.failure(error="bad", error_code="InvalidStructure").to_response()

    assert body == {"success": False, "error": "bad", "errorCode": "InvalidStructure"}
