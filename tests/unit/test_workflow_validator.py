from __future__ import annotations

import pytest

from flowforge.application.services.workflow_validator import (
    DEFAULT_DOCUMENTATION,
    DEFAULT_SUMMARY,
    WorkflowValidator,
)
from flowforge.domain.exceptions import InvalidStructure


def test_credential_kinds_collapse_across_nodes() -> None:
    parsed = {
        "name": "Mailer",
        "nodes": [
            {"name": "Send Receipt", "type": "n8n-nodes-base.emailSend", "credentials": {"smtp": {"id": "1"}}},
            {
                "name": "Notify",
                "type": "n8n-nodes-base.slack",
                "credentials": {"smtp": {"id": "1"}, "slack": {"id": "2"}},
            },
        ],
        "connections": {},
    }

    validated = WorkflowValidator().validate(parsed)

    credentials = validated.required_credentials
    assert set(credentials) == {"smtp", "slack"}
    assert all(item.required is True for item in credentials.values())
    assert credentials["smtp"].type == "smtp"
    assert credentials["smtp"].description == "Required for Notify"


def test_node_type_labels_credentials_when_name_missing() -> None:
    parsed = {"nodes": [{"type": "n8n-nodes-base.postgres", "credentials": {"postgres": {}}}]}

    validated = WorkflowValidator().validate(parsed)

    assert validated.required_credentials["postgres"].description == (
        "Required for n8n-nodes-base.postgres"
    )


@pytest.mark.parametrize("name", [None, "", "   "])
def test_summary_defaults_when_name_absent_or_empty(name) -> None:
    parsed = {"nodes": []}
    if name is not None:
        parsed["name"] = name

    validated = WorkflowValidator().validate(parsed)

    assert validated.summary == DEFAULT_SUMMARY
    assert validated.documentation == DEFAULT_DOCUMENTATION


def test_declared_name_becomes_summary_and_document_is_preserved() -> None:
    parsed = {"name": "Invoice Archiver", "nodes": [{"name": "Start"}], "meta": {"templateId": "x"}}

    validated = WorkflowValidator().validate(parsed)

    assert validated.summary == "Invoice Archiver"
    assert validated.workflow.as_dict() == parsed
    assert validated.required_credentials == {}


@pytest.mark.parametrize(
    "parsed",
    [
        {"name": "No nodes"},
        {"nodes": {"a": 1}},
        {"nodes": "[]"},
        [{"nodes": []}],
        "workflow",
    ],
)
def test_structurally_invalid_documents_are_rejected(parsed) -> None:
    with pytest.raises(InvalidStructure):
        WorkflowValidator().validate(parsed)


@pytest.mark.parametrize(
    "extra",
    [{"settings": None}, {"settings": []}, {"connections": None}, {"connections": []}],
)
def test_only_nodes_shape_is_enforced(extra) -> None:
    parsed = {"name": "Mailer", "nodes": [{"name": "A", "credentials": {"smtp": {}}}], **extra}

    validated = WorkflowValidator().validate(parsed)

    assert validated.summary == "Mailer"
    assert validated.workflow.as_dict() == parsed
    assert set(validated.required_credentials) == {"smtp"}
