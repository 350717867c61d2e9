from __future__ import annotations

from typing import Any

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DeployWorkflowRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    workflow: dict[str, Any]
    summary: str = ""
    n8n_url: AnyHttpUrl = Field(..., alias="n8nUrl")
    api_key: str = Field(..., min_length=1)


class DeployWorkflowResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    workflow_id: str
    workflow_url: str
    message: str
