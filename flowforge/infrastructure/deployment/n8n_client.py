from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import httpx
import structlog

from flowforge.core.settings import settings
from flowforge.domain.exceptions import DeploymentFailed

logger = structlog.get_logger(__name__)

DEFAULT_WORKFLOW_NAME = "AI Generated Workflow"

_STATUS_MESSAGES: Dict[int, str] = {
    400: "Invalid workflow data",
    401: "Invalid API key or unauthorized",
    404: "n8n instance not found - check your URL",
}


@dataclass(frozen=True)
class DeploymentReceipt:
    workflow_id: str
    workflow_url: str
    message: str = "Workflow successfully deployed to n8n"


def build_deploy_payload(
    workflow: Mapping[str, Any], summary: Optional[str], tags: List[str]
) -> Dict[str, Any]:
    return {
        "name": summary or DEFAULT_WORKFLOW_NAME,
        "nodes": workflow.get("nodes") or [],
        "connections": workflow.get("connections") or {},
        "settings": workflow.get("settings") or {},
        "tags": list(tags),
        "active": False,
    }


class N8nDeploymentClient:
    """Creates a workflow on a user-supplied n8n instance through its public REST API."""

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        tags: Optional[List[str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout_seconds = timeout_seconds or settings.N8N_DEPLOY_TIMEOUT_SECONDS
        self.tags = list(tags if tags is not None else settings.N8N_WORKFLOW_TAGS)
        self._transport = transport

    async def deploy(
        self,
        workflow: Mapping[str, Any],
        summary: Optional[str],
        base_url: str,
        api_key: str,
    ) -> DeploymentReceipt:
        base = base_url.rstrip("/")
        payload = build_deploy_payload(workflow, summary, self.tags)
        headers = {"Content-Type": "application/json", "X-N8N-API-KEY": api_key}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(f"{base}/api/v1/workflows", json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("n8n_deploy_transport_failed", base_url=base, error=str(exc))
            raise DeploymentFailed(
                status_code=502, message="Could not reach n8n instance", details=str(exc)
            ) from exc

        if response.is_error:
            message = _STATUS_MESSAGES.get(response.status_code, "Failed to deploy workflow")
            logger.error(
                "n8n_deploy_rejected",
                base_url=base,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise DeploymentFailed(status_code=response.status_code, message=message)

        try:
            body = response.json()
        except ValueError as exc:
            raise DeploymentFailed(
                status_code=502, message="n8n returned an unreadable response"
            ) from exc

        workflow_id = str(body.get("id", "")) if isinstance(body, dict) else ""
        if not workflow_id:
            raise DeploymentFailed(status_code=502, message="n8n response did not include a workflow id")

        logger.info("n8n_deploy_succeeded", base_url=base, workflow_id=workflow_id)
        return DeploymentReceipt(
            workflow_id=workflow_id,
            workflow_url=f"{base}/workflow/{workflow_id}",
        )
