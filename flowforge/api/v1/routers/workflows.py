from typing import Any, Dict

import structlog
from fastapi import APIRouter, Body, Depends

from flowforge.api.v1.errors import ERROR_RESPONSES, ApiError
from flowforge.api.v1.schemas.deployments import DeployWorkflowRequest, DeployWorkflowResponse
from flowforge.application.services.workflow_generation_service import WorkflowGenerationService
from flowforge.core.dependencies import get_deployment_client, get_generation_service
from flowforge.core.settings import settings
from flowforge.domain.exceptions import DeploymentFailed, InvalidInput
from flowforge.domain.schemas.workflow import build_generation_request
from flowforge.infrastructure.deployment.n8n_client import N8nDeploymentClient

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/workflows", tags=["workflows"])


@router.post("/generate", response_model=Dict[str, Any], responses=ERROR_RESPONSES)
async def generate_workflow(
    payload: Dict[str, Any] = Body(...),
    service: WorkflowGenerationService = Depends(get_generation_service),
):
    """
    Generate an importable n8n workflow from a free-text automation request.
    """
    try:
        request = build_generation_request(
            payload, min_description_length=settings.MIN_DESCRIPTION_LENGTH
        )
    except InvalidInput as exc:
        raise ApiError(
            status_code=400, code="INVALID_REQUEST", message=exc.message, details=exc.details
        )

    try:
        result = await service.generate(request)
    except Exception as e:
        logger.error("workflow_generate_endpoint_failed", error=str(e))
        raise ApiError(status_code=500, code="INTERNAL_ERROR", message="Internal server error")

    if not result.success:
        raise ApiError(
            status_code=422,
            code="WORKFLOW_GENERATION_FAILED",
            message=result.error or "Workflow generation failed",
            details={"errorCode": result.error_code},
        )
    return result.to_response()


@router.post("/deploy", response_model=DeployWorkflowResponse, response_model_by_alias=True)
async def deploy_workflow(
    body: DeployWorkflowRequest,
    client: N8nDeploymentClient = Depends(get_deployment_client),
):
    """
    Push a generated workflow to the caller's n8n instance (created inactive).
    """
    try:
        receipt = await client.deploy(
            workflow=body.workflow,
            summary=body.summary,
            base_url=str(body.n8n_url),
            api_key=body.api_key,
        )
    except DeploymentFailed as exc:
        raise ApiError(
            status_code=exc.status_code,
            code="DEPLOYMENT_FAILED",
            message=exc.message,
            details=exc.details,
        )

    return DeployWorkflowResponse(
        workflow_id=receipt.workflow_id,
        workflow_url=receipt.workflow_url,
        message=receipt.message,
    )
