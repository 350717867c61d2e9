from typing import Annotated

from fastapi import Depends, Request

from flowforge.infrastructure.container import WorkflowContainer


def get_container(request: Request) -> WorkflowContainer:
    """
    Dependency injection for the WorkflowContainer.
    Pulls the singleton instance from the app state (initialized in lifespan).
    """
    return request.app.state.container


def get_generation_service(container: Annotated[WorkflowContainer, Depends(get_container)]):
    return container.generation_service


def get_deployment_client(container: Annotated[WorkflowContainer, Depends(get_container)]):
    return container.deployment_client
