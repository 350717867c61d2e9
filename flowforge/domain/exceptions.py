from typing import Any, Optional


class WorkflowGenerationError(Exception):
    """
    Base class for every failure the generation pipeline can surface.
    `code` is the stable failure kind reported back to callers.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        return type(self).__name__


class InvalidInput(WorkflowGenerationError):
    """Request failed shape or length checks; never enters the pipeline."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class GenerationUnavailable(WorkflowGenerationError):
    """Generation backend unreachable, misconfigured or rejected the call."""


class UnexpectedResponseShape(WorkflowGenerationError):
    """Generation backend answered with content that is not text."""


class UnrecoverableMalformedDocument(WorkflowGenerationError):
    """Extraction and repair could not produce a parseable document."""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.position = position
        self.line = line
        self.column = column


class InvalidStructure(WorkflowGenerationError):
    """Document parsed but lacks the shape of a workflow."""


class DeploymentFailed(Exception):
    """
    Raised when the n8n instance refuses or cannot receive a workflow.
    """

    def __init__(self, status_code: int, message: str, details: Any = None):
        super().__init__(message)
        self.status_code = int(status_code)
        self.message = message
        self.details = details
