from __future__ import annotations

import time

import structlog

from flowforge.application.services.document_repair import DocumentRepairEngine
from flowforge.application.services.knowledge_selector import KnowledgeSelector
from flowforge.application.services.prompt_assembler import PromptAssembler
from flowforge.application.services.response_extractor import ResponseExtractor
from flowforge.application.services.workflow_validator import WorkflowValidator
from flowforge.domain.exceptions import WorkflowGenerationError
from flowforge.domain.interfaces.generation_provider import GenerationProvider
from flowforge.domain.schemas.workflow import GenerationRequest, GenerationResult

logger = structlog.get_logger(__name__)

ESTIMATED_RUNTIME_MS = 1000


class WorkflowGenerationService:
    """
    Runs the generation-and-recovery pipeline for a single request:
    knowledge selection, prompt assembly, one backend call, extraction,
    repair and validation. Every failure is folded into the returned
    `GenerationResult`; nothing is retried.
    """

    def __init__(
        self,
        selector: KnowledgeSelector,
        provider: GenerationProvider,
        assembler: PromptAssembler | None = None,
        extractor: ResponseExtractor | None = None,
        repair_engine: DocumentRepairEngine | None = None,
        validator: WorkflowValidator | None = None,
    ):
        self._selector = selector
        self._provider = provider
        self._assembler = assembler or PromptAssembler()
        self._extractor = extractor or ResponseExtractor()
        self._repair_engine = repair_engine or DocumentRepairEngine()
        self._validator = validator or WorkflowValidator()

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        started = time.perf_counter()
        try:
            return await self._run(request, started)
        except WorkflowGenerationError as exc:
            logger.warning(
                "workflow_generation_failed",
                error_code=exc.code,
                error=exc.message,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return GenerationResult.failure(error=exc.message, error_code=exc.code)
        except Exception as exc:
            logger.exception("workflow_generation_crashed", error=str(exc))
            return GenerationResult.failure(
                error=str(exc) or "Unknown error occurred", error_code="InternalError"
            )

    async def _run(self, request: GenerationRequest, started: float) -> GenerationResult:
        knowledge = self._selector.select(request.description)
        payload = self._assembler.assemble(
            description=request.description,
            clarifications=request.clarifications,
            context=request.context,
            knowledge_text=knowledge,
        )

        raw = await self._provider.generate(payload)

        candidate = self._extractor.extract(raw)
        parsed = self._repair_engine.parse(candidate.text)
        validated = self._validator.validate(parsed)

        logger.info(
            "workflow_generation_succeeded",
            workflow_name=validated.summary,
            node_count=len(validated.workflow.nodes),
            credential_kinds=sorted(validated.required_credentials),
            strategy=candidate.strategy,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return GenerationResult(
            success=True,
            workflow=validated.workflow,
            documentation=validated.documentation,
            summary=validated.summary,
            required_credentials=validated.required_credentials,
            estimated_runtime=ESTIMATED_RUNTIME_MS,
        )
