"""
Workflow Container - flowforge Infrastructure Layer

Centralizes service instantiation and dependency injection.
Services are stateless; the knowledge corpus is the only shared value and
it is frozen after its first read.
"""

from typing import Optional

from flowforge.application.services.knowledge_selector import KnowledgeSelector
from flowforge.application.services.workflow_generation_service import WorkflowGenerationService
from flowforge.core.settings import settings
from flowforge.domain.interfaces.generation_provider import GenerationProvider
from flowforge.infrastructure.ai.langchain_generation_provider import LangChainGenerationProvider
from flowforge.infrastructure.deployment.n8n_client import N8nDeploymentClient
from flowforge.infrastructure.knowledge.corpus import FileKnowledgeCorpus


class WorkflowContainer:
    """
    IoC Container for workflow generation services.
    """

    def __init__(self, generation_provider: Optional[GenerationProvider] = None):
        # Lazy initialization of services
        self._knowledge_corpus = None
        self._knowledge_selector = None
        self._generation_provider = generation_provider
        self._generation_service = None
        self._deployment_client = None

    @property
    def knowledge_corpus(self) -> FileKnowledgeCorpus:
        if self._knowledge_corpus is None:
            self._knowledge_corpus = FileKnowledgeCorpus(settings.KNOWLEDGE_CORPUS_PATH)
        return self._knowledge_corpus

    @property
    def knowledge_selector(self) -> KnowledgeSelector:
        if self._knowledge_selector is None:
            self._knowledge_selector = KnowledgeSelector(self.knowledge_corpus)
        return self._knowledge_selector

    @property
    def generation_provider(self) -> GenerationProvider:
        if self._generation_provider is None:
            self._generation_provider = LangChainGenerationProvider()
        return self._generation_provider

    @property
    def generation_service(self) -> WorkflowGenerationService:
        if self._generation_service is None:
            self._generation_service = WorkflowGenerationService(
                selector=self.knowledge_selector,
                provider=self.generation_provider,
            )
        return self._generation_service

    @property
    def deployment_client(self) -> N8nDeploymentClient:
        if self._deployment_client is None:
            self._deployment_client = N8nDeploymentClient()
        return self._deployment_client

    async def startup(self) -> None:
        # Load the corpus before serving so no request pays for the read.
        _ = self.knowledge_corpus.text

    async def shutdown(self) -> None:
        return None
