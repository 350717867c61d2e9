from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

import structlog

from flowforge.domain.interfaces.knowledge_source import KnowledgeSource

logger = structlog.get_logger(__name__)


BASELINE_HEADER = """
## n8n Platform Overview
n8n is a workflow automation platform with 400+ integrations, native AI capabilities, and flexible node-based architecture.

### Key Capabilities:
- Code When You Need It: Write JavaScript/Python, add npm packages, or use visual interface
- AI-Native Platform: Build AI agent workflows based on LangChain
- 400+ integrations available
- Self-host with fair-code license or use cloud offering

## Node Structure Fundamentals
"""

_NODE_TYPE_RE = re.compile(r"Node Type[\s\S]*?(?=\n## |\Z)")
_NODE_PROPERTIES_RE = re.compile(r"Node Properties[\s\S]*?(?=\n## |Node Property Options)")


@dataclass(frozen=True)
class KnowledgeTopic:
    name: str
    keywords: Tuple[str, ...]
    addendum: str

    def matches(self, lowered_description: str) -> bool:
        return any(keyword in lowered_description for keyword in self.keywords)


KNOWLEDGE_TOPICS: Tuple[KnowledgeTopic, ...] = (
    KnowledgeTopic(
        name="email",
        keywords=("email", "gmail", "smtp"),
        addendum="""
## Email Integration Notes
- Use Gmail node for Gmail-specific operations
- Use SMTP/IMAP nodes for general email providers
- Always include proper authentication setup
- Consider rate limits for bulk operations
""",
    ),
    KnowledgeTopic(
        name="trigger",
        keywords=("webhook", "trigger", "form"),
        addendum="""
## Webhook & Trigger Guidelines
- Webhook nodes respond to external HTTP requests
- Trigger nodes start workflow execution
- Always validate incoming data
- Use proper HTTP response codes
- Include error handling for invalid requests
""",
    ),
    KnowledgeTopic(
        name="chat",
        keywords=("slack", "discord", "teams"),
        addendum="""
## Chat Platform Integration
- Use official platform nodes when available
- Authenticate with proper API tokens/OAuth
- Format messages according to platform requirements
- Handle rate limits and message size restrictions
""",
    ),
    KnowledgeTopic(
        name="database",
        keywords=("database", "sql", "postgres", "mysql"),
        addendum="""
## Database Integration
- Use specific database nodes (PostgreSQL, MySQL, etc.)
- Always use parameterized queries to prevent SQL injection
- Handle connection pooling and timeouts
- Validate data before database operations
""",
    ),
    KnowledgeTopic(
        name="api",
        keywords=("api", "http", "rest"),
        addendum="""
## API Integration Best Practices
- Use HTTP Request node for custom API calls
- Include proper authentication headers
- Handle rate limiting with appropriate delays
- Validate API responses and handle errors
- Use appropriate HTTP methods (GET, POST, PUT, DELETE)
""",
    ),
    KnowledgeTopic(
        name="scheduling",
        keywords=("schedule", "cron", "daily", "weekly"),
        addendum="""
## Scheduling Guidelines
- Use Schedule Trigger node for time-based automation
- Support cron expressions for complex schedules
- Consider timezone settings
- Include proper error handling for scheduled tasks
""",
    ),
)


class KnowledgeSelector:
    """
    Picks the reference material used to prime the generator.

    The baseline (platform overview plus node structure excerpts from the
    corpus) is always emitted; topical addenda are appended in declaration
    order when any of their keywords occurs in the description.
    """

    def __init__(
        self,
        corpus: KnowledgeSource,
        topics: Tuple[KnowledgeTopic, ...] = KNOWLEDGE_TOPICS,
    ):
        self._corpus = corpus
        self._topics = topics

    def baseline(self) -> str:
        corpus_text = self._corpus.text
        sections = BASELINE_HEADER
        if not corpus_text:
            return sections

        node_type = _NODE_TYPE_RE.search(corpus_text)
        if node_type:
            sections += node_type.group(0)

        node_properties = _NODE_PROPERTIES_RE.search(corpus_text)
        if node_properties:
            sections += "\n## " + node_properties.group(0)
        return sections

    def select(self, description: str) -> str:
        sections = self.baseline()
        if not self._corpus.text:
            logger.info("knowledge_topics_skipped", reason="corpus_unavailable")
            return sections

        lowered = (description or "").lower()
        matched = [topic for topic in self._topics if topic.matches(lowered)]
        for topic in matched:
            sections += topic.addendum

        logger.info(
            "knowledge_selected",
            topics=[topic.name for topic in matched],
            chars=len(sections),
        )
        return sections
