from __future__ import annotations

from flowforge.application.services.knowledge_selector import (
    BASELINE_HEADER,
    KNOWLEDGE_TOPICS,
    KnowledgeSelector,
)

CORPUS = """# Reference

## Node Type Basics
Node Type identifies which integration a node runs.

## Node Properties
Each node carries id, name, type and parameters.

Node Property Options
Flags such as disabled.

## Expressions
Use double curly braces.
"""


class _StaticCorpus:
    def __init__(self, text: str):
        self.text = text


def _addendum(name: str) -> str:
    return next(topic.addendum for topic in KNOWLEDGE_TOPICS if topic.name == name)


def test_description_without_keywords_yields_exact_baseline() -> None:
    selector = KnowledgeSelector(_StaticCorpus(CORPUS))

    output = selector.select("Summarize my notes into a document")

    assert output == selector.baseline()


def test_baseline_embeds_node_type_and_properties_excerpts() -> None:
    selector = KnowledgeSelector(_StaticCorpus(CORPUS))

    baseline = selector.baseline()

    assert baseline.startswith(BASELINE_HEADER)
    assert "Node Type Basics\nNode Type identifies which integration a node runs.\n" in baseline
    assert "\n## Node Properties\nEach node carries id, name, type and parameters." in baseline
    assert "Node Property Options" not in baseline
    assert "Expressions" not in baseline


def test_keyword_appends_topic_after_baseline() -> None:
    selector = KnowledgeSelector(_StaticCorpus(CORPUS))

    output = selector.select("Call me when the webhook fires")

    baseline = selector.baseline()
    assert output.startswith(baseline)
    assert _addendum("trigger") in output[len(baseline) :]


def test_keyword_match_is_case_insensitive() -> None:
    selector = KnowledgeSelector(_StaticCorpus(CORPUS))

    output = selector.select("Post a summary to SLACK")

    assert _addendum("chat") in output


def test_addenda_follow_declaration_order_not_input_order() -> None:
    selector = KnowledgeSelector(_StaticCorpus(CORPUS))

    output = selector.select("Every weekly run, read the postgres table and email the result")

    email = output.index(_addendum("email"))
    database = output.index(_addendum("database"))
    scheduling = output.index(_addendum("scheduling"))
    assert email < database < scheduling


def test_empty_description_returns_baseline_only() -> None:
    selector = KnowledgeSelector(_StaticCorpus(CORPUS))

    assert selector.select("") == selector.baseline()


def test_unavailable_corpus_degrades_to_fixed_baseline() -> None:
    selector = KnowledgeSelector(_StaticCorpus(""))

    output = selector.select("Send an email when a form is submitted")

    assert output == BASELINE_HEADER
