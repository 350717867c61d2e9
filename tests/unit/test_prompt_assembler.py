from __future__ import annotations

from flowforge.application.services.prompt_assembler import PromptAssembler
from flowforge.domain.schemas.workflow import GenerationContext


def test_empty_and_missing_clarifications_are_equivalent() -> None:
    assembler = PromptAssembler()

    without = assembler.assemble("Sync leads to a sheet", None, None, "KB")
    empty = assembler.assemble("Sync leads to a sheet", [], None, "KB")

    assert without == empty
    assert "Additional clarifications" not in empty.user_instructions


def test_user_prompt_lists_clarifications_and_present_context_fields() -> None:
    assembler = PromptAssembler()
    context = GenerationContext(
        industry="Retail", tools=["Gmail", "Slack", "Gmail"], complexity="medium"
    )

    payload = assembler.assemble(
        "Notify the team about new orders",
        ["Only orders above 100 EUR", "Post in #sales"],
        context,
        "KB",
    )

    assert payload.user_instructions == (
        "Create an n8n workflow for: Notify the team about new orders"
        "\n\nAdditional clarifications:\nOnly orders above 100 EUR\nPost in #sales"
        "\n\nContext:"
        "\n- Industry: Retail"
        "\n- Preferred tools: Gmail, Slack"
        "\n- Complexity level: medium"
    )


def test_context_section_skips_absent_fields() -> None:
    assembler = PromptAssembler()

    payload = assembler.assemble("Archive invoices", None, GenerationContext(complexity="simple"), "")

    assert payload.user_instructions == (
        "Create an n8n workflow for: Archive invoices\n\nContext:\n- Complexity level: simple"
    )


def test_empty_context_emits_no_context_section() -> None:
    assembler = PromptAssembler()

    payload = assembler.assemble("Archive invoices", None, GenerationContext(tools=[]), "")

    assert payload.user_instructions == "Create an n8n workflow for: Archive invoices"


def test_system_prompt_embeds_knowledge_and_output_contract() -> None:
    assembler = PromptAssembler()

    payload = assembler.assemble("Archive invoices", None, None, "## Marker Knowledge Section")

    system = payload.system_instructions
    assert "## n8n Documentation Context\n## Marker Knowledge Section" in system
    assert '"name"' in system and '"nodes"' in system
    assert '"connections"' in system and '"settings"' in system
    assert "NO trailing commas before closing braces/brackets" in system
    assert "LIMIT workflow to 15 nodes maximum" in system
    assert "under 500 chars each" in system
    assert system.rstrip().endswith("can be parsed without errors.")
    assert "Return ONLY the valid n8n workflow JSON" in system


def test_assembly_is_deterministic() -> None:
    assembler = PromptAssembler()
    context = GenerationContext(industry="Health")

    first = assembler.assemble("Triage inbound forms", ["Urgent first"], context, "KB")
    second = assembler.assemble("Triage inbound forms", ["Urgent first"], context, "KB")

    assert first == second
