"""Tests for the English literacy tools."""

import pytest

from helpers import FakeClient
from learnlab.schemas.literacy import EnglishTool
from learnlab.services import literacy


async def test_run_tool_returns_model_text() -> None:
    client = FakeClient(texts=["Once upon a time..."])

    state = await literacy.run_tool(client, EnglishTool.STORY, "a brave turtle")

    assert state.output == "Once upon a time..."
    assert state.error is None
    assert state.input == "a brave turtle"
    assert '"a brave turtle"' in client.prompt()


@pytest.mark.parametrize(
    "tool, message",
    [
        (EnglishTool.STORY, "Failed to generate story. Please try again."),
        (EnglishTool.VOCABULARY, "Failed to get vocabulary help. Please try again."),
        (EnglishTool.GRAMMAR, "Failed to correct grammar. Please try again."),
        (EnglishTool.ANALYSIS, "Failed to analyze text. Please try again."),
    ],
)
async def test_failure_returns_generic_message(tool, message) -> None:
    client = FakeClient(texts=[RuntimeError("boom")])

    state = await literacy.run_tool(client, tool, "text")

    assert state.output == message
    assert state.error == "boom"


async def test_named_wrappers_pick_their_prompt() -> None:
    client = FakeClient(texts=["a", "b", "c", "d"])

    await literacy.generate_story(client, "dragons")
    await literacy.generate_vocabulary_help(client, "ephemeral")
    await literacy.correct_grammar(client, "he go home")
    await literacy.analyze_text(client, "The fog comes on little cat feet.")

    assert "storyteller" in client.prompt(0)
    assert 'For the word "ephemeral"' in client.prompt(1)
    assert "Correct the grammar" in client.prompt(2)
    assert "literary analyst" in client.prompt(3)


def test_every_tool_is_registered() -> None:
    assert set(literacy.TOOLS) == set(EnglishTool)


async def test_braces_in_user_text_are_kept() -> None:
    client = FakeClient(texts=["ok"])
    await literacy.run_tool(client, EnglishTool.GRAMMAR, "a {weird} sentence")
    assert "a {weird} sentence" in client.prompt()
