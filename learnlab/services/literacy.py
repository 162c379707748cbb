import logging
from typing import Dict, NamedTuple

import openai

from learnlab.core.config import settings
from learnlab.schemas.literacy import EnglishTool, ToolState
from learnlab.services.llm import complete_text

logger = logging.getLogger(__name__)

class ToolSpec(NamedTuple):
    template: str
    failure_message: str

TOOLS: Dict[EnglishTool, ToolSpec] = {
    EnglishTool.STORY: ToolSpec(
        template='You are a creative storyteller. Write a short, engaging story for a student based on this idea: "{text}"',
        failure_message="Failed to generate story. Please try again.",
    ),
    EnglishTool.VOCABULARY: ToolSpec(
        template='You are a helpful dictionary. For the word "{text}", provide its definition, part of speech, '
                 'and three example sentences. Format the output clearly.',
        failure_message="Failed to get vocabulary help. Please try again.",
    ),
    EnglishTool.GRAMMAR: ToolSpec(
        template='You are an expert English teacher. Correct the grammar in the following text. Provide the corrected '
                 'version and a brief, clear explanation of the changes made.\n\nTEXT: "{text}"',
        failure_message="Failed to correct grammar. Please try again.",
    ),
    EnglishTool.ANALYSIS: ToolSpec(
        template='You are a literary analyst. Provide a brief analysis of the following text, focusing on its theme, '
                 'tone, and any notable literary devices used.\n\nTEXT: "{text}"',
        failure_message="Failed to analyze text. Please try again.",
    ),
}


async def run_tool(client: openai.AsyncOpenAI, tool: EnglishTool, text: str) -> ToolState:
    """
    Runs one literacy tool. Failures are reported in the returned state, never raised.
    """
    spec = TOOLS[tool]
    state = ToolState(tool=tool, input=text)
    logger.info(f"Running literacy tool '{tool.value}'")
    try:
        state.output = await complete_text(client, spec.template.format(text=text), settings.OPENAI_TOOL_MODEL)
    except Exception as e:
        logger.error(f"Literacy tool '{tool.value}' failed: {e}")
        state.output = spec.failure_message
        state.error = str(e)
    return state


async def generate_story(client: openai.AsyncOpenAI, prompt: str) -> str:
    return (await run_tool(client, EnglishTool.STORY, prompt)).output

async def generate_vocabulary_help(client: openai.AsyncOpenAI, word: str) -> str:
    return (await run_tool(client, EnglishTool.VOCABULARY, word)).output

async def correct_grammar(client: openai.AsyncOpenAI, text: str) -> str:
    return (await run_tool(client, EnglishTool.GRAMMAR, text)).output

async def analyze_text(client: openai.AsyncOpenAI, text: str) -> str:
    return (await run_tool(client, EnglishTool.ANALYSIS, text)).output
