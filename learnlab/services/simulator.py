import json
import logging
from typing import NamedTuple, Sequence, Tuple

import openai
from pydantic import ValidationError

from learnlab.core.config import settings
from learnlab.core.errors import GenerationFailure
from learnlab.schemas.simulation import HistoryEntry, SimulationResponse, TurnResult
from learnlab.services.illustrator import render_scene
from learnlab.services.llm import extract_json_from_string
from learnlab.services.outcomes import CallError, Ok, Outcome, ParseError, best_effort

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to generate simulation step. The model may have returned an invalid format."

History = Tuple[HistoryEntry, ...]

class SimulationStep(NamedTuple):
    turn: TurnResult
    history: History


def _response_format() -> dict:
    return {
        "type": "json_schema",
        "json_schema": {
            "name": "simulation_step",
            "schema": SimulationResponse.model_json_schema(),
        },
    }


def build_opening_prompt(seed_prompt: str) -> str:
    return f"""You are an expert educator and an interactive simulation engine. Your goal is to create an engaging, choice-based simulation to help a student learn.
Based on the user's prompt, provide an initial scenario description, 3-4 choices for the user to proceed, and a vivid, descriptive prompt for an image generation model to create a visual for this scene. The image prompt should be concise but detailed.
Set "is_final_state" to false unless the prompt is resolved immediately.

USER PROMPT: "{seed_prompt}"

Your response MUST be a JSON object with the keys "description", "choices", "is_final_state" and "image_prompt". Provide only the JSON object."""


def format_transcript(history: Sequence[HistoryEntry]) -> str:
    return "\n\n".join(
        f'The scene was: "{entry.description}"\nThe user chose: "{entry.choice}"'
        for entry in history
    )


def build_continuation_prompt(seed_prompt: str, history: Sequence[HistoryEntry]) -> str:
    last_choice = history[-1].choice
    return f"""Continue the interactive simulation.
ORIGINAL PROMPT: "{seed_prompt}"

SIMULATION HISTORY:
{format_transcript(history)}

The user has just chosen: "{last_choice}".

Describe what happens next as a result of this choice. Then, provide 3-4 new choices for the user to continue the simulation, and a new image generation prompt for the updated scene.
If this choice leads to a natural conclusion of the simulation, set "is_final_state" to true, provide a concluding description, an image prompt, and the choices array can be empty.

Your response MUST be a JSON object with the keys "description", "choices", "is_final_state" and "image_prompt". Provide only the JSON object."""


def build_prompt(seed_prompt: str, history: Sequence[HistoryEntry]) -> str:
    if not history:
        return build_opening_prompt(seed_prompt)
    return build_continuation_prompt(seed_prompt, history)


def parse_simulation_response(raw_content: str) -> Outcome[SimulationResponse]:
    """
    Parses raw model output into a SimulationResponse.
    """
    json_str = extract_json_from_string(raw_content or "")
    if not json_str:
        return ParseError("LLM returned no JSON object for the simulation step.", raw_content or "")
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        return ParseError(f"Invalid JSON: {e}", raw_content)
    if not isinstance(data, dict):
        return ParseError("Simulation step is not a JSON object.", raw_content)
    try:
        return Ok(SimulationResponse.model_validate(data))
    except ValidationError as e:
        return ParseError(f"Simulation step does not match the schema: {e}", raw_content)


async def request_step(client: openai.AsyncOpenAI, seed_prompt: str, history: Sequence[HistoryEntry]) -> Outcome[SimulationResponse]:
    """
    Required stage: one text request for the next scene.
    """
    prompt = build_prompt(seed_prompt, history)
    try:
        response = await client.chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=[{"role": "user", "content": prompt}],
            temperature=settings.SIMULATION_TEMPERATURE,
            response_format=_response_format(),
        )
        raw_content = response.choices[0].message.content
    except Exception as e:
        return CallError(str(e))
    return parse_simulation_response(raw_content)


async def generate_turn(client: openai.AsyncOpenAI, seed_prompt: str, history: Sequence[HistoryEntry]) -> TurnResult:
    """
    Produces one simulation turn: the scene text (required) followed by its
    illustration (best effort). Raises GenerationFailure if no scene is produced.
    """
    logger.info(f"Generating simulation turn {len(history)} for prompt '{seed_prompt[:60]}'")
    outcome = await request_step(client, seed_prompt, history)

    if isinstance(outcome, CallError):
        logger.error(f"Simulation text request failed: {outcome.reason}")
        raise GenerationFailure(FAILURE_MESSAGE, kind="call")
    if isinstance(outcome, ParseError):
        logger.error(f"Failed to parse simulation step: {outcome.reason}")
        raise GenerationFailure(FAILURE_MESSAGE, kind="parse")

    step = outcome.value
    image_url = await best_effort(render_scene, client, step.image_prompt, label="scene illustration")

    return TurnResult(
        description=step.description,
        choices=list(step.choices),
        is_final=step.is_final_state,
        image_url=image_url,
    )


async def start_simulation(client: openai.AsyncOpenAI, seed_prompt: str) -> SimulationStep:
    """
    Starts a simulation with an empty history and returns turn 0.
    """
    if not seed_prompt or not seed_prompt.strip():
        raise ValueError("Please enter a prompt to simulate.")
    turn = await generate_turn(client, seed_prompt, ())
    return SimulationStep(turn=turn, history=())


async def advance_simulation(
    client: openai.AsyncOpenAI,
    seed_prompt: str,
    history: Sequence[HistoryEntry],
    previous_description: str,
    choice: str,
) -> SimulationStep:
    """
    Records ``choice`` against the scene it was made in and requests the next
    turn. The caller's history is never modified; the extended copy is only
    returned once the turn has been generated.
    """
    new_history = tuple(history) + (HistoryEntry(choice=choice, description=previous_description),)
    turn = await generate_turn(client, seed_prompt, new_history)
    return SimulationStep(turn=turn, history=new_history)
