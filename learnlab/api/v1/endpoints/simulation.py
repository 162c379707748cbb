import logging
import openai
from fastapi import APIRouter, Depends, HTTPException

from learnlab.schemas import simulation as simulation_schema
from learnlab.services import simulator
from learnlab.services.llm import get_client
from learnlab.crud import crud_session
from learnlab.crud.crud_session import SessionStore, get_store

router = APIRouter()

def _state_response(session: crud_session.SimulationSession) -> simulation_schema.SimulationStateResponse:
    return simulation_schema.SimulationStateResponse(
        session_id=session.id,
        seed_prompt=session.seed_prompt,
        turn=session.turn,
        history=list(session.history),
        updated_at=session.updated_at,
    )

def _get_or_404(store: SessionStore, session_id: str) -> crud_session.SimulationSession:
    session = crud_session.get_session(store, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Simulation not found")
    return session

@router.post("/simulation", response_model=simulation_schema.SimulationStateResponse, status_code=201)
async def create_simulation(
    simulation_in: simulation_schema.SimulationCreate,
    client: openai.AsyncOpenAI = Depends(get_client),
    store: SessionStore = Depends(get_store),
):
    """
    Starts a new simulation from a seed prompt and returns its opening turn.
    """
    logging.info(f"Starting new simulation for prompt '{simulation_in.prompt[:60]}'")
    try:
        step = await simulator.start_simulation(client, simulation_in.prompt)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session = crud_session.create_session(store, seed_prompt=simulation_in.prompt, turn=step.turn)
    return _state_response(session)

@router.post("/simulation/turn", response_model=simulation_schema.TurnResult)
async def simulation_turn(
    turn_in: simulation_schema.SimulationTurnRequest,
    client: openai.AsyncOpenAI = Depends(get_client),
):
    """
    Produces the next turn for a caller that keeps the history itself.
    The last history entry holds the choice just made.
    """
    if not turn_in.prompt.strip():
        raise HTTPException(status_code=400, detail="Please enter a prompt to simulate.")
    return await simulator.generate_turn(client, turn_in.prompt, turn_in.history)

@router.post("/simulation/{session_id}/choice", response_model=simulation_schema.SimulationStateResponse)
async def choose(
    session_id: str,
    choice_in: simulation_schema.SimulationChoice,
    client: openai.AsyncOpenAI = Depends(get_client),
    store: SessionStore = Depends(get_store),
):
    """
    Applies a choice to a running simulation and generates the next turn.
    """
    session = _get_or_404(store, session_id)
    if session.turn.is_final:
        raise HTTPException(status_code=409, detail="Simulation has already reached its conclusion")
    if choice_in.choice not in session.turn.choices:
        raise HTTPException(status_code=400, detail="Choice is not available in the current scene")

    step = await simulator.advance_simulation(
        client,
        seed_prompt=session.seed_prompt,
        history=session.history,
        previous_description=session.turn.description,
        choice=choice_in.choice,
    )

    # A reset may have happened while the turn was generating.
    session = crud_session.record_turn(store, session_id, history=step.history, turn=step.turn)
    if not session:
        raise HTTPException(status_code=404, detail="Simulation not found")
    return _state_response(session)

@router.get("/simulation/{session_id}", response_model=simulation_schema.SimulationStateResponse)
async def get_simulation_state(session_id: str, store: SessionStore = Depends(get_store)):
    """
    Retrieves the current turn and history of a simulation.
    """
    return _state_response(_get_or_404(store, session_id))

@router.delete("/simulation/{session_id}", status_code=204)
async def reset_simulation(session_id: str, store: SessionStore = Depends(get_store)):
    """
    Resets a simulation, discarding its prompt and history.
    """
    if not crud_session.delete_session(store, session_id):
        raise HTTPException(status_code=404, detail="Simulation not found")
    logging.info(f"Reset simulation {session_id}")
    return
