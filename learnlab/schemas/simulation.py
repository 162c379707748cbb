from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, model_validator

# --- Shared Models ---

class HistoryEntry(BaseModel):
    """One past turn: the choice made and the scene it was made in."""
    model_config = ConfigDict(frozen=True)

    choice: str
    description: str

class TurnResult(BaseModel):
    description: str
    choices: List[str] = Field(default_factory=list)
    is_final: bool = False
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def _final_turn_has_no_choices(self):
        # A concluded simulation offers nothing further, whatever the model sent.
        if self.is_final and self.choices:
            self.choices = []
        return self

# --- Model Output ---

class SimulationResponse(BaseModel):
    """
    The structured object the text model is asked to return for every turn.
    Types are strict so that e.g. "false" is rejected rather than coerced.
    """
    model_config = ConfigDict(extra="ignore")

    description: StrictStr = Field(
        min_length=1,
        description="A detailed description of the current state of the simulation."
    )
    choices: List[StrictStr] = Field(
        description="A list of 3-4 actions the user can take next. "
                    "If the simulation is over, this can be an empty array."
    )
    is_final_state: StrictBool = Field(
        description="Set to true if the simulation has reached a conclusive end."
    )
    image_prompt: StrictStr = Field(
        description="A vivid, descriptive prompt for an image generation model that visually "
                    "represents the current scene. Concise but detailed, suitable for a text-to-image AI."
    )

    @model_validator(mode="after")
    def _scene_can_continue(self):
        if not self.description.strip():
            raise ValueError("description is blank")
        if not self.is_final_state and not self.choices:
            raise ValueError("an ongoing simulation must offer at least one choice")
        return self

# --- Request Models ---

class SimulationCreate(BaseModel):
    prompt: str = Field(min_length=1)

class SimulationChoice(BaseModel):
    choice: str = Field(min_length=1)

class SimulationTurnRequest(BaseModel):
    prompt: str = Field(min_length=1)
    history: List[HistoryEntry] = Field(default_factory=list)

# --- Response Models ---

class SimulationStateResponse(BaseModel):
    session_id: str
    seed_prompt: str
    turn: TurnResult
    history: List[HistoryEntry]
    updated_at: datetime
