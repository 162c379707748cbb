from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

class EnglishTool(str, Enum):
    STORY = "story"
    VOCABULARY = "vocabulary"
    GRAMMAR = "grammar"
    ANALYSIS = "analysis"

class ToolState(BaseModel):
    tool: EnglishTool
    input: str
    output: str = ""
    error: Optional[str] = None

class ToolRequest(BaseModel):
    text: str = Field(min_length=1)
