import openai
from fastapi import APIRouter, Depends

from learnlab.schemas.literacy import EnglishTool, ToolRequest, ToolState
from learnlab.services import literacy
from learnlab.services.llm import get_client

router = APIRouter()

@router.post("/literacy/{tool}", response_model=ToolState)
async def run_literacy_tool(
    tool: EnglishTool,
    tool_in: ToolRequest,
    client: openai.AsyncOpenAI = Depends(get_client),
):
    """
    Runs one of the English literacy tools on the submitted text.
    """
    return await literacy.run_tool(client, tool, tool_in.text)
