import openai
from functools import lru_cache
from typing import Optional

from learnlab.core.config import settings

@lru_cache(maxsize=1)
def get_client() -> openai.AsyncOpenAI:
    """
    Shared client for the OpenAI-compatible generation API.
    """
    return openai.AsyncOpenAI(api_key=settings.OPENAI_API_KEY, base_url=settings.OPENAI_BASE_URL)


def strip_code_fence(text: str) -> str:
    """
    Removes a surrounding markdown code fence (```json ... ``` or ``` ... ```).
    """
    text = text.strip()
    if text.startswith("```"):
        first_newline = text.find("\n")
        # ```json{...}``` on a single line
        if first_newline == -1:
            text = text[3:]
            if text.startswith("json"):
                text = text[4:]
        else:
            text = text[first_newline + 1:]
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def extract_json_from_string(text: str) -> Optional[str]:
    """
    Extracts a JSON object string from a larger string, cleaning up markdown.
    """
    if not text:
        return None

    text = strip_code_fence(text)
    first_bracket_pos = text.find('{')
    if first_bracket_pos == -1:
        return None
    last_bracket_pos = text.rfind('}')
    if last_bracket_pos == -1 or last_bracket_pos < first_bracket_pos:
        return None

    return text[first_bracket_pos:last_bracket_pos+1]


async def complete_text(client: openai.AsyncOpenAI, prompt: str, model: str, **kwargs) -> str:
    """
    Sends a single-message chat completion and returns the message content.
    """
    response = await client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        **kwargs,
    )
    return response.choices[0].message.content or ""
