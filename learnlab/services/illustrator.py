import logging
from typing import Optional

import openai

from learnlab.core.config import settings

logger = logging.getLogger(__name__)

async def render_scene(client: openai.AsyncOpenAI, image_prompt: str) -> Optional[str]:
    """
    Renders a scene illustration and returns it as a PNG data URL, or None when
    the response carries no image payload.
    """
    if not image_prompt or not image_prompt.strip():
        return None

    logger.info("Generating scene illustration...")
    result = await client.images.generate(
        model=settings.OPENAI_IMAGE_MODEL,
        prompt=image_prompt,
        size=settings.IMAGE_SIZE,
        n=1,
        response_format="b64_json",
    )
    for image in result.data or []:
        if getattr(image, "b64_json", None):
            return f"data:image/png;base64,{image.b64_json}"

    logger.warning("Image response contained no base64 payload.")
    return None
