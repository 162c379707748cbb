"""Test doubles and canned model responses."""

import json
from types import SimpleNamespace


def _completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    """Stands in for openai.AsyncOpenAI.

    ``texts`` are returned (or raised, if exceptions) by successive chat
    completions. ``image`` is the base64 payload, an exception to raise, or None.
    """

    def __init__(self, texts=(), image="aW1hZ2U="):
        self.texts = list(texts)
        self.image = image
        self.text_calls = []
        self.image_calls = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
        self.images = SimpleNamespace(generate=self._generate)

    async def _create(self, **kwargs):
        self.text_calls.append(kwargs)
        item = self.texts.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, dict):
            item = json.dumps(item)
        return _completion(item)

    async def _generate(self, **kwargs):
        self.image_calls.append(kwargs)
        if isinstance(self.image, Exception):
            raise self.image
        return SimpleNamespace(data=[SimpleNamespace(b64_json=self.image)])

    def prompt(self, index=-1) -> str:
        return self.text_calls[index]["messages"][0]["content"]


PHOTOSYNTHESIS = {
    "description": "A leaf sits in sunlight...",
    "choices": ["Increase light", "Add water", "Wait"],
    "is_final_state": False,
    "image_prompt": "A green leaf glowing in warm sunlight",
}

AFTER_WAIT = {
    "description": "Hours pass and the stomata close as the afternoon cools.",
    "choices": ["Open the stomata", "Measure oxygen"],
    "is_final_state": False,
    "image_prompt": "A leaf in the cool afternoon",
}

CONCLUSION = {
    "description": "The leaf has produced glucose and released oxygen.",
    "choices": ["Start over"],
    "is_final_state": True,
    "image_prompt": "A healthy plant at dusk",
}
