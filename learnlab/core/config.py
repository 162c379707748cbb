from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # OpenAI-compatible API configuration
    OPENAI_API_KEY: str
    OPENAI_BASE_URL: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_TOOL_MODEL: str = "gpt-4o-mini"
    OPENAI_IMAGE_MODEL: str = "dall-e-3"
    IMAGE_SIZE: str = "1024x1024"
    SIMULATION_TEMPERATURE: float = 0.8

    # Idle simulation cleanup threshold (in hours)
    INACTIVE_SESSION_CLEANUP_HOURS: int = 6

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'

settings = Settings()
