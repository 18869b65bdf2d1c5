# api/config.py
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict


class ConfigurationError(RuntimeError):
    """Raised at cold start when a required environment value is missing."""


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    gemini_api_key: str
    langfuse_secret_key: Optional[str] = None
    langfuse_public_key: Optional[str] = None
    langfuse_host: Optional[str] = None

    @property
    def tracing_enabled(self) -> bool:
        return all([self.langfuse_secret_key, self.langfuse_public_key, self.langfuse_host])


def load_settings() -> Settings:
    """Reads the environment once. Local runs may keep the keys in a .env file."""
    load_dotenv()

    gemini_api_key = os.getenv("GEMINI_API_KEY")
    if not gemini_api_key:
        raise ConfigurationError(
            "Server Configuration Error: GEMINI_API_KEY is not set in the Vercel environment."
        )

    return Settings(
        gemini_api_key=gemini_api_key,
        langfuse_secret_key=os.getenv("LANGFUSE_SECRET_KEY"),
        langfuse_public_key=os.getenv("LANGFUSE_PUBLIC_KEY"),
        langfuse_host=os.getenv("LANGFUSE_HOST"),
    )
