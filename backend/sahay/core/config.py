from __future__ import annotations

import os
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    APP_NAME: str = "Sahay API"
    ENV: str = Field(default=os.getenv("ENV", "local"))
    DEBUG: bool = Field(default=os.getenv("DEBUG", "false").lower() == "true")
    LOG_FORMAT: str = Field(default=os.getenv("LOG_FORMAT", "console"))  # "console" | "json"
    LOG_LEVEL: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))

    # LLM gateway (OpenAI-compatible chat completions)
    LLM_API_KEY: str | None = None
    LLM_BASE_URL: str = Field(default=os.getenv("LLM_BASE_URL", "https://ai.gateway.lovable.dev/v1"))
    LLM_MODEL: str = Field(default=os.getenv("LLM_MODEL", "google/gemini-2.5-flash"))
    LLM_TEMPERATURE: float = Field(default=float(os.getenv("LLM_TEMPERATURE", "0.7")))
    LLM_TIMEOUT_S: float = Field(default=float(os.getenv("LLM_TIMEOUT_S", "30")))
    LLM_MAX_RETRIES: int = Field(default=int(os.getenv("LLM_MAX_RETRIES", "2")))

    # Safety
    CRISIS_KEYWORDS_FILE: str | None = None  # JSON {"high": [...], "moderate": [...], "low": [...]}
    CRISIS_REGION: str = Field(default=os.getenv("CRISIS_REGION", "IN"))

    class Config:
        env_file = (".env.backend", ".env.local", ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Cached Settings instance. Call anywhere.
    """
    return Settings()
