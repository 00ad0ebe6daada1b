"""Application configuration from environment."""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "aichat-api"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS (comma-separated origins, e.g. http://localhost:3000,http://127.0.0.1:3000)
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Provider used when a request does not name one (openai | ollama | gemini | anthropic)
    default_provider: str = "ollama"
    llm_timeout_seconds: float = 120.0

    # LLM: OpenAI
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"

    # LLM: Ollama (local, no key)
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"

    # LLM: Gemini
    gemini_api_key: Optional[str] = None
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.0-flash"

    # LLM: Anthropic
    anthropic_api_key: Optional[str] = None
    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_model: str = "claude-3-5-haiku-latest"
    anthropic_max_tokens: int = 1024

    @property
    def cors_origin_list(self) -> list[str]:
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        if not origins:
            return ["http://localhost:3000", "http://127.0.0.1:3000"]
        return origins


@lru_cache
def get_settings() -> Settings:
    return Settings()
