"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "HobbyPath Backend"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./hobbypath.db"
    llm_api_key: str | None = None
    llm_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    llm_model: str = "gemini-1.5-flash"
    llm_temperature: float = 0.8
    llm_top_p: float = 0.9
    llm_top_k: int = 40
    llm_max_output_tokens: int = 4000
    llm_timeout_seconds: float = 60.0
    resources_enabled: bool = True
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "hobbypath"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
