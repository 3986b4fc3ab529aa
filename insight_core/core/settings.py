"""Paramètres du cœur d'insights, chargés depuis l'environnement et un fichier `.env`.

Le fichier `.env` retenu suit la priorité ENV_FILE > .env.{APP_ENV} > .env (répertoire courant).
Les valeurs vides sont ignorées: `REDIS_URL=` équivaut à une variable absente.
"""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from insight_core.core.constants import (
    DEFAULT_CACHE_KEY_PREFIX,
    DEFAULT_MAX_TOKENS,
    MONTHLY_MAX_TOKENS,
)


def _resolve_env_file(cwd: Path | None = None) -> Path:
    explicit = os.getenv("ENV_FILE")
    if explicit:
        return Path(explicit)
    base = cwd or Path.cwd()
    specific = base / f".env.{os.getenv('APP_ENV', 'dev')}"
    return specific if specific.exists() else base / ".env"


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file(),
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )
    APP_NAME: str = "astro-insights"
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Cache
    REDIS_URL: str | None = None
    REQUIRE_REDIS: bool = False
    CACHE_KEY_PREFIX: str = DEFAULT_CACHE_KEY_PREFIX

    # Générateur distant (API compatible OpenAI, Groq par défaut)
    LLM_API_KEY: str | None = None
    LLM_BASE_URL: str = "https://api.groq.com/openai/v1"
    LLM_MODEL: str = "llama-3.3-70b-versatile"
    LLM_TEMPERATURE: float = 0.8
    LLM_MAX_TOKENS: int = DEFAULT_MAX_TOKENS
    LLM_MONTHLY_MAX_TOKENS: int = MONTHLY_MAX_TOKENS
    LLM_TIMEOUT_S: float = 60.0

    # Miroir distant des profils (best-effort)
    PROFILE_SYNC_URL: str | None = None
    PROFILE_SYNC_API_KEY: str | None = None
    PROFILE_SYNC_TIMEOUT_S: float = 5.0


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
