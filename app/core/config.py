"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.

Every upstream/secret value defaults to an empty string: routes check for
presence at request time and answer 500 when something they need is missing,
so the service still boots (and serves /health) with a partial configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # n8n read proxy (recruiter dashboard data)
    N8N_READ_URL: str = ""
    N8N_READ_AUTH: str = ""

    # n8n write proxy (resume intake webhook)
    N8N_WEBHOOK_URL: str = ""
    N8N_WEBHOOK_SECRET: str = ""

    # Cloudflare Turnstile (verification is enabled by the secret alone)
    TURNSTILE_SECRET_KEY: str = ""
    TURNSTILE_SITE_KEY: str = ""

    # Recruiter dashboard path secret
    RECRUITER_KEY: str = ""

    # Origin used by the same-origin guard; derived from the request when empty
    PUBLIC_ORIGIN: str = ""

    # Rate limiting
    RATE_LIMIT_TOKENS: int = 30
    RATE_LIMIT_WINDOW_SECONDS: int = 300
    RATE_LIMIT_SWEEP_MINUTES: int = 5

    # Outbound HTTP
    UPSTREAM_TIMEOUT_SECONDS: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
