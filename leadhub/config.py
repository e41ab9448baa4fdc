from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    LEADHUB_DB_URL: str = "sqlite+aiosqlite:///./leadhub.db"
    LOG_LEVEL: str = "INFO"

    # --- Minimal auth (API key) ---
    # Send: X-API-Key: <key>
    API_KEY: str | None = None

    # --- Matching ---
    # Fraction above budget still treated as a match. 0.0 == strict.
    MATCH_BUDGET_TOLERANCE_PCT: float = 0.0

    # --- Lead writes ---
    # In-request attempts for a lead insert that fails transiently (not duplicates).
    LEAD_WRITE_ATTEMPTS: int = 2

    # --- Scoring ---
    # Recompute score/tier when a buyer edits budget, locations, types or intent.
    RESCORE_ON_PROFILE_UPDATE: bool = True


settings = Settings()
