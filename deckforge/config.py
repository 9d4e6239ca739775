from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKFORGE_")

    app_name: str = "DeckForge"
    debug: bool = False

    log_level: str = "INFO"

    # Comma-separated list, "*" for any origin
    cors_allow_origins: str = "*"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


settings = Settings()
