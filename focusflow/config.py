from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    # App Settings
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "FocusFlow"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # PostgreSQL Settings
    POSTGRES_SERVER: str
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str
    POSTGRES_PORT: str = "5432"
    DB_ECHO_QUERIES: bool = False

    # Third Party Services
    OPENAI_API_KEY: str = ""

    # Model Names (litellm provider prefix format)
    TEXT_MODEL: str = "openai/gpt-4"
    IMAGE_MODEL: str = "dall-e-3"
    IMAGE_SIZE: str = "1024x1024"
    LLM_MAX_ATTEMPTS: int = 1

    # Object storage for generated images
    MEDIA_ROOT: str = "media"
    MEDIA_URL: str = "/media"

    @property
    def DATABASE_URI(self) -> str:
        """Builds database URI dynamically."""
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @classmethod
    def load_from_env_file(cls):
        """Load settings from .env file in local development."""
        from pathlib import Path

        from dotenv import load_dotenv

        env_file = Path(".env")
        if env_file.exists():
            load_dotenv(env_file, override=True)

        return cls()


settings = Settings.load_from_env_file()
