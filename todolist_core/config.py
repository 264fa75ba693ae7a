"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    host: str = "127.0.0.1"
    port: int = 5001
    database_path: str = "./data/todolist.db"
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:5173"]

    # JWT Configuration
    jwt_secret_key: str = "change-me-in-production-use-env-var"
    jwt_expiry_days: int = 7

    # Bcrypt work factor (higher = more secure but slower)
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = 12

    # Serve the bundled browser client at "/"
    serve_client: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()
