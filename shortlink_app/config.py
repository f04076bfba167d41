from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import string


# Same 64 symbols nanoid uses: letters, digits, "_" and "-"
URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True

    # Application
    app_name: str = "Short Link Service"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Link store
    store_backend: str = "sql"  # Options: "sql", "memory"
    database_url: str = "sqlite:///./shortlinks.db"

    # Short code generation
    code_length: int = 6
    code_alphabet: str = URL_SAFE_ALPHABET
    retry_limit: int = 5  # Collision retries for generated codes

    # Prefix used when displaying short links ("<display_domain>/<code>")
    display_domain: str = "http://127.0.0.1:8000"

    # bcrypt cost factor for link passwords
    password_hash_rounds: int = 10

    # Record cache settings
    cache_backend: str = "null"  # Options: "redis", "memory", "null"
    redis_url: Optional[str] = "redis://localhost:6379/0"
    cache_ttl: int = 3600  # Cache TTL in seconds (1 hour)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
