from pydantic_settings import BaseSettings, SettingsConfigDict


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
    log_level: str = "INFO"

    # Application
    app_name: str = "Link Analytics"
    app_version: str = "1.0.0"
    base_url: str = "http://127.0.0.1:8080"

    # Storage (one file per link, named <identifier><suffix>)
    storage_dir: str = "./data"
    storage_suffix: str = ".linkanalytics"
    hit_prefix: str = "hit: "

    # Identifier derivation strategy
    identifier_strategy: str = "sha256"  # Options: "sha256", "sha3_256", "blake2b"

    # Destination cache settings
    cache_backend: str = "memory"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 3600  # Cache TTL in seconds (1 hour)

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
