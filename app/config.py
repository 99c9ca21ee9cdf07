"""
Application configuration.

Loads settings from environment variables and an optional .env file.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode (exposes /docs and /redoc).
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        request_log_level: Level of the per-request log lines; defaults to log_level.
        host: Interface uvicorn binds to.
        port: Listening port.
        api_key: Static secret expected in the x-api-key header.
        cors_origins: Origins allowed by the CORS middleware.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Product API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    request_log_level: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 3000
    api_key: str = "secret-api-key"
    cors_origins: List[str] = ["*"]


settings = Settings()
