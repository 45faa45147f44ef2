"""Configuration settings for the bank account service."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./sample_dto_app.db"

    # Service identification
    service_name: str = "sample-dto-app"

    # Used as the <app> part of the alert headers (X-<app>-alert)
    application_name: str = "sampleDtoApp"

    api_prefix: str = "/api"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
