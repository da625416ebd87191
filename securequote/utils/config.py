"""
Configuration management using pydantic-settings

Loads configuration from environment variables and .env file
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )
    
    # Database Configuration
    DB_HOST: str = Field(default="localhost", description="Database host")
    DB_PORT: int = Field(default=5432, description="Database port")
    DB_NAME: str = Field(default="securequote", description="Database name")
    DB_USER: str = Field(default="securequote", description="Database user")
    DB_PASSWORD: str = Field(default="securequote", description="Database password")
    DB_MIN_CONNECTIONS: int = Field(default=1, ge=1, description="Minimum pooled connections")
    DB_MAX_CONNECTIONS: int = Field(default=10, ge=1, description="Maximum pooled connections")
    INIT_SCHEMA: bool = Field(
        default=True,
        description="Create the quotations table on server start"
    )
    
    # Application Settings
    API_HOST: str = Field(default="0.0.0.0", description="API host to bind to")
    API_PORT: int = Field(default=2022, description="API port to listen on")
    API_PREFIX: str = Field(default="/api", description="Path prefix of the RPC routes")
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser"
    )
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    
    # Client Configuration
    CLIENT_BASE_URL: str = Field(
        default="http://localhost:2022",
        description="Server URL used by the command line client"
    )
    CLIENT_TIMEOUT: float = Field(default=15.0, gt=0, description="HTTP timeout in seconds")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance"""
    return settings
