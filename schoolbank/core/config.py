"""
Configuration settings for the passbook service.
Loads environment variables (and .env) into a single Settings object.
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    
    # Database
    DATABASE_URL: str = "sqlite:///./schoolbank.db"
    SQL_ECHO: bool = False
    
    # Logging
    LOG_LEVEL: str = "INFO"
    
    # API
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "School Bank Passbook Service"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Student bank accounts, transactions and passbook statements for school banking programs"
    CORS_ORIGINS: List[str] = ["*"]
    DEFAULT_PAGE_LIMIT: int = 100
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
