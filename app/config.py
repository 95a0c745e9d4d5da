"""
Configuration management using Pydantic Settings
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    DATABASE_URL: str

    # Gemini API (empty key = template questions only)
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Redis
    REDIS_URL: str = "redis://redis:6379/0"

    # Application
    APP_NAME: str = "Digital Literacy Assessment Platform"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Rate Limiting
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_PER_HOUR: int = 1000

    # Statistics cache
    STATS_CACHE_TTL: int = 300  # 5 minutes

    # Content
    SKILL_CATEGORIES: List[str] = ["basic", "intermediate", "advanced"]
    DEFAULT_TOTAL_POINTS: float = 100.0

    # AI-generated assessments
    AI_MIN_QUESTIONS: int = 3
    AI_MAX_QUESTIONS: int = 30
    AI_TIME_LIMIT_MINUTES: int = 20

    # Literacy tiers
    LITERATE_THRESHOLD: int = 70
    SEMI_LITERATE_THRESHOLD: int = 50

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
