"""
Application Configuration - Environment Variables & Settings
"""
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field
from typing import List
from functools import lru_cache


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(',') if item.strip()]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Application
    APP_NAME: str = Field(default="Wanderlist API")
    DEBUG: bool = Field(default=False)
    SECRET_KEY: str = Field(default="change-me-in-production")

    # Database - MongoDB (lists & users)
    MONGODB_URL: str = Field(default="mongodb://localhost:27017/wanderlist")
    MONGODB_DATABASE: str = Field(default="wanderlist")

    # JWT Authentication
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=1440)

    # CORS - stored as comma-separated string
    ALLOWED_ORIGINS_STR: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        alias="ALLOWED_ORIGINS"
    )

    @computed_field
    @property
    def ALLOWED_ORIGINS(self) -> List[str]:
        """Parse comma-separated origins into list"""
        return _split_csv(self.ALLOWED_ORIGINS_STR)

    # Accounts created with one of these emails are administrators
    ADMIN_EMAILS_STR: str = Field(default="", alias="ADMIN_EMAILS")

    @computed_field
    @property
    def ADMIN_EMAILS(self) -> List[str]:
        """Parse comma-separated admin emails into a lower-cased list"""
        return [email.lower() for email in _split_csv(self.ADMIN_EMAILS_STR)]

    # Destination catalog
    DESTINATIONS_CSV_PATH: str = Field(default="data/europe-destinations.csv")
    SEARCH_DEFAULT_LIMIT: int = Field(default=5)

    # Compare-and-set attempts for review writes
    REVIEW_WRITE_ATTEMPTS: int = Field(default=3)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
        populate_by_name = True


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()
