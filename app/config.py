"""
Configuration management for the FastAPI application.
Uses Pydantic Settings for environment variable management.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "Slowwwy Keyboards API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Storefront pages and content management for custom keyboard builds"

    # CORS Configuration
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # Backend project database (Supabase PostgreSQL)
    DATABASE_URL: str = ""

    # Object storage for uploaded images
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    STORAGE_ROOT_FOLDER: str = "slowwwy"

    # Admin account
    # ADMIN_PASSWORD_HASH should be a bcrypt hash (see generate_password_hash.py)
    ADMIN_EMAIL: str = ""
    ADMIN_PASSWORD_HASH: str = ""

    # Session tokens
    # SECRET_KEY should be a long random string (e.g., generated with: openssl rand -hex 32)
    JWT_SECRET_KEY: str = "change-this-in-production-use-openssl-rand-hex-32"
    JWT_EXPIRE_MINUTES: int = 60 * 8
    SESSION_COOKIE_NAME: str = "admin_session"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
