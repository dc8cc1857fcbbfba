import os
from typing import List
from dotenv import load_dotenv
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

# Load environment variables from the correct .env file
os.environ.setdefault("APP_ENV", "development")  # Default to development
env_file = ".env" if os.getenv("APP_ENV") == "development" else ".env.production"
load_dotenv(env_file)  # Load the .env file

class Settings(BaseSettings):
    APP_ENV: str = "development"
    DEBUG: bool = True
    SITE_NAME: str = "Developer 2050"
    SITE_URL: str = "https://v2050.vercel.app"
    DATABASE_URL: str = "sqlite+aiosqlite:///./dev2050.db"
    ALLOWED_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "info"
    RATE_LIMIT_ENABLED: bool = True

    # Beta features (AI answer, chat, JSON generator, AI learning plans)
    FEATURES_ENABLED: bool = False

    # Shared secret for the image management gateway
    ADMIN_PASSWORD: str = ""

    # Generative AI
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Object storage (Cloudflare R2 / any S3-compatible endpoint)
    R2_ENDPOINT: str = ""
    R2_ACCESS_KEY: str = ""
    R2_SECRET_KEY: str = ""
    R2_BUCKET: str = ""
    R2_PUBLIC_URL: str = ""
    R2_PREFIX: str = "uploads/"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Sanity CMS
    SANITY_PROJECT_ID: str = ""
    SANITY_DATASET: str = "production"
    SANITY_API_VERSION: str = "2024-01-01"
    SANITY_TOKEN: str = ""

    # Cache windows
    NEWS_CACHE_TTL_SECONDS: int = 300
    BLOG_CACHE_TTL_SECONDS: int = 60

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("R2_PREFIX")
    def normalize_prefix(cls, value):
        value = value.strip("/")
        return f"{value}/" if value else ""

    @model_validator(mode="after")
    def validate_production_secrets(self):
        """Ensure critical secrets are set when running in production."""
        if self.APP_ENV == "production":
            missing = []
            for key in ["ADMIN_PASSWORD", "R2_BUCKET", "R2_PUBLIC_URL"]:
                if not getattr(self, key):
                    missing.append(key)
            if missing:
                raise ValueError(
                    f"Missing required secrets for production: {', '.join(missing)}"
                )
        return self

settings = Settings()
