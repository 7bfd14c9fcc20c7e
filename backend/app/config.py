"""
Application configuration using environment variables.
"""
import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()

@dataclass
class Settings:
    """Application settings."""
    APP_NAME: str = os.getenv("APP_NAME", "SEO Score API")

    # API Keys
    PSI_API_KEY: str = os.getenv("PSI_API_KEY", "")
    SERPAPI_KEY: str = os.getenv("SERPAPI_KEY", "")

    # PageSpeed settings
    PSI_STRATEGY: str = os.getenv("PSI_STRATEGY", "mobile")
    PAGESPEED_TIMEOUT: int = int(os.getenv("PAGESPEED_TIMEOUT", "60"))

    # HTTP client settings (SerpApi)
    HTTP_TIMEOUT: int = int(os.getenv("HTTP_TIMEOUT", "30"))

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3020"))

    # CORS
    CORS_ORIGINS: List[str] = field(default_factory=lambda: ["*"])

    @property
    def visibility_enabled(self) -> bool:
        """SerpApi lookups are possible only with a key."""
        return bool(self.SERPAPI_KEY)

settings = Settings()


def get_settings() -> Settings:
    """Settings dependency (overridden in tests)."""
    return settings
