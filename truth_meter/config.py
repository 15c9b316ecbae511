"""Runtime configuration loaded from the environment."""

import logging
import os
from enum import Enum
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class VerifierBackend(str, Enum):
    """Reference backends a statement can be verified against."""

    WIKIPEDIA = "wikipedia"
    FACTCHECK = "factcheck"


class Settings(BaseModel):
    """Service settings."""

    backend: VerifierBackend = Field(default=VerifierBackend.WIKIPEDIA, description="Verification backend")
    wikipedia_api_url: str = Field(
        default="https://en.wikipedia.org/w/api.php",
        description="MediaWiki action API endpoint",
    )
    wikipedia_user_agent: str = Field(default="TruthMeter/1.0", description="User agent for Wikipedia API")
    reference_timeout: float = Field(default=10.0, gt=0, description="Per-call timeout in seconds")
    reference_max_concurrency: int = Field(default=8, ge=1, description="Concurrent reference calls")
    reference_cache_ttl: int = Field(default=3600, description="Cache TTL in seconds")
    reference_cache_maxsize: int = Field(default=1000, description="Maximum cache size")
    google_factcheck_api_key: Optional[str] = Field(default=None, description="Google Fact Check Tools API key")
    log_level: str = Field(default="INFO", description="Root log level")

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables (and a .env file if present)."""
        load_dotenv()
        defaults = cls()

        backend = os.getenv("TRUTH_METER_BACKEND", defaults.backend.value).lower()
        if backend not in {member.value for member in VerifierBackend}:
            logger.warning(f"⚠️ Unknown TRUTH_METER_BACKEND {backend!r}, using wikipedia")
            backend = VerifierBackend.WIKIPEDIA.value

        return cls(
            backend=VerifierBackend(backend),
            wikipedia_api_url=os.getenv("WIKIPEDIA_API_URL", defaults.wikipedia_api_url),
            wikipedia_user_agent=os.getenv("WIKIPEDIA_USER_AGENT", defaults.wikipedia_user_agent),
            reference_timeout=float(os.getenv("REFERENCE_TIMEOUT", defaults.reference_timeout)),
            reference_max_concurrency=int(
                os.getenv("REFERENCE_MAX_CONCURRENCY", defaults.reference_max_concurrency)
            ),
            reference_cache_ttl=int(os.getenv("REFERENCE_CACHE_TTL", defaults.reference_cache_ttl)),
            reference_cache_maxsize=int(os.getenv("REFERENCE_CACHE_MAXSIZE", defaults.reference_cache_maxsize)),
            google_factcheck_api_key=os.getenv("GOOGLE_FACTCHECK_API_KEY") or None,
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings.from_env()
