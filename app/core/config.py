"""
Configuration and constants for the Selection Analysis Microservice.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment ("1", "true", "yes", "on")."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    # Internal auth
    INTERNAL_API_SECRET: str = os.getenv("INTERNAL_API_SECRET", "")

    # Server Configuration
    PORT: int = int(os.getenv("PORT", 10000))
    HOST: str = "0.0.0.0"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Feature flag for the whole engine
    SELECTION_ANALYSIS_FLAG: str = "ai_selection_analysis"
    SELECTION_ANALYSIS_ENABLED: bool = _env_bool("SELECTION_ANALYSIS_ENABLED", True)
    SELECTION_ANALYSIS_ROLLOUT: int = int(os.getenv("SELECTION_ANALYSIS_ROLLOUT", 100))

    # Analysis engine defaults
    SELECTION_CACHE_ENABLED: bool = _env_bool("SELECTION_CACHE_ENABLED", True)
    SELECTION_CACHE_TTL_SECONDS: float = float(os.getenv("SELECTION_CACHE_TTL_SECONDS", 300))
    SELECTION_DETAILED_LOGGING: bool = _env_bool("SELECTION_DETAILED_LOGGING", False)
    ANALYSIS_VERSION: str = "1.0.0"

    # Per-endpoint rate limits (slowapi syntax)
    ANALYSIS_RATE_LIMIT: str = os.getenv("ANALYSIS_RATE_LIMIT", "30/minute")
    CONFIG_RATE_LIMIT: str = os.getenv("CONFIG_RATE_LIMIT", "10/minute")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration on startup."""
        problems = []

        if not 0 <= cls.SELECTION_ANALYSIS_ROLLOUT <= 100:
            problems.append(
                f"SELECTION_ANALYSIS_ROLLOUT must be between 0 and 100 (got {cls.SELECTION_ANALYSIS_ROLLOUT})"
            )

        if cls.SELECTION_CACHE_TTL_SECONDS <= 0:
            problems.append(
                f"SELECTION_CACHE_TTL_SECONDS must be positive (got {cls.SELECTION_CACHE_TTL_SECONDS})"
            )

        if problems:
            raise ValueError(
                f"Invalid configuration: {'; '.join(problems)}. "
                "Please check your .env file."
            )


settings = Settings()
