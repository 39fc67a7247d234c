"""
Application settings loaded from environment variables (and a .env file).
"""
from dataclasses import dataclass, field
from typing import List, Optional
import os

from dotenv import find_dotenv, load_dotenv

CLASSIFIER_BACKENDS = ("auto", "gemini", "rules")


class ConfigurationError(ValueError):
    """Settings are invalid; raised at startup."""


@dataclass
class Settings:
    database_url: str = "sqlite:///./symptom_history.db"
    google_api_key: Optional[str] = None
    llm_model: str = "gemini-1.5-flash"
    classifier_backend: str = "auto"
    classifier_timeout: float = 20.0
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    environment: str = "development"

    def __post_init__(self) -> None:
        if self.classifier_backend not in CLASSIFIER_BACKENDS:
            raise ConfigurationError(
                f"CLASSIFIER_BACKEND must be one of {', '.join(CLASSIFIER_BACKENDS)}, "
                f"got {self.classifier_backend!r}"
            )
        if self.classifier_timeout <= 0:
            raise ConfigurationError("CLASSIFIER_TIMEOUT must be positive")

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))

        timeout = os.getenv("CLASSIFIER_TIMEOUT", "20")
        try:
            classifier_timeout = float(timeout)
        except ValueError:
            raise ConfigurationError(f"CLASSIFIER_TIMEOUT must be a number, got {timeout!r}")

        origins = os.getenv("CORS_ORIGINS", "*")

        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./symptom_history.db"),
            google_api_key=os.getenv("GOOGLE_API_KEY") or None,
            llm_model=os.getenv("LLM_MODEL", "gemini-1.5-flash"),
            classifier_backend=os.getenv("CLASSIFIER_BACKEND", "auto").strip().lower(),
            classifier_timeout=classifier_timeout,
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            environment=os.getenv("APP_ENV", "development"),
        )

    @property
    def classifier_enabled(self) -> bool:
        """auto uses Gemini only when a key is present; gemini forces it."""
        if self.classifier_backend == "gemini":
            return True
        if self.classifier_backend == "auto":
            return bool(self.google_api_key)
        return False
