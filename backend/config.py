import os
from typing import List

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings:
    """Application settings loaded from environment variables."""

    # Static reference data (universities, courses, policies, quiz)
    DATA_DIR: str = os.getenv("CAREER_CANVAS_DATA_DIR", os.path.join(PROJECT_ROOT, "data"))

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # CORS
    ALLOWED_ORIGINS: List[str] = _split_csv(
        os.getenv("ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:8080")
    )

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
