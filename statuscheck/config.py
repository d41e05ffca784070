import os
from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


class Settings:
    # Unset means no timeout; an unresponsive endpoint holds the check open.
    STATUS_CHECK_TIMEOUT_SECONDS: float | None = _optional_float(
        "STATUS_CHECK_TIMEOUT_SECONDS"
    )
    STATUS_CHECK_CA_FILE: str | None = os.getenv("STATUS_CHECK_CA_FILE") or None
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
