import os
import logging
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from edumanage.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    backend: Literal["remote", "memory"] = "memory"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    frontend_url: Optional[str] = None
    jwt_secret: str = "devsecret"
    locale: Literal["en", "fr"] = "en"
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment (and a .env file if present).

    The remote backend needs both SUPABASE_URL and SUPABASE_KEY. With neither
    set the service falls back to the seeded in-memory store; with only one of
    them set, startup fails instead of silently picking a backend.
    """
    load_dotenv()

    supabase_url = os.getenv("SUPABASE_URL") or None
    supabase_key = os.getenv("SUPABASE_KEY") or None
    requested = (os.getenv("EDUMANAGE_BACKEND") or "").strip().lower()

    if requested and requested not in ("remote", "memory"):
        raise ConfigurationError(f"Unknown EDUMANAGE_BACKEND: {requested}")

    if not requested:
        if supabase_url and supabase_key:
            requested = "remote"
        elif supabase_url or supabase_key:
            raise ConfigurationError("Supabase URL or Key not found in environment variables")
        else:
            requested = "memory"

    if requested == "remote" and not (supabase_url and supabase_key):
        raise ConfigurationError("Supabase URL or Key not found in environment variables")

    locale = (os.getenv("EDUMANAGE_LOCALE") or "en").lower()
    if locale not in ("en", "fr"):
        logger.warning(f"Unsupported locale {locale}, using en")
        locale = "en"

    return Settings(
        backend=requested,
        supabase_url=supabase_url,
        supabase_key=supabase_key,
        frontend_url=os.getenv("FRONTEND_URL"),
        jwt_secret=os.getenv("JWT_SECRET", "devsecret"),
        locale=locale,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
