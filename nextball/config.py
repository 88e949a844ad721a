"""
Application configuration
"""
import logging
import os
from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


APP_MODES = ("test", "files")


class Settings:
    """Settings from environment variables"""

    # Match data
    DATA_DIR: str = _get_env("NEXTBALL_DATA_DIR", "data")
    APP_MODE: str = _get_env("NEXTBALL_APP_MODE", "test").lower()  # test = built-in sample matches

    # Remote catalog (used by the CLI's http source)
    CATALOG_URL: str = _get_env("NEXTBALL_CATALOG_URL", "http://localhost:3001")
    HTTP_TIMEOUT: int = _get_env_int("NEXTBALL_HTTP_TIMEOUT", 10)

    # Game
    STARTING_POINTS: int = _get_env_int("NEXTBALL_STARTING_POINTS", 50)
    MAX_ACTIVE_GAMES: int = _get_env_int("NEXTBALL_MAX_GAMES", 1000)

    # Server
    HOST: str = _get_env("HOST", "0.0.0.0")
    PORT: int = _get_env_int("PORT", 3001)
    CORS_ORIGINS: str = _get_env("CORS_ORIGINS")
    LOG_LEVEL: str = _get_env("NEXTBALL_LOG_LEVEL", "INFO").upper()


settings = Settings()


def validate_config() -> None:
    if settings.APP_MODE not in APP_MODES:
        raise RuntimeError(f"NEXTBALL_APP_MODE must be one of {', '.join(APP_MODES)}")

    if not settings.CATALOG_URL.startswith("http"):
        raise RuntimeError("NEXTBALL_CATALOG_URL must start with http/https")

    if settings.HTTP_TIMEOUT <= 0:
        raise RuntimeError("NEXTBALL_HTTP_TIMEOUT must be positive")

    if settings.MAX_ACTIVE_GAMES <= 0:
        raise RuntimeError("NEXTBALL_MAX_GAMES must be positive")


def configure_logging(level: str = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
