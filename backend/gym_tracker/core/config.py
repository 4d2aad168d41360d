import os

DEFAULT_DATABASE_URL = "sqlite:///./gym_progress.db"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


def get_database_url() -> str:
    return os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL


def get_host() -> str:
    return os.getenv("HOST") or DEFAULT_HOST


def get_port() -> int:
    raw = os.getenv("PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"PORT must be an integer, got {raw!r}") from None


def get_log_level() -> str:
    return (os.getenv("LOG_LEVEL") or "INFO").upper()


def get_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
