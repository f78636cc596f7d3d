import os

from .exceptions import ConfigurationError

VALID_DB_PREFIXES = ("sqlite://", "postgresql://", "postgres://")


def load_database_url(raw=None):
    """Return the store URL, failing startup if it is missing or malformed."""
    url = raw if raw is not None else os.getenv("DATABASE_URL")
    if not url:
        raise ConfigurationError(
            "Missing DATABASE_URL. Set it to a sqlite:// or postgresql:// URL before starting the app."
        )
    if not url.startswith(VALID_DB_PREFIXES):
        raise ConfigurationError(f"Invalid DATABASE_URL scheme: {url.split(':', 1)[0]}")
    # SQLAlchemy only accepts the postgresql:// spelling
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


DATABASE_URL = load_database_url()

LOG_LEVEL = os.getenv("HEALTHDIARY_LOG_LEVEL", "INFO")

GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL_ID = os.getenv("GEMINI_MODEL_ID", "gemini-2.0-flash")

def get_diagnostics():
    return {
        "Database": "SQLite" if DATABASE_URL.startswith("sqlite") else "Postgres",
        "Google API Key": "Configured" if GOOGLE_API_KEY else "Missing (Fallback Mode)",
        "Model": GEMINI_MODEL_ID,
        "Log level": LOG_LEVEL,
    }
