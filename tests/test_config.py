import pytest
from healthdiary.config import get_diagnostics, load_database_url
from healthdiary.exceptions import ConfigurationError


def test_missing_database_url_is_fatal(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ConfigurationError):
        load_database_url()


def test_empty_database_url_is_fatal():
    with pytest.raises(ConfigurationError):
        load_database_url("")


def test_malformed_database_url_is_fatal():
    with pytest.raises(ConfigurationError):
        load_database_url("mysql://localhost/db")


def test_postgres_scheme_is_normalized():
    assert load_database_url("postgres://u:p@host/db") == "postgresql://u:p@host/db"
    assert load_database_url("sqlite:///x.db") == "sqlite:///x.db"


def test_diagnostics_without_ai_key():
    diag = get_diagnostics()
    assert diag["Database"] == "SQLite"
    assert diag["Google API Key"].startswith("Missing")
