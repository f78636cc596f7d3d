"""Custom exceptions for Health Diary."""


class HealthDiaryError(Exception):
    """Base exception for all Health Diary errors."""

    pass


class ConfigurationError(HealthDiaryError):
    """Raised when required configuration is missing or malformed."""

    pass


class AuthenticationError(HealthDiaryError):
    """Raised when sign-in or sign-up fails."""

    pass


class StoreError(HealthDiaryError):
    """Raised when a database operation fails."""

    pass


class EntryNotFoundError(StoreError):
    """Raised when a row to update or delete does not exist for the user."""

    pass


class InvalidEntryError(HealthDiaryError):
    """Raised when submitted entry fields cannot be stored as given."""

    pass
