"""
Identity for a browser session.

The session context is the single place the rest of the app reads "who is
signed in" from. Pages build it once per Streamlit session, services take it
as an argument, and sign-out tears it down.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .exceptions import AuthenticationError
from .logging_config import get_logger
from .models import User

logger = get_logger(__name__)

HOME_PATH = "/"
SIGN_IN_PATH = "/sign-in"
PROTECTED_PREFIXES = ("/dashboard", "/profile", "/settings", "/journal")
AUTH_ONLY_PREFIXES = ("/sign-in", "/sign-up")

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class Identity:
    id: int
    email: str
    display_name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or self.email


class SessionContext:
    """Current identity plus a loaded flag, injected into services."""

    def __init__(self):
        self.identity: Optional[Identity] = None
        self.loaded = False

    def resolve(self, identity: Optional[Identity]) -> None:
        self.identity = identity
        self.loaded = True

    @property
    def is_anonymous(self) -> bool:
        return self.loaded and self.identity is None

    @property
    def user_id(self) -> Optional[int]:
        return self.identity.id if self.identity else None

    def sign_out(self) -> None:
        if self.identity:
            logger.info("User %s signed out", self.identity.id)
        self.identity = None
        self.loaded = True


def _to_identity(user: User) -> Identity:
    return Identity(id=user.id, email=user.email, display_name=user.display_name)


def _find_user(email: str, db: Session):
    try:
        return db.query(User).filter(User.email == email).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("User lookup failed")
        raise AuthenticationError("Sign-in is unavailable right now. Please try again.") from e


def _normalize_email(email: str) -> str:
    email = (email or "").strip().lower()
    if not EMAIL_RE.match(email):
        raise AuthenticationError("Please enter a valid email address.")
    return email


def sign_up(email: str, display_name: str, db: Session) -> Identity:
    email = _normalize_email(email)
    if _find_user(email, db):
        raise AuthenticationError("An account with that email already exists.")
    user = User(email=email, display_name=(display_name or "").strip() or None)
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Sign-up failed for %s", email)
        raise AuthenticationError("Could not create your account.") from e
    logger.info("Registered user %s", user.id)
    return _to_identity(user)


def sign_in(email: str, db: Session) -> Identity:
    email = _normalize_email(email)
    user = _find_user(email, db)
    if not user:
        raise AuthenticationError("No account found for that email. Sign up first.")
    logger.info("User %s signed in", user.id)
    return _to_identity(user)


def _matches(path: str, prefixes) -> bool:
    return any(path == p or path.startswith(p + "/") for p in prefixes)


def route_for(path: str, identity: Optional[Identity]) -> Optional[str]:
    """
    Return the path to redirect to, or None to render ``path`` as requested.

    The home path is dual-purpose (landing page or dashboard) and never
    redirects.
    """
    path = path or HOME_PATH
    if path == HOME_PATH:
        return None
    if identity is None and _matches(path, PROTECTED_PREFIXES):
        return SIGN_IN_PATH
    if identity is not None and _matches(path, AUTH_ONLY_PREFIXES):
        return HOME_PATH
    return None
