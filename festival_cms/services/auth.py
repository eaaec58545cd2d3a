"""
Admin authentication service

Verifies the configured admin credentials and issues opaque, expiring
session tokens. The password is only ever held as an Argon2id hash in
configuration (``ADMIN_PASSWORD_HASH``); generate one with ``hash_password``.
"""

import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

logger = logging.getLogger(__name__)

_hasher = PasswordHasher()


class AuthenticationError(Exception):
    """Raised when credentials are rejected."""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AdminSession:
    token: str
    username: str
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at


def hash_password(password: str) -> str:
    """Hash ``password`` with Argon2id."""
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Check ``password`` against an Argon2 hash in constant time.

    A malformed hash is logged and treated as a mismatch.
    """
    try:
        return _hasher.verify(hashed, password)
    except InvalidHashError:
        logger.error("Malformed admin password hash in configuration")
        return False
    except VerificationError:
        return False


def needs_rehash(hashed: str) -> bool:
    """True when ``hashed`` was made with weaker parameters than the current ones."""
    return _hasher.check_needs_rehash(hashed)


def _same_username(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


class AuthService:
    def __init__(
        self,
        username: str,
        password_hash: Optional[str],
        session_ttl_seconds: int = 8 * 3600,
    ):
        self.username = username
        self.password_hash = password_hash
        self.session_ttl = timedelta(seconds=session_ttl_seconds)
        self._sessions: Dict[str, AdminSession] = {}

    def sign_in(self, username: str, password: str) -> AdminSession:
        """Check credentials and open a new session.

        Raises:
            AuthenticationError: unknown user, wrong password, or no admin
                password configured
        """
        if not self.password_hash:
            logger.warning("Sign-in attempted but ADMIN_PASSWORD_HASH is unset")
            raise AuthenticationError("Admin sign-in is not configured")

        user_ok = _same_username(username, self.username)
        password_ok = verify_password(password, self.password_hash)
        if not (user_ok and password_ok):
            logger.info("Rejected sign-in for '%s'", username)
            raise AuthenticationError("Invalid username or password")
        if needs_rehash(self.password_hash):
            logger.warning(
                "ADMIN_PASSWORD_HASH uses outdated parameters; regenerate it "
                "with scripts/seed_content.py --hash-password"
            )

        self._purge_expired()
        session = AdminSession(
            token=secrets.token_urlsafe(32),
            username=username,
            expires_at=utcnow() + self.session_ttl,
        )
        self._sessions[session.token] = session
        logger.info("Admin '%s' signed in", username)
        return session

    def get_session(self, token: Optional[str]) -> Optional[AdminSession]:
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None:
            return None
        if session.is_expired():
            self._sessions.pop(token, None)
            return None
        return session

    def sign_out(self, token: str) -> None:
        if self._sessions.pop(token, None):
            logger.info("Session closed")

    def _purge_expired(self) -> None:
        now = utcnow()
        for token in [t for t, s in self._sessions.items() if s.is_expired(now)]:
            del self._sessions[token]
