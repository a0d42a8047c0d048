"""Authentication provider interfaces."""

from abc import ABC, abstractmethod


class AuthVerificationError(Exception):
    """Raised when a token cannot be verified or carries no subject."""


class TokenVerifier(ABC):
    """Provider-neutral token verification interface."""

    @abstractmethod
    def verify_token(self, token: str) -> str:
        """Verify token signature and expiry and return the subject user id."""


class TokenIssuer(ABC):
    """Signs credentials for a user id."""

    @abstractmethod
    def issue_token(self, subject: str) -> str:
        """Return a signed token whose subject is ``subject``."""


__all__ = ["AuthVerificationError", "TokenIssuer", "TokenVerifier"]
