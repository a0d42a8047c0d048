"""Auth token adapters."""

from .base import AuthVerificationError, TokenIssuer, TokenVerifier
from .jwt_auth import JwtTokenIssuer, JwtTokenVerifier

__all__ = [
    "AuthVerificationError",
    "JwtTokenIssuer",
    "JwtTokenVerifier",
    "TokenIssuer",
    "TokenVerifier",
]
