"""HS256 JSON Web Token adapter."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt as pyjwt

from app.adapters.auth.base import AuthVerificationError, TokenIssuer, TokenVerifier


class JwtTokenVerifier(TokenVerifier):
    """Verifies tokens signed with the server-held secret."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    def verify_token(self, token: str) -> str:
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except pyjwt.ExpiredSignatureError as exc:
            raise AuthVerificationError("Bearer token has expired") from exc
        except pyjwt.InvalidTokenError as exc:
            raise AuthVerificationError("Invalid bearer token") from exc

        subject = str(payload.get("sub") or "").strip()
        if not subject:
            raise AuthVerificationError("Bearer token missing user identity")
        return subject


class JwtTokenIssuer(TokenIssuer):
    """Signs short-lived tokens for login, registration and password changes."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: timedelta = timedelta(days=30)) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in

    def issue_token(self, subject: str) -> str:
        issued_at = datetime.now(UTC)
        payload = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self._expires_in,
        }
        return pyjwt.encode(payload, self._secret, algorithm=self._algorithm)


__all__ = ["JwtTokenIssuer", "JwtTokenVerifier"]
