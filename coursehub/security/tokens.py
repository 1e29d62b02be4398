"""Utilities for issuing and validating identity JWTs."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

import jwt

from ..errors import TokenError, TokenRejected

USER_ID_CLAIM = "userId"
_REQUIRED_CLAIMS = ["sub", USER_ID_CLAIM, "iat", "exp"]


@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated caller resolved from a verified token."""

    email: str
    user_id: str
    expires_at: int


class TokenCodec:
    """Stateless HMAC-signed token issuance and verification.

    Expiry is evaluated against the injected ``clock`` rather than PyJWT's own
    wall clock so that verification time can be supplied explicitly.
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl_seconds: int,
        issuer: str,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._ttl = ttl_seconds
        self._issuer = issuer
        self._algorithm = algorithm
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def issue(self, subject: str, user_id: str) -> str:
        """Create a signed JWT for ``subject`` (the account email).

        Parameters
        ----------
        subject:
            Account email placed in the ``sub`` claim.
        user_id:
            Account identifier placed in the ``userId`` claim.

        Returns
        -------
        str
            The encoded JWT. It expires ``ttl_seconds`` after issuance.
        """
        now = int(self._clock())
        payload: dict[str, Any] = {
            "iss": self._issuer,
            "sub": subject,
            USER_ID_CLAIM: user_id,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def authenticate(self, token: str, now: float | None = None) -> Identity:
        """Verify signature, issuer, required claims and expiry in one step.

        Raises
        ------
        TokenRejected
            With the reason describing why the token was not accepted.
        """
        claims = self._decode(token)
        missing = [claim for claim in _REQUIRED_CLAIMS if claims.get(claim) in (None, "")]
        if missing:
            raise TokenRejected(TokenError.MISSING_CLAIMS)
        try:
            expires_at = int(claims["exp"])
        except (TypeError, ValueError) as exc:
            raise TokenRejected(TokenError.MALFORMED) from exc
        current = self._clock() if now is None else now
        if current >= expires_at:
            raise TokenRejected(TokenError.EXPIRED)
        return Identity(
            email=str(claims["sub"]),
            user_id=str(claims[USER_ID_CLAIM]),
            expires_at=expires_at,
        )

    def verify_subject(self, token: str, expected_subject: str, now: float | None = None) -> bool:
        """Return ``True`` only for a valid, unexpired token whose subject matches exactly."""
        try:
            identity = self.authenticate(token, now=now)
        except TokenRejected:
            return False
        return identity.email == expected_subject

    def extract_subject(self, token: str) -> str:
        """Return the ``sub`` claim without checking expiry.

        The signature is still verified. Callers must :meth:`authenticate`
        before relying on the value.
        """
        return str(self._decode(token).get("sub", ""))

    def extract_user_id(self, token: str) -> str:
        """Return the ``userId`` claim without checking expiry."""
        return str(self._decode(token).get(USER_ID_CLAIM, ""))

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
        except jwt.InvalidSignatureError as exc:
            raise TokenRejected(TokenError.BAD_SIGNATURE) from exc
        except jwt.PyJWTError as exc:
            raise TokenRejected(TokenError.MALFORMED) from exc
