"""Signed, expiring pagination keys.

A key is an HS256 JWT carrying ``rid`` (the request identifier it was issued
for), ``page``, ``size``, ``iat`` and ``exp``. JWTs are URL-safe base64
segments joined by dots, so a key travels in a query string untouched.
"""

import logging
import time
from typing import Any, Callable

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class SignedPaginationKeyService:
    """Issue and verify pagination keys.

    Parameters
    ----------
    secret : str
        Signing secret shared by every instance serving the API.
    ttl_minutes : int
        Age after which a key stops being valid.
    clock : Callable[[], float] | None
        Wall clock in epoch seconds, injectable for tests. Expiry is checked
        against this clock rather than the library's own.
    """

    def __init__(
        self,
        secret: str,
        ttl_minutes: int = 60,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if not secret:
            raise ValueError("secret cannot be empty")
        if ttl_minutes <= 0:
            raise ValueError("ttl_minutes must be positive")
        self._secret = secret
        self.ttl_seconds = ttl_minutes * 60
        self._clock = clock or time.time

    def generate(self, request_identifier: str, page: int, page_size: int) -> str:
        issued_at = int(self._clock())
        claims = {
            "rid": request_identifier,
            "page": page,
            "size": page_size,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def _decode(self, key: str | None) -> dict[str, Any] | None:
        """Return the claims of a well-formed, correctly signed key."""
        if not key:
            return None
        try:
            claims = jwt.decode(
                key,
                self._secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "require_exp": True, "require_iat": True},
            )
        except JWTError as exc:
            logger.debug("Rejected pagination key: %s", exc)
            return None
        if not isinstance(claims.get("exp"), int) or not isinstance(claims.get("iat"), int):
            return None
        return claims

    def is_valid(self, key: str | None) -> bool:
        claims = self._decode(key)
        if claims is None:
            return False
        now = self._clock()
        if now > claims["exp"]:
            logger.debug("Pagination key expired %.0fs ago", now - claims["exp"])
            return False
        return now >= claims["iat"]

    def extract_request_identifier(self, key: str | None) -> str | None:
        """Request identifier a key was issued for, if the key is authentic."""
        claims = self._decode(key)
        if claims is None:
            return None
        rid = claims.get("rid")
        return rid if isinstance(rid, str) else None
