"""Session token verification — resolves the store domain behind a request.

Storefront admin sessions are HS256 JWTs. The store is read from the ``dest``
claim (a shop URL such as ``https://demo.myshopify.com``) or, failing that,
from a plain ``shop`` claim.
"""

import logging
from urllib.parse import urlparse

import jwt

from countdown_timers.application.interfaces import SessionVerifier

logger = logging.getLogger(__name__)


def _shop_from_claims(payload: dict) -> str | None:
    dest = payload.get("dest")
    if isinstance(dest, str) and dest:
        host = urlparse(dest).netloc if "://" in dest else dest
        if host:
            return host.strip()
    shop = payload.get("shop")
    if isinstance(shop, str) and shop.strip():
        return shop.strip()
    return None


class ShopSessionTokenVerifier(SessionVerifier):
    """Verify a signed session token and return the shop it belongs to."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", audience: str | None = None):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience

    def verify(self, token: str | None) -> str | None:
        if not token:
            return None
        if not self.secret_key:
            logger.debug("Session token presented but no secret configured; ignoring it")
            return None

        options = {"verify_aud": self.audience is not None}
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                options=options,
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Session token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid session token: {e}")
            return None

        shop = _shop_from_claims(payload)
        if shop is None:
            logger.warning("Session token has no shop claim")
        return shop


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
