from .session_token_verifier import ShopSessionTokenVerifier, bearer_token

__all__ = [
    "ShopSessionTokenVerifier",
    "bearer_token",
]
