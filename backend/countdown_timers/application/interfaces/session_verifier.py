"""Port for resolving the authenticated store behind a request."""

from abc import ABC, abstractmethod


class SessionVerifier(ABC):
    """Turns a presented session token into the store domain it was issued for."""

    @abstractmethod
    def verify(self, token: str | None) -> str | None:
        """Return the verified store domain, or None when no valid session exists."""
        ...
