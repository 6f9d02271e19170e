from __future__ import annotations

from typing import Protocol

from sessionauth.services._shared.dto import VerifiedIdentity


class Authenticator(Protocol):
    """Port for credential verification (username + plaintext password)."""

    def authenticate(self, name: str, plaintext: str) -> VerifiedIdentity:
        """
        Return the verified identity for valid credentials.

        :raises AuthenticationError: When the credentials are rejected.
        """
        ...
