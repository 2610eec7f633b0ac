"""Abstract credential helpers used by the admin use cases.

Hashing and token signing are infrastructure concerns; the application
layer only sees these interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class PasswordHasher(ABC):

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted hash of *password*."""

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """True if *password* matches *password_hash*."""


class TokenService(ABC):

    @abstractmethod
    def issue(self, admin_id: int, email: str) -> str:
        """Return a signed, expiring token for the admin."""

    @abstractmethod
    def verify(self, token: str) -> dict:
        """Return the token claims.

        Raises AuthenticationError if the token is invalid or expired.
        """
