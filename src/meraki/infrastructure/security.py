"""Password hashing (bcrypt) and admin tokens (HS256 JWT)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from meraki.domain.exceptions import AuthenticationError
from meraki.domain.repository.credentials import PasswordHasher, TokenService


class BcryptPasswordHasher(PasswordHasher):

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            # Malformed stored hash
            return False


class JwtTokenService(TokenService):

    algorithm = "HS256"

    def __init__(self, secret: str, ttl_hours: int = 24) -> None:
        self._secret = secret
        self._ttl = timedelta(hours=ttl_hours)

    def issue(self, admin_id: int, email: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(admin_id),
            "email": email,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc
