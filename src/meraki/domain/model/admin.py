"""The shared admin account."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AdminAccount:
    id: int | None
    email: str
    password_hash: str
    name: str | None = None
