"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Account:
    id: str
    username: str
    password_hash: str = field(repr=False)


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    password: str
