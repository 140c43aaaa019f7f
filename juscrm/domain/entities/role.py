"""Domain entity representing a user role."""

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_LAWYER = "lawyer"
ROLE_ASSISTANT = "assistant"
ROLE_CLIENT = "client"


@dataclass
class Role:
    """A role that can be assigned to a user of the office."""

    id: int
    name: str
    alias: str


__all__ = ["Role", "ROLE_ADMIN", "ROLE_LAWYER", "ROLE_ASSISTANT", "ROLE_CLIENT"]
