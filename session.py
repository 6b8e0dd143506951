"""
Session collaborator interface.

The current user and access token are supplied by an injected session
object rather than read from process-wide state.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from utils.validators import require_field

MANAGER_ROLE = "manager"
ENGINEER_ROLE = "engineer"


@dataclass(frozen=True)
class User:
    """Authenticated user of the application."""

    id: str
    email: str
    name: str
    role: str

    @property
    def is_manager(self) -> bool:
        return self.role == MANAGER_ROLE

    @property
    def is_engineer(self) -> bool:
        return self.role == ENGINEER_ROLE

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "User":
        return cls(
            id=str(require_field(record, "id", "_id")),
            email=record.get("email") or "",
            name=record.get("name") or "",
            role=require_field(record, "role"),
        )


class SessionProvider(ABC):
    """Base interface for session state."""

    @abstractmethod
    def get_current_user(self) -> Optional[User]:
        """Return the logged-in user, or None when logged out."""
        pass

    @abstractmethod
    def get_token(self) -> Optional[str]:
        """Return the access token, or None when logged out."""
        pass


class InMemorySession(SessionProvider):
    """Session held in memory for the lifetime of one process."""

    def __init__(self, user: Optional[User] = None, token: Optional[str] = None):
        self._user = None
        self._token = None
        if user is not None and token is not None:
            self.login(token, user)

    def login(self, token: str, user: User) -> None:
        self._token = token
        self._user = user

    def logout(self) -> None:
        self._token = None
        self._user = None

    def get_current_user(self) -> Optional[User]:
        return self._user

    def get_token(self) -> Optional[str]:
        return self._token
