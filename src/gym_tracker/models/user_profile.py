"""User profile model."""

from dataclasses import dataclass
from enum import Enum

from .attendance import as_iso


class Theme(str, Enum):
    """Display theme preference."""

    LIGHT = "light"
    DARK = "dark"


@dataclass
class UserProfile:
    """Profile document stored at ``users/{userId}``."""

    email: str
    display_name: str | None = None
    theme: Theme | None = None
    created_at: str | None = None
    last_login_at: str | None = None

    def to_dict(self) -> dict:
        return {
            "email": self.email,
            "displayName": self.display_name,
            "theme": self.theme.value if self.theme else None,
            "createdAt": self.created_at,
            "lastLoginAt": self.last_login_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        theme = data.get("theme")
        return cls(
            email=data.get("email", ""),
            display_name=data.get("displayName") or None,
            theme=Theme(theme) if theme in {t.value for t in Theme} else None,
            created_at=as_iso(data.get("createdAt")),
            last_login_at=as_iso(data.get("lastLoginAt")),
        )
