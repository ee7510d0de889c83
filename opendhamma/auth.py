"""Static admin allow-list."""

from __future__ import annotations

import os

from opendhamma.config.models import AuthConfig


class AdminPolicy:
    """Decides whether a signed-in email may reach admin views."""

    def __init__(self, admin_emails: list[str]) -> None:
        self._emails = {e.strip().casefold() for e in admin_emails if e and e.strip()}

    @classmethod
    def from_config(cls, config: AuthConfig) -> AdminPolicy:
        """Configured emails plus the comma-separated env var list."""
        emails = list(config.admin_emails)
        emails.extend(os.environ.get(config.admin_emails_env, "").split(","))
        return cls(emails)

    def is_admin(self, email: str | None) -> bool:
        if not email or not email.strip():
            return False
        return email.strip().casefold() in self._emails

    def __len__(self) -> int:
        return len(self._emails)
