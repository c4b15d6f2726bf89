"""Identity of whoever invokes a use case.

Supplied by the auth collaborator; the domain only reads it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Caller:
    user_id: str
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id and self.user_id.strip())


ANONYMOUS = Caller(user_id="")
