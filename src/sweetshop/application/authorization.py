"""Capability checks applied before a use case reaches the ledger."""

from __future__ import annotations

from sweetshop.domain.exceptions import UnauthorizedError
from sweetshop.domain.model.caller import Caller


def require_authenticated(caller: Caller, action: str) -> None:
    if not caller.is_authenticated:
        raise UnauthorizedError(f"Sign in to {action}")


def require_admin(caller: Caller, action: str) -> None:
    require_authenticated(caller, action)
    if not caller.is_admin:
        raise UnauthorizedError(f"Only administrators may {action}")
