"""Shared CLI plumbing: the wired shop and the calling user."""

from __future__ import annotations

import click

from sweetshop.domain.model.caller import Caller
from sweetshop.infrastructure.bootstrap import Shop, build_shop, resolve_caller


def current_shop() -> Shop:
    """Return the shop for this invocation, building it on first use."""
    obj = click.get_current_context().find_root().ensure_object(dict)
    if "shop" not in obj:
        obj["shop"] = build_shop()
    return obj["shop"]


def current_caller() -> Caller:
    obj = click.get_current_context().find_root().ensure_object(dict)
    return resolve_caller(obj.get("user"))
