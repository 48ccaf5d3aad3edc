"""HTTP API: versioned blueprints for health, auth and revocation management."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from flask import Blueprint, Flask

log = logging.getLogger(__name__)


def join_prefix(*segments: str) -> str:
    """Join URL segments into one absolute prefix, ignoring empty parts.

    ``join_prefix("/api/", "v1", "")`` gives ``"/api/v1"``.
    """
    parts = [s.strip("/") for s in segments if s and s.strip("/")]
    return "/" + "/".join(parts)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> list[str]:
    """Mount each ``(blueprint, relative_prefix)`` pair under ``base_prefix``.

    :returns: The URL prefixes that were registered, in order.
    """
    mounted: list[str] = []
    for bp, rel_prefix in entries:
        prefix = join_prefix(base_prefix, rel_prefix)
        app.register_blueprint(bp, url_prefix=prefix)
        mounted.append(prefix)
    return mounted


def init_app(app: Flask) -> None:
    """Register the v1 revocation API under ``API_BASE_PREFIX``."""

    from token_denylist.api.v1 import API_VERSION, REGISTRY

    base = join_prefix(app.config.get("API_BASE_PREFIX", "/api"), API_VERSION)
    mounted = register_blueprint_group(app, base_prefix=base, entries=REGISTRY)
    log.debug("api.mounted %s", ", ".join(mounted))


__all__ = ["init_app", "join_prefix", "register_blueprint_group"]
