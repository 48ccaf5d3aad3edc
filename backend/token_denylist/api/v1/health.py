"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app

from token_denylist.api.deps import json_response, timing
from token_denylist.core.extensions import get_revocation_list
from token_denylist.services._shared.errors import StoreError

bp = Blueprint("health", __name__)

PROBE_KEY = "__health__"


@bp.get("/health")
@timing
def healthcheck():
    """Return application and revocation store health information."""

    revocations = get_revocation_list()
    store_status = "ok"
    try:
        revocations.store.has(PROBE_KEY)
    except StoreError:
        current_app.logger.exception("healthcheck.store_error")
        store_status = "fail"
    payload = {
        "status": "ok" if store_status == "ok" else "degraded",
        "store": store_status,
        "backend": type(revocations.store).__name__,
        "grace_period": revocations.grace_period,
    }
    return json_response(payload, status=200 if store_status == "ok" else 503)
