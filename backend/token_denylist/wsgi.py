"""WSGI entrypoint: ``gunicorn -c gunicorn.conf.py token_denylist.wsgi:app``."""

from __future__ import annotations

from token_denylist import create_app

app = create_app()
