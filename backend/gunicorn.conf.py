import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))  # use REVOCATION_STORE=redis|sql with >1 worker
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

wsgi_app = "token_denylist.wsgi:app"

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
