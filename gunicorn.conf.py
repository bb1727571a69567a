"""Gunicorn config for container deployment."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Single worker: the active transaction set lives in process memory
worker_class = "uvicorn.workers.UvicornWorker"
workers = 1

# Large workbooks take a few seconds to parse
timeout = 60
graceful_timeout = 30
keepalive = 65

accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("FINDASH_LOG_LEVEL", "info").lower()
