"""
Gunicorn configuration for the Carbon Coach API.

    gunicorn -c gunicorn.conf.py

Env vars that override defaults:
  PORT     — TCP port to bind (default: 8000)
  WORKERS  — number of worker processes (default: 2)
"""
import os

wsgi_app = "app.main:app"

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"
workers = int(os.environ.get("WORKERS", "2"))

# Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

timeout = 60
graceful_timeout = 30

# stdout/stderr only; the platform collects them.
loglevel = "info"
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'
