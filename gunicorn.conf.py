"""
Gunicorn Configuration for Production

Run with: gunicorn main:app -c gunicorn.conf.py

Turns are I/O bound: each worker spends most of a turn awaiting Gemini, so
a few async workers go a long way. Each worker loads its own copy of the
Baseline CSS cache on first code generation.

RECOMMENDED SETTINGS BY INSTANCE:
- 1GB RAM:  GUNICORN_WORKERS=1
- 2GB RAM:  GUNICORN_WORKERS=2
- 4GB RAM:  GUNICORN_WORKERS=4
"""

import multiprocessing
import os

# =============================================================================
# Server Socket
# =============================================================================

bind = os.getenv("BIND", "0.0.0.0:8000")
backlog = 2048

# =============================================================================
# Worker Processes
# =============================================================================

workers = int(os.getenv("GUNICORN_WORKERS", min(2 * multiprocessing.cpu_count() + 1, 4)))

# Use Uvicorn worker for async support
worker_class = "uvicorn.workers.UvicornWorker"

# Longest turn: WEB_FEATURES_FETCH_TIMEOUT (20s) + GENERATION_TIMEOUT_SECONDS (90s),
# which already includes retries and backoff
timeout = int(os.getenv("GUNICORN_TIMEOUT", "150"))
graceful_timeout = 30
keepalive = 5

max_requests = 1000
max_requests_jitter = 100

# =============================================================================
# Logging
# =============================================================================

accesslog = "-"  # stdout
errorlog = "-"   # stderr
loglevel = os.getenv("LOG_LEVEL", "info")

access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# =============================================================================
# Process Naming
# =============================================================================

proc_name = "airlane-api"

daemon = False
pidfile = None
