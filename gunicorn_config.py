"""Gunicorn configuration for production."""
import multiprocessing
import os

# Server socket
port = os.getenv("PORT", "8000")
bind = f"0.0.0.0:{port}"
backlog = 2048

# Worker processes
workers_env = os.getenv("GUNICORN_WORKERS")
if workers_env:
    workers = int(workers_env)
else:
    # Requests are short single-record operations; scale with CPUs, capped at 8
    cpu_count = multiprocessing.cpu_count()
    workers = max(2, min(cpu_count * 2, 8))

worker_class = "sync"
timeout = 30
keepalive = 5
graceful_timeout = 30

# Logging
accesslog = "-"  # stdout
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

capture_output = True

# Process naming
proc_name = "customer-api"

# Server mechanics
daemon = False
pidfile = None
umask = 0
user = None
group = None
tmp_upload_dir = None


def worker_exit(server, worker):
    """Release the worker's Redis connections on shutdown."""
    from customer_api.infrastructure.redis_client import RedisClientFactory

    RedisClientFactory.close()

