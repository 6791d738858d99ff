import multiprocessing
import os

# Workers: 2 * CPU cores + 1, capped to stay within Postgres max_connections.
# Admission holds a row lock per request, so keep workers * threads modest.
workers = int(os.environ.get('GUNICORN_WORKERS', min(multiprocessing.cpu_count() * 2 + 1, 9)))
worker_class = 'gthread'
threads = int(os.environ.get('GUNICORN_THREADS', 4))

# Connections
max_requests = 1000
max_requests_jitter = 50

# Timeouts (publication renders PDFs in-request)
timeout = 120
graceful_timeout = 30
keepalive = 5

# Logging
accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'warning')

# Bind
bind = os.environ.get('GUNICORN_BIND', '0.0.0.0:8000')
