# gunicorn.conf.py
import os
import logging
import sys

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Get PORT from environment or use default
port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# Chat sessions, the chapter cache and narration locks live in process
# memory, so a single worker process serves every request.
workers = 1
threads = int(os.getenv('GUNICORN_THREADS', '8'))

# Log configuration on startup
def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} worker and {threads} threads on port {port}")
    logger.info(f"Worker timeout set to {timeout} seconds")

# Generative calls can be slow
timeout = 180
keepalive = 120
worker_class = "gthread"

# Process naming
proc_name = "devotional_app"
default_proc_name = "devotional_app"

# Graceful server restart
graceful_timeout = 30
