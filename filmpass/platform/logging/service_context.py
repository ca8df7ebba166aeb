"""
Client context for log lines.

Identifies which client process emitted a log line, so logs from several
kiosks or browser-side workers can be told apart when aggregated.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    client_name = os.getenv('CLIENT_NAME', 'filmpass-web')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    host = os.getenv('HOSTNAME') or socket.gethostname()
    return f'{client_name}@{deploy_env}:{host[:12]}:{os.getpid()}'
