"""
Service context extraction for distributed logging.

Identifies which process wrote a log line so that purchase and redemption
traces can be followed across several API workers.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'tikiti')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hosts expose HOSTNAME; fall back to PID for local development
    instance_id = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance_id}'
