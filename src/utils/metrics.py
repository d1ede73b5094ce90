"""
Metrics Module

Prometheus metrics for sync runs and the HTTP endpoint that serves them.
"""

import logging
import threading
import time
from typing import Tuple

from prometheus_client import Counter, Gauge, Histogram, start_http_server

from cert_sync.models import SyncResult

logger = logging.getLogger(__name__)

SYNC_RUNS_TOTAL = Counter(
    'cert_sync_runs_total',
    'Total certificate sync runs',
    ['result'],
)

SYNC_LAST_SUCCESS_TIMESTAMP = Gauge(
    'cert_sync_last_success_timestamp_seconds',
    'Unix time of the last successful sync',
)

SYNC_DURATION_SECONDS = Histogram(
    'cert_sync_duration_seconds',
    'Duration of certificate sync runs in seconds',
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

SECRET_WRITES_TOTAL = Counter(
    'cert_sync_secret_writes_total',
    'Total writes to the target secret',
    ['action'],
)


def record_sync(result: SyncResult) -> None:
    """Record the outcome of a sync run."""
    SYNC_DURATION_SECONDS.observe(result.duration)
    if result.success:
        SYNC_RUNS_TOTAL.labels(result='success').inc()
        SYNC_LAST_SUCCESS_TIMESTAMP.set(time.time())
        SECRET_WRITES_TOTAL.labels(action=result.action).inc()
    else:
        SYNC_RUNS_TOTAL.labels(result='failure').inc()


def start_metrics_server(host: str, port: int) -> Tuple[object, threading.Thread]:
    """
    Serve /metrics on a daemon thread.
    
    Args:
        host: Interface to bind, empty for all interfaces
        port: Port to bind
        
    Returns:
        The server and its thread, so the caller can shut it down
    """
    server, thread = start_http_server(port, addr=host or '0.0.0.0')
    logger.info(f"Serving metrics on {host or '0.0.0.0'}:{port}/metrics")
    return server, thread
