"""
Sync Pipeline Module

One sync cycle: scan the directory, resolve the key pair, publish the secret.
"""

import logging
import time
from dataclasses import dataclass, field

from .errors import CertSyncError
from .models import SyncResult
from .publisher import SecretPublisher
from .scanner import DirectoryScanner
from .validator import PairValidator

logger = logging.getLogger(__name__)


@dataclass
class SyncContext:
    """Everything a sync cycle needs, built once at startup."""
    scanner: DirectoryScanner
    publisher: SecretPublisher
    validator: PairValidator = field(default_factory=PairValidator)


def sync_cert_to_secret(ctx: SyncContext) -> str:
    """
    Run the scan, validate and publish steps in order.
    
    Args:
        ctx: Sync context
        
    Returns:
        The action taken on the secret ('created' or 'updated')
        
    Raises:
        OSError: If the directory or candidate file cannot be read
        CertSyncError: If no candidate or pair is found, or the secret write fails
    """
    logger.debug(f"starting sync of certs to secret {ctx.publisher.namespace}/{ctx.publisher.name}")
    
    entries = ctx.scanner.list_entries()
    candidate_path = ctx.scanner.find_candidate(entries)
    candidate = ctx.scanner.read_candidate(candidate_path)
    key_pair = ctx.validator.resolve(candidate, entries)
    
    return ctx.publisher.publish(key_pair)


def run_sync(ctx: SyncContext) -> SyncResult:
    """
    Run one sync cycle and report its outcome instead of raising.
    
    Only the cycle-scoped error kinds are converted; anything else propagates to
    the caller.
    """
    start = time.monotonic()
    try:
        action = sync_cert_to_secret(ctx)
    except (CertSyncError, OSError) as e:
        return SyncResult(success=False, error=e, duration=time.monotonic() - start)
    
    return SyncResult(success=True, action=action, duration=time.monotonic() - start)
