"""
Certificate Sync Module

Syncs a TLS certificate/key pair from local disk into a Kubernetes secret.
"""

from .errors import (
    CandidateNotFoundError,
    CertSyncError,
    ConfigError,
    PairNotFoundError,
    StoreError,
)
from .models import CertCandidate, KeyPair, PairSearchResult, SyncResult
from .pipeline import SyncContext, run_sync, sync_cert_to_secret
from .publisher import SecretPublisher
from .scanner import DirectoryScanner
from .scheduler import PeriodicSyncer
from .validator import PairValidator, load_key_pair

__all__ = [
    'CandidateNotFoundError', 'CertSyncError', 'ConfigError', 'PairNotFoundError', 'StoreError',
    'CertCandidate', 'KeyPair', 'PairSearchResult', 'SyncResult',
    'SyncContext', 'run_sync', 'sync_cert_to_secret',
    'SecretPublisher', 'DirectoryScanner', 'PeriodicSyncer', 'PairValidator', 'load_key_pair',
]
