"""
Sync Models Module

Value types passed between the stages of a sync cycle.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CertCandidate:
    """A file matched by the certificate regex, read fresh each cycle."""
    path: str
    content: bytes


@dataclass(frozen=True)
class KeyPair:
    """A certificate and private key that were validated as a matching pair.

    Attributes:
        cert: Raw certificate file content
        key: Raw private key file content
        cert_path: Path the certificate was read from
        key_path: Path the private key was read from
    """
    cert: bytes
    key: bytes
    cert_path: str
    key_path: str


@dataclass(frozen=True)
class PairSearchResult:
    """Outcome of searching the directory for the candidate's counterpart."""
    candidate_role: str
    attempts: int
    key_pair: Optional[KeyPair] = None

    @property
    def matched(self) -> bool:
        return self.key_pair is not None


@dataclass
class SyncResult:
    """Outcome of a single sync cycle."""
    success: bool
    action: Optional[str] = None
    error: Optional[BaseException] = None
    duration: float = 0.0
