"""
Sync Errors Module

Error kinds raised by the certificate sync pipeline.
"""


class CertSyncError(Exception):
    """Base class for all certificate sync errors."""


class ConfigError(CertSyncError):
    """Startup configuration is malformed. Fatal, no cycle ever runs."""


class CandidateNotFoundError(CertSyncError):
    """No directory entry matched the certificate regex."""

    def __init__(self, directory: str, pattern: str):
        self.directory = directory
        self.pattern = pattern
        super().__init__(f"no file in {directory} matches {pattern!r}")


class KeyPairMismatchError(CertSyncError):
    """A certificate and key could not be loaded as a matching pair."""


class PairNotFoundError(CertSyncError):
    """No sibling file forms a valid certificate/key pair with the candidate."""

    def __init__(self, candidate_path: str, attempts: int):
        self.candidate_path = candidate_path
        self.attempts = attempts
        super().__init__(
            f"no matching certificate/key pair found for {candidate_path} "
            f"after trying {attempts} file(s)"
        )


class StoreError(CertSyncError):
    """Reading or writing the target secret failed."""
