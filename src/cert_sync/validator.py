"""
Key Pair Validator Module

Pairs the candidate file with its counterpart (certificate or private key)
from the same directory.
"""

import logging
from typing import Callable, List

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .errors import KeyPairMismatchError, PairNotFoundError
from .models import CertCandidate, KeyPair, PairSearchResult
from .scanner import read_file

logger = logging.getLogger(__name__)

PRIVATE_KEY_MARKER = b'PRIVATE KEY'

ROLE_KEY = 'key'
ROLE_CERT = 'cert'


def is_private_key(content: bytes) -> bool:
    """Return True if the content looks like a PEM private key."""
    return PRIVATE_KEY_MARKER in content


def load_key_pair(cert_pem: bytes, key_pem: bytes) -> None:
    """
    Check that a PEM certificate and an unencrypted PEM private key belong together.
    
    The first certificate in cert_pem is the leaf; its public key must equal the
    public key derived from the private key. Nothing parsed here is kept.
    
    Args:
        cert_pem: Certificate (or chain) content
        key_pem: Private key content
        
    Raises:
        KeyPairMismatchError: If either blob fails to parse or the keys differ
    """
    try:
        certs = x509.load_pem_x509_certificates(cert_pem)
        private_key = serialization.load_pem_private_key(key_pem, password=None)
        cert_public = certs[0].public_key().public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)
        key_public = private_key.public_key().public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyPairMismatchError(str(e)) from e
    
    if cert_public != key_public:
        raise KeyPairMismatchError("private key does not match certificate public key")


class PairValidator:
    """Finds the file that completes a certificate/key pair with the candidate."""
    
    def __init__(self, reader: Callable[[str], bytes] = read_file):
        """
        Initialize the pair validator.
        
        Args:
            reader: Callable returning a file's bytes, swapped out in tests
        """
        self.reader = reader
    
    def search(self, candidate: CertCandidate, siblings: List[str]) -> PairSearchResult:
        """
        Search the directory listing for the candidate's counterpart.
        
        The candidate is classified by content. Each sibling, the candidate itself
        included, is then tried in listing order in the opposite role. The first
        sibling that loads as a valid pair wins.
        
        Args:
            candidate: The file matched by the scanner
            siblings: Full paths of every entry in the candidate's directory
            
        Returns:
            PairSearchResult, matched or not
        """
        candidate_is_key = is_private_key(candidate.content)
        role = ROLE_KEY if candidate_is_key else ROLE_CERT
        attempts = 0
        
        for path in siblings:
            try:
                content = candidate.content if path == candidate.path else self.reader(path)
            except OSError as e:
                logger.debug(f"skipping {path}: {e}")
                continue
            
            attempts += 1
            if candidate_is_key:
                cert_path, cert, key_path, key = path, content, candidate.path, candidate.content
            else:
                cert_path, cert, key_path, key = candidate.path, candidate.content, path, content
            
            try:
                load_key_pair(cert, key)
            except KeyPairMismatchError as e:
                logger.debug(f"{cert_path} / {key_path} is not a pair: {e}")
                continue
            
            return PairSearchResult(
                candidate_role=role,
                attempts=attempts,
                key_pair=KeyPair(cert=cert, key=key, cert_path=cert_path, key_path=key_path),
            )
        
        return PairSearchResult(candidate_role=role, attempts=attempts)
    
    def resolve(self, candidate: CertCandidate, siblings: List[str]) -> KeyPair:
        """
        Resolve the candidate into a validated KeyPair.
        
        Raises:
            PairNotFoundError: If no sibling forms a valid pair with the candidate
        """
        result = self.search(candidate, siblings)
        if not result.matched:
            raise PairNotFoundError(candidate.path, result.attempts)
        
        logger.debug(f"found cert {result.key_pair.cert_path}")
        logger.debug(f"found key {result.key_pair.key_path}")
        return result.key_pair
