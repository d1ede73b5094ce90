"""
Certificate Scanner Module

Finds the certificate or key file to sync in the configured directory.
"""

import logging
import os
import re
from typing import List, Optional

from .errors import CandidateNotFoundError
from .models import CertCandidate

logger = logging.getLogger(__name__)


def read_file(path: str) -> bytes:
    """Read a file's raw bytes."""
    with open(path, 'rb') as f:
        return f.read()


class DirectoryScanner:
    """Scans a single directory (non-recursive) for files matching a regex."""
    
    def __init__(self, cert_path: str, cert_regex: re.Pattern):
        """
        Initialize the directory scanner.
        
        Args:
            cert_path: Directory to look in for certificate files
            cert_regex: Compiled regex, searched against each entry's full path
        """
        self.cert_path = cert_path
        self.cert_regex = cert_regex
    
    def list_entries(self) -> List[str]:
        """
        List the full paths of every entry in the directory, ordered by name.
        
        Returns:
            List of full paths, subdirectories included
            
        Raises:
            OSError: If the directory is missing or cannot be read
        """
        names = sorted(os.listdir(self.cert_path))
        return [os.path.join(self.cert_path, name) for name in names]
    
    def find_candidate(self, entries: Optional[List[str]] = None) -> str:
        """
        Find the first entry whose full path matches the certificate regex.
        
        Args:
            entries: Directory listing to search (listed fresh when omitted)
            
        Returns:
            Full path of the first matching entry
            
        Raises:
            CandidateNotFoundError: If no entry matches
        """
        if entries is None:
            entries = self.list_entries()
        
        for path in entries:
            if self.cert_regex.search(path):
                logger.debug(f"found file {path} to sync")
                # only sync the first one found
                return path
        
        raise CandidateNotFoundError(self.cert_path, self.cert_regex.pattern)
    
    def read_candidate(self, path: str) -> CertCandidate:
        """Read the matched file's content."""
        return CertCandidate(path=path, content=read_file(path))
