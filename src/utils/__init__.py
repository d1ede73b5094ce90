"""
Utilities Module

Common utilities for the certificate sync application.
"""

from .config import Config
from .logger import setup_logging

__all__ = ['Config', 'setup_logging']
