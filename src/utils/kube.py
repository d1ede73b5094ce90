"""
Kubernetes Client Module

Bootstraps the Kubernetes API client from a kubeconfig file or the in-cluster
service account.
"""

import logging
import os
from typing import Optional

from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from cert_sync.errors import ConfigError

logger = logging.getLogger(__name__)


def default_kubeconfig_path() -> Optional[str]:
    """Return ~/.kube/config if a home directory is known."""
    home = os.path.expanduser('~')
    if home and home != '~':
        return os.path.join(home, '.kube', 'config')
    return None


def load_kube_config(kubeconfig: Optional[str] = None) -> str:
    """
    Load Kubernetes client configuration.
    
    Tries the given kubeconfig (or ~/.kube/config) first, then falls back to the
    in-cluster service account.
    
    Args:
        kubeconfig: Path to a kubeconfig file
        
    Returns:
        'kubeconfig' or 'incluster', whichever was loaded
        
    Raises:
        ConfigError: If neither source is usable
    """
    path = kubeconfig or default_kubeconfig_path()
    if path and os.path.exists(path):
        try:
            config.load_kube_config(config_file=path)
            logger.info(f"✅ Loaded kubeconfig from {path}")
            return 'kubeconfig'
        except (ConfigException, OSError) as e:
            logger.warning(f"⚠️ Could not load kubeconfig {path}: {e}")
    
    logger.info("No kubeconfig found. Using in-cluster config...")
    try:
        config.load_incluster_config()
    except ConfigException as e:
        raise ConfigError(f"could not load Kubernetes configuration: {e}") from e
    logger.info("✅ Loaded in-cluster Kubernetes configuration")
    return 'incluster'


def get_core_v1_api(kubeconfig: Optional[str] = None) -> client.CoreV1Api:
    """Load configuration and return a CoreV1Api client."""
    load_kube_config(kubeconfig)
    return client.CoreV1Api()
