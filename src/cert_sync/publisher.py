"""
Secret Publisher Module

Creates or updates the Kubernetes secret that holds the synced certificate and key.
"""

import base64
import logging
from typing import Dict, Optional

from kubernetes import client
from kubernetes.client.rest import ApiException

from .errors import StoreError
from .models import KeyPair

logger = logging.getLogger(__name__)

ACTION_CREATED = 'created'
ACTION_UPDATED = 'updated'

DEFAULT_CERT_KEY_NAME = 'cert.pem'
DEFAULT_KEY_KEY_NAME = 'key.pem'


class SecretPublisher:
    """Publishes a KeyPair into a single namespaced secret."""
    
    def __init__(self, core_v1: client.CoreV1Api, namespace: str, name: str,
                 cert_key_name: str = DEFAULT_CERT_KEY_NAME,
                 key_key_name: str = DEFAULT_KEY_KEY_NAME):
        """
        Initialize the secret publisher.
        
        Args:
            core_v1: Kubernetes CoreV1Api client
            namespace: Namespace of the target secret
            name: Name of the target secret
            cert_key_name: Secret data key holding the certificate
            key_key_name: Secret data key holding the private key
        """
        self.core_v1 = core_v1
        self.namespace = namespace
        self.name = name
        self.cert_key_name = cert_key_name
        self.key_key_name = key_key_name
    
    def build_secret(self, key_pair: KeyPair, resource_version: Optional[str] = None) -> client.V1Secret:
        """
        Build the secret body for a key pair.
        
        Args:
            key_pair: Validated certificate and key
            resource_version: Version read from the existing secret, if any
            
        Returns:
            V1Secret with base64 encoded data
        """
        data: Dict[str, str] = {
            self.cert_key_name: base64.b64encode(key_pair.cert).decode('ascii'),
            self.key_key_name: base64.b64encode(key_pair.key).decode('ascii'),
        }
        return client.V1Secret(
            api_version='v1',
            kind='Secret',
            type='Opaque',
            metadata=client.V1ObjectMeta(
                name=self.name,
                namespace=self.namespace,
                resource_version=resource_version,
            ),
            data=data,
        )
    
    def _get_existing(self) -> Optional[client.V1Secret]:
        try:
            return self.core_v1.read_namespaced_secret(name=self.name, namespace=self.namespace)
        except ApiException as e:
            if e.status == 404:
                return None
            raise StoreError(f"retrieving existing secret {self.namespace}/{self.name} failed: {e.status} {e.reason}") from e
        except Exception as e:
            raise StoreError(f"retrieving existing secret {self.namespace}/{self.name} failed: {e}") from e
    
    def publish(self, key_pair: KeyPair) -> str:
        """
        Create the secret, or update it in place if it already exists.
        
        Updates carry the resource version read at the start of this call, so the
        API server rejects the write if someone else changed the secret meanwhile.
        
        Args:
            key_pair: Validated certificate and key
            
        Returns:
            ACTION_CREATED or ACTION_UPDATED
            
        Raises:
            StoreError: If the lookup, create or update fails
        """
        existing = self._get_existing()
        
        if existing is None:
            body = self.build_secret(key_pair)
            try:
                self.core_v1.create_namespaced_secret(namespace=self.namespace, body=body)
            except Exception as e:
                raise StoreError(f"creating secret {self.namespace}/{self.name} failed: {e}") from e
            logger.debug(f"created secret {self.name} successfully in namespace {self.namespace}")
            return ACTION_CREATED
        
        body = self.build_secret(key_pair, resource_version=existing.metadata.resource_version)
        try:
            self.core_v1.replace_namespaced_secret(name=self.name, namespace=self.namespace, body=body)
        except Exception as e:
            raise StoreError(f"updating secret {self.namespace}/{self.name} failed: {e}") from e
        logger.debug(f"updated secret {self.name} successfully in namespace {self.namespace}")
        return ACTION_UPDATED
