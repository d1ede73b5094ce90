"""In-memory stand-in for the Kubernetes CoreV1Api secret calls.

Mirrors the API server behaviour the publisher relies on: 404 on missing
secrets, 409 on create of an existing secret, and 409 on replace with a
stale resource version.
"""

import copy
from typing import Dict, List, Tuple

from kubernetes import client
from kubernetes.client.rest import ApiException


class FakeCoreV1Api:
    """Stores secrets by (namespace, name) and bumps resource_version on write."""

    def __init__(self):
        self.secrets: Dict[Tuple[str, str], client.V1Secret] = {}
        self.calls: List[str] = []
        self._version = 0

    def _next_version(self) -> str:
        self._version += 1
        return str(self._version)

    def seed(self, namespace: str, name: str, data: Dict[str, str] = None) -> client.V1Secret:
        """Put a secret in place as if someone else had created it."""
        secret = client.V1Secret(
            metadata=client.V1ObjectMeta(name=name, namespace=namespace, resource_version=self._next_version()),
            data=data or {},
        )
        self.secrets[(namespace, name)] = secret
        return secret

    def bump(self, namespace: str, name: str) -> None:
        """Simulate a concurrent external modification."""
        self.secrets[(namespace, name)].metadata.resource_version = self._next_version()

    def read_namespaced_secret(self, name, namespace):
        self.calls.append("read")
        secret = self.secrets.get((namespace, name))
        if secret is None:
            raise ApiException(status=404, reason="Not Found")
        return copy.deepcopy(secret)

    def create_namespaced_secret(self, namespace, body):
        self.calls.append("create")
        key = (namespace, body.metadata.name)
        if key in self.secrets:
            raise ApiException(status=409, reason="AlreadyExists")
        stored = copy.deepcopy(body)
        stored.metadata.resource_version = self._next_version()
        self.secrets[key] = stored
        return copy.deepcopy(stored)

    def replace_namespaced_secret(self, name, namespace, body):
        self.calls.append("replace")
        current = self.secrets.get((namespace, name))
        if current is None:
            raise ApiException(status=404, reason="Not Found")
        if body.metadata.resource_version != current.metadata.resource_version:
            raise ApiException(status=409, reason="Conflict")
        stored = copy.deepcopy(body)
        stored.metadata.resource_version = self._next_version()
        self.secrets[(namespace, name)] = stored
        return copy.deepcopy(stored)
