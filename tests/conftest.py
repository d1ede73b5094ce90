"""Shared pytest fixtures for etcd-cert-sync tests.

Certificates and keys are generated with cryptography once per session; each
test writes them into its own tmp_path directory.
"""

import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Tuple

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from cert_sync import DirectoryScanner, SecretPublisher, SyncContext
from tests.mocks.fake_kube import FakeCoreV1Api

NAMESPACE = "monitoring"
SECRET_NAME = "etcd-cert"
DEFAULT_REGEX = r"kube-etcd.*\.pem"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")


def generate_pair(common_name: str, key_type: str = "rsa") -> Tuple[bytes, bytes]:
    """Generate a self-signed certificate and its PKCS8 private key, both PEM."""
    if key_type == "ec":
        key = ec.generate_private_key(ec.SECP256R1())
    else:
        key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
        .sign(key, hashes.SHA256())
    )
    cert_pem = cert.public_bytes(serialization.Encoding.PEM)
    key_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return cert_pem, key_pem


@pytest.fixture(scope="session")
def etcd_pair() -> Tuple[bytes, bytes]:
    """RSA cert/key pair for kube-etcd-1."""
    return generate_pair("kube-etcd-1")


@pytest.fixture(scope="session")
def other_pair() -> Tuple[bytes, bytes]:
    """An unrelated RSA cert/key pair."""
    return generate_pair("other")


@pytest.fixture(scope="session")
def ec_pair() -> Tuple[bytes, bytes]:
    """EC cert/key pair."""
    return generate_pair("kube-etcd-ec", key_type="ec")


@pytest.fixture
def cert_dir(tmp_path: Path) -> Path:
    """Provide an empty certificate directory."""
    directory = tmp_path / "ssl"
    directory.mkdir()
    return directory


@pytest.fixture
def write_file(cert_dir: Path) -> Callable[[str, bytes], Path]:
    """Write a file into the certificate directory."""
    def _write(name: str, content: bytes) -> Path:
        path = cert_dir / name
        path.write_bytes(content)
        return path
    return _write


@pytest.fixture
def fake_core_v1() -> FakeCoreV1Api:
    return FakeCoreV1Api()


@pytest.fixture
def publisher(fake_core_v1: FakeCoreV1Api) -> SecretPublisher:
    return SecretPublisher(fake_core_v1, namespace=NAMESPACE, name=SECRET_NAME)


@pytest.fixture
def sync_context(cert_dir: Path, publisher: SecretPublisher) -> SyncContext:
    """Sync context over the test directory and the fake secret store."""
    scanner = DirectoryScanner(str(cert_dir), re.compile(DEFAULT_REGEX))
    return SyncContext(scanner=scanner, publisher=publisher)
