"""
Configuration Module

Resolves the application configuration from command line flags, falling back
to environment variables and then to built-in defaults.
"""

import argparse
import os
import re
from typing import List, Optional, Tuple

from cert_sync.errors import ConfigError

LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')
LOG_FORMATS = ('json', 'text')


def split_secret(value: str) -> Tuple[str, str]:
    """
    Split a '<namespace>/<secretname>' string.
    
    Raises:
        ConfigError: Unless the value has exactly two non-empty parts
    """
    parts = value.split('/')
    if len(parts) != 2 or not all(parts):
        raise ConfigError(f"-secret config invalid, should contain <namespace>/<secretname>, got {value!r}")
    return parts[0], parts[1]


def parse_listen_address(value: str) -> Tuple[str, int]:
    """
    Parse a 'host:port' listen address. An empty host means all interfaces.
    
    Raises:
        ConfigError: If the port is missing or invalid
    """
    host, sep, port = value.rpartition(':')
    if not sep:
        raise ConfigError(f"listen address {value!r} should be <host>:<port>")
    try:
        port_num = int(port)
    except ValueError:
        raise ConfigError(f"listen address {value!r} has an invalid port") from None
    if not 0 <= port_num <= 65535:
        raise ConfigError(f"listen address {value!r} has an invalid port")
    return host.strip('[]'), port_num


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser; every flag defaults to its environment variable."""
    env = os.environ.get
    parser = argparse.ArgumentParser(
        prog='etcd-cert-sync',
        description='Sync a TLS certificate/key pair from disk into a Kubernetes secret.',
    )
    parser.add_argument('--listen-address', default=env('LISTEN_ADDRESS', ':8080'),
                        help='The address to listen on for HTTP metrics requests.')
    parser.add_argument('--log-level', default=env('LOG_LEVEL', 'info'),
                        help='Log level (debug, info, warning, error, critical).')
    parser.add_argument('--log-format', default=env('LOG_FORMAT', 'json'),
                        help='Log format (json or text).')
    parser.add_argument('--cert-path', default=env('CERT_PATH', '/etc/kubernetes/ssl'),
                        help='The directory to look in for etcd client certs.')
    parser.add_argument('--cert-regex', default=env('CERT_REGEX', 'kube-etcd.*.pem'),
                        help='Regex matched against full file paths in --cert-path. Only the first match is used.')
    parser.add_argument('--secret', default=env('SECRET', 'monitoring/etcd-cert'),
                        help='Namespace and secret to copy the certs to, as <namespace>/<secretname>.')
    parser.add_argument('--sync-interval', default=env('SYNC_INTERVAL', '120'),
                        help='Seconds between sync runs.')
    parser.add_argument('--kubeconfig', default=env('KUBECONFIG'),
                        help='Path to a kubeconfig file. Uses in-cluster config when none is found.')
    parser.add_argument('--cert-key-name', default=env('CERT_KEY_NAME', 'cert.pem'),
                        help='Secret data key for the certificate.')
    parser.add_argument('--key-key-name', default=env('KEY_KEY_NAME', 'key.pem'),
                        help='Secret data key for the private key.')
    return parser


class Config:
    """Application configuration, validated once at startup."""
    
    def __init__(self, argv: Optional[List[str]] = None):
        """
        Parse and validate the configuration.
        
        Args:
            argv: Command line arguments (defaults to sys.argv[1:])
            
        Raises:
            ConfigError: If any value is invalid
        """
        args = build_parser().parse_args(argv)
        
        self.listen_address: str = args.listen_address
        self.metrics_host, self.metrics_port = parse_listen_address(args.listen_address)
        
        self.log_level: str = args.log_level.lower()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"unknown log level {args.log_level!r}")
        self.log_format: str = args.log_format.lower()
        if self.log_format not in LOG_FORMATS:
            raise ConfigError(f"unknown log format {args.log_format!r}")
        
        self.cert_path: str = args.cert_path
        try:
            self.cert_regex = re.compile(args.cert_regex)
        except re.error as e:
            raise ConfigError(f"invalid cert regex {args.cert_regex!r}: {e}") from e
        
        self.secret: str = args.secret
        self.namespace, self.secret_name = split_secret(args.secret)
        
        try:
            self.sync_interval = float(args.sync_interval)
        except ValueError:
            raise ConfigError(f"invalid sync interval {args.sync_interval!r}") from None
        if self.sync_interval <= 0:
            raise ConfigError(f"sync interval must be positive, got {args.sync_interval!r}")
        
        self.kubeconfig: Optional[str] = args.kubeconfig or None
        self.cert_key_name: str = args.cert_key_name
        self.key_key_name: str = args.key_key_name
        if not self.cert_key_name or not self.key_key_name or self.cert_key_name == self.key_key_name:
            raise ConfigError("secret data keys for cert and key must be non-empty and distinct")
    
    def __repr__(self) -> str:
        return (f"Config(cert_path={self.cert_path!r}, cert_regex={self.cert_regex.pattern!r}, "
                f"secret={self.namespace}/{self.secret_name}, sync_interval={self.sync_interval})")
