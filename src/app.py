"""
Certificate Sync Application

Owns process startup and shutdown: metrics endpoint, periodic syncer and
signal handling.
"""

import logging
import signal
import threading
from typing import Callable, Optional

from cert_sync import DirectoryScanner, PeriodicSyncer, SecretPublisher, SyncContext, run_sync
from utils import Config, setup_logging
from utils import kube, metrics

logger = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT = 10.0


class CertSyncApp:
    """Runs the certificate sync until SIGINT or SIGTERM."""
    
    def __init__(self, config: Config, core_v1=None,
                 start_metrics: Callable = metrics.start_metrics_server):
        """
        Initialize the application.
        
        Args:
            config: Validated application configuration
            core_v1: CoreV1Api client (built from kubeconfig/in-cluster when omitted)
            start_metrics: Starts the metrics server, returns (server, thread)
        """
        self.config = config
        self.core_v1 = core_v1
        self.start_metrics = start_metrics
        self.shutdown_event = threading.Event()
        self.syncer: Optional[PeriodicSyncer] = None
        self._metrics_server = None
    
    def build_context(self) -> SyncContext:
        """Build the sync context shared by every cycle."""
        if self.core_v1 is None:
            self.core_v1 = kube.get_core_v1_api(self.config.kubeconfig)
        
        publisher = SecretPublisher(
            self.core_v1,
            namespace=self.config.namespace,
            name=self.config.secret_name,
            cert_key_name=self.config.cert_key_name,
            key_key_name=self.config.key_key_name,
        )
        scanner = DirectoryScanner(self.config.cert_path, self.config.cert_regex)
        return SyncContext(scanner=scanner, publisher=publisher)
    
    def _handle_signal(self, signum, frame) -> None:
        logger.info(f"Received signal {signal.Signals(signum).name}, shutting down...")
        self.shutdown_event.set()
    
    def install_signal_handlers(self) -> None:
        signal.signal(signal.SIGINT, self._handle_signal)
        signal.signal(signal.SIGTERM, self._handle_signal)
    
    def _stop_metrics_server(self) -> None:
        if self._metrics_server is None:
            return
        stopper = threading.Thread(target=self._metrics_server.shutdown, daemon=True)
        stopper.start()
        stopper.join(SHUTDOWN_TIMEOUT)
        if stopper.is_alive():
            logger.warning("⚠️ Metrics server did not stop in time")
        else:
            self._metrics_server.server_close()
        self._metrics_server = None
    
    def run(self, install_signals: bool = True) -> int:
        """
        Run until a shutdown signal arrives.
        
        Args:
            install_signals: Install SIGINT/SIGTERM handlers (main thread only)
            
        Returns:
            Process exit code
        """
        setup_logging(self.config.log_level, self.config.log_format)
        logger.info(f"🚀 Starting certificate sync: {self.config!r}")
        
        ctx = self.build_context()
        
        if install_signals:
            self.install_signal_handlers()
        
        self._metrics_server, _ = self.start_metrics(self.config.metrics_host, self.config.metrics_port)
        
        self.syncer = PeriodicSyncer(
            lambda: run_sync(ctx),
            interval=self.config.sync_interval,
            stop_event=self.shutdown_event,
            on_result=metrics.record_sync,
        )
        self.syncer.start()
        
        self.shutdown_event.wait()
        
        self.syncer.stop()
        self._stop_metrics_server()
        logger.info("Certificate sync stopped")
        return 0
    
    def stop(self) -> None:
        """Request shutdown, same as receiving SIGTERM."""
        self.shutdown_event.set()
