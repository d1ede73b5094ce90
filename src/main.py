"""
Main Entry Point

This is the main entry point for the etcd certificate sync application.
"""

import logging
import sys

from app import CertSyncApp
from cert_sync.errors import ConfigError
from utils import Config

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    try:
        # Create configuration
        config = Config()
        
        # Create and run application
        app = CertSyncApp(config)
        exit_code = app.run()
        sys.exit(exit_code)
    
    except ConfigError as e:
        logging.basicConfig()
        logger.critical(f"❌ Invalid configuration: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        logger.critical(f"❌ Fatal error: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
