"""
Smart Contract Deployment Script
Deploys the Voting contract and saves its address and artifact for the frontend
"""

import os
import sys
from loguru import logger

from deployment.runner import configure_logging, main


if __name__ == "__main__":
    configure_logging(os.getenv('DEPLOY_LOG_LEVEL', 'INFO'))

    logger.info("Starting contract deployment...")
    sys.exit(main())
