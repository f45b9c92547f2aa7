"""
System Check Script
Verifies configuration and connections before deploying
"""

import os
import sys

from deployment.preflight import run_checks
from deployment.runner import configure_logging


if __name__ == "__main__":
    configure_logging(os.getenv('DEPLOY_LOG_LEVEL', 'INFO'))

    sys.exit(run_checks())
