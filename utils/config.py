"""
Deploy Configuration
Collects deployment settings from the environment (.env supported)
"""

import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_NETWORK = 'hardhat'
DEFAULT_CONTRACT = 'Voting'
DEFAULT_CONFIRMATION_TIMEOUT = 120


class DeployConfig:
    """
    Settings for a single deployment run
    """

    def __init__(
        self,
        network: str = DEFAULT_NETWORK,
        contract_name: str = DEFAULT_CONTRACT,
        rpc_url: Optional[str] = None,
        private_key: Optional[str] = None,
        artifacts_dir: Optional[str] = None,
        contracts_dir: Optional[str] = None,
        networks_file: Optional[str] = None,
        confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
        log_level: str = 'INFO'
    ):
        self.network = network
        self.contract_name = contract_name
        self.rpc_url = rpc_url
        self.private_key = private_key
        self.artifacts_dir = artifacts_dir or os.path.join(PROJECT_ROOT, 'artifacts')
        self.contracts_dir = contracts_dir or os.path.join(
            PROJECT_ROOT, 'frontend', 'src', 'contracts'
        )
        self.networks_file = networks_file or os.path.join(
            PROJECT_ROOT, 'config', 'networks.json'
        )
        self.confirmation_timeout = confirmation_timeout
        self.log_level = log_level

    @classmethod
    def from_env(cls) -> 'DeployConfig':
        """
        Build configuration from environment variables

        Raises:
            ValueError: if DEPLOY_CONFIRMATION_TIMEOUT is not a number
        """
        timeout = os.getenv('DEPLOY_CONFIRMATION_TIMEOUT')

        return cls(
            network=os.getenv('DEPLOY_NETWORK', DEFAULT_NETWORK),
            contract_name=os.getenv('DEPLOY_CONTRACT', DEFAULT_CONTRACT),
            rpc_url=os.getenv('RPC_URL') or None,
            private_key=os.getenv('DEPLOYER_PRIVATE_KEY') or None,
            artifacts_dir=os.getenv('HARDHAT_ARTIFACTS_DIR') or None,
            contracts_dir=os.getenv('FRONTEND_CONTRACTS_DIR') or None,
            networks_file=os.getenv('DEPLOY_NETWORKS_FILE') or None,
            confirmation_timeout=float(timeout) if timeout else DEFAULT_CONFIRMATION_TIMEOUT,
            log_level=os.getenv('DEPLOY_LOG_LEVEL', 'INFO')
        )
