"""
Network Manager
Resolves the target network and opens the Web3 connection to it
"""

import os
import json
from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from .errors import NetworkConfigError, NetworkUnavailableError

# In-process network recreated on every run; deployments to it do not persist
EPHEMERAL_NETWORK = 'hardhat'


class NetworkManager:
    """
    Holds the selected network's settings and its Web3 connection
    """

    def __init__(self, name: str, networks_file: str, rpc_url: Optional[str] = None):
        """
        Initialize Network Manager

        Args:
            name: Network name from config/networks.json
            networks_file: Path to the network table
            rpc_url: Overrides the configured endpoint
        """
        self.name = name

        with open(networks_file, 'r') as f:
            self.config = json.load(f)

        networks = self.config.get('networks', {})
        if name not in networks:
            raise NetworkConfigError(
                f"Unknown network '{name}' (configured: {', '.join(sorted(networks))})"
            )

        self.settings = networks[name]
        self.chain_id = self.settings.get('chain_id')
        self.rpc_url = rpc_url or self._resolve_rpc_url()

        self.w3 = None

    def _resolve_rpc_url(self) -> str:
        """Get endpoint URL from the network entry"""
        url = self.settings.get('rpc_url')

        if not url and self.settings.get('rpc_url_env'):
            url = os.getenv(self.settings['rpc_url_env'])

        if not url:
            raise NetworkConfigError(
                f"No RPC URL for network '{self.name}' "
                f"(set {self.settings.get('rpc_url_env', 'RPC_URL')})"
            )

        return url

    @property
    def is_ephemeral(self) -> bool:
        """True when the target is the throwaway in-process network"""
        return self.name == EPHEMERAL_NETWORK

    def connect(self) -> Web3:
        """
        Open the Web3 connection and check the chain id

        Returns:
            Connected Web3 instance
        """
        if self.w3 is not None:
            return self.w3

        w3 = Web3(Web3.HTTPProvider(self.rpc_url))

        if not w3.is_connected():
            raise NetworkUnavailableError(
                f"Failed to connect to {self.name} at {self.rpc_url}"
            )

        if self.chain_id is not None:
            node_chain_id = w3.eth.chain_id
            if node_chain_id != self.chain_id:
                raise NetworkConfigError(
                    f"Network '{self.name}' expects chain id {self.chain_id}, "
                    f"node reports {node_chain_id}"
                )

        logger.success(f"Connected to {self.settings.get('name', self.name)}")
        self.w3 = w3
        return w3

    def describe(self) -> Dict:
        """Summary used in log output"""
        return {
            'name': self.name,
            'rpc_url': self.rpc_url,
            'chain_id': self.chain_id
        }
