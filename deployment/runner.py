"""
Deployment Runner
Wires the collaborators together and turns faults into an exit status
"""

import os
import sys
from typing import Optional
from loguru import logger

from blockchain.artifacts import ArtifactRegistry
from blockchain.contract_factory import ContractFactoryProvider
from blockchain.errors import PublishError
from blockchain.network import NetworkManager
from blockchain.signers import SignerProvider
from utils.config import DeployConfig, PROJECT_ROOT

from .deployer import Deployer
from .publisher import ArtifactPublisher


def configure_logging(level: str = 'INFO', log_dir: Optional[str] = None):
    """Console sink at `level`, rotating DEBUG file sink"""
    log_dir = log_dir or os.path.join(PROJECT_ROOT, 'data', 'logs')

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )
    logger.add(
        os.path.join(log_dir, 'deploy.log'),
        rotation="1 day",
        retention="7 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        level="DEBUG"
    )


def build_deployer(config: DeployConfig) -> Deployer:
    """Connect to the configured network and assemble a Deployer"""
    network = NetworkManager(config.network, config.networks_file, rpc_url=config.rpc_url)
    logger.debug(f"Target network: {network.describe()}")

    w3 = network.connect()
    artifact_registry = ArtifactRegistry(config.artifacts_dir)

    return Deployer(
        network=network,
        signer_provider=SignerProvider(w3, private_key=config.private_key),
        contract_factory_provider=ContractFactoryProvider(
            w3,
            artifact_registry,
            confirmation_timeout=config.confirmation_timeout
        ),
        publisher=ArtifactPublisher(config.contracts_dir, artifact_registry),
        contract_name=config.contract_name
    )


def main(config: Optional[DeployConfig] = None) -> int:
    """
    Run one deployment

    Returns:
        Process exit status (0 on success, 1 on any fault)
    """
    try:
        config = config or DeployConfig.from_env()
        deployer = build_deployer(config)
        deployer.run()
    except PublishError as e:
        logger.error(
            f"{e.contract_name} is deployed at {e.address} but the address was not saved; "
            "record it manually"
        )
        logger.exception(f"Deployment failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Deployment failed: {e}")
        return 1

    return 0
