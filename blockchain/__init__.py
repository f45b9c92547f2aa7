"""
Blockchain Interaction Package
Handles network selection, signers, artifacts and contract deployment
"""

from .artifacts import ArtifactRegistry
from .contract_factory import ContractFactory, ContractFactoryProvider, DeployedContract
from .network import NetworkManager
from .signers import Signer, SignerProvider

__all__ = [
    'ArtifactRegistry',
    'ContractFactory',
    'ContractFactoryProvider',
    'DeployedContract',
    'NetworkManager',
    'Signer',
    'SignerProvider'
]
