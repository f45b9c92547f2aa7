"""
Deployment Package
Deploys the contract and publishes its address and artifact to the frontend
"""

from .deployer import Deployer
from .publisher import ArtifactPublisher

__all__ = ['Deployer', 'ArtifactPublisher']
