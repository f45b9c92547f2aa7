"""
Artifact Publisher
Writes the deployed address and the compiled artifact for the frontend
"""

import os
import json
import tempfile
from typing import Dict, List, Tuple
from loguru import logger

from blockchain.artifacts import ArtifactRegistry
from blockchain.errors import ArtifactNotFoundError, PublishError

ADDRESS_FILE = 'contract-address.json'


class ArtifactPublisher:
    """
    Publishes deployment outputs to the frontend contracts directory

    Both files are staged next to their targets and only moved into place
    once every write has succeeded. The address record is moved last, so a
    failed publish never leaves an address record behind.
    """

    def __init__(self, contracts_dir: str, artifact_registry: ArtifactRegistry):
        self.contracts_dir = contracts_dir
        self.artifact_registry = artifact_registry

    def _stage(self, document: Dict) -> str:
        """Write a JSON document to a temp file in the output directory"""
        fd, path = tempfile.mkstemp(dir=self.contracts_dir, prefix='.', suffix='.tmp')

        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(document, f, indent=2)
            os.chmod(path, 0o644)
        except Exception:
            os.remove(path)
            raise

        return path

    @staticmethod
    def _discard(staged: List[Tuple[str, str]]):
        for temp_path, _ in staged:
            if os.path.exists(temp_path):
                os.remove(temp_path)

    def publish(self, deployed_contract):
        """
        Write contract-address.json and <Name>.json

        Args:
            deployed_contract: Confirmed DeployedContract

        Raises:
            PublishError: if the directory, the artifact or either file cannot be
                read or written
        """
        name = deployed_contract.name
        address = deployed_contract.address

        staged = []
        try:
            os.makedirs(self.contracts_dir, exist_ok=True)
            artifact = self.artifact_registry.read_artifact_sync(deployed_contract.artifact_name)

            # Address record goes last: it is only written once the artifact is in place
            targets = [
                (artifact, os.path.join(self.contracts_dir, f'{name}.json')),
                ({name: address}, os.path.join(self.contracts_dir, ADDRESS_FILE))
            ]

            for document, target in targets:
                staged.append((self._stage(document), target))

            for temp_path, target in staged:
                os.replace(temp_path, target)
                logger.debug(f"Wrote {target}")

        except (ArtifactNotFoundError, OSError, TypeError, ValueError) as e:
            self._discard(staged)
            raise PublishError(name, address, str(e)) from e

        logger.success(f"Saved {name} address and artifact to {self.contracts_dir}")
