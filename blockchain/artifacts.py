"""
Artifact Registry
Reads compiled contract artifacts from the Hardhat build output
"""

import os
import json
import glob
from typing import Dict, List
from loguru import logger

from .errors import ArtifactNotFoundError

REQUIRED_KEYS = ('abi', 'bytecode')


class ArtifactRegistry:
    """
    Looks up artifacts under <artifacts_dir>/contracts

    Layout follows `npx hardhat compile`:
    artifacts/contracts/<Source>.sol/<Contract>.json
    """

    def __init__(self, artifacts_dir: str):
        self.artifacts_dir = artifacts_dir

    def _find_artifact_paths(self, name: str) -> List[str]:
        """Artifact files for a bare contract name"""
        pattern = os.path.join(self.artifacts_dir, 'contracts', '**', f'{name}.json')

        return sorted(
            path for path in glob.glob(pattern, recursive=True)
            if not path.endswith('.dbg.json')
        )

    def _resolve_path(self, name: str) -> str:
        # Fully qualified name: contracts/Voting.sol:Voting
        if ':' in name:
            source_name, contract_name = name.rsplit(':', 1)
            path = os.path.join(self.artifacts_dir, source_name, f'{contract_name}.json')

            if not os.path.exists(path):
                raise ArtifactNotFoundError(
                    f"Artifact for {name} not found at {path}. Run 'npx hardhat compile' first"
                )
            return path

        paths = self._find_artifact_paths(name)

        if not paths:
            raise ArtifactNotFoundError(
                f"Artifact for contract \"{name}\" not found in {self.artifacts_dir}. "
                "Run 'npx hardhat compile' first"
            )

        if len(paths) > 1:
            candidates = ', '.join(
                os.path.relpath(path, self.artifacts_dir) for path in paths
            )
            raise ArtifactNotFoundError(
                f"Multiple artifacts for contract \"{name}\": {candidates}. "
                "Use the fully qualified name (e.g. contracts/Voting.sol:Voting)"
            )

        return paths[0]

    def read_artifact_sync(self, name: str) -> Dict:
        """
        Load an artifact by contract name

        Args:
            name: Contract name or fully qualified name

        Returns:
            Artifact dict exactly as the compiler wrote it
        """
        path = self._resolve_path(name)

        with open(path, 'r') as f:
            artifact = json.load(f)

        missing = [key for key in REQUIRED_KEYS if key not in artifact]
        if missing:
            raise ArtifactNotFoundError(
                f"Artifact {path} is missing {', '.join(missing)}"
            )

        logger.debug(f"Loaded artifact {path}")
        return artifact
