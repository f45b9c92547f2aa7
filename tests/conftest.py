"""
Shared fixtures for deployment tests
"""

import os
import json
import pytest
from loguru import logger

from blockchain.artifacts import ArtifactRegistry


VOTING_ARTIFACT = {
    "_format": "hh-sol-artifact-1",
    "contractName": "Voting",
    "sourceName": "contracts/Voting.sol",
    "abi": [
        {
            "inputs": [],
            "stateMutability": "nonpayable",
            "type": "constructor"
        },
        {
            "inputs": [{"internalType": "uint256", "name": "proposal", "type": "uint256"}],
            "name": "vote",
            "outputs": [],
            "stateMutability": "nonpayable",
            "type": "function"
        }
    ],
    "bytecode": "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe",
    "deployedBytecode": "0x6080604052600080fdfe",
    "linkReferences": {},
    "deployedLinkReferences": {}
}

DEPLOYED_ADDRESS = '0x5FbDB2315678afecb367f032d93F642f64180aa3'
DEPLOYER_ADDRESS = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'


def write_artifact(artifacts_dir, source='Voting.sol', artifact=None):
    """Lay out an artifact the way `npx hardhat compile` does"""
    artifact = artifact or VOTING_ARTIFACT
    source_dir = os.path.join(str(artifacts_dir), 'contracts', source)
    os.makedirs(source_dir, exist_ok=True)

    name = artifact.get('contractName', 'Voting')
    with open(os.path.join(source_dir, f'{name}.json'), 'w') as f:
        json.dump(artifact, f, indent=2)
    with open(os.path.join(source_dir, f'{name}.dbg.json'), 'w') as f:
        json.dump({"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/x.json"}, f)

    return source_dir


@pytest.fixture
def artifacts_dir(tmp_path):
    """Hardhat artifacts directory holding the Voting artifact"""
    path = tmp_path / 'artifacts'
    write_artifact(path)
    return path


@pytest.fixture
def artifact_registry(artifacts_dir):
    return ArtifactRegistry(str(artifacts_dir))


@pytest.fixture
def contracts_dir(tmp_path):
    """Frontend output directory (not created yet)"""
    return tmp_path / 'frontend' / 'src' / 'contracts'


@pytest.fixture
def log_records():
    """Capture loguru records emitted during a test"""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


def messages(records, level=None):
    return [
        record['message'] for record in records
        if level is None or record['level'].name == level
    ]
