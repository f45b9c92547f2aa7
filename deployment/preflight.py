"""
Preflight Checks
Verifies network, signer, artifact and output directory before deploying
"""

import os
import json
from typing import Callable, List, Optional, Tuple
from web3 import Web3
from loguru import logger

from blockchain.artifacts import ArtifactRegistry
from blockchain.network import NetworkManager
from blockchain.signers import SignerProvider
from utils.config import DeployConfig

from .publisher import ADDRESS_FILE


class PreflightContext:
    """Shared state between checks (the connection is opened once)"""

    def __init__(self, config: DeployConfig):
        self.config = config
        self.w3: Optional[Web3] = None


def check_network(ctx: PreflightContext) -> bool:
    logger.info("Checking network connection...")

    network = NetworkManager(ctx.config.network, ctx.config.networks_file, rpc_url=ctx.config.rpc_url)

    if network.is_ephemeral:
        logger.warning(f"  ⚠ {network.name} is recreated on every run, use localhost to keep deployments")

    ctx.w3 = network.connect()
    logger.success(f"  ✓ {network.name}: Connected (Block: {ctx.w3.eth.block_number})")
    return True


def check_signer(ctx: PreflightContext) -> bool:
    logger.info("Checking deployer account...")

    if ctx.w3 is None:
        logger.warning("  No connection - skipping signer check")
        return False

    signers = SignerProvider(ctx.w3, private_key=ctx.config.private_key).get_signers()
    if not signers:
        logger.error("  ✗ No signer available (set DEPLOYER_PRIVATE_KEY or unlock a node account)")
        return False

    signer = signers[0]
    balance = signer.get_balance()
    logger.info(f"  Deployer: {signer.get_address()}")
    logger.info(f"  Balance: {ctx.w3.from_wei(balance, 'ether')} ETH")

    if balance == 0:
        logger.error("  ✗ Deployer account has no funds")
        return False

    logger.success("  ✓ Deployer account funded")
    return True


def check_artifact(ctx: PreflightContext) -> bool:
    logger.info("Checking compiled artifact...")

    registry = ArtifactRegistry(ctx.config.artifacts_dir)
    artifact = registry.read_artifact_sync(ctx.config.contract_name)

    logger.success(f"  ✓ {ctx.config.contract_name}: {len(artifact['abi'])} ABI entries")
    return True


def check_output_directory(ctx: PreflightContext) -> bool:
    logger.info("Checking frontend contracts directory...")

    contracts_dir = ctx.config.contracts_dir

    if os.path.exists(contracts_dir) and not os.path.isdir(contracts_dir):
        logger.error(f"  ✗ {contracts_dir} exists and is not a directory")
        return False

    # Missing directory is created on publish; its nearest existing parent must be writable
    existing = os.path.abspath(contracts_dir)
    while not os.path.exists(existing):
        existing = os.path.dirname(existing)

    if not os.access(existing, os.W_OK):
        logger.error(f"  ✗ {existing} is not writable")
        return False

    if existing != os.path.abspath(contracts_dir):
        logger.info(f"  {contracts_dir} does not exist yet (created on deploy)")

    logger.success(f"  ✓ {contracts_dir}")
    return True


def check_published_address(ctx: PreflightContext) -> bool:
    """Compare the recorded address (if any) with on-chain code"""
    logger.info("Checking previously published address...")

    address_path = os.path.join(ctx.config.contracts_dir, ADDRESS_FILE)

    if not os.path.exists(address_path):
        logger.info("  No address recorded yet")
        return True

    with open(address_path, 'r') as f:
        addresses = json.load(f)

    address = addresses.get(ctx.config.contract_name.rsplit(':', 1)[-1])
    if not address:
        logger.info(f"  {ADDRESS_FILE} has no entry for {ctx.config.contract_name}")
        return True

    if ctx.w3 is None:
        logger.warning("  No connection - skipping on-chain check")
        return True

    code = ctx.w3.eth.get_code(Web3.to_checksum_address(address))
    if len(code) == 0:
        logger.warning(f"  ⚠ No contract at recorded address {address} (stale record)")
    else:
        logger.success(f"  ✓ Contract found at {address}")

    return True


CHECKS: List[Tuple[str, Callable[[PreflightContext], bool]]] = [
    ("Network Connection", check_network),
    ("Deployer Account", check_signer),
    ("Compiled Artifact", check_artifact),
    ("Output Directory", check_output_directory),
    ("Published Address", check_published_address)
]


def run_checks(config: Optional[DeployConfig] = None) -> int:
    """
    Run all preflight checks

    Returns:
        0 if every check passed, 1 otherwise
    """
    logger.info("=" * 70)
    logger.info("Deployment Preflight Check")
    logger.info("=" * 70)

    try:
        config = config or DeployConfig.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    ctx = PreflightContext(config)
    results = []

    for name, check_func in CHECKS:
        logger.info("")
        try:
            result = check_func(ctx)
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            result = False
        results.append((name, result))

    # Summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("")
    logger.info(f"Total: {passed}/{len(results)} checks passed")

    if passed == len(results):
        logger.success("✅ Ready to deploy: python deploy.py")
        return 0

    logger.error("❌ Not ready to deploy - fix issues above")
    return 1
