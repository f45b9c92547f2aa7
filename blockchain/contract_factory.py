"""
Contract Factory
Builds, sends and confirms contract deployment transactions
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from .artifacts import ArtifactRegistry
from .errors import DeploymentNotConfirmedError, DeploymentRevertedError
from .signers import Signer

DEFAULT_GAS_LIMIT = 3000000
GAS_BUFFER = 1.2


class DeployedContract:
    """
    Handle for a submitted deployment

    The address is only available once wait_for_deployment() has seen
    a successful receipt.
    """

    def __init__(
        self,
        w3: Web3,
        artifact_name: str,
        tx_hash: bytes,
        timeout: float
    ):
        self.w3 = w3
        self.artifact_name = artifact_name
        self.name = artifact_name.rsplit(':', 1)[-1]
        self.tx_hash = tx_hash
        self.timeout = timeout

        self.receipt = None
        self._address = None

    @property
    def address(self) -> str:
        if self._address is None:
            raise DeploymentNotConfirmedError(
                f"{self.name} deployment {Web3.to_hex(self.tx_hash)} is not confirmed yet"
            )
        return self._address

    @property
    def is_confirmed(self) -> bool:
        return self._address is not None

    def wait_for_deployment(self) -> 'DeployedContract':
        """
        Block until the deployment transaction is mined

        Raises:
            DeploymentRevertedError: if the receipt has status 0
            web3.exceptions.TimeExhausted: if the provider gives up waiting
        """
        if self.is_confirmed:
            return self

        logger.info(f"Waiting for confirmation of {Web3.to_hex(self.tx_hash)}...")
        receipt = self.w3.eth.wait_for_transaction_receipt(self.tx_hash, timeout=self.timeout)

        if receipt['status'] != 1:
            raise DeploymentRevertedError(self.name, Web3.to_hex(self.tx_hash))

        self.receipt = receipt
        self._address = Web3.to_checksum_address(receipt['contractAddress'])

        logger.debug(f"Gas used: {receipt['gasUsed']}")
        return self


class ContractFactory:
    """
    Deploys one compiled contract from one signer
    """

    def __init__(self, w3: Web3, name: str, artifact: Dict, signer: Signer, timeout: float):
        self.w3 = w3
        self.name = name
        self.artifact = artifact
        self.signer = signer
        self.timeout = timeout

        self.contract = w3.eth.contract(abi=artifact['abi'], bytecode=artifact['bytecode'])

    def _estimate_gas(self, constructor) -> int:
        try:
            gas_estimate = constructor.estimate_gas({'from': self.signer.address})
            return int(gas_estimate * GAS_BUFFER)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            return DEFAULT_GAS_LIMIT

    def build_deploy_transaction(self, *args) -> Dict:
        """
        Build the constructor transaction

        Args:
            *args: Constructor arguments

        Returns:
            Transaction dict ready to sign or send
        """
        constructor = self.contract.constructor(*args)
        gas_limit = self._estimate_gas(constructor)

        logger.debug(f"Gas limit: {gas_limit}")

        return constructor.build_transaction({
            'from': self.signer.address,
            'nonce': self.w3.eth.get_transaction_count(self.signer.address, 'pending'),
            'gas': gas_limit,
            'chainId': self.w3.eth.chain_id
        })

    def deploy(self, *args) -> DeployedContract:
        """
        Send the deployment transaction without waiting for it

        Returns:
            Unconfirmed deployment handle
        """
        transaction = self.build_deploy_transaction(*args)
        tx_hash = self.signer.send_transaction(transaction)

        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")

        return DeployedContract(self.w3, self.name, tx_hash, self.timeout)


class ContractFactoryProvider:
    """
    Resolves contract names to factories through the artifact registry
    """

    def __init__(
        self,
        w3: Web3,
        artifact_registry: ArtifactRegistry,
        confirmation_timeout: Optional[float] = 120
    ):
        self.w3 = w3
        self.artifact_registry = artifact_registry
        self.confirmation_timeout = confirmation_timeout

    def get_contract_factory(self, name: str, signer: Signer) -> ContractFactory:
        artifact = self.artifact_registry.read_artifact_sync(name)
        return ContractFactory(self.w3, name, artifact, signer, self.confirmation_timeout)
