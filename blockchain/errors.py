"""
Deployment Errors
Fault taxonomy for a single deployment run
"""


class DeployerError(Exception):
    """Base class for every fault raised by the deployer"""


class EnvironmentFault(DeployerError):
    """Execution environment cannot support a deployment"""


class NetworkConfigError(EnvironmentFault):
    """Unknown network name or inconsistent network settings"""


class NetworkUnavailableError(EnvironmentFault):
    """RPC endpoint is unreachable"""


class NoSignerAvailableError(EnvironmentFault):
    """No account is available to sign the deployment"""


class ArtifactNotFoundError(EnvironmentFault):
    """Compiled artifact cannot be located or is malformed"""


class TransactionFault(DeployerError):
    """Deployment transaction did not produce a contract"""


class DeploymentRevertedError(TransactionFault):
    """Deployment transaction was mined with status 0"""

    def __init__(self, contract_name: str, tx_hash: str):
        self.contract_name = contract_name
        self.tx_hash = tx_hash
        super().__init__(f"Deployment of {contract_name} reverted (tx {tx_hash})")


class DeploymentNotConfirmedError(TransactionFault):
    """Contract address was read before the deployment was confirmed"""


class PersistenceFault(DeployerError):
    """Deployment outputs could not be written to disk"""


class PublishError(PersistenceFault):
    """Frontend files could not be written"""

    def __init__(self, contract_name: str, address: str, reason: str):
        self.contract_name = contract_name
        self.address = address
        super().__init__(f"Could not publish {contract_name} at {address}: {reason}")
