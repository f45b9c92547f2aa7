"""
Deployer
Deploys one contract and hands the result to the publisher
"""

from loguru import logger

from blockchain.errors import NoSignerAvailableError


class Deployer:
    """
    Single forward pass: signer -> deploy -> confirm -> publish

    Collaborators are passed in so the run can be driven by test doubles.
    No step is retried; any fault propagates to the caller.
    """

    def __init__(
        self,
        network,
        signer_provider,
        contract_factory_provider,
        publisher,
        contract_name: str = 'Voting'
    ):
        """
        Initialize Deployer

        Args:
            network: Object with `name` and `is_ephemeral`
            signer_provider: Provides get_signers()
            contract_factory_provider: Provides get_contract_factory(name, signer)
            publisher: Provides publish(deployed_contract)
            contract_name: Artifact name of the contract to deploy
        """
        self.network = network
        self.signer_provider = signer_provider
        self.contract_factory_provider = contract_factory_provider
        self.publisher = publisher
        self.contract_name = contract_name

    def _warn_if_ephemeral(self):
        if self.network.is_ephemeral:
            logger.warning(
                f"You are trying to deploy a contract to the {self.network.name} network, "
                "which gets automatically created and destroyed every time. "
                "Use DEPLOY_NETWORK=localhost instead"
            )

    def run(self):
        """
        Deploy the contract and publish its address and artifact

        Returns:
            Confirmed DeployedContract
        """
        self._warn_if_ephemeral()

        signers = self.signer_provider.get_signers()
        if not signers:
            raise NoSignerAvailableError(
                f"No signer available on network {self.network.name}"
            )
        deployer = signers[0]

        logger.info(f"Deploying the contracts with the account: {deployer.get_address()}")
        logger.info(f"Account balance: {deployer.get_balance()}")

        factory = self.contract_factory_provider.get_contract_factory(self.contract_name, deployer)
        deployed = factory.deploy()
        deployed.wait_for_deployment()

        logger.success(f"{deployed.name} contract address: {deployed.address}")

        self.publisher.publish(deployed)

        return deployed
