"""
Signer Provider
Supplies the accounts that can authorize the deployment
"""

from typing import Dict, List, Optional
from web3 import Web3
from eth_account import Account
from loguru import logger


class Signer:
    """
    One account able to send transactions

    Wraps either a local key (signed here, sent raw) or an account the
    node keeps unlocked (sent with eth_sendTransaction).
    """

    def __init__(self, w3: Web3, address: str, account=None):
        """
        Initialize Signer

        Args:
            w3: Web3 instance
            address: Account address
            account: eth_account LocalAccount, None for node-managed accounts
        """
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.account = account

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def get_address(self) -> str:
        return self.address

    def get_balance(self) -> int:
        """Current balance in wei"""
        return self.w3.eth.get_balance(self.address)

    def send_transaction(self, transaction: Dict) -> bytes:
        """
        Sign (if local) and submit a transaction

        Args:
            transaction: Transaction dict built by the caller

        Returns:
            Transaction hash
        """
        if self.account is None:
            return self.w3.eth.send_transaction(transaction)

        signed_tx = self.account.sign_transaction(transaction)
        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)


class SignerProvider:
    """
    Lists the signers available in the current environment

    A configured private key wins; otherwise the node's unlocked
    accounts are used in the order the node reports them.
    """

    def __init__(self, w3: Web3, private_key: Optional[str] = None):
        self.w3 = w3
        self.private_key = private_key

    def get_signers(self) -> List[Signer]:
        if self.private_key:
            account = Account.from_key(self.private_key)
            logger.debug(f"Using local key for {account.address}")
            return [Signer(self.w3, account.address, account)]

        accounts = self.w3.eth.accounts
        logger.debug(f"Node reports {len(accounts)} unlocked accounts")
        return [Signer(self.w3, address) for address in accounts]
