"""
Solana Chain Context Management

Pure chain context functionality without console dependencies.
Handles cluster configuration and the RPC connection.
"""

import logging
from typing import List, Optional, Tuple

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.types import TxOpts
from solders.account import Account
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.signature import Signature

from .config import CLUSTER_URLS


logger = logging.getLogger(__name__)


class SolanaChainContext:
    """Manages the Solana RPC connection and network configuration"""

    def __init__(
        self,
        network: str = "devnet",
        cluster_url: Optional[str] = None,
        commitment: str = "confirmed",
        explorer_url: str = "https://explorer.solana.com",
        client: Optional[AsyncClient] = None,
    ):
        """
        Initialize chain context

        Args:
            network: Cluster name ("devnet", "testnet" or "mainnet-beta")
            cluster_url: Explicit RPC endpoint, overrides the network default
            commitment: Commitment level used for queries and confirmation
            explorer_url: Base URL of the block explorer
            client: Pre-built RPC client (tests inject a mock here)
        """
        if cluster_url is None:
            if network not in CLUSTER_URLS:
                raise ValueError(f"Unknown network: {network}")
            cluster_url = CLUSTER_URLS[network]

        self.network = network
        self.cluster_url = cluster_url
        self.commitment = Commitment(commitment)
        self.explorer_url = explorer_url.rstrip("/")

        self.client = client if client is not None else AsyncClient(cluster_url, commitment=self.commitment)

    @classmethod
    def from_settings(cls, settings) -> "SolanaChainContext":
        """Create chain context from SolanaSettings"""
        return cls(
            network=settings.network,
            cluster_url=settings.rpc_url,
            commitment=settings.commitment,
            explorer_url=settings.explorer_url,
        )

    async def __aenter__(self) -> "SolanaChainContext":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying RPC session"""
        await self.client.close()

    def get_client(self) -> AsyncClient:
        """Get the RPC client"""
        return self.client

    async def get_latest_blockhash(self) -> Hash:
        """Fetch the latest blockhash from the cluster"""
        resp = await self.client.get_latest_blockhash(self.commitment)
        return resp.value.blockhash

    async def get_minimum_balance_for_rent_exemption(self, byte_length: int) -> int:
        """
        Query the rent-exempt minimum balance

        Args:
            byte_length: Size of the account data in bytes

        Returns:
            Minimum balance in lamports
        """
        resp = await self.client.get_minimum_balance_for_rent_exemption(byte_length, self.commitment)
        return resp.value

    async def send_raw_transaction(self, raw_transaction: bytes) -> Signature:
        """Broadcast a serialized, signed transaction"""
        resp = await self.client.send_raw_transaction(
            raw_transaction, opts=TxOpts(preflight_commitment=self.commitment)
        )
        return resp.value

    async def confirm_transaction(self, signature: Signature):
        """
        Wait for a transaction to reach the configured commitment

        Returns:
            Signature status response from the RPC node
        """
        return await self.client.confirm_transaction(signature, self.commitment)

    async def get_account_info(self, address: Pubkey) -> Optional[Account]:
        """Fetch an account, None if it does not exist"""
        resp = await self.client.get_account_info(address, self.commitment)
        return resp.value

    async def get_program_accounts(self, program_id: Pubkey) -> List[Tuple[Pubkey, Account]]:
        """Fetch every account owned by a program"""
        resp = await self.client.get_program_accounts(program_id, self.commitment, encoding="base64")
        return [(keyed.pubkey, keyed.account) for keyed in resp.value]

    async def get_balance(self, address: Pubkey) -> int:
        """Get account balance in lamports"""
        resp = await self.client.get_balance(address, self.commitment)
        return resp.value

    def get_network_info(self) -> dict:
        """
        Get network configuration information

        Returns:
            Dictionary containing network information
        """
        return {
            "network": self.network,
            "cluster_url": self.cluster_url,
            "commitment": str(self.commitment),
            "explorer_url": self.explorer_url,
        }

    def _cluster_query(self) -> str:
        if self.network == "mainnet-beta":
            return ""
        if self.network in CLUSTER_URLS:
            return f"?cluster={self.network}"
        return f"?cluster=custom&customUrl={self.cluster_url}"

    def get_explorer_url(self, signature: str) -> str:
        """
        Get explorer URL for a transaction

        Args:
            signature: Transaction signature

        Returns:
            Explorer URL for the transaction
        """
        return f"{self.explorer_url}/tx/{signature}{self._cluster_query()}"

    def get_address_explorer_url(self, address: str) -> str:
        """Get explorer URL for an account"""
        return f"{self.explorer_url}/address/{address}{self._cluster_query()}"
