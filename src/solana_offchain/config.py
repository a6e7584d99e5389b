"""
Solana Off-chain Configuration

Settings shared by the chain context, wallets and campaign operations.
Values load from the environment or the project .env file.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# Project root (two levels up from src/solana_offchain/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_PROGRAM_ID = "DtVe5Jab8MmDtAbyi3XzVsg9mc4NKwJ1AFybq5Xd8U2a"

CLUSTER_URLS = {
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
}


class SolanaSettings(BaseSettings):
    """Network, program and wallet settings for the crowdfunding client"""

    network: str = "devnet"  # devnet, testnet, mainnet-beta
    cluster_url: str | None = None  # overrides the network default
    commitment: str = "confirmed"

    program_id: str = DEFAULT_PROGRAM_ID
    wallet_provider_url: str = "https://www.sollet.io"
    seed_prefix: str = "abcdef"

    explorer_url: str = "https://explorer.solana.com"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"), env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @property
    def rpc_url(self) -> str:
        """RPC endpoint for the configured network"""
        if self.cluster_url:
            return self.cluster_url
        if self.network not in CLUSTER_URLS:
            raise ValueError(f"Unknown network: {self.network}")
        return CLUSTER_URLS[self.network]


def get_settings() -> SolanaSettings:
    """Load settings from environment"""
    return SolanaSettings()
