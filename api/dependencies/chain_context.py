"""
Chain Context Dependency

FastAPI dependencies for the Solana chain context, configured wallets,
campaign readers and campaign operations.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException

from solana_offchain import CampaignOperations, CampaignReader, SolanaChainContext, SolanaSettings, WalletManager


# Global state for chain context
_chain_context: SolanaChainContext | None = None


@lru_cache
def get_solana_settings() -> SolanaSettings:
    return SolanaSettings()


def get_chain_context(settings: SolanaSettings = Depends(get_solana_settings)) -> SolanaChainContext:
    """
    Get or initialize the chain context.

    Returns:
        SolanaChainContext: Chain context for the configured cluster
    """
    global _chain_context
    if _chain_context is None:
        _chain_context = SolanaChainContext.from_settings(settings)
    return _chain_context


async def close_chain_context() -> None:
    global _chain_context
    if _chain_context is not None:
        await _chain_context.close()
        _chain_context = None


@lru_cache
def get_wallet_manager() -> WalletManager:
    """
    Load wallets from environment.

    Raises:
        HTTPException: If no wallet is configured
    """
    manager = WalletManager.from_environment(get_solana_settings().wallet_provider_url)
    if not manager.get_wallet_names():
        raise HTTPException(status_code=500, detail="No wallets configured in environment")
    return manager


def build_campaign_operations(
    wallet_name: str | None,
    chain_context: SolanaChainContext,
    wallet_manager: WalletManager,
    settings: SolanaSettings,
) -> CampaignOperations:
    """
    Create campaign operations for a named wallet.

    Raises:
        HTTPException: If the wallet does not exist
    """
    wallet = wallet_manager.get_wallet(wallet_name)
    if wallet is None:
        raise HTTPException(status_code=404, detail=f"Wallet '{wallet_name}' not found")
    return CampaignOperations(wallet, chain_context, settings.program_id, seed_prefix=settings.seed_prefix)


def get_campaign_reader(
    chain_context: SolanaChainContext = Depends(get_chain_context),
    settings: SolanaSettings = Depends(get_solana_settings),
) -> CampaignReader:
    """Campaign lookups need no wallet"""
    return CampaignReader(chain_context, settings.program_id)
