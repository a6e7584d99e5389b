"""
Solana Crowdfunding Core Library

This module provides core crowdfunding client functionality separated from
console and HTTP interfaces. Contains pure logic for wallets, transactions
and campaign operations.
"""

from .campaigns import CampaignNotFoundError, CampaignOperations, CampaignReader, CampaignReceipt
from .chain_context import SolanaChainContext
from .config import SolanaSettings, get_settings
from .transactions import SolanaTransactions, TransactionConfirmationError
from .types import CampaignDetails, CampaignInstruction, WithdrawRequest
from .wallet import (
    SignatureRejectedError,
    SolanaWallet,
    WalletConnectionError,
    WalletManager,
    WalletNotConnectedError,
)


__all__ = [
    "SolanaWallet",
    "WalletManager",
    "SolanaChainContext",
    "SolanaTransactions",
    "CampaignOperations",
    "CampaignReader",
    "CampaignReceipt",
    "CampaignDetails",
    "CampaignInstruction",
    "WithdrawRequest",
    "SolanaSettings",
    "get_settings",
    "CampaignNotFoundError",
    "TransactionConfirmationError",
    "SignatureRejectedError",
    "WalletConnectionError",
    "WalletNotConnectedError",
]
