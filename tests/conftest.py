"""
Pytest configuration for off-chain client tests

Fixtures providing a keypair wallet and a chain context backed by a mocked
RPC client.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solana_offchain import CampaignOperations, SolanaChainContext, SolanaTransactions, SolanaWallet


PROGRAM_ID = Pubkey.from_string("DtVe5Jab8MmDtAbyi3XzVsg9mc4NKwJ1AFybq5Xd8U2a")
RENT_EXEMPT_LAMPORTS = 1_524_240
FIXED_SEED = "abcdef0.123456789"


@pytest.fixture
def program_id():
    return PROGRAM_ID


@pytest.fixture
def keypair():
    return Keypair()


@pytest.fixture
def wallet(keypair):
    """Wallet that still needs connect()"""
    return SolanaWallet.from_keypair(keypair)


@pytest.fixture
def blockhash():
    return Hash.new_unique()


@pytest.fixture
def rpc_signature():
    return Keypair().sign_message(b"submitted")


@pytest.fixture
def rpc_client(blockhash, rpc_signature):
    """Mocked solana-py AsyncClient answering every call successfully"""
    client = AsyncMock()
    client.get_latest_blockhash.return_value = MagicMock(value=MagicMock(blockhash=blockhash))
    client.get_minimum_balance_for_rent_exemption.return_value = MagicMock(value=RENT_EXEMPT_LAMPORTS)
    client.send_raw_transaction.return_value = MagicMock(value=rpc_signature)
    client.confirm_transaction.return_value = MagicMock(value=[MagicMock(err=None)])
    client.get_account_info.return_value = MagicMock(value=None)
    client.get_program_accounts.return_value = MagicMock(value=[])
    client.get_balance.return_value = MagicMock(value=0)
    return client


@pytest.fixture
def chain_context(rpc_client):
    return SolanaChainContext(network="devnet", client=rpc_client)


@pytest.fixture
def transactions(wallet, chain_context):
    return SolanaTransactions(wallet, chain_context)


@pytest.fixture
def campaign_operations(wallet, chain_context):
    return CampaignOperations(wallet, chain_context, PROGRAM_ID, seed_factory=lambda prefix: FIXED_SEED)


@pytest.fixture
def rent_exempt_lamports():
    return RENT_EXEMPT_LAMPORTS


@pytest.fixture
def fixed_seed():
    return FIXED_SEED
