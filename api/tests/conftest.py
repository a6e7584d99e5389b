"""
Pytest configuration for API tests

Fixtures and configuration for FastAPI endpoint testing against a mocked
Solana RPC node.
"""

import pytest
from fastapi.testclient import TestClient
from solders.keypair import Keypair

from api.config import settings
from api.dependencies.chain_context import get_chain_context, get_solana_settings, get_wallet_manager
from api.main import app
from api.tests.mocks import MockSolanaRpc
from solana_offchain import SolanaChainContext, SolanaSettings, SolanaWallet, WalletManager


TEST_API_KEY = "test_api_key"


@pytest.fixture
def solana_settings():
    return SolanaSettings(_env_file=None, network="devnet", cluster_url=None)


@pytest.fixture
def mock_rpc():
    return MockSolanaRpc()


@pytest.fixture
def admin_keypair():
    return Keypair()


@pytest.fixture
def donor_keypair():
    return Keypair()


@pytest.fixture
def wallet_manager(admin_keypair, donor_keypair):
    manager = WalletManager()
    manager.add_wallet("default", SolanaWallet.from_keypair(admin_keypair), set_as_default=True)
    manager.add_wallet("donor", SolanaWallet.from_keypair(donor_keypair))
    return manager


@pytest.fixture
def client(monkeypatch, mock_rpc, wallet_manager, solana_settings):
    """Create FastAPI test client with Solana dependencies overridden"""
    monkeypatch.setattr(settings, "admin_api_key", TEST_API_KEY)
    chain_context = SolanaChainContext(network="devnet", client=mock_rpc.client)

    app.dependency_overrides[get_chain_context] = lambda: chain_context
    app.dependency_overrides[get_wallet_manager] = lambda: wallet_manager
    app.dependency_overrides[get_solana_settings] = lambda: solana_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"X-API-Key": TEST_API_KEY}
