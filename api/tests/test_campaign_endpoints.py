"""
Campaign Endpoint Tests

Test suite for crowdfunding campaign API endpoints.
"""

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from api.dependencies.chain_context import get_wallet_manager
from api.main import app
from api.tests.assertions import (
    assert_error_response,
    assert_successful_response,
    assert_valid_transaction_response,
)
from solana_offchain import CampaignDetails


CREATE_PAYLOAD = {"name": "Clean Water", "description": "Fund a well", "image_link": "http://x/img.png"}


@pytest.mark.api
class TestAuthentication:
    def test_missing_api_key(self, client: TestClient):
        response = client.post("/api/v1/campaigns", json=CREATE_PAYLOAD)
        assert_error_response(response, 401, "api key")

    def test_invalid_api_key(self, client: TestClient):
        response = client.get("/api/v1/campaigns", headers={"X-API-Key": "wrong"})
        assert_error_response(response, 401)


@pytest.mark.api
class TestCreateCampaignEndpoint:
    """Tests for POST /api/v1/campaigns"""

    def test_create_campaign(self, client: TestClient, auth_headers, mock_rpc, admin_keypair, solana_settings):
        response = client.post("/api/v1/campaigns", json=CREATE_PAYLOAD, headers=auth_headers)
        data = assert_successful_response(response, ["signature", "campaign_address", "seed"])

        assert_valid_transaction_response(data)
        assert data["signature"] == str(mock_rpc.signature)
        expected = Pubkey.create_with_seed(
            admin_keypair.pubkey(), data["seed"], Pubkey.from_string(solana_settings.program_id)
        )
        assert data["campaign_address"] == str(expected)
        assert mock_rpc.client.get_minimum_balance_for_rent_exemption.await_args.args[0] == 91

    def test_create_with_named_wallet(self, client: TestClient, auth_headers, donor_keypair, solana_settings):
        payload = {**CREATE_PAYLOAD, "wallet_name": "donor"}
        response = client.post("/api/v1/campaigns", json=payload, headers=auth_headers)
        data = assert_successful_response(response)

        expected = Pubkey.create_with_seed(
            donor_keypair.pubkey(), data["seed"], Pubkey.from_string(solana_settings.program_id)
        )
        assert data["campaign_address"] == str(expected)

    def test_unknown_wallet(self, client: TestClient, auth_headers):
        payload = {**CREATE_PAYLOAD, "wallet_name": "missing"}
        response = client.post("/api/v1/campaigns", json=payload, headers=auth_headers)
        assert_error_response(response, 404, "not found")

    def test_empty_name_rejected(self, client: TestClient, auth_headers, mock_rpc):
        response = client.post("/api/v1/campaigns", json={**CREATE_PAYLOAD, "name": ""}, headers=auth_headers)
        assert response.status_code == 422
        mock_rpc.client.send_raw_transaction.assert_not_awaited()

    def test_failed_confirmation(self, client: TestClient, auth_headers, mock_rpc):
        mock_rpc.fail_confirmation()
        response = client.post("/api/v1/campaigns", json=CREATE_PAYLOAD, headers=auth_headers)
        assert_error_response(response, 502, "blockchain error")


@pytest.mark.api
class TestReadCampaignEndpoints:
    """Tests for GET /api/v1/campaigns and GET /api/v1/campaigns/{address}"""

    def test_get_campaign(self, client: TestClient, auth_headers, mock_rpc, solana_settings):
        address = Keypair().pubkey()
        record = CampaignDetails(Keypair().pubkey(), "Clean Water", "Fund a well", "http://x/img.png", 5)
        mock_rpc.set_account(address, Pubkey.from_string(solana_settings.program_id), record.to_bytes())

        response = client.get(f"/api/v1/campaigns/{address}", headers=auth_headers)
        data = assert_successful_response(response)

        assert data == {"address": str(address), **record.to_dict()}

    def test_get_missing_campaign(self, client: TestClient, auth_headers):
        response = client.get(f"/api/v1/campaigns/{Keypair().pubkey()}", headers=auth_headers)
        assert_error_response(response, 404, "not found")

    def test_get_invalid_address(self, client: TestClient, auth_headers):
        response = client.get("/api/v1/campaigns/not-a-key", headers=auth_headers)
        assert_error_response(response, 400, "invalid campaign address")

    def test_list_campaigns(self, client: TestClient, auth_headers, mock_rpc, solana_settings):
        program_id = Pubkey.from_string(solana_settings.program_id)
        record = CampaignDetails(Keypair().pubkey(), "a", "b", "c")
        mock_rpc.set_account(Keypair().pubkey(), program_id, record.to_bytes())
        mock_rpc.set_account(Keypair().pubkey(), program_id, b"")
        mock_rpc.set_account(Keypair().pubkey(), Keypair().pubkey(), record.to_bytes())

        response = client.get("/api/v1/campaigns", headers=auth_headers)
        data = assert_successful_response(response, ["campaigns", "total"])

        assert data["total"] == 1
        assert data["campaigns"][0]["name"] == "a"

    def test_reads_without_wallets(self, client: TestClient, auth_headers, mock_rpc, solana_settings):
        def no_wallets():
            raise HTTPException(status_code=500, detail="No wallets configured in environment")

        app.dependency_overrides[get_wallet_manager] = no_wallets
        address = Keypair().pubkey()
        record = CampaignDetails(Keypair().pubkey(), "a", "b", "c")
        mock_rpc.set_account(address, Pubkey.from_string(solana_settings.program_id), record.to_bytes())

        assert client.get(f"/api/v1/campaigns/{address}", headers=auth_headers).status_code == 200
        assert client.get("/api/v1/campaigns", headers=auth_headers).json()["total"] == 1

        response = client.post("/api/v1/campaigns", json=CREATE_PAYLOAD, headers=auth_headers)
        assert_error_response(response, 500, "no wallets configured")


@pytest.mark.api
class TestDonateWithdrawEndpoints:
    """Tests for donate and withdraw endpoints"""

    def test_donate(self, client: TestClient, auth_headers):
        address = Keypair().pubkey()
        response = client.post(
            f"/api/v1/campaigns/{address}/donate",
            json={"lamports": 1_000_000, "wallet_name": "donor"},
            headers=auth_headers,
        )
        data = assert_successful_response(response)

        assert_valid_transaction_response(data)
        assert data["campaign_address"] == str(address)

    def test_donate_requires_positive_amount(self, client: TestClient, auth_headers):
        response = client.post(
            f"/api/v1/campaigns/{Keypair().pubkey()}/donate", json={"lamports": 0}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_withdraw(self, client: TestClient, auth_headers):
        address = Keypair().pubkey()
        response = client.post(
            f"/api/v1/campaigns/{address}/withdraw", json={"lamports": 500}, headers=auth_headers
        )
        data = assert_successful_response(response)

        assert data["campaign_address"] == str(address)
        assert data["seed"] is None

    def test_withdraw_failed_on_chain(self, client: TestClient, auth_headers, mock_rpc):
        mock_rpc.fail_confirmation("InsufficientFunds")
        response = client.post(
            f"/api/v1/campaigns/{Keypair().pubkey()}/withdraw", json={"lamports": 500}, headers=auth_headers
        )
        assert_error_response(response, 502)


@pytest.mark.api
def test_health(client: TestClient):
    response = client.get("/health")
    data = assert_successful_response(response, ["status", "network"])

    assert data["status"] == "healthy"
    assert data["network"]["network"] == "devnet"
