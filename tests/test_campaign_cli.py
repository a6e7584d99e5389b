"""
Tests for the interactive crowdfunding console
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from solders.keypair import Keypair

from solana_offchain import SolanaSettings, SolanaWallet, WalletManager
from solana_offchain.menu.campaign_cli import CampaignCLI, parse_sol_amount


def feed_input(monkeypatch, *answers):
    answers = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))


@pytest.fixture
def cli(wallet, chain_context):
    manager = WalletManager()
    manager.add_wallet("admin", wallet)
    return CampaignCLI(SolanaSettings(_env_file=None), wallet_manager=manager, chain_context=chain_context)


@pytest.mark.unit
class TestCampaignCLI:
    def test_requires_wallet(self, chain_context):
        with pytest.raises(ValueError):
            CampaignCLI(SolanaSettings(_env_file=None), wallet_manager=WalletManager(), chain_context=chain_context)

    @pytest.mark.asyncio
    async def test_create_campaign_approved(self, cli, monkeypatch, rpc_client, capsys):
        feed_input(monkeypatch, "Clean Water", "Fund a well", "http://x/img.png", "y")

        await cli.create_campaign_menu()

        rpc_client.send_raw_transaction.assert_awaited_once()
        assert rpc_client.get_minimum_balance_for_rent_exemption.await_args.args[0] == 91
        assert "Campaign created at" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_declined_signature_reported_in_menu(self, cli, monkeypatch, rpc_client, capsys):
        feed_input(monkeypatch, "2", "Clean Water", "Fund a well", "http://x/img.png", "n", "0")

        await cli.interactive_menu()

        rpc_client.send_raw_transaction.assert_not_awaited()
        assert "signature rejected" in capsys.readouterr().out
        rpc_client.close.assert_awaited_once()

    def test_switch_wallet(self, cli, monkeypatch):
        cli.wallet_manager.add_wallet("donor", SolanaWallet.from_keypair(Keypair()))
        feed_input(monkeypatch, "2")

        cli.switch_wallet_menu()

        assert cli.wallet_name == "donor"
        assert cli.campaigns.wallet is cli.wallet_manager.get_wallet("donor")

    @pytest.mark.asyncio
    async def test_donate_converts_sol_exactly(self, cli, monkeypatch):
        campaign = str(Keypair().pubkey())
        cli.campaigns.donate = AsyncMock(return_value=MagicMock(explorer_url="https://explorer"))
        feed_input(monkeypatch, campaign, "1.005")

        await cli.donate_menu()

        cli.campaigns.donate.assert_awaited_once_with(campaign, 1_005_000_000)

    @pytest.mark.asyncio
    async def test_withdraw_rejects_bad_amount(self, cli, monkeypatch):
        cli.campaigns.withdraw = AsyncMock()
        feed_input(monkeypatch, str(Keypair().pubkey()), "nan")

        with pytest.raises(ValueError):
            await cli.withdraw_menu()
        cli.campaigns.withdraw.assert_not_awaited()


@pytest.mark.unit
class TestParseSolAmount:
    @pytest.mark.parametrize(
        "text, lamports",
        [("1.005", 1_005_000_000), ("0.1", 100_000_000), ("2", 2_000_000_000), ("0.000000001", 1)],
    )
    def test_exact_conversion(self, text, lamports):
        assert parse_sol_amount(text) == lamports

    @pytest.mark.parametrize("text", ["", "abc", "nan", "inf", "-inf", "0", "-1", "0.0000000001"])
    def test_rejects_invalid_amounts(self, text):
        with pytest.raises(ValueError):
            parse_sol_amount(text)
