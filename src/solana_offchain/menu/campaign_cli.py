"""
Crowdfunding CLI Interface

Console interface that uses the core crowdfunding library.
Handles user interactions, menus, and display formatting.
"""

import asyncio
from decimal import Decimal, InvalidOperation
import logging
from typing import Optional

from dotenv import load_dotenv
from solana.constants import LAMPORTS_PER_SOL
from solders.transaction import Transaction

from solana_offchain import (
    CampaignOperations,
    SolanaChainContext,
    SolanaSettings,
    WalletManager,
)
from solana_offchain.config import PROJECT_ROOT
from solana_offchain.menu.menu_formatter import MenuFormatter


logger = logging.getLogger(__name__)


def parse_sol_amount(text: str) -> int:
    """
    Convert a SOL amount typed by the user into lamports

    Raises:
        ValueError: If the amount is not a positive whole number of lamports
    """
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {text!r}")
    if not amount.is_finite() or amount <= 0:
        raise ValueError(f"Amount must be a positive number of SOL: {text!r}")

    lamports = amount * LAMPORTS_PER_SOL
    if lamports != lamports.to_integral_value():
        raise ValueError(f"Amount has more precision than one lamport: {text!r}")
    return int(lamports)


class CampaignCLI:
    """Console interface for crowdfunding campaign operations"""

    def __init__(
        self,
        settings: Optional[SolanaSettings] = None,
        wallet_manager: Optional[WalletManager] = None,
        chain_context: Optional[SolanaChainContext] = None,
        menu: Optional[MenuFormatter] = None,
    ):
        """Initialize the CLI interface"""
        self.settings = settings or SolanaSettings()
        self.chain_context = chain_context or SolanaChainContext.from_settings(self.settings)

        self.wallet_manager = wallet_manager or WalletManager.from_environment(self.settings.wallet_provider_url)
        if not self.wallet_manager.get_wallet_names():
            raise ValueError(
                "No wallets configured. Set wallet_mnemonic, wallet_secret_key, wallet_keypair_path "
                "or wallet_mnemonic_<role> environment variables"
            )

        self.menu = menu or MenuFormatter()
        self._use_wallet(self.wallet_manager.get_default_wallet_name())

    def _use_wallet(self, name: str) -> None:
        self.wallet_name = name
        self.wallet = self.wallet_manager.get_wallet(name)
        self.wallet.approve = self.approve_transaction
        self.campaigns = CampaignOperations(
            self.wallet,
            self.chain_context,
            self.settings.program_id,
            seed_prefix=self.settings.seed_prefix,
        )

    def approve_transaction(self, transaction: Transaction) -> bool:
        """Ask the user before the wallet signs"""
        count = len(transaction.message.instructions)
        return self.menu.confirm_action(f"Sign transaction with {count} instruction(s)?")

    async def display_wallet_info(self):
        await self.campaigns.check_wallet()
        balance = await self.chain_context.get_balance(self.wallet.public_key)
        self.menu.print_status_bar(self.chain_context.network, balance / LAMPORTS_PER_SOL, self.wallet_name)
        self.menu.print_info(f"Public key: {self.wallet.public_key}")
        self.menu.print_info(f"Explorer: {self.chain_context.get_address_explorer_url(str(self.wallet.public_key))}")

    def switch_wallet_menu(self):
        names = self.wallet_manager.get_wallet_names()
        self.menu.print_section("WALLETS")
        for i, name in enumerate(names, 1):
            self.menu.print_menu_option(str(i), name)
        self.menu.print_footer()
        try:
            choice = int(self.menu.get_input(f"Select wallet (1-{len(names)})")) - 1
            if choice < 0:
                raise IndexError(choice)
            self._use_wallet(names[choice])
            self.menu.print_success(f"Switched to wallet: {names[choice]}")
        except (ValueError, IndexError):
            self.menu.print_error("Invalid selection")

    async def create_campaign_menu(self):
        name = self.menu.get_input("Campaign name")
        description = self.menu.get_input("Description")
        image_link = self.menu.get_input("Image link")
        if not name:
            self.menu.print_error("Campaign name is required")
            return

        receipt = await self.campaigns.create_campaign(name, description, image_link)
        self.menu.print_success(f"Campaign created at {receipt.campaign_address}")
        print(f"Check your transaction at: {receipt.explorer_url}")

    async def list_campaigns_menu(self):
        campaigns = await self.campaigns.list_campaigns()
        self.menu.print_section(f"CAMPAIGNS ({len(campaigns)})")
        for address, details in campaigns:
            self._print_campaign(str(address), details)
        self.menu.print_footer()

    async def view_campaign_menu(self):
        address = self.menu.get_input("Campaign address")
        details = await self.campaigns.get_campaign(address)
        self.menu.print_section("CAMPAIGN")
        self._print_campaign(address, details)
        self.menu.print_footer()

    async def donate_menu(self):
        address = self.menu.get_input("Campaign address")
        amount_sol = self.menu.get_input("Amount (SOL)")
        receipt = await self.campaigns.donate(address, parse_sol_amount(amount_sol))
        self.menu.print_success(f"Donated {amount_sol} SOL to {address}")
        print(f"Check your transaction at: {receipt.explorer_url}")

    async def withdraw_menu(self):
        address = self.menu.get_input("Campaign address")
        amount_sol = self.menu.get_input("Amount (SOL)")
        receipt = await self.campaigns.withdraw(address, parse_sol_amount(amount_sol))
        self.menu.print_success(f"Withdrew {amount_sol} SOL from {address}")
        print(f"Check your transaction at: {receipt.explorer_url}")

    def _print_campaign(self, address: str, details):
        self.menu.print_campaign(
            address,
            details.name,
            details.description,
            details.image_link,
            str(details.admin),
            details.amount_donated / LAMPORTS_PER_SOL,
        )

    async def interactive_menu(self):
        """Main menu loop"""
        actions = {
            "1": self.display_wallet_info,
            "2": self.create_campaign_menu,
            "3": self.list_campaigns_menu,
            "4": self.view_campaign_menu,
            "5": self.donate_menu,
            "6": self.withdraw_menu,
        }

        while True:
            self.menu.print_header("SOLANA CROWDFUNDING", f"Program {self.settings.program_id}")
            self.menu.print_section("MAIN MENU")
            self.menu.print_menu_option("1", "Wallet information")
            self.menu.print_menu_option("2", "Create campaign")
            self.menu.print_menu_option("3", "List campaigns")
            self.menu.print_menu_option("4", "View campaign")
            self.menu.print_menu_option("5", "Donate to campaign")
            self.menu.print_menu_option("6", "Withdraw from campaign")
            self.menu.print_menu_option("7", "Switch wallet")
            self.menu.print_menu_option("0", "Exit")
            self.menu.print_footer()

            choice = self.menu.get_input("Enter your choice (0-7)")
            if choice == "0":
                break
            if choice == "7":
                self.switch_wallet_menu()
                continue
            action = actions.get(choice)
            if action is None:
                self.menu.print_error("Invalid choice")
                continue
            try:
                await action()
            except Exception as e:
                logger.debug("Menu action failed", exc_info=True)
                self.menu.print_error(str(e))

        await self.chain_context.close()


def main():
    """Main function to run the CLI"""
    load_dotenv(PROJECT_ROOT / ".env")
    settings = SolanaSettings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        print("Initializing Solana crowdfunding client...")
        cli = CampaignCLI(settings)
    except ValueError as e:
        print(f"Error initializing client: {e}")
        return

    asyncio.run(cli.interactive_menu())


if __name__ == "__main__":
    main()
