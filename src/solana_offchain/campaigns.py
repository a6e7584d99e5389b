"""
Crowdfunding Campaign Operations

Creates campaigns, donates to and withdraws from them, and reads campaign
records back from the chain.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from construct import ConstructError
from solders.pubkey import Pubkey

from . import instructions as ix
from .chain_context import SolanaChainContext
from .transactions import SolanaTransactions
from .types import CampaignDetails
from .wallet import SolanaWallet


logger = logging.getLogger(__name__)

_random = secrets.SystemRandom()

# longest str(random()), e.g. "1.2345678901234567e-05"
MAX_FRACTION_LEN = 22


class CampaignNotFoundError(Exception):
    """No account exists at the campaign address"""
    pass


@dataclass
class CampaignReceipt:
    """Outcome of a confirmed campaign transaction"""

    signature: str
    campaign_address: Pubkey
    explorer_url: str
    seed: Optional[str] = None


def random_seed(prefix: str) -> str:
    """Fixed prefix followed by the string form of a random fraction"""
    return prefix + str(_random.random())


class CampaignReader:
    """Read-only access to campaign records, no wallet required"""

    def __init__(self, chain_context: SolanaChainContext, program_id: Union[Pubkey, str]):
        self.chain_context = chain_context
        self.program_id = _to_pubkey(program_id)

    async def get_campaign(self, campaign_address: Union[Pubkey, str]) -> CampaignDetails:
        """
        Read and decode a campaign record

        Raises:
            CampaignNotFoundError: If the account does not exist
            ValueError: If the account is not owned by the program
        """
        campaign_address = _to_pubkey(campaign_address)
        account = await self.chain_context.get_account_info(campaign_address)
        if account is None:
            raise CampaignNotFoundError(f"Campaign account not found: {campaign_address}")
        if account.owner != self.program_id:
            raise ValueError(f"Account {campaign_address} is not owned by program {self.program_id}")
        return CampaignDetails.from_bytes(bytes(account.data))

    async def list_campaigns(self) -> List[Tuple[Pubkey, CampaignDetails]]:
        """List every decodable campaign owned by the program"""
        campaigns = []
        for address, account in await self.chain_context.get_program_accounts(self.program_id):
            try:
                campaigns.append((address, CampaignDetails.from_bytes(bytes(account.data))))
            except (ConstructError, UnicodeDecodeError) as e:
                # donation accounts and foreign layouts do not decode
                logger.debug(f"Skipping account {address}: {e}")
        return campaigns


class CampaignOperations(CampaignReader):
    """Campaign lifecycle operations against the crowdfunding program"""

    def __init__(
        self,
        wallet: SolanaWallet,
        chain_context: SolanaChainContext,
        program_id: Union[Pubkey, str],
        transactions: Optional[SolanaTransactions] = None,
        seed_prefix: str = "abcdef",
        seed_factory: Optional[Callable[[str], str]] = None,
    ):
        """
        Initialize campaign operations

        Args:
            wallet: Wallet acting as campaign admin and donor
            chain_context: SolanaChainContext instance
            program_id: Crowdfunding program address
            transactions: Transaction helper, built from wallet and context if omitted
            seed_prefix: Prefix of generated account seeds
            seed_factory: Seed generator taking the prefix (defaults to random_seed)
        """
        if len(seed_prefix.encode("utf-8")) > ix.MAX_SEED_LEN - MAX_FRACTION_LEN:
            raise ValueError(
                f"Seed prefix too long: {seed_prefix!r} "
                f"(at most {ix.MAX_SEED_LEN - MAX_FRACTION_LEN} bytes)"
            )

        super().__init__(chain_context, program_id)
        self.wallet = wallet
        self.transactions = transactions or SolanaTransactions(wallet, chain_context)
        self.seed_prefix = seed_prefix
        self.seed_factory = seed_factory or random_seed

    async def check_wallet(self) -> None:
        """Connect the wallet if it is not connected yet"""
        if not self.wallet.connected():
            await self.wallet.connect()

    def generate_seed(self) -> str:
        return self.seed_factory(self.seed_prefix)

    async def create_campaign(self, name: str, description: str, image_link: str) -> CampaignReceipt:
        """
        Create a campaign account and initialize its record

        Args:
            name: Campaign name
            description: Campaign description
            image_link: Campaign image URL

        Returns:
            Receipt with the signature and the new campaign address
        """
        await self.check_wallet()
        admin = self.wallet.public_key

        seed = self.generate_seed()
        campaign_address = ix.derive_campaign_address(admin, seed, self.program_id)

        campaign = CampaignDetails(
            admin=admin,
            name=name,
            description=description,
            image_link=image_link,
            amount_donated=0,
        )
        data = ix.create_campaign_data(campaign)

        lamports = await self.chain_context.get_minimum_balance_for_rent_exemption(len(data))

        # the account holds the record without the discriminator byte; the
        # program decodes the whole account and rejects trailing bytes
        create_program_account = ix.create_account_with_seed_instruction(
            payer=admin,
            new_account=campaign_address,
            seed=seed,
            lamports=lamports,
            space=len(data) - 1,
            program_id=self.program_id,
        )
        create_campaign = ix.create_campaign_instruction(self.program_id, campaign_address, admin, data)

        transaction = await self.transactions.set_payer_and_blockhash_transaction(
            [create_program_account, create_campaign]
        )
        signature = await self.transactions.sign_and_send_transaction(transaction)
        await self.transactions.confirm_transaction(signature)

        logger.info(f"Campaign '{name}' created at {campaign_address} ({signature})")
        return CampaignReceipt(
            signature=signature,
            campaign_address=campaign_address,
            explorer_url=self.chain_context.get_explorer_url(signature),
            seed=seed,
        )

    async def donate(self, campaign_address: Union[Pubkey, str], lamports: int) -> CampaignReceipt:
        """
        Donate lamports to a campaign

        The lamports are first moved into a fresh program-owned donation
        account, which the program then drains into the campaign.

        Args:
            campaign_address: Campaign account address
            lamports: Amount to donate

        Returns:
            Receipt for the donation transaction
        """
        if lamports <= 0:
            raise ValueError("Donation amount must be positive")

        campaign_address = _to_pubkey(campaign_address)
        await self.check_wallet()
        donor = self.wallet.public_key

        seed = self.generate_seed()
        donation_account = ix.derive_campaign_address(donor, seed, self.program_id)

        create_donation_account = ix.create_account_with_seed_instruction(
            payer=donor,
            new_account=donation_account,
            seed=seed,
            lamports=lamports,
            space=0,
            program_id=self.program_id,
        )
        donate = ix.donate_instruction(self.program_id, campaign_address, donation_account, donor)

        signature = await self.transactions.send_instructions([create_donation_account, donate])

        logger.info(f"Donated {lamports} lamports to {campaign_address} ({signature})")
        return CampaignReceipt(
            signature=signature,
            campaign_address=campaign_address,
            explorer_url=self.chain_context.get_explorer_url(signature),
            seed=seed,
        )

    async def withdraw(self, campaign_address: Union[Pubkey, str], lamports: int) -> CampaignReceipt:
        """
        Withdraw lamports from a campaign to its admin wallet

        Args:
            campaign_address: Campaign account address
            lamports: Amount to withdraw

        Returns:
            Receipt for the withdrawal transaction
        """
        if lamports <= 0:
            raise ValueError("Withdrawal amount must be positive")

        campaign_address = _to_pubkey(campaign_address)
        await self.check_wallet()
        admin = self.wallet.public_key

        withdraw = ix.withdraw_instruction(self.program_id, campaign_address, admin, lamports)
        signature = await self.transactions.send_instructions([withdraw])

        logger.info(f"Withdrew {lamports} lamports from {campaign_address} ({signature})")
        return CampaignReceipt(
            signature=signature,
            campaign_address=campaign_address,
            explorer_url=self.chain_context.get_explorer_url(signature),
        )


def _to_pubkey(value: Union[Pubkey, str]) -> Pubkey:
    return value if isinstance(value, Pubkey) else Pubkey.from_string(value)
