"""
Crowdfunding Instruction Builders

Pure functions building the system and program instructions used by
campaign operations. No network access happens here.
"""

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import CreateAccountWithSeedParams, create_account_with_seed

from .types import CampaignDetails, CampaignInstruction, WithdrawRequest


MAX_SEED_LEN = 32


def derive_campaign_address(base: Pubkey, seed: str, program_id: Pubkey) -> Pubkey:
    """
    Derive the address of a seed-based account owned by the program

    The same (base, seed, program_id) triple always gives the same address.
    """
    if len(seed.encode("utf-8")) > MAX_SEED_LEN:
        raise ValueError(f"Seed exceeds {MAX_SEED_LEN} bytes: {seed!r}")
    return Pubkey.create_with_seed(base, seed, program_id)


def create_campaign_data(details: CampaignDetails) -> bytes:
    """Instruction data for create_campaign: discriminator byte + borsh record"""
    return bytes([CampaignInstruction.CREATE_CAMPAIGN]) + details.to_bytes()


def withdraw_data(amount: int) -> bytes:
    return bytes([CampaignInstruction.WITHDRAW]) + WithdrawRequest(amount).to_bytes()


def donate_data() -> bytes:
    return bytes([CampaignInstruction.DONATE])


def create_account_with_seed_instruction(
    payer: Pubkey,
    new_account: Pubkey,
    seed: str,
    lamports: int,
    space: int,
    program_id: Pubkey,
) -> Instruction:
    """
    System instruction creating a seed-derived account owned by the program

    The payer is both the funding account and the seed base.
    """
    return create_account_with_seed(
        CreateAccountWithSeedParams(
            from_pubkey=payer,
            to_pubkey=new_account,
            base=payer,
            seed=seed,
            lamports=lamports,
            space=space,
            owner=program_id,
        )
    )


def create_campaign_instruction(program_id: Pubkey, campaign: Pubkey, admin: Pubkey, data: bytes) -> Instruction:
    return Instruction(
        program_id,
        data,
        [
            AccountMeta(pubkey=campaign, is_signer=False, is_writable=True),
            AccountMeta(pubkey=admin, is_signer=True, is_writable=False),
        ],
    )


def withdraw_instruction(program_id: Pubkey, campaign: Pubkey, admin: Pubkey, amount: int) -> Instruction:
    # admin receives the lamports, so it must be writable
    return Instruction(
        program_id,
        withdraw_data(amount),
        [
            AccountMeta(pubkey=campaign, is_signer=False, is_writable=True),
            AccountMeta(pubkey=admin, is_signer=True, is_writable=True),
        ],
    )


def donate_instruction(program_id: Pubkey, campaign: Pubkey, donation_account: Pubkey, donor: Pubkey) -> Instruction:
    return Instruction(
        program_id,
        donate_data(),
        [
            AccountMeta(pubkey=campaign, is_signer=False, is_writable=True),
            AccountMeta(pubkey=donation_account, is_signer=False, is_writable=True),
            AccountMeta(pubkey=donor, is_signer=True, is_writable=False),
        ],
    )
