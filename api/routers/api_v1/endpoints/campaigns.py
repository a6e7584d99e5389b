"""
Campaign Endpoints

FastAPI endpoints for crowdfunding campaign operations.
Provides campaign creation, donation, withdrawal and campaign lookups.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path
from solana.exceptions import SolanaRpcException
from solana.rpc.core import RPCException, UnconfirmedTxError
from solders.pubkey import Pubkey

from api.dependencies.chain_context import (
    build_campaign_operations,
    get_campaign_reader,
    get_chain_context,
    get_solana_settings,
    get_wallet_manager,
)
from api.schemas.campaign import (
    CampaignListResponse,
    CampaignResponse,
    CampaignTransactionResponse,
    CreateCampaignRequest,
    DonateRequest,
    WithdrawRequest,
)
from solana_offchain import (
    CampaignDetails,
    CampaignNotFoundError,
    CampaignReader,
    CampaignReceipt,
    SignatureRejectedError,
    SolanaChainContext,
    SolanaSettings,
    TransactionConfirmationError,
    WalletConnectionError,
    WalletManager,
)


logger = logging.getLogger(__name__)

router = APIRouter()

CHAIN_ERRORS = (RPCException, SolanaRpcException, UnconfirmedTxError, TransactionConfirmationError)


def _receipt_response(receipt: CampaignReceipt) -> CampaignTransactionResponse:
    return CampaignTransactionResponse(
        signature=receipt.signature,
        campaign_address=str(receipt.campaign_address),
        explorer_url=receipt.explorer_url,
        seed=receipt.seed,
    )


def _campaign_response(address, details: CampaignDetails) -> CampaignResponse:
    return CampaignResponse(address=str(address), **details.to_dict())


def _parse_address(address: str) -> Pubkey:
    try:
        return Pubkey.from_string(address)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid campaign address: {address}")


def _raise_http_error(operation: str, e: Exception):
    """Map library failures to HTTP errors"""
    if isinstance(e, HTTPException):
        raise e
    if isinstance(e, CampaignNotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (WalletConnectionError, SignatureRejectedError)):
        raise HTTPException(status_code=403, detail=str(e))
    if isinstance(e, ValueError):
        raise HTTPException(status_code=400, detail=str(e))
    if isinstance(e, CHAIN_ERRORS):
        logger.error(f"Error in {operation}: {e}")
        raise HTTPException(status_code=502, detail=f"Blockchain error: {e}")
    logger.error(f"Unexpected error in {operation}: {e}", exc_info=True)
    raise HTTPException(status_code=500, detail=f"Failed to {operation}: {e}")


# ============================================================================
# Campaign Endpoints
# ============================================================================


@router.post(
    "",
    response_model=CampaignTransactionResponse,
    summary="Create campaign",
    description="Create a campaign account owned by the crowdfunding program and initialize its record.",
)
async def create_campaign(
    request: CreateCampaignRequest,
    chain_context: SolanaChainContext = Depends(get_chain_context),
    wallet_manager: WalletManager = Depends(get_wallet_manager),
    settings: SolanaSettings = Depends(get_solana_settings),
) -> CampaignTransactionResponse:
    """
    Create a new campaign.

    This endpoint:
    1. Derives a new account address from the admin wallet and a random seed
    2. Funds it with the rent-exempt minimum
    3. Invokes the program to write the campaign record
    4. Waits for confirmation
    """
    try:
        operations = build_campaign_operations(request.wallet_name, chain_context, wallet_manager, settings)
        receipt = await operations.create_campaign(request.name, request.description, request.image_link)
        return _receipt_response(receipt)
    except Exception as e:
        _raise_http_error("create campaign", e)


@router.get("", response_model=CampaignListResponse, summary="List campaigns")
async def list_campaigns(reader: CampaignReader = Depends(get_campaign_reader)) -> CampaignListResponse:
    """List every campaign account owned by the program"""
    try:
        campaigns = await reader.list_campaigns()
        items = [_campaign_response(address, details) for address, details in campaigns]
        return CampaignListResponse(campaigns=items, total=len(items))
    except Exception as e:
        _raise_http_error("list campaigns", e)


@router.get("/{address}", response_model=CampaignResponse, summary="Get campaign")
async def get_campaign(
    address: str = Path(description="Campaign account address"),
    reader: CampaignReader = Depends(get_campaign_reader),
) -> CampaignResponse:
    """Read a campaign record from the chain"""
    campaign_address = _parse_address(address)
    try:
        details = await reader.get_campaign(campaign_address)
        return _campaign_response(campaign_address, details)
    except Exception as e:
        _raise_http_error("get campaign", e)


@router.post("/{address}/donate", response_model=CampaignTransactionResponse, summary="Donate to campaign")
async def donate(
    request: DonateRequest,
    address: str = Path(description="Campaign account address"),
    chain_context: SolanaChainContext = Depends(get_chain_context),
    wallet_manager: WalletManager = Depends(get_wallet_manager),
    settings: SolanaSettings = Depends(get_solana_settings),
) -> CampaignTransactionResponse:
    """Donate lamports from a configured wallet to a campaign"""
    campaign_address = _parse_address(address)
    try:
        operations = build_campaign_operations(request.wallet_name, chain_context, wallet_manager, settings)
        receipt = await operations.donate(campaign_address, request.lamports)
        return _receipt_response(receipt)
    except Exception as e:
        _raise_http_error("donate", e)


@router.post("/{address}/withdraw", response_model=CampaignTransactionResponse, summary="Withdraw from campaign")
async def withdraw(
    request: WithdrawRequest,
    address: str = Path(description="Campaign account address"),
    chain_context: SolanaChainContext = Depends(get_chain_context),
    wallet_manager: WalletManager = Depends(get_wallet_manager),
    settings: SolanaSettings = Depends(get_solana_settings),
) -> CampaignTransactionResponse:
    """Withdraw lamports from a campaign to its admin wallet"""
    campaign_address = _parse_address(address)
    try:
        operations = build_campaign_operations(request.wallet_name, chain_context, wallet_manager, settings)
        receipt = await operations.withdraw(campaign_address, request.lamports)
        return _receipt_response(receipt)
    except Exception as e:
        _raise_http_error("withdraw", e)
