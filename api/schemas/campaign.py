"""
Campaign Schemas

Pydantic models for campaign-related API requests and responses.
"""

from pydantic import BaseModel, Field


# ============================================================================
# Create Campaign Schemas
# ============================================================================


class CreateCampaignRequest(BaseModel):
    """Request to create a crowdfunding campaign"""

    name: str = Field(min_length=1, description="Campaign name")
    description: str = Field(default="", description="Campaign description")
    image_link: str = Field(default="", description="Campaign image URL")
    wallet_name: str | None = Field(None, description="Wallet acting as admin (default wallet if omitted)")


class CampaignTransactionResponse(BaseModel):
    """Response for a confirmed campaign transaction"""

    success: bool = True
    signature: str = Field(description="Transaction signature")
    campaign_address: str = Field(description="Campaign account address")
    explorer_url: str = Field(description="Blockchain explorer URL")
    seed: str | None = Field(None, description="Seed used to derive a new account")


# ============================================================================
# Donate / Withdraw Schemas
# ============================================================================


class DonateRequest(BaseModel):
    """Request to donate to a campaign"""

    lamports: int = Field(gt=0, description="Amount in lamports to donate (must be > 0)")
    wallet_name: str | None = Field(None, description="Donor wallet (default wallet if omitted)")


class WithdrawRequest(BaseModel):
    """Request to withdraw from a campaign"""

    lamports: int = Field(gt=0, description="Amount in lamports to withdraw (must be > 0)")
    wallet_name: str | None = Field(None, description="Admin wallet (default wallet if omitted)")


# ============================================================================
# Campaign Read Schemas
# ============================================================================


class CampaignResponse(BaseModel):
    """Decoded campaign record"""

    address: str = Field(description="Campaign account address")
    admin: str = Field(description="Admin public key")
    name: str
    description: str
    image_link: str
    amount_donated: int = Field(description="Total donated in lamports")


class CampaignListResponse(BaseModel):
    campaigns: list[CampaignResponse]
    total: int
