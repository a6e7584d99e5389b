"""
Crowdfunding Program Types

Borsh layouts and Python records for the data exchanged with the
crowdfunding program.
"""

from dataclasses import dataclass
from enum import IntEnum

from borsh_construct import CStruct, String, U8, U64
from solders.pubkey import Pubkey


class CampaignInstruction(IntEnum):
    """First byte of the program instruction data"""

    CREATE_CAMPAIGN = 0
    WITHDRAW = 1
    DONATE = 2


CAMPAIGN_DETAILS_LAYOUT = CStruct(
    "admin" / U8[32],
    "name" / String,
    "description" / String,
    "image_link" / String,
    "amount_donated" / U64,
)

WITHDRAW_REQUEST_LAYOUT = CStruct("amount" / U64)


@dataclass
class CampaignDetails:
    """Campaign record stored in the campaign account"""

    admin: Pubkey
    name: str
    description: str
    image_link: str
    amount_donated: int = 0  # lamports

    def to_bytes(self) -> bytes:
        return CAMPAIGN_DETAILS_LAYOUT.build(
            {
                "admin": list(bytes(self.admin)),
                "name": self.name,
                "description": self.description,
                "image_link": self.image_link,
                "amount_donated": self.amount_donated,
            }
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "CampaignDetails":
        """Decode a record; trailing account bytes are ignored"""
        parsed = CAMPAIGN_DETAILS_LAYOUT.parse(data)
        return cls(
            admin=Pubkey(bytes(parsed.admin)),
            name=parsed.name,
            description=parsed.description,
            image_link=parsed.image_link,
            amount_donated=parsed.amount_donated,
        )

    def to_dict(self) -> dict:
        return {
            "admin": str(self.admin),
            "name": self.name,
            "description": self.description,
            "image_link": self.image_link,
            "amount_donated": self.amount_donated,
        }


@dataclass
class WithdrawRequest:
    amount: int  # lamports

    def to_bytes(self) -> bytes:
        return WITHDRAW_REQUEST_LAYOUT.build({"amount": self.amount})

    @classmethod
    def from_bytes(cls, data: bytes) -> "WithdrawRequest":
        return cls(amount=WITHDRAW_REQUEST_LAYOUT.parse(data).amount)
