from fastapi import APIRouter, Security

from api.routers.api_v1.endpoints import campaigns
from api.utils.security import get_api_key


api_router = APIRouter()

api_router.include_router(
    campaigns.router, prefix="/campaigns", tags=["Campaigns"], dependencies=[Security(get_api_key)]
)
