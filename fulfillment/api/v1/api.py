"""API v1 router composition."""

from fastapi import APIRouter

from fulfillment.api.v1.endpoints import fulfillment

api_router: APIRouter = APIRouter()
api_router.include_router(fulfillment.router, prefix="/fulfillment", tags=["fulfillment"])
