from fastapi import APIRouter

from gateway.api.v1.routes import assets, ipn, withdrawals

api_router = APIRouter()
api_router.include_router(assets.router)
api_router.include_router(withdrawals.router)
api_router.include_router(ipn.router)
