from fastapi import APIRouter
from bloodconnect.api.v1.endpoints import auth, donors, blood_requests, donations, inventory, stats

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(donors.router, prefix="/donors", tags=["donors"])
api_router.include_router(blood_requests.router, prefix="/blood-requests", tags=["blood-requests"])
api_router.include_router(donations.router, prefix="/donations", tags=["donations"])
api_router.include_router(inventory.router, prefix="/blood-inventory", tags=["blood-inventory"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
