from fastapi import APIRouter
from app.api.v1.users.connections import router as connections_router
from app.api.v1.users.feed import router as feed_router
from app.api.v1.users.swipes import router as swipes_router
from app.api.v1.users.endpoints import router as user_router

# Create a single router that combines all user endpoints
router = APIRouter()

# Include all sub-routers; the /{user_id} profile route goes last
router.include_router(connections_router)
router.include_router(feed_router)
router.include_router(swipes_router)
router.include_router(user_router)

__all__ = ["router"]
