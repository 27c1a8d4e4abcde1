from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.api.deps import get_current_user, get_complete_profile_user
from app.models.user import User
from app.schemas.connection_request import (
    ConnectionsResponse,
    ReceivedRequestsResponse,
    SentRequestsResponse,
)
from app.services.connection_service import ConnectionService

router = APIRouter()


@router.get("/requests/received", response_model=ReceivedRequestsResponse)
async def get_received_requests(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Pending connection requests other users sent to me"""
    service = ConnectionService()
    requests = await service.list_received(db, current_user)
    return {"message": "Data fetched successfully", "data": requests}


@router.get("/requests/sent", response_model=SentRequestsResponse)
async def get_sent_requests(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Connection requests I sent that are still pending"""
    service = ConnectionService()
    requests = await service.list_sent(db, current_user)
    return {"message": "Data fetched successfully", "data": requests}


@router.get("/connections", response_model=ConnectionsResponse)
async def get_connections(
    current_user: User = Depends(get_complete_profile_user),
    db: AsyncSession = Depends(get_db)
):
    """Users I have matched with"""
    service = ConnectionService()
    connections = await service.list_connections(db, current_user)
    return {"data": connections}
