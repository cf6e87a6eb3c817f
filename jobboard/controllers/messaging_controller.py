from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from jobboard.db.database import get_db
from jobboard.schemas.message_schema import ConnectionRequest, MessageCreate
from jobboard.services.auth.auth_service import get_current_user
from jobboard.services.auth.identity import Identity
from jobboard.services.messaging_service import ConnectionService, MessageService

connections_router = APIRouter()
messages_router = APIRouter()
connection_service = ConnectionService()
message_service = MessageService()


@connections_router.post("/request", status_code=status.HTTP_201_CREATED)
async def send_connection_request(
    data: ConnectionRequest,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await connection_service.send_request(current_user, data.receiver_id, db)


@connections_router.put("/{connection_id}/accept")
async def accept_connection(
    connection_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await connection_service.respond(current_user, connection_id, True, db)


@connections_router.put("/{connection_id}/reject")
async def reject_connection(
    connection_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await connection_service.respond(current_user, connection_id, False, db)


@connections_router.get("")
async def list_connections(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await connection_service.list_connections(current_user, db)


@messages_router.post("", status_code=status.HTTP_201_CREATED)
async def send_message(
    data: MessageCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await message_service.send_message(current_user, data.receiver_id, data.content, db)


# declared before /{connection_id} so "unread" is not taken as an id
@messages_router.get("/unread")
async def unread_messages(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await message_service.get_unread(current_user, db)


@messages_router.get("/{connection_id}")
async def get_conversation(
    connection_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await message_service.get_conversation(current_user, connection_id, db)


@messages_router.put("/{message_id}/read")
async def mark_message_read(
    message_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user)
):
    return await message_service.mark_read(current_user, message_id, db)
