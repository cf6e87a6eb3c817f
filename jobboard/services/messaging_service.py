import logging

from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from jobboard.models.messaging import Connection, ConnectionStatus, Message
from jobboard.repositories.messaging_repo import ConnectionRepository, MessageRepository
from jobboard.repositories.user_repo import get_user_by_id
from jobboard.services.auth.identity import Identity

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000


def serialize_connection(connection: Connection) -> dict:
    return {
        "id": connection.id,
        "sender_id": connection.sender_id,
        "receiver_id": connection.receiver_id,
        "status": connection.status.value,
        "created_at": connection.created_at,
        "updated_at": connection.updated_at,
    }


def serialize_message(message: Message) -> dict:
    return {
        "id": message.id,
        "sender_id": message.sender_id,
        "receiver_id": message.receiver_id,
        "content": message.content,
        "is_read": message.is_read,
        "created_at": message.created_at,
    }


class ConnectionService:
    async def send_request(self, identity: Identity, receiver_id: str, db: AsyncSession) -> dict:
        if not receiver_id:
            raise ValidationError("receiver_id is required")
        if receiver_id == identity.id:
            raise ValidationError("Cannot connect with yourself")
        if not await get_user_by_id(db, receiver_id):
            raise NotFoundError("User not found")
        if await ConnectionRepository.find_between(db, identity.id, receiver_id):
            raise ConflictError("Connection already exists")

        connection = await ConnectionRepository.create(db, identity.id, receiver_id)
        return {"success": True, "message": "Connection request sent", "connection": serialize_connection(connection)}

    async def respond(self, identity: Identity, connection_id: str, accept: bool, db: AsyncSession) -> dict:
        connection = await ConnectionRepository.get_by_id(db, connection_id)
        if not connection:
            raise NotFoundError("Connection not found")
        if connection.receiver_id != identity.id:
            raise ForbiddenError("Only the receiver can respond to this request")
        if connection.status != ConnectionStatus.pending:
            raise ValidationError("Connection request already handled")

        connection.status = ConnectionStatus.accepted if accept else ConnectionStatus.rejected
        await db.commit()
        await db.refresh(connection)
        return {"success": True, "connection": serialize_connection(connection)}

    async def list_connections(self, identity: Identity, db: AsyncSession) -> dict:
        connections = await ConnectionRepository.list_for_user(db, identity.id)
        data = [serialize_connection(c) for c in connections]
        return {"success": True, "count": len(data), "connections": data}


class MessageService:
    async def send_message(self, identity: Identity, receiver_id: str, content: str, db: AsyncSession) -> dict:
        content = (content or "").strip()
        if not receiver_id or not content:
            raise ValidationError("receiver_id and content are required")
        if len(content) > MAX_MESSAGE_LENGTH:
            raise ValidationError("Message too long")
        if not await ConnectionRepository.find_between(db, identity.id, receiver_id,
                                                       status=ConnectionStatus.accepted):
            raise ForbiddenError("You can only message accepted connections")

        message = await MessageRepository.create(db, identity.id, receiver_id, content)
        return {"success": True, "message": serialize_message(message)}

    async def get_conversation(self, identity: Identity, connection_id: str, db: AsyncSession) -> dict:
        connection = await ConnectionRepository.get_by_id(db, connection_id)
        if not connection:
            raise NotFoundError("Connection not found")
        if identity.id not in (connection.sender_id, connection.receiver_id):
            raise ForbiddenError("Not a participant in this conversation")

        messages = await MessageRepository.conversation(db, connection.sender_id, connection.receiver_id)
        return {"success": True, "count": len(messages), "messages": [serialize_message(m) for m in messages]}

    async def get_unread(self, identity: Identity, db: AsyncSession) -> dict:
        messages = await MessageRepository.unread_for(db, identity.id)
        return {"success": True, "count": len(messages), "messages": [serialize_message(m) for m in messages]}

    async def mark_read(self, identity: Identity, message_id: str, db: AsyncSession) -> dict:
        message = await MessageRepository.get_by_id(db, message_id)
        if not message:
            raise NotFoundError("Message not found")
        if message.receiver_id != identity.id:
            raise ForbiddenError("Only the receiver can mark a message as read")
        message.is_read = True
        await db.commit()
        return {"success": True, "message": serialize_message(message)}
