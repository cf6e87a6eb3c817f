from typing import List, Optional

from sqlalchemy import and_, or_, select

from jobboard.models.messaging import Connection, ConnectionStatus, Message


def _between(model, a: str, b: str):
    return or_(
        and_(model.sender_id == a, model.receiver_id == b),
        and_(model.sender_id == b, model.receiver_id == a),
    )


class ConnectionRepository:
    @staticmethod
    async def get_by_id(db, connection_id: str) -> Optional[Connection]:
        result = await db.execute(select(Connection).where(Connection.id == connection_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def find_between(db, user_a: str, user_b: str,
                           status: Optional[ConnectionStatus] = None) -> Optional[Connection]:
        stmt = select(Connection).where(_between(Connection, user_a, user_b)).limit(1)
        if status is not None:
            stmt = stmt.where(Connection.status == status)
        result = await db.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def create(db, sender_id: str, receiver_id: str) -> Connection:
        connection = Connection(sender_id=sender_id, receiver_id=receiver_id,
                                status=ConnectionStatus.pending)
        db.add(connection)
        await db.commit()
        await db.refresh(connection)
        return connection

    @staticmethod
    async def list_for_user(db, user_id: str) -> List[Connection]:
        result = await db.execute(
            select(Connection)
            .where(or_(Connection.sender_id == user_id, Connection.receiver_id == user_id))
            .order_by(Connection.created_at.desc())
        )
        return result.scalars().all()


class MessageRepository:
    @staticmethod
    async def create(db, sender_id: str, receiver_id: str, content: str) -> Message:
        message = Message(sender_id=sender_id, receiver_id=receiver_id, content=content)
        db.add(message)
        await db.commit()
        await db.refresh(message)
        return message

    @staticmethod
    async def get_by_id(db, message_id: str) -> Optional[Message]:
        result = await db.execute(select(Message).where(Message.id == message_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def conversation(db, user_a: str, user_b: str) -> List[Message]:
        result = await db.execute(
            select(Message)
            .where(_between(Message, user_a, user_b))
            .order_by(Message.created_at.asc())
        )
        return result.scalars().all()

    @staticmethod
    async def unread_for(db, user_id: str) -> List[Message]:
        result = await db.execute(
            select(Message)
            .where(Message.receiver_id == user_id, Message.is_read == False)  # noqa: E712
            .order_by(Message.created_at.desc())
        )
        return result.scalars().all()
