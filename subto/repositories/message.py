"""
Message repository for inbox, outbox and per-listing conversations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, and_, or_, asc, desc
from subto.repositories.base import BaseRepository
from subto.models.message import Message
from typing import List, Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class MessageRepository(BaseRepository[Message]):
    """Repository for member-to-member messages."""

    def __init__(self, db: AsyncSession):
        super().__init__(Message, db)

    async def _list(self, *conditions, newest_first: bool = True) -> List[Message]:
        order = desc(Message.created_at) if newest_first else asc(Message.created_at)
        query = (
            select(Message)
            .where(*conditions)
            .order_by(order)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_received(self, user_id: uuid.UUID) -> List[Message]:
        try:
            return await self._list(Message.recipient_id == user_id)
        except Exception as e:
            logger.error(f"Failed to get received messages for {user_id}: {e}")
            raise

    async def get_sent(self, user_id: uuid.UUID) -> List[Message]:
        try:
            return await self._list(Message.sender_id == user_id)
        except Exception as e:
            logger.error(f"Failed to get sent messages for {user_id}: {e}")
            raise

    async def get_conversation(
        self,
        property_id: uuid.UUID,
        user_id: uuid.UUID,
        other_user_id: uuid.UUID,
    ) -> List[Message]:
        """
        Messages about one listing exchanged between two members, oldest first.

        Args:
            property_id: Listing the conversation is about
            user_id: Caller
            other_user_id: Counterpart

        Returns:
            Messages in both directions
        """
        try:
            return await self._list(
                Message.property_id == property_id,
                or_(
                    and_(Message.sender_id == user_id, Message.recipient_id == other_user_id),
                    and_(Message.sender_id == other_user_id, Message.recipient_id == user_id),
                ),
                newest_first=False,
            )
        except Exception as e:
            logger.error(f"Failed to get conversation on {property_id}: {e}")
            raise

    async def mark_as_read(self, message_id: uuid.UUID, recipient_id: uuid.UUID) -> Optional[Message]:
        """
        Flag a message as read if ``recipient_id`` received it.

        Returns:
            Updated message, or None when no such message was received by the caller
        """
        try:
            result = await self.db.execute(
                update(Message)
                .where(Message.id == message_id, Message.recipient_id == recipient_id)
                .values(read=True)
            )
            await self.db.commit()
            if result.rowcount == 0:
                return None
            return await self.get_by_id(message_id)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to mark message {message_id} as read: {e}")
            raise

    async def count_unread(self, user_id: uuid.UUID) -> int:
        return await self.count(Message.recipient_id == user_id, Message.read.is_(False))
