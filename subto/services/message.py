"""
Message service for buyer and seller conversations about a listing.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from subto.models.message import Message
from subto.models.profile import Profile
from subto.repositories.message import MessageRepository
from subto.repositories.profile import ProfileRepository
from subto.schemas.message import MessageCreate
from subto.services.property import PropertyService
from subto.utils.exceptions import BadRequestError, NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class MessageService:
    """
    Service for sending and reading messages.
    A message always concerns one listing and goes from the caller to another member.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.message_repo = MessageRepository(db_session)
        self.profile_repo = ProfileRepository(db_session)
        self.property_service = PropertyService(db_session)

    async def send_message(self, message_data: MessageCreate, current_user: Profile) -> Message:
        """
        Send a message about a listing.

        Args:
            message_data: Listing, recipient, optional subject and body
            current_user: Sender

        Returns:
            Stored message with sender, recipient and listing summaries

        Raises:
            BadRequestError: If the caller messages themselves
            PropertyNotFoundError: If the listing doesn't exist
            NotFoundError: If the recipient doesn't exist
        """
        if message_data.recipient_id == current_user.id:
            raise BadRequestError("You cannot send a message to yourself")

        await self.property_service.get_property(message_data.property_id)
        if not await self.profile_repo.exists(message_data.recipient_id):
            raise NotFoundError("Recipient", str(message_data.recipient_id))

        message = await self.message_repo.create({
            "property_id": message_data.property_id,
            "sender_id": current_user.id,
            "recipient_id": message_data.recipient_id,
            "subject": message_data.subject,
            "content": message_data.content,
            "read": False,
        })
        logger.info(
            f"Message {message.id} sent from {current_user.id} to {message_data.recipient_id} "
            f"about property {message_data.property_id}"
        )
        return message

    async def get_received_messages(self, current_user: Profile) -> List[Message]:
        return await self.message_repo.get_received(current_user.id)

    async def get_sent_messages(self, current_user: Profile) -> List[Message]:
        return await self.message_repo.get_sent(current_user.id)

    async def mark_as_read(self, message_id: uuid.UUID, current_user: Profile) -> Message:
        """
        Mark one of the caller's received messages as read.

        Raises:
            NotFoundError: If the caller did not receive such a message
        """
        message = await self.message_repo.mark_as_read(message_id, current_user.id)
        if message is None:
            raise NotFoundError("Message", str(message_id))
        return message

    async def get_property_conversation(
        self,
        property_id: uuid.UUID,
        other_user_id: uuid.UUID,
        current_user: Profile,
    ) -> List[Message]:
        """Messages on one listing between the caller and another member, oldest first."""
        return await self.message_repo.get_conversation(property_id, current_user.id, other_user_id)

    async def get_unread_count(self, current_user: Profile) -> int:
        return await self.message_repo.count_unread(current_user.id)
