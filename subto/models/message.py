"""
Message model for buyer/seller conversations about a listing.
"""

from sqlalchemy import String, Text, Boolean, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from subto.database import Base
import uuid
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from subto.models.profile import Profile
    from subto.models.property import Property


class Message(Base):
    """Direct message from one member to another, always tied to a listing."""

    __tablename__ = "messages"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Listing the conversation is about"
    )

    sender_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    recipient_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    subject: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Set once the recipient opens the message"
    )

    sender: Mapped["Profile"] = relationship("Profile", foreign_keys=[sender_id], lazy="selectin")

    recipient: Mapped["Profile"] = relationship("Profile", foreign_keys=[recipient_id], lazy="selectin")

    property_rel: Mapped["Property"] = relationship("Property", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, sender_id={self.sender_id}, recipient_id={self.recipient_id})>"

    def to_dict(self) -> dict:
        """
        Convert message to dictionary.

        Returns:
            Message with sender, recipient and listing summaries
        """
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "sender_id": str(self.sender_id),
            "recipient_id": str(self.recipient_id),
            "subject": self.subject,
            "content": self.content,
            "read": self.read,
            "created_at": self.created_at.isoformat(),
            "sender": self.sender.to_summary() if self.sender else None,
            "recipient": self.recipient.to_summary() if self.recipient else None,
            "property": self.property_rel.to_summary() if self.property_rel else None,
        }


# Inbox with unread badge
recipient_read_index = Index(
    'idx_messages_recipient_read',
    Message.recipient_id,
    Message.read,
    Message.created_at.desc()
)

# Conversation thread on one listing
conversation_index = Index(
    'idx_messages_conversation',
    Message.property_id,
    Message.sender_id,
    Message.recipient_id,
    Message.created_at.asc()
)
