"""
PropertyImage model for listing photos.
Rows point at objects in the property-images storage bucket.
"""

from sqlalchemy import String, Integer, Boolean, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from subto.database import Base
import uuid
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from subto.models.property import Property


class PropertyImage(Base):
    """
    Photo attached to a listing.
    At most one image per listing is primary; the rest are shown by order_index.
    """

    __tablename__ = "property_images"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the listing this image belongs to"
    )

    image_url: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Public URL of the stored object"
    )

    storage_path: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        unique=True,
        comment="Object path inside the storage bucket"
    )

    is_primary: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
        comment="Whether this is the cover image of the listing"
    )

    caption: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    order_index: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Gallery position"
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="images",
    )

    def __repr__(self) -> str:
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, storage_path={self.storage_path})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "image_url": self.image_url,
            "storage_path": self.storage_path,
            "is_primary": self.is_primary,
            "caption": self.caption,
            "order_index": self.order_index,
            "created_at": self.created_at.isoformat(),
        }


# Gallery lookup in display order
property_images_index = Index(
    'idx_property_images_property_order',
    PropertyImage.property_id,
    PropertyImage.is_primary.desc(),
    PropertyImage.order_index.asc()
)
