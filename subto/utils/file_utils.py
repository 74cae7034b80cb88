"""
Image upload validation.
Checks type, size and decodability of listing photos before they reach storage.
"""

import io
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from PIL import Image, UnidentifiedImageError
from fastapi import UploadFile

from subto.config import get_settings
from subto.utils.exceptions import (
    FileUploadError,
    FileSizeExceededError,
    UnsupportedFileTypeError,
)

settings = get_settings()


@dataclass
class ValidatedImage:
    """Upload that passed validation, ready to be stored."""
    content: bytes
    content_type: str
    extension: str
    width: int
    height: int

    @property
    def size(self) -> int:
        return len(self.content)


class FileValidator:
    """Utility class for image validation operations."""

    # Supported image formats and their extensions
    SUPPORTED_FORMATS = {
        'image/jpeg': ['.jpg', '.jpeg'],
        'image/png': ['.png'],
        'image/webp': ['.webp']
    }

    # Pillow format names per MIME type
    PIL_FORMATS = {
        'image/jpeg': 'JPEG',
        'image/png': 'PNG',
        'image/webp': 'WEBP'
    }

    MIN_WIDTH = 100
    MIN_HEIGHT = 100
    MAX_WIDTH = 10000
    MAX_HEIGHT = 10000

    @classmethod
    def allowed_types(cls) -> list:
        return [t for t in settings.allowed_file_types if t in cls.SUPPORTED_FORMATS]

    @classmethod
    def validate_file_extension(cls, filename: str) -> str:
        """
        Validate file extension.

        Args:
            filename: Name of the file

        Returns:
            Lowercase file extension including the dot

        Raises:
            FileUploadError: If extension is missing or not supported
        """
        if not filename:
            raise FileUploadError("Filename is required")

        extension = Path(filename).suffix.lower()
        if not extension:
            raise FileUploadError("File must have an extension")

        supported_extensions = [ext for exts in cls.SUPPORTED_FORMATS.values() for ext in exts]
        if extension not in supported_extensions:
            raise FileUploadError(
                f"File extension '{extension}' not supported. "
                f"Supported extensions: {', '.join(supported_extensions)}"
            )
        return extension

    @classmethod
    def validate_mime_type(cls, mime_type: str) -> str:
        allowed = cls.allowed_types()
        if not mime_type or mime_type not in allowed:
            raise UnsupportedFileTypeError(mime_type or "unknown", allowed)
        return mime_type

    @classmethod
    def validate_file_size(cls, file_size: int, max_size: Optional[int] = None) -> int:
        if file_size <= 0:
            raise FileUploadError("File is empty")

        max_allowed = max_size or settings.max_file_size
        if file_size > max_allowed:
            raise FileSizeExceededError(file_size, max_allowed)
        return file_size

    @classmethod
    def validate_image_content(cls, content: bytes, mime_type: str) -> tuple:
        """
        Decode the image with Pillow and check its format and dimensions.

        Returns:
            Tuple of (width, height)

        Raises:
            FileUploadError: If the bytes are not a usable image of the declared type
        """
        try:
            with Image.open(io.BytesIO(content)) as img:
                img.verify()
                width, height = img.size
                pil_format = img.format
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise FileUploadError(f"Invalid image file: {e}")

        if pil_format != cls.PIL_FORMATS.get(mime_type):
            raise FileUploadError(f"Image format '{pil_format}' doesn't match MIME type '{mime_type}'")

        if width < cls.MIN_WIDTH or height < cls.MIN_HEIGHT:
            raise FileUploadError(
                f"Image {width}x{height}px is below minimum {cls.MIN_WIDTH}x{cls.MIN_HEIGHT}px"
            )
        if width > cls.MAX_WIDTH or height > cls.MAX_HEIGHT:
            raise FileUploadError(
                f"Image {width}x{height}px exceeds maximum {cls.MAX_WIDTH}x{cls.MAX_HEIGHT}px"
            )
        return width, height

    @classmethod
    async def validate_upload_file(cls, file: UploadFile) -> ValidatedImage:
        """
        Comprehensive validation of an uploaded listing photo.

        Args:
            file: FastAPI UploadFile object

        Returns:
            ValidatedImage holding the file bytes

        Raises:
            FileUploadError: If any validation fails
        """
        extension = cls.validate_file_extension(file.filename or "")
        mime_type = cls.validate_mime_type(file.content_type or "")

        if extension not in cls.SUPPORTED_FORMATS[mime_type]:
            raise FileUploadError(f"File extension '{extension}' doesn't match MIME type '{mime_type}'")

        await file.seek(0)
        content = await file.read()
        cls.validate_file_size(len(content))
        width, height = cls.validate_image_content(content, mime_type)

        return ValidatedImage(
            content=content,
            content_type=mime_type,
            extension=extension.lstrip('.'),
            width=width,
            height=height,
        )


def build_storage_path(property_id: uuid.UUID, index: int, extension: str) -> str:
    """
    Object path for the ``index``-th photo of an upload batch.

    Format: ``{property_id}/{epoch_ms}-{index}.{extension}``
    """
    return f"{property_id}/{int(time.time() * 1000)}-{index}.{extension}"
