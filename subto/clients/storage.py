"""
Object storage backends for listing photos.
SupabaseStorage talks to the Storage REST API; LocalStorage writes under upload_dir for development and tests.
"""

from pathlib import Path
from typing import List, Optional
import logging

import aiofiles
import aiofiles.os
import httpx

from subto.config import settings
from subto.utils.exceptions import FileUploadError, UpstreamServiceError

logger = logging.getLogger(__name__)


class StorageBackend:
    """Interface shared by the storage backends."""

    bucket: str

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store ``content`` at ``path`` without overwriting; returns the stored path."""
        raise NotImplementedError

    async def remove(self, paths: List[str]) -> None:
        raise NotImplementedError

    def get_public_url(self, path: str) -> str:
        raise NotImplementedError


class SupabaseStorage(StorageBackend):
    """Supabase Storage REST API (``{supabase_url}/storage/v1``)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        bucket: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.supabase_storage_url
        self.api_key = api_key if api_key is not None else settings.supabase_service_role_key
        self.bucket = bucket or settings.storage_bucket
        self.timeout = timeout or settings.supabase_timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "apikey": self.api_key,
                "Authorization": f"Bearer {self.api_key}",
            },
            timeout=self.timeout,
            transport=self._transport,
        )

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        """
        Upload an object into the bucket.

        Raises:
            FileUploadError: If storage rejects the object (e.g. it already exists)
            UpstreamServiceError: If storage is unreachable or fails
        """
        try:
            async with self._client() as client:
                response = await client.post(
                    f"/object/{self.bucket}/{path}",
                    content=content,
                    headers={
                        "Content-Type": content_type,
                        "cache-control": f"max-age={settings.storage_cache_control}",
                        "x-upsert": "false",
                    },
                )
        except httpx.HTTPError as e:
            logger.error(f"Storage upload of {path} failed: {e}")
            raise UpstreamServiceError("Supabase storage", "service unreachable")

        if response.status_code >= 500:
            raise UpstreamServiceError("Supabase storage", f"status {response.status_code}")
        if not response.is_success:
            try:
                message = response.json().get("message") or response.text
            except ValueError:
                message = response.text
            raise FileUploadError(f"Storage rejected {path}: {message}")

        logger.debug(f"Uploaded {path} to bucket {self.bucket}")
        return path

    async def remove(self, paths: List[str]) -> None:
        if not paths:
            return
        try:
            async with self._client() as client:
                response = await client.request(
                    "DELETE",
                    f"/object/{self.bucket}",
                    json={"prefixes": paths},
                )
        except httpx.HTTPError as e:
            logger.error(f"Storage removal of {paths} failed: {e}")
            raise UpstreamServiceError("Supabase storage", "service unreachable")

        if not response.is_success:
            raise UpstreamServiceError("Supabase storage", f"remove returned status {response.status_code}")

    def get_public_url(self, path: str) -> str:
        return f"{self.base_url}/object/public/{self.bucket}/{path}"


class LocalStorage(StorageBackend):
    """Filesystem storage under ``upload_dir``, served by the app at ``/uploads``."""

    def __init__(self, base_dir: Optional[Path] = None, bucket: Optional[str] = None,
                 public_base_url: Optional[str] = None):
        self.base_dir = Path(base_dir or settings.upload_dir)
        self.bucket = bucket or settings.storage_bucket
        self.public_base_url = (public_base_url or settings.public_base_url).rstrip("/")

    def _full_path(self, path: str) -> Path:
        full_path = (self.base_dir / self.bucket / path).resolve()
        bucket_dir = (self.base_dir / self.bucket).resolve()
        if bucket_dir not in full_path.parents:
            raise FileUploadError(f"Invalid storage path: {path}")
        return full_path

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        full_path = self._full_path(path)
        if await aiofiles.os.path.exists(full_path):
            raise FileUploadError(f"Object already exists: {path}")

        try:
            await aiofiles.os.makedirs(full_path.parent, exist_ok=True)
            async with aiofiles.open(full_path, 'wb') as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Failed to write {full_path}: {e}")
            raise FileUploadError(f"Failed to save file: {e}")

        return path

    async def remove(self, paths: List[str]) -> None:
        for path in paths:
            full_path = self._full_path(path)
            if await aiofiles.os.path.exists(full_path):
                await aiofiles.os.remove(full_path)

    def get_public_url(self, path: str) -> str:
        return f"{self.public_base_url}/uploads/{self.bucket}/{path}"


def get_storage() -> StorageBackend:
    """FastAPI dependency returning the configured storage backend."""
    if settings.storage_backend == "local":
        return LocalStorage()
    return SupabaseStorage()
