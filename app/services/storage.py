"""
Object storage for uploaded images, backed by Cloudinary.
Uploads return the public delivery URL that the content rows store.
"""
import asyncio
import logging
import re
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from app.config import settings
from app.utils.image_converter import shrink_for_upload

logger = logging.getLogger(__name__)

# Captures everything after /image/upload/ (or /image/upload/v{version}/)
_DELIVERY_URL_RE = re.compile(r'/image/upload(?:/v\d+)?/(.+)$')


@dataclass
class ImageUpload:
    """An image file chosen in an editor form, read into memory."""
    filename: str
    content: bytes
    content_type: str = "image/jpeg"


def object_name() -> str:
    """Collision-resistant object name: epoch milliseconds plus a random suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:10]}"


def extract_public_id_from_url(url: str) -> str:
    """
    Extract the Cloudinary public_id from a delivery URL.

    https://res.cloudinary.com/{cloud}/image/upload/v{version}/{public_id}.{format}

    Raises:
        ValueError: If URL format is invalid
    """
    match = _DELIVERY_URL_RE.search(url or "")
    if not match:
        raise ValueError(f"Invalid Cloudinary URL format: {url}")

    public_id = match.group(1)
    folder, _, filename = public_id.rpartition('/')
    if '.' in filename:
        filename = filename.rsplit('.', 1)[0]
    return f"{folder}/{filename}" if folder else filename


class MediaStorage:
    """Uploads and deletes images in one Cloudinary account."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        root_folder: str = "",
        max_retries: int = 3,
    ):
        self.cloud_name = cloud_name
        self.root_folder = root_folder.strip('/')
        self.max_retries = max_retries
        self._api_key = api_key
        self._api_secret = api_secret
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True  # Always use HTTPS for secure URLs
        )
        if not self.is_configured:
            logger.warning(
                "Cloudinary credentials missing. Set CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY "
                "and CLOUDINARY_API_SECRET in your .env file. Uploads will fail."
            )

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name)

    def validate_config(self) -> bool:
        """Check that every Cloudinary credential is set."""
        for name, value in (
            ("CLOUDINARY_CLOUD_NAME", self.cloud_name),
            ("CLOUDINARY_API_KEY", self._api_key),
            ("CLOUDINARY_API_SECRET", self._api_secret),
        ):
            if not value:
                logger.warning(f"{name} not configured")
                return False
        return True

    def _folder(self, folder: str) -> str:
        return "/".join(part for part in (self.root_folder, folder.strip('/')) if part)

    async def _with_retries(self, action: str, fn, *args, **kwargs) -> Dict[str, Any]:
        for attempt in range(self.max_retries):
            try:
                return await asyncio.to_thread(fn, *args, **kwargs)
            except CloudinaryError as e:
                logger.warning(f"Cloudinary {action} error (attempt {attempt + 1}/{self.max_retries}): {str(e)}")
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(2 ** attempt)  # 1s, 2s, 4s backoff
                    continue
                logger.error(f"Cloudinary {action} failed after {self.max_retries} attempts: {str(e)}")
                raise

    async def upload(self, content: bytes, folder: str, filename: str = "upload") -> str:
        """
        Upload image bytes under folder with a generated object name.

        Returns:
            str: Public HTTPS URL of the stored image
        """
        content = await asyncio.to_thread(shrink_for_upload, content, filename)
        result = await self._with_retries(
            "upload",
            cloudinary.uploader.upload,
            content,
            folder=self._folder(folder),
            public_id=object_name(),
            overwrite=False,
            resource_type="image",
        )
        logger.info(f"Uploaded {filename} as {result['public_id']}")
        return result["secure_url"]

    async def remove(self, url: str) -> bool:
        """
        Delete the image behind a public URL.

        Returns:
            bool: False if the URL does not point into this store (nothing deleted)
        """
        try:
            public_id = extract_public_id_from_url(url)
        except ValueError:
            logger.warning(f"Not a storage URL, skipping delete: {url}")
            return False

        result = await self._with_retries(
            "delete",
            cloudinary.uploader.destroy,
            public_id,
            invalidate=True,  # Invalidate CDN cache
            resource_type="image",
        )
        logger.info(f"Deleted {public_id} from storage (result: {result.get('result')})")
        return result.get("result") in ("ok", "not found")


async def remove_quietly(storage: MediaStorage, url: Optional[str]) -> None:
    """
    Best-effort delete used by the editors' cleanup steps.
    Storage failures are logged and never block the row mutation.
    """
    if not url:
        return
    try:
        await storage.remove(url)
    except Exception as e:
        logger.warning(f"Failed to delete {url} from storage: {str(e)}")


_storage: Optional[MediaStorage] = None


def get_storage() -> MediaStorage:
    """FastAPI dependency returning the process-wide storage client."""
    global _storage
    if _storage is None:
        _storage = MediaStorage(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            root_folder=settings.STORAGE_ROOT_FOLDER,
        )
    return _storage
