"""
Image conversion utility for converting uploads to WebP format.
Reduces file size before the image is sent to storage.
"""
import io
import logging
from typing import Optional, Tuple
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_WEBP_QUALITY = 85  # Balance between quality and file size (0-100)
DEFAULT_WEBP_METHOD = 6    # Compression method (0-6, higher = better compression but slower)
MAX_DIMENSION = 2560       # Build photos larger than this are downscaled


def convert_to_webp(
    image_bytes: bytes,
    quality: int = DEFAULT_WEBP_QUALITY,
    method: int = DEFAULT_WEBP_METHOD,
    max_dimension: Optional[int] = MAX_DIMENSION,
) -> Tuple[bytes, bool]:
    """
    Convert image bytes to WebP format.

    Args:
        image_bytes: Original image file bytes
        quality: WebP quality (0-100)
        method: WebP compression method (0-6)
        max_dimension: Maximum width or height before downscaling (None to disable)

    Returns:
        Tuple[bytes, bool]:
            - Converted image bytes (or the original bytes if skipped/failed)
            - True if the returned bytes are WebP, False if conversion failed
    """
    try:
        image = Image.open(io.BytesIO(image_bytes))

        if image.format == 'WEBP':
            logger.debug("Image is already WebP format, skipping conversion")
            return image_bytes, True

        # WebP keeps alpha, so only palette images need expanding
        if image.mode == 'P':
            image = image.convert('RGBA')
        elif image.mode not in ('RGB', 'RGBA', 'LA'):
            image = image.convert('RGB')

        if max_dimension:
            image.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

        webp_buffer = io.BytesIO()
        image.save(webp_buffer, format='WEBP', quality=quality, method=method)
        webp_bytes = webp_buffer.getvalue()

        logger.info(
            f"Converted image to WebP: "
            f"{len(image_bytes):,} bytes -> {len(webp_bytes):,} bytes (quality={quality})"
        )
        return webp_bytes, True

    except UnidentifiedImageError as e:
        logger.warning(f"Cannot identify image format: {str(e)}")
        return image_bytes, False

    except (OSError, ValueError) as e:
        logger.error(f"Error converting image to WebP: {str(e)}", exc_info=True)
        return image_bytes, False


def shrink_for_upload(image_bytes: bytes, filename: str = "upload") -> bytes:
    """Return the WebP version of an upload if it is smaller, else the original bytes."""
    converted, ok = convert_to_webp(image_bytes)
    if ok and len(converted) < len(image_bytes):
        return converted
    if not ok:
        logger.warning(f"WebP conversion failed for {filename}, uploading original format")
    return image_bytes
