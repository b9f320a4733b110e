"""
Media Service

Image validation and Supabase Storage uploads for challenge proofs and
avatars.
"""

import io
import time
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from nightout.core.config import settings
from nightout.core.database import get_supabase_client

# Pillow format name -> (extension, mime type)
ALLOWED_IMAGE_FORMATS = {
    "JPEG": ("jpg", "image/jpeg"),
    "PNG": ("png", "image/png"),
    "WEBP": ("webp", "image/webp"),
    "GIF": ("gif", "image/gif"),
}


def validate_image(content: bytes) -> Tuple[str, str]:
    """
    Check that ``content`` is an image we accept.

    Returns (extension, mime type). Raises ValueError otherwise.
    """
    if not content:
        raise ValueError("Uploaded file is empty")
    if len(content) > int(settings.MAX_UPLOAD_BYTES):
        raise ValueError("Uploaded file is too large")

    try:
        with Image.open(io.BytesIO(content)) as img:
            image_format = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValueError("Uploaded file is not a valid image") from e

    if image_format not in ALLOWED_IMAGE_FORMATS:
        raise ValueError(f"Unsupported image format: {image_format}")

    return ALLOWED_IMAGE_FORMATS[image_format]


def upload_image(bucket: str, prefix: str, content: bytes) -> str:
    """
    Validate and store an image at ``{prefix}/{epoch_ms}.{ext}``.

    Returns the storage path, which is the stable reference saved on rows.
    """
    extension, mime_type = validate_image(content)
    path = f"{prefix}/{int(time.time() * 1000)}.{extension}"

    supabase = get_supabase_client()
    supabase.storage.from_(bucket).upload(
        path, content, {"content-type": mime_type, "upsert": "false"}
    )
    return path


def public_url(bucket: str, path: str) -> str:
    supabase = get_supabase_client()
    return supabase.storage.from_(bucket).get_public_url(path)
