"""
Image Service

Pillow-based processing of uploaded images before they are stored.
"""

import io
import logging

from PIL import Image, ImageOps

from app.exceptions import FileUploadError

logger = logging.getLogger(__name__)

# Gallery and cover images are fitted inside this box, never enlarged
MAX_IMAGE_SIZE = (1600, 1200)
JPEG_QUALITY = 80
WEBP_QUALITY = 80
PNG_COMPRESSION = 8

# Team photos are cropped to a square
TEAM_PHOTO_SIZE = (600, 600)
TEAM_PHOTO_QUALITY = 82

OPTIMIZED_FORMATS = {"JPEG", "PNG", "WEBP"}


def optimize_image(data: bytes) -> bytes:
    """
    Shrink an image to fit MAX_IMAGE_SIZE and re-encode it.

    EXIF orientation is applied first. Formats other than JPEG, PNG and WEBP,
    and anything Pillow cannot read, are returned unchanged.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            if fmt not in OPTIMIZED_FORMATS:
                return data

            img = ImageOps.exif_transpose(img)
            img.thumbnail(MAX_IMAGE_SIZE, Image.Resampling.LANCZOS)

            save_kwargs: dict = {"optimize": True}
            if fmt == "JPEG":
                if img.mode not in ("RGB", "L"):
                    img = img.convert("RGB")
                save_kwargs["quality"] = JPEG_QUALITY
            elif fmt == "PNG":
                save_kwargs["compress_level"] = PNG_COMPRESSION
            elif fmt == "WEBP":
                save_kwargs["quality"] = WEBP_QUALITY

            buffer = io.BytesIO()
            img.save(buffer, format=fmt, **save_kwargs)
            return buffer.getvalue()
    except (OSError, ValueError) as e:
        logger.warning("Failed to optimize image, using original: %s", e)
        return data


def process_team_photo(data: bytes) -> bytes:
    """
    Center-crop a portrait to TEAM_PHOTO_SIZE and encode it as JPEG.

    Raises:
        FileUploadError: if the data is not a readable image.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img = ImageOps.exif_transpose(img)
            photo = ImageOps.fit(img.convert("RGB"), TEAM_PHOTO_SIZE, Image.Resampling.LANCZOS)
            buffer = io.BytesIO()
            photo.save(buffer, format="JPEG", quality=TEAM_PHOTO_QUALITY, optimize=True)
            return buffer.getvalue()
    except (OSError, ValueError) as e:
        logger.warning("Failed to process team photo: %s", e)
        raise FileUploadError("Image could not be processed. Please upload a valid image up to 2 MB.") from e
