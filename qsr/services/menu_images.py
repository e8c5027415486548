"""Menu image upload to Supabase Storage."""
from supabase import Client

from qsr import config
from qsr.logging import get_logger

logger = get_logger(__name__)


def menu_image_path(restaurant_id: str, item_id: str, filename: str) -> str:
    """Storage path ``{restaurant_id}/{item_id}.{ext}`` keeping the upload's extension."""
    # A name without a dot is used whole as the extension
    ext = filename.split(".")[-1]
    return f"{restaurant_id}/{item_id}.{ext}"


def upload_menu_image(
    client: Client,
    content: bytes,
    filename: str,
    content_type: str,
    restaurant_id: str,
    item_id: str,
    bucket: str | None = None,
) -> str:
    """
    Upload (or replace) a menu item's image and return its public URL.

    Storage errors propagate to the caller.
    """
    bucket = bucket or config.MENU_IMAGES_BUCKET
    storage_path = menu_image_path(restaurant_id, item_id, filename)

    client.storage.from_(bucket).upload(
        storage_path,
        content,
        {"content-type": content_type, "upsert": "true"},
    )

    public_url = client.storage.from_(bucket).get_public_url(storage_path)

    logger.info(f"Uploaded menu image to {bucket}/{storage_path}")
    return public_url
