"""
Image acquisition

Resolves the photograph for a ground-truth item: a local file under the image
directory when one exists, otherwise the item's image URL.
"""

import logging
from pathlib import Path

import httpx

from vintage_eval_core.domain.entities import GroundTruthItem
from vintage_eval_core.domain.exceptions import ImageUnavailableError
from vintage_eval_core.domain.value_objects import ImagePayload

logger = logging.getLogger(__name__)

LOCAL_IMAGE_TYPES = [(".jpg", "image/jpeg"), (".png", "image/png")]


class ImageSource:
    """Loads item images from a local directory, falling back to HTTP"""

    def __init__(
        self,
        image_dir: str | Path,
        timeout_seconds: float = 30,
        user_agent: str = "vintage-eval-core/0.1",
    ):
        self.image_dir = Path(image_dir)
        self.timeout_seconds = timeout_seconds
        self.headers = {
            "User-Agent": user_agent,
            "Accept": "image/*,*/*;q=0.8",
        }

    def __call__(self, item: GroundTruthItem) -> ImagePayload:
        return self.load(item)

    def load(self, item: GroundTruthItem) -> ImagePayload:
        """
        Load the image for an item

        Args:
            item: Ground-truth item

        Returns:
            ImagePayload

        Raises:
            ImageUnavailableError: If neither a local file nor the URL yields an image
        """
        for suffix, mime_type in LOCAL_IMAGE_TYPES:
            path = self.image_dir / f"{item.id}{suffix}"
            if path.is_file():
                logger.debug("Using local image for %s: %s", item.id, path)
                return ImagePayload(item.id, path.read_bytes(), mime_type, source=str(path))

        return self.fetch(item)

    def fetch(self, item: GroundTruthItem) -> ImagePayload:
        """Fetch the image from the item's URL"""
        if not item.image_url:
            raise ImageUnavailableError(f"No local image and no image URL for item: {item.id}")

        logger.debug("No local image, fetching from: %s", item.image_url)
        try:
            response = httpx.get(
                item.image_url,
                headers=self.headers,
                timeout=self.timeout_seconds,
                follow_redirects=True,
            )
        except httpx.HTTPError as e:
            raise ImageUnavailableError(f"Failed to fetch image: {e}") from e

        if not response.is_success:
            raise ImageUnavailableError(
                f"Failed to fetch image: HTTP {response.status_code} {response.reason_phrase}"
            )

        mime_type = response.headers.get("content-type", "image/jpeg").split(";")[0].strip()
        logger.debug("Image fetched for %s, content-type: %s", item.id, mime_type)
        return ImagePayload(item.id, response.content, mime_type, source=item.image_url)


def placeholder_image(item: GroundTruthItem) -> ImagePayload:
    """Empty image for oracles that never look at pixels (the simulated oracle)"""
    return ImagePayload(item.id, b"", source="placeholder")
