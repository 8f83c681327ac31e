import logging
from typing import Optional
from urllib.parse import urlparse

import requests
from PIL import Image

from .exceptions import FetchError, InvalidInputError
from .models import FetchedImage

logger = logging.getLogger(__name__)

SUPPORTED_URL_SCHEMES = ('http', 'https')
DEFAULT_FETCH_TIMEOUT = 10


class MediaProcessor:
    """Handles image download and validation"""

    def __init__(self, timeout: float = DEFAULT_FETCH_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def validate_image_url(image_url) -> str:
        """Return the stripped URL, or raise InvalidInputError if it is not an absolute http(s) URL"""
        if not isinstance(image_url, str) or not image_url.strip():
            raise InvalidInputError("Image URL is required")

        image_url = image_url.strip()
        try:
            parsed = urlparse(image_url)
        except ValueError as e:
            raise InvalidInputError(f"Invalid image URL: {image_url}") from e
        if parsed.scheme.lower() not in SUPPORTED_URL_SCHEMES or not parsed.netloc:
            raise InvalidInputError(f"Invalid image URL: {image_url}")
        return image_url

    def fetch_image(self, image_url: str) -> FetchedImage:
        """Download an image and check that the server reports an image content-type"""
        try:
            response = self.session.get(image_url, timeout=self.timeout)
            response.raise_for_status()

            content_type = response.headers.get('content-type', '')
            if not content_type.startswith('image/'):
                raise FetchError('URL does not point to a valid image')

            return FetchedImage(url=image_url, content_type=content_type, data=response.content)
        except (requests.RequestException, FetchError) as e:
            logger.error(f"Failed to load image from URL {image_url}: {str(e)}")
            raise FetchError(f"Failed to fetch image: {str(e)}") from e

    @staticmethod
    def preprocess_image(image: Image.Image, max_size: int = 1024) -> Image.Image:
        """Resize image if needed and ensure RGB mode"""
        if max(image.size) > max_size:
            ratio = max_size / max(image.size)
            new_size = (int(image.size[0] * ratio), int(image.size[1] * ratio))
            image = image.resize(new_size, Image.Resampling.LANCZOS)

        # Flatten transparency onto white
        if image.mode == 'RGBA':
            background = Image.new('RGB', image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[3])
            image = background
        elif image.mode != 'RGB':
            image = image.convert('RGB')

        return image
