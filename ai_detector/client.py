import logging
from typing import Dict, Optional

import requests
from pydantic import ValidationError

from .exceptions import AnalysisError
from .models import AnalysisResult
from .utils.cache import ResultCache

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze-url"


class AnalysisClient:
    """Calls a running detector server, keeping its own client-side result cache"""

    def __init__(self, base_url: str, cache: Optional[ResultCache] = None,
                 session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.cache = cache if cache is not None else ResultCache()
        self.session = session or requests.Session()
        self.timeout = timeout

    def analyze_image(self, image_url: str) -> Dict:
        """Return the analysis for image_url, asking the server only on a cache miss"""
        cached_result = self.cache.get(image_url)
        if cached_result is not None:
            return cached_result.to_response()

        try:
            response = self.session.post(f"{self.base_url}{ANALYZE_PATH}",
                                         json={"url": image_url}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to {self.base_url} failed: {str(e)}")
            raise AnalysisError(f"Failed to analyze image: {str(e)}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.ok:
            raise AnalysisError(data.get("error") or "Failed to analyze image")

        try:
            result = AnalysisResult.model_validate(data)
        except ValidationError as e:
            raise AnalysisError(f"Malformed analysis response: {str(e)}") from e
        self.cache.put(image_url, result)
        return result.to_response()
