import logging
from typing import Dict, Optional

from .exceptions import AnalysisError
from .llm_manager import LLMManager, MockLLMManager
from .media_processor import MediaProcessor
from .response_parser import parse_analysis_text
from .utils.cache import ResultCache

# Set up logging
logger = logging.getLogger("ai_detector")


class AIImageDetectionPipeline:
    """
    AI-generated image detection pipeline

    Flow for a URL:
    - serve from the result cache when possible
    - otherwise fetch the image, ask the vision model about it
    - parse the model's prose into an AnalysisResult and cache it
    """

    def __init__(self, llm_config: Optional[Dict] = None, cache: Optional[ResultCache] = None,
                 media_processor: Optional[MediaProcessor] = None, mock: bool = False):
        """
        Initialize the detection pipeline

        Args:
            llm_config (Dict): Provider API keys and settings
            cache (ResultCache, optional): Shared result cache; a new one is created if omitted
            media_processor (MediaProcessor, optional): Image downloader
            mock (bool): Use the canned offline provider instead of a real model
        """
        if mock:
            self.llm_manager = MockLLMManager()
        else:
            self.llm_manager = LLMManager(llm_config or {})

        self.media_processor = media_processor or MediaProcessor()
        self.cache = cache if cache is not None else ResultCache()

    def analyze_image_url(self, image_url: str, provider: Optional[str] = None) -> Dict:
        """
        Analyze an image from a URL

        Args:
            image_url (str): Absolute http(s) URL of the image
            provider (str, optional): Model provider; defaults to the configured one

        Returns:
            Dict: Serialized AnalysisResult, with "cached": True on a cache hit

        Raises:
            InvalidInputError, FetchError, AnalysisError
        """
        image_url = self.media_processor.validate_image_url(image_url)

        cached_result = self.cache.get(image_url)
        if cached_result is not None:
            logger.info(f"Returning cached analysis for {image_url}")
            return cached_result.to_response(cached=True)

        image = self.media_processor.fetch_image(image_url)

        provider = provider or self.llm_manager.default_provider
        llm_response = self.llm_manager.call_llm(provider, image)
        if "error" in llm_response:
            logger.error(f"Error in image analysis: {llm_response['error']}")
            raise AnalysisError(llm_response["error"])

        result = parse_analysis_text(llm_response.get("text", ""))
        self.cache.put(image_url, result)

        logger.info(f"Analyzed {image_url}: {result.ai_likelihood.label} ({result.ai_likelihood.score:.2f})")
        return result.to_response()
