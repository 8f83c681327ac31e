import logging
from typing import Dict, Optional

import anthropic
import openai
from google.generativeai import GenerativeModel, configure as configure_gemini

from .media_processor import MediaProcessor
from .models import FetchedImage
from .utils.rate_limiter import RateLimiter

# Set up logging
logger = logging.getLogger("ai_detector")

SYSTEM_PROMPT = (
    "You are an AI image analyst. Analyze the provided image and determine: "
    "1. A brief description of what the image shows. "
    "2. The likelihood that the image is AI-generated (score between 0 and 1, "
    "where 0 is definitely real and 1 is definitely AI-generated). "
    "3. Specific visual features or anomalies that support your assessment."
)

USER_PROMPT = (
    "Analyze this image. Is it likely AI-generated? Provide a description, "
    "a likelihood score from 0-1, and specific visual features supporting your assessment."
)

MAX_TOKENS = 1000
DEFAULT_RATE_LIMIT_PER_MINUTE = 5

# Response served by the mock provider so the whole pipeline can run offline
MOCK_RESPONSE = (
    "A landscape with mountains and a lake reflecting the scenery.\n\n"
    "Likelihood score: 0.3\n\n"
    "Features:\n"
    "- Natural lighting patterns and shadows\n"
    "- Consistent perspective and proportions\n"
    "- No digital artifacts or unnatural smoothing\n"
    "- Realistic textures and details\n"
    "- Proper reflections in the water"
)


# LLM Provider Enum
class LLMProvider:
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    MOCK = "mock"


DEFAULT_MODELS = {
    LLMProvider.OPENAI: "gpt-4o",
    LLMProvider.ANTHROPIC: "claude-3-opus-20240229",
    LLMProvider.GEMINI: "gemini-1.5-pro-latest",
}

# Keys in the provider config that are settings rather than providers
SETTINGS_KEYS = ("default_provider", "models", "rate_limit_per_minute")


class LLMManager:
    """Manages the vision model providers and their API calls"""

    def __init__(self, config: Dict):
        """Initialize with API keys for the configured providers"""
        self.config = config
        self.default_provider = config.get("default_provider", LLMProvider.OPENAI)
        self.models = {**DEFAULT_MODELS, **config.get("models", {})}

        # Initialize providers
        if LLMProvider.OPENAI in config:
            openai.api_key = config[LLMProvider.OPENAI]

        if LLMProvider.ANTHROPIC in config:
            self.anthropic_client = anthropic.Anthropic(api_key=config[LLMProvider.ANTHROPIC])

        if LLMProvider.GEMINI in config:
            configure_gemini(api_key=config[LLMProvider.GEMINI])

        # Initialize rate limiters for each provider
        rate_limit = config.get("rate_limit_per_minute", DEFAULT_RATE_LIMIT_PER_MINUTE)
        self.rate_limiters = {
            provider: RateLimiter(rate_limit)
            for provider in self.providers
        }

    @property
    def providers(self):
        return [k for k in self.config.keys() if k not in SETTINGS_KEYS]

    def _call_openai(self, prompt: str, image: FetchedImage) -> Dict:
        """Call the OpenAI chat completions API with the image as a data URI"""
        try:
            self.rate_limiters[LLMProvider.OPENAI].wait_if_needed()

            response = openai.chat.completions.create(
                model=self.models[LLMProvider.OPENAI],
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": image.data_uri}}
                    ]}
                ],
                max_tokens=MAX_TOKENS
            )

            content = response.choices[0].message.content if response.choices else None
            return {"text": content or ""}

        except Exception as e:
            logger.error(f"Error calling OpenAI API: {str(e)}")
            return {"error": str(e)}

    def _call_anthropic(self, prompt: str, image: FetchedImage) -> Dict:
        """Call the Anthropic messages API with a base64 image block"""
        try:
            self.rate_limiters[LLMProvider.ANTHROPIC].wait_if_needed()

            message = self.anthropic_client.messages.create(
                model=self.models[LLMProvider.ANTHROPIC],
                max_tokens=MAX_TOKENS,
                system=SYSTEM_PROMPT,
                messages=[{
                    "role": "user",
                    "content": [
                        {"type": "image", "source": {
                            "type": "base64",
                            "media_type": image.content_type.split(";")[0].strip(),
                            "data": image.base64_data
                        }},
                        {"type": "text", "text": prompt}
                    ]
                }]
            )

            text = "".join(block.text for block in message.content if getattr(block, "type", "") == "text")
            return {"text": text}

        except Exception as e:
            logger.error(f"Error calling Anthropic API: {str(e)}")
            return {"error": str(e)}

    def _call_gemini(self, prompt: str, image: FetchedImage) -> Dict:
        """Call the Google Gemini API with a decoded Pillow image"""
        try:
            self.rate_limiters[LLMProvider.GEMINI].wait_if_needed()

            model = GenerativeModel(self.models[LLMProvider.GEMINI], system_instruction=SYSTEM_PROMPT)
            pil_image = MediaProcessor.preprocess_image(image.to_pil())
            response = model.generate_content([prompt, pil_image])

            return {"text": response.text}

        except Exception as e:
            logger.error(f"Error calling Gemini API: {str(e)}")
            return {"error": str(e)}

    def call_llm(self, provider: Optional[str], image: FetchedImage, prompt: str = USER_PROMPT) -> Dict:
        """Call the specified provider or fall back to the default"""
        if provider == LLMProvider.OPENAI and LLMProvider.OPENAI in self.config:
            return self._call_openai(prompt, image)
        elif provider == LLMProvider.ANTHROPIC and LLMProvider.ANTHROPIC in self.config:
            return self._call_anthropic(prompt, image)
        elif provider == LLMProvider.GEMINI and LLMProvider.GEMINI in self.config:
            return self._call_gemini(prompt, image)
        elif provider != self.default_provider and self.default_provider in self.providers:
            logger.warning(f"Provider {provider} not available, falling back to {self.default_provider}")
            return self.call_llm(self.default_provider, image, prompt)
        else:
            logger.error(f"No configured provider available (requested {provider})")
            return {"error": f"No configured LLM provider available for '{provider}'"}


class MockLLMManager:
    """Offline stand-in for LLMManager that returns a canned analysis"""

    default_provider = LLMProvider.MOCK
    providers = [LLMProvider.MOCK]

    def __init__(self, response_text: str = MOCK_RESPONSE):
        self.response_text = response_text

    def call_llm(self, provider: Optional[str], image: FetchedImage, prompt: str = USER_PROMPT) -> Dict:
        logger.info(f"Returning mock analysis for {image.url}")
        return {"text": self.response_text}
