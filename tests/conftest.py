import pytest
import requests

from ai_detector.detector import AIImageDetectionPipeline
from ai_detector.media_processor import MediaProcessor
from ai_detector.utils.cache import ResultCache

CAT_URL = "https://example.com/cat.png"
CAT_ANALYSIS = (
    "A photo of a cat.\n\nScore: 0.9\n\n"
    "Reasons:\n- sharp fur detail\n- natural eye reflection"
)


class FakeClock:
    """Manually advanced clock for cache tests"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def tick(self, seconds: float = 1.0):
        self.now += seconds


class FakeResponse:
    def __init__(self, status_code=200, content=b"", headers=None, json_data=None):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self._json = json_data

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


class FakeSession:
    """Records requests and replays a queued response"""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def _respond(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._respond("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._respond("POST", url, **kwargs)


class StubLLMManager:
    """Returns a fixed provider reply and counts calls"""

    default_provider = "openai"
    providers = ["openai"]

    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def call_llm(self, provider, image, prompt=None):
        self.calls.append((provider, image))
        return self.reply


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def image_session():
    return FakeSession(FakeResponse(content=b"\x89PNG fake", headers={"content-type": "image/png"}))


@pytest.fixture
def pipeline(image_session, clock):
    pipeline = AIImageDetectionPipeline(
        {"openai": "test-key"},
        cache=ResultCache(clock=clock),
        media_processor=MediaProcessor(session=image_session),
    )
    pipeline.llm_manager = StubLLMManager({"text": CAT_ANALYSIS})
    return pipeline
