import base64
from io import BytesIO
from typing import Dict, List

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field


REASONS_NOT_FOUND = "Analysis incomplete"


class AILikelihood(BaseModel):
    score: float = Field(0.5, ge=0.0, le=1.0)
    label: str = "Uncertain"


class AnalysisResult(BaseModel):
    # The wire format uses camelCase; extra keys such as "cached" are dropped
    # when a server response is read back.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    description: str = ""
    ai_likelihood: AILikelihood = Field(default_factory=AILikelihood, alias="aiLikelihood")
    reasons: List[str] = Field(default_factory=lambda: [REASONS_NOT_FOUND], min_length=1)

    def to_response(self, cached: bool = False) -> Dict:
        """Serialize to the JSON payload returned to callers"""
        payload = self.model_dump(by_alias=True)
        if cached:
            payload["cached"] = True
        return payload


class FetchedImage(BaseModel):
    url: str
    content_type: str
    data: bytes

    @property
    def base64_data(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")

    @property
    def data_uri(self) -> str:
        return f"data:{self.content_type};base64,{self.base64_data}"

    def to_pil(self) -> Image.Image:
        """Decode the raw bytes into a Pillow image"""
        return Image.open(BytesIO(self.data))
