from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _Frozen(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class AuditRequest(BaseModel):
    url: Optional[str] = None


class PageFacts(_Frozen):
    title: str = ""
    meta_description: str = ""
    first_h1: str = Field("", alias="firstH1")
    image_count: int = Field(0, ge=0)
    images_missing_alt: int = Field(0, ge=0)
    canonical_url: str = ""
    robots_directive: str = ""

    @model_validator(mode="after")
    def _alt_count_within_images(self):
        if self.images_missing_alt > self.image_count:
            raise ValueError("images_missing_alt cannot exceed image_count")
        return self


class PerformanceFacts(_Frozen):
    """None means the provider failed or had no usable score."""

    lighthouse_performance_ratio: Optional[float] = Field(None, ge=0.0, le=1.0)

    @property
    def absent(self) -> bool:
        return self.lighthouse_performance_ratio is None


class ScoreSet(_Frozen):
    performance: int = Field(ge=0, le=100)
    seo: int = Field(ge=0, le=100)
    overall: int = Field(ge=0, le=100)


class AuditResult(_Frozen):
    url: str
    scores: ScoreSet
    page_facts: PageFacts
    explanation: str
    fetched_via: Optional[str] = None     # "httpx"|"playwright"
    fetched_at: Optional[str] = None      # ISO timestamp
    degraded: List[str] = []
