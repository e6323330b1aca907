"""Shared data structures used across modules."""
from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

FAQCategory = Literal["technical", "security", "support", "pricing", "general"]


class FrozenModel(BaseModel):
    """Immutable record that accepts snake_case names or the backend's camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _wrap_scalar(data: Any, key: str) -> Any:
    if isinstance(data, str):
        return {key: data}
    return data


class Category(FrozenModel):
    id: Optional[int] = None
    name: str
    slug: str = ""


class KeywordEntry(FrozenModel):
    keyword: str

    @model_validator(mode="before")
    @classmethod
    def accept_plain_string(cls, data: Any) -> Any:
        return _wrap_scalar(data, "keyword")


class HeadingEntry(FrozenModel):
    heading: str

    @model_validator(mode="before")
    @classmethod
    def accept_plain_string(cls, data: Any) -> Any:
        return _wrap_scalar(data, "heading")


class LanguageEntry(FrozenModel):
    language: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_plain_string(cls, data: Any) -> Any:
        return _wrap_scalar(data, "language")


class UseCaseTag(FrozenModel):
    tag: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_plain_string(cls, data: Any) -> Any:
        return _wrap_scalar(data, "tag")


class SeoMetadata(FrozenModel):
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[List[KeywordEntry]] = None
    h1: Optional[str] = None
    h2s: Optional[List[HeadingEntry]] = None
    languages: Optional[List[LanguageEntry]] = None
    doc_quality_score: Optional[float] = None
    has_code_examples: Optional[bool] = None
    og_image: Optional[str] = None
    extracted_at: Optional[str] = None

    def language_names(self) -> list[str]:
        return [entry.language for entry in self.languages or [] if entry.language]


class AiAnalysis(FrozenModel):
    summary: Optional[str] = None
    use_cases: Optional[List[UseCaseTag]] = None

    def tags(self) -> list[str]:
        return [entry.tag for entry in self.use_cases or [] if entry.tag]


class GeneratedContent(FrozenModel):
    seo_title: Optional[str] = None
    blog_post: Optional[str] = None
    model: Optional[str] = None
    last_generated_at: Optional[str] = None


class Screenshot(FrozenModel):
    thumbnail_url: Optional[str] = None
    full_url: Optional[str] = None
    captured_at: Optional[str] = None


class ApiRecord(FrozenModel):
    """The catalogued API a page is synthesised for."""

    id: int | str = 0
    name: str
    description: str = ""
    link: str = ""
    openapi_url: Optional[str] = None
    category: Optional[Category] = None
    auth: str = "No"
    cors: str = "No"
    https: bool = False
    health_status: Optional[str] = None
    latency_ms: Optional[float] = None
    last_checked_at: Optional[str] = None
    last_error: Optional[str] = None
    seo_metadata: Optional[SeoMetadata] = None
    ai_analysis: Optional[AiAnalysis] = None
    generated_content: Optional[GeneratedContent] = None
    screenshot: Optional[Screenshot] = None

    @field_validator("name", "description", "link", mode="before")
    @classmethod
    def normalise_text_fields(cls, value: object) -> str:
        return str(value or "").strip()

    @field_validator("auth", "cors", mode="before")
    @classmethod
    def normalise_flags(cls, value: object) -> str:
        text = str(value or "").strip()
        return text or "No"

    @field_validator("https", mode="before")
    @classmethod
    def normalise_https(cls, value: object) -> bool:
        return bool(value)

    @property
    def requires_auth(self) -> bool:
        return self.auth != "No"


class HealthPoint(FrozenModel):
    date: str
    status: str
    latency_ms: Optional[float] = None


class HealthSummary(FrozenModel):
    uptime_pct: Optional[float] = None
    avg_latency_ms: Optional[float] = None
    series: Optional[List[HealthPoint]] = None


class RelatedCategory(FrozenModel):
    name: str
    slug: str = ""


class RelatedApi(FrozenModel):
    id: int | str
    name: str
    description: str = ""
    auth: str = "No"
    cors: str = "No"
    https: bool = False
    category: Optional[RelatedCategory] = None


class TemplateContext(FrozenModel):
    """Everything the engine knows about one API page."""

    api: ApiRecord
    health_summary: Optional[HealthSummary] = None
    related_apis: Optional[List[RelatedApi]] = None
    locale: str = "en"


class FAQItem(FrozenModel):
    question: str
    answer: str
    category: FAQCategory = "general"
    keywords: List[str] = Field(default_factory=list)


class ContentQualityBreakdown(FrozenModel):
    basic_info: float = Field(ge=0, le=20)
    technical_docs: float = Field(ge=0, le=25)
    code_examples: float = Field(ge=0, le=20)
    seo_optimization: float = Field(ge=0, le=20)
    user_guidance: float = Field(ge=0, le=15)

    def total(self) -> float:
        return (
            self.basic_info
            + self.technical_docs
            + self.code_examples
            + self.seo_optimization
            + self.user_guidance
        )


class ContentQualityScore(FrozenModel):
    overall: float
    breakdown: ContentQualityBreakdown
    recommendations: List[str]
    calculated_at: str


class CompletenessResult(FrozenModel):
    available_blocks: List[str]
    missing_blocks: List[str]
    completeness: float


class SEOFactors(FrozenModel):
    title_optimization: float
    meta_description: float
    content_length: float
    keyword_density: float
    structured_data: float
    internal_links: float
    image_optimization: float
    mobile_optimization: float


class SEOFactorScore(FrozenModel):
    overall: float
    factors: SEOFactors
