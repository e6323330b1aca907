"""Content quality, completeness and SEO scoring for API detail pages.

Weights, caps, breakpoints and step thresholds live in the tables below so
they can be reviewed and tested without reading the scoring code.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal

from .schemas import (
    CompletenessResult,
    ContentQualityBreakdown,
    ContentQualityScore,
    SEOFactors,
    SEOFactorScore,
    TemplateContext,
)
from .text_utils import has_text, is_valid_url, utc_now_iso, word_count

logger = logging.getLogger(__name__)

QualityDimension = Literal[
    "basic_info", "technical_docs", "code_examples", "seo_optimization", "user_guidance"
]
QualityStatus = Literal["excellent", "good", "fair", "poor"]


@dataclass(frozen=True, slots=True)
class ScoreWeight:
    dimension: QualityDimension
    weight: float
    max_score: float


SCORE_WEIGHTS: tuple[ScoreWeight, ...] = (
    ScoreWeight("basic_info", 0.2, 20),
    ScoreWeight("technical_docs", 0.25, 25),
    ScoreWeight("code_examples", 0.2, 20),
    ScoreWeight("seo_optimization", 0.2, 20),
    ScoreWeight("user_guidance", 0.15, 15),
)

MAX_SCORES: dict[str, float] = {weight.dimension: weight.max_score for weight in SCORE_WEIGHTS}

# A dimension below its threshold gets its specific recommendations checked.
RECOMMENDATION_THRESHOLDS: dict[str, float] = {
    "basic_info": 15,
    "technical_docs": 20,
    "code_examples": 15,
    "seo_optimization": 15,
    "user_guidance": 10,
}

GRADE_BREAKPOINTS: tuple[tuple[float, str], ...] = (
    (90, "A+"),
    (85, "A"),
    (80, "A-"),
    (75, "B+"),
    (70, "B"),
    (65, "B-"),
    (60, "C+"),
    (55, "C"),
    (50, "C-"),
    (45, "D+"),
    (40, "D"),
)
LOWEST_GRADE = "F"

STATUS_BREAKPOINTS: tuple[tuple[float, QualityStatus], ...] = (
    (80, "excellent"),
    (65, "good"),
    (50, "fair"),
)
LOWEST_STATUS: QualityStatus = "poor"

DOC_QUALITY_TARGET = 7
TARGET_LANGUAGE_COUNT = 3
TARGET_KEYWORD_COUNT = 5
TARGET_USE_CASE_COUNT = 3


def _step_lookup(value: float, steps, default):
    for threshold, result in steps:
        if value >= threshold:
            return result
    return default


def get_grade(score: float) -> str:
    return _step_lookup(score, GRADE_BREAKPOINTS, LOWEST_GRADE)


def get_status(score: float) -> QualityStatus:
    return _step_lookup(score, STATUS_BREAKPOINTS, LOWEST_STATUS)


def _cap(dimension: str, score: float) -> float:
    return min(score, MAX_SCORES[dimension])


def _language_count(ctx: TemplateContext) -> int:
    metadata = ctx.api.seo_metadata
    return len(metadata.languages or []) if metadata else 0


def _keyword_count(ctx: TemplateContext) -> int:
    metadata = ctx.api.seo_metadata
    return len(metadata.keywords or []) if metadata else 0


def _h2_count(ctx: TemplateContext) -> int:
    metadata = ctx.api.seo_metadata
    return len(metadata.h2s or []) if metadata else 0


def _use_case_count(ctx: TemplateContext) -> int:
    analysis = ctx.api.ai_analysis
    return len(analysis.use_cases or []) if analysis else 0


def _doc_quality(ctx: TemplateContext) -> float | None:
    metadata = ctx.api.seo_metadata
    return metadata.doc_quality_score if metadata else None


def _has_code_examples(ctx: TemplateContext) -> bool:
    metadata = ctx.api.seo_metadata
    return bool(metadata and metadata.has_code_examples)


def _seo_title(ctx: TemplateContext) -> str | None:
    generated = ctx.api.generated_content
    return generated.seo_title if generated else None


def _blog_post(ctx: TemplateContext) -> str | None:
    generated = ctx.api.generated_content
    return generated.blog_post if generated else None


def _summary(ctx: TemplateContext) -> str | None:
    analysis = ctx.api.ai_analysis
    return analysis.summary if analysis else None


class ContentQualityScorer:
    """Five capped sub-scores summed into an overall 0-100 quality score."""

    def calculate_score(self, ctx: TemplateContext) -> ContentQualityScore:
        breakdown = ContentQualityBreakdown(
            basic_info=self.score_basic_info(ctx),
            technical_docs=self.score_technical_docs(ctx),
            code_examples=self.score_code_examples(ctx),
            seo_optimization=self.score_seo_optimization(ctx),
            user_guidance=self.score_user_guidance(ctx),
        )
        overall = breakdown.total()
        logger.debug("Quality score for API %s: %.2f", ctx.api.id, overall)
        return ContentQualityScore(
            overall=overall,
            breakdown=breakdown,
            recommendations=self.recommendations(ctx, breakdown),
            calculated_at=utc_now_iso(),
        )

    @staticmethod
    def score_basic_info(ctx: TemplateContext) -> float:
        api = ctx.api
        # Name and description are mandatory on every record.
        score = 10
        if api.category is not None:
            score += 5
        if is_valid_url(api.link):
            score += 5
        return _cap("basic_info", score)

    @staticmethod
    def score_technical_docs(ctx: TemplateContext) -> float:
        score: float = 0
        if is_valid_url(ctx.api.openapi_url):
            score += 10
        quality = _doc_quality(ctx)
        if quality is not None:
            score += max(0.0, min(15, quality * 1.5))
        return _cap("technical_docs", score)

    @staticmethod
    def score_code_examples(ctx: TemplateContext) -> float:
        score: float = 0
        if _has_code_examples(ctx):
            score += 10
        score += min(10, _language_count(ctx) * 2)
        return _cap("code_examples", score)

    @staticmethod
    def score_seo_optimization(ctx: TemplateContext) -> float:
        score: float = 0
        if has_text(_seo_title(ctx)):
            score += 5
        if has_text(_blog_post(ctx)):
            score += 5
        score += min(5, _keyword_count(ctx) / 2)
        score += min(5, _h2_count(ctx) / 3)
        return _cap("seo_optimization", score)

    @staticmethod
    def score_user_guidance(ctx: TemplateContext) -> float:
        score: float = 0
        if has_text(_summary(ctx)):
            score += 5
        score += min(10, _use_case_count(ctx) * 2)
        return _cap("user_guidance", score)

    @staticmethod
    def recommendations(ctx: TemplateContext, breakdown: ContentQualityBreakdown) -> list[str]:
        api = ctx.api
        below = {
            dimension: getattr(breakdown, dimension) < threshold
            for dimension, threshold in RECOMMENDATION_THRESHOLDS.items()
        }
        recommendations: list[str] = []

        if below["basic_info"] and api.category is None:
            recommendations.append("Assign a category to improve discoverability")

        if below["technical_docs"]:
            if not has_text(api.openapi_url):
                recommendations.append(
                    "Add OpenAPI specification URL to enable API reference documentation"
                )
            quality = _doc_quality(ctx)
            if not quality or quality < DOC_QUALITY_TARGET:
                recommendations.append("Run SEO extraction job to analyze documentation quality")

        if below["code_examples"]:
            if not _has_code_examples(ctx):
                recommendations.append(
                    "Add code examples to documentation to improve developer experience"
                )
            languages = _language_count(ctx)
            if languages < TARGET_LANGUAGE_COUNT:
                recommendations.append(
                    f"Increase language coverage (currently {languages}) - add examples for JavaScript, Python, cURL"
                )

        if below["seo_optimization"]:
            if not has_text(_seo_title(ctx)):
                recommendations.append("Generate SEO-optimized title for better search visibility")
            if not has_text(_blog_post(ctx)):
                recommendations.append(
                    "Generate long-form content (blog post) to increase page depth and SEO value"
                )
            keywords = _keyword_count(ctx)
            if keywords < TARGET_KEYWORD_COUNT:
                recommendations.append(
                    f"Add more relevant keywords (currently {keywords}) for better search coverage"
                )

        if below["user_guidance"]:
            if not has_text(_summary(ctx)):
                recommendations.append("Add AI-generated summary to help users understand API value")
            use_cases = _use_case_count(ctx)
            if use_cases < TARGET_USE_CASE_COUNT:
                recommendations.append(
                    f"Add more use cases (currently {use_cases}) to demonstrate API applications"
                )

        return recommendations

    @staticmethod
    def get_grade(score: float) -> str:
        return get_grade(score)

    @staticmethod
    def get_status(score: float) -> QualityStatus:
        return get_status(score)


# ==================== Completeness ====================

COMPLETENESS_CHECKS: tuple[tuple[str, Callable[[TemplateContext], bool]], ...] = (
    ("getting_started", lambda ctx: has_text(ctx.api.link)),
    ("code_examples", lambda ctx: _has_code_examples(ctx) or _language_count(ctx) > 0),
    ("api_reference", lambda ctx: has_text(ctx.api.openapi_url)),
    # FAQ content is always generated.
    ("faq", lambda ctx: True),
    ("use_cases", lambda ctx: _use_case_count(ctx) > 0),
    (
        "performance_chart",
        lambda ctx: bool(ctx.health_summary and ctx.health_summary.series),
    ),
    (
        "screenshot",
        lambda ctx: bool(ctx.api.screenshot and has_text(ctx.api.screenshot.thumbnail_url)),
    ),
    ("deep_dive_article", lambda ctx: has_text(_blog_post(ctx))),
    ("related_apis", lambda ctx: bool(ctx.related_apis)),
)


class ContentCompletenessAnalyzer:
    def analyze_completeness(self, ctx: TemplateContext) -> CompletenessResult:
        available: list[str] = []
        missing: list[str] = []
        for block, check in COMPLETENESS_CHECKS:
            (available if check(ctx) else missing).append(block)

        total = len(available) + len(missing)
        completeness = len(available) / total * 100 if total else 0.0
        return CompletenessResult(
            available_blocks=available,
            missing_blocks=missing,
            completeness=completeness,
        )


# ==================== SEO factors ====================

SEO_FACTOR_WEIGHTS: dict[str, float] = {
    "title_optimization": 0.15,
    "meta_description": 0.1,
    "content_length": 0.2,
    "keyword_density": 0.1,
    "structured_data": 0.15,
    "internal_links": 0.1,
    "image_optimization": 0.1,
    "mobile_optimization": 0.1,
}

WORD_COUNT_STEPS: tuple[tuple[int, int], ...] = ((1500, 100), (1000, 80), (500, 60), (300, 40))
KEYWORD_COUNT_STEPS: tuple[tuple[int, int], ...] = ((10, 100), (7, 80), (5, 60), (3, 40))
INTERNAL_LINK_STEPS: tuple[tuple[int, int], ...] = ((8, 100), (5, 80), (3, 60), (1, 40))

TITLE_OPTIMAL_LENGTH = (50, 60)
TITLE_ACCEPTABLE_LENGTH = (40, 70)
META_OPTIMAL_LENGTH = (150, 160)
META_ACCEPTABLE_LENGTH = (120, 180)

# Responsive layout is a frontend concern, assumed to be in place.
MOBILE_OPTIMIZATION_SCORE = 100


def _within(length: int, bounds: tuple[int, int]) -> bool:
    return bounds[0] <= length <= bounds[1]


class SEOScoreCalculator:
    def calculate_seo_score(self, ctx: TemplateContext) -> SEOFactorScore:
        factors = SEOFactors(
            title_optimization=self.score_title_optimization(ctx),
            meta_description=self.score_meta_description(ctx),
            content_length=self.score_content_length(ctx),
            keyword_density=self.score_keyword_density(ctx),
            structured_data=self.score_structured_data(ctx),
            internal_links=self.score_internal_links(ctx),
            image_optimization=self.score_image_optimization(ctx),
            mobile_optimization=MOBILE_OPTIMIZATION_SCORE,
        )
        values = factors.model_dump()
        overall = sum(values[name] * weight for name, weight in SEO_FACTOR_WEIGHTS.items())
        return SEOFactorScore(overall=overall, factors=factors)

    @staticmethod
    def score_title_optimization(ctx: TemplateContext) -> float:
        title = _seo_title(ctx) if has_text(_seo_title(ctx)) else ctx.api.name
        score = 30
        if _within(len(title), TITLE_OPTIMAL_LENGTH):
            score += 40
        elif _within(len(title), TITLE_ACCEPTABLE_LENGTH):
            score += 25
        if ctx.api.name.lower() in title.lower():
            score += 30
        return min(score, 100)

    @staticmethod
    def score_meta_description(ctx: TemplateContext) -> float:
        metadata = ctx.api.seo_metadata
        description = metadata.description if metadata and has_text(metadata.description) else None
        description = description or ctx.api.description
        score = 40
        if _within(len(description), META_OPTIMAL_LENGTH):
            score += 60
        elif _within(len(description), META_ACCEPTABLE_LENGTH):
            score += 40
        return min(score, 100)

    @staticmethod
    def score_content_length(ctx: TemplateContext) -> float:
        return _step_lookup(word_count(_blog_post(ctx)), WORD_COUNT_STEPS, 20)

    @staticmethod
    def score_keyword_density(ctx: TemplateContext) -> float:
        return _step_lookup(_keyword_count(ctx), KEYWORD_COUNT_STEPS, 20)

    @staticmethod
    def score_structured_data(ctx: TemplateContext) -> float:
        # WebAPI and FAQ schemas are always emitted.
        score = 25 + 25
        if ctx.api.category is not None:
            score += 20
        if _has_code_examples(ctx):
            score += 15
        if has_text(_blog_post(ctx)):
            score += 15
        return min(score, 100)

    @staticmethod
    def score_internal_links(ctx: TemplateContext) -> float:
        links = len(ctx.related_apis or [])
        if ctx.api.category is not None:
            links += 1
        return _step_lookup(links, INTERNAL_LINK_STEPS, 0)

    @staticmethod
    def score_image_optimization(ctx: TemplateContext) -> float:
        score = 0
        if ctx.api.screenshot and has_text(ctx.api.screenshot.thumbnail_url):
            score += 60
        metadata = ctx.api.seo_metadata
        if metadata and has_text(metadata.og_image):
            score += 40
        return min(score, 100)


quality_scorer = ContentQualityScorer()
completeness_analyzer = ContentCompletenessAnalyzer()
seo_score_calculator = SEOScoreCalculator()
