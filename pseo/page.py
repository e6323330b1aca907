"""Assemble every engine output needed to render one API detail page."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .faq import extract_faq_items
from .generators import CodeExamplesGenerator, FAQGenerator, GettingStartedGenerator
from .nodes import ContentNode
from .quality import completeness_analyzer, quality_scorer, seo_score_calculator
from .schemas import (
    CompletenessResult,
    ContentQualityScore,
    FAQItem,
    SEOFactorScore,
    TemplateContext,
)
from .structured_data import SchemaManager, SchemaObject

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class PageContent:
    getting_started: List[ContentNode]
    code_examples: Optional[List[ContentNode]]
    faq: List[ContentNode]
    faq_items: List[FAQItem]
    schemas: List[SchemaObject]
    quality: ContentQualityScore
    completeness: CompletenessResult
    seo: SEOFactorScore


def wants_code_examples(ctx: TemplateContext) -> bool:
    metadata = ctx.api.seo_metadata
    return bool(metadata and (metadata.has_code_examples or metadata.language_names()))


def assemble_page(ctx: TemplateContext, schema_manager: SchemaManager | None = None) -> PageContent:
    """Run the generators, FAQ extraction, schema builders and scorers for ``ctx``.

    The code-examples section is only produced when the record documents code
    examples or at least one language; otherwise it is ``None``.
    """
    manager = schema_manager or SchemaManager()

    faq_nodes = FAQGenerator().generate(ctx)
    faq_items = extract_faq_items(faq_nodes)

    page = PageContent(
        getting_started=GettingStartedGenerator().generate(ctx),
        code_examples=CodeExamplesGenerator().generate(ctx) if wants_code_examples(ctx) else None,
        faq=faq_nodes,
        faq_items=faq_items,
        schemas=manager.generate_all(ctx, faq_items),
        quality=quality_scorer.calculate_score(ctx),
        completeness=completeness_analyzer.analyze_completeness(ctx),
        seo=seo_score_calculator.calculate_seo_score(ctx),
    )
    logger.debug(
        "Assembled page for API %s: %d FAQ items, %d schemas",
        ctx.api.id,
        len(faq_items),
        len(page.schemas),
    )
    return page
