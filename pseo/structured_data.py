"""Schema.org JSON-LD builders for API detail pages."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Literal, Optional, Sequence

from .schemas import ApiRecord, FAQItem, TemplateContext
from .text_utils import (
    extract_base_url,
    extract_provider_name,
    format_number,
    has_text,
    slugify,
    valid_url,
)

logger = logging.getLogger(__name__)

SCHEMA_CONTEXT = "https://schema.org"
DEFAULT_SITE_URL = "https://api-navigator.com"
DEFAULT_SITE_NAME = "API Navigator"

SchemaType = Literal[
    "WebAPI",
    "SoftwareApplication",
    "FAQPage",
    "HowTo",
    "Article",
    "BreadcrumbList",
    "Organization",
    "Product",
    "Review",
]

SchemaObject = dict[str, Any]


def _site_url() -> str:
    return os.getenv("PSEO_SITE_URL", DEFAULT_SITE_URL).strip().rstrip("/") or DEFAULT_SITE_URL


def _site_name() -> str:
    return os.getenv("PSEO_SITE_NAME", DEFAULT_SITE_NAME).strip() or DEFAULT_SITE_NAME


@dataclass(frozen=True, slots=True)
class SiteConfig:
    url: str
    name: str

    @classmethod
    def from_env(cls, url: str | None = None, name: str | None = None) -> "SiteConfig":
        return cls(url=(url or _site_url()).rstrip("/"), name=name or _site_name())

    def api_page_url(self, api: ApiRecord) -> str:
        return f"{self.url}/api/{api.id}/{slugify(api.name)}"


def _description(api: ApiRecord) -> str:
    summary = api.ai_analysis.summary if api.ai_analysis else None
    return summary.strip() if has_text(summary) else api.description


def _property(name: str, value: str | float) -> dict[str, Any]:
    return {"@type": "PropertyValue", "name": name, "value": value}


def _rating(score: float) -> dict[str, Any]:
    return {
        "@type": "AggregateRating",
        "ratingValue": score,
        "bestRating": 10,
        "worstRating": 1,
        "ratingCount": 1,
    }


def _doc_quality(api: ApiRecord) -> Optional[float]:
    return api.seo_metadata.doc_quality_score if api.seo_metadata else None


def _documentation_url(api: ApiRecord) -> Optional[str]:
    return valid_url(api.openapi_url) or valid_url(api.link)


def _screenshot_url(api: ApiRecord) -> Optional[str]:
    if api.screenshot and has_text(api.screenshot.full_url):
        return api.screenshot.full_url
    return None


class WebAPISchema:
    schema_type: SchemaType = "WebAPI"

    def __init__(self, site: SiteConfig) -> None:
        self.site = site

    def generate(self, ctx: TemplateContext) -> SchemaObject:
        api = ctx.api
        schema: SchemaObject = {
            "@context": SCHEMA_CONTEXT,
            "@type": self.schema_type,
            "name": api.name,
            "description": _description(api),
            "url": self.site.api_page_url(api),
        }
        documentation = _documentation_url(api)
        if documentation:
            schema["documentation"] = documentation

        provider: dict[str, Any] = {"@type": "Organization", "name": extract_provider_name(api.link)}
        base_url = extract_base_url(api.link)
        if base_url:
            provider["url"] = base_url
        schema["provider"] = provider

        link = valid_url(api.link)
        if link:
            schema["termsOfService"] = link

        tags = api.ai_analysis.tags() if api.ai_analysis else []
        if tags:
            schema["applicationCategory"] = ", ".join(tags)

        metadata = api.seo_metadata
        keywords = [entry.keyword for entry in (metadata.keywords or [])] if metadata else []
        if keywords:
            schema["keywords"] = ", ".join(keywords)
        languages = metadata.language_names() if metadata else []
        if languages:
            schema["programmingLanguage"] = languages

        schema["additionalProperty"] = self._additional_properties(ctx)
        return schema

    @staticmethod
    def _additional_properties(ctx: TemplateContext) -> list[dict[str, Any]]:
        api = ctx.api
        properties = [
            _property("Authentication", api.auth),
            _property("CORS", api.cors),
            _property("HTTPS", "Yes" if api.https else "No"),
        ]

        quality = _doc_quality(api)
        if quality is not None:
            properties.append(_property("Documentation Quality", f"{format_number(quality)}/10"))
        if api.seo_metadata and api.seo_metadata.has_code_examples:
            properties.append(_property("Code Examples", "Yes"))

        health = ctx.health_summary
        if health and health.uptime_pct is not None:
            properties.append(_property("Uptime (30d)", f"{health.uptime_pct:.2f}%"))
        if health and health.avg_latency_ms is not None:
            properties.append(_property("Average Latency", f"{format_number(health.avg_latency_ms)}ms"))
        return properties


class SoftwareApplicationSchema:
    schema_type: SchemaType = "SoftwareApplication"

    def __init__(self, site: SiteConfig) -> None:
        self.site = site

    def generate(self, ctx: TemplateContext) -> SchemaObject:
        api = ctx.api
        schema: SchemaObject = {
            "@context": SCHEMA_CONTEXT,
            "@type": self.schema_type,
            "name": api.name,
            "description": _description(api),
        }
        link = valid_url(api.link)
        if link:
            schema["url"] = link
        schema.update(
            applicationCategory="DeveloperApplication",
            operatingSystem="Web API",
            offers={"@type": "Offer", "price": "0", "priceCurrency": "USD"},
        )
        quality = _doc_quality(api)
        if quality is not None:
            schema["aggregateRating"] = _rating(quality)
        screenshot = _screenshot_url(api)
        if screenshot:
            schema["screenshot"] = screenshot
        return schema


class ProductSchema:
    schema_type: SchemaType = "Product"

    def __init__(self, site: SiteConfig) -> None:
        self.site = site

    def generate(self, ctx: TemplateContext) -> SchemaObject:
        api = ctx.api
        schema: SchemaObject = {
            "@context": SCHEMA_CONTEXT,
            "@type": self.schema_type,
            "name": api.name,
            "description": _description(api),
            "url": self.site.api_page_url(api),
        }
        screenshot = _screenshot_url(api)
        if screenshot:
            schema["image"] = [screenshot]
        schema["brand"] = {"@type": "Brand", "name": extract_provider_name(api.link)}

        offer: dict[str, Any] = {"@type": "Offer"}
        link = valid_url(api.link)
        if link:
            offer["url"] = link
        if not api.requires_auth:
            offer.update(price="0", priceCurrency="USD")
        offer["availability"] = "https://schema.org/InStock"
        schema["offers"] = offer

        quality = _doc_quality(api)
        if quality is not None:
            schema["aggregateRating"] = _rating(quality)

        properties = [_property("API Type", "REST API"), _property("Authentication", api.auth)]
        health = ctx.health_summary
        if health and health.uptime_pct is not None:
            properties.append(_property("Uptime", f"{health.uptime_pct:.2f}%"))
        schema["additionalProperty"] = properties
        return schema


class FAQSchema:
    schema_type: SchemaType = "FAQPage"

    def __init__(self, site: SiteConfig) -> None:
        self.site = site

    def generate(self, ctx: TemplateContext, faq_items: Sequence[FAQItem] = ()) -> SchemaObject:
        return {
            "@context": SCHEMA_CONTEXT,
            "@type": self.schema_type,
            "mainEntity": [
                {
                    "@type": "Question",
                    "name": item.question,
                    "acceptedAnswer": {"@type": "Answer", "text": item.answer},
                }
                for item in faq_items
            ],
        }


class HowToSchema:
    schema_type: SchemaType = "HowTo"

    def __init__(self, site: SiteConfig) -> None:
        self.site = site

    def generate(self, ctx: TemplateContext) -> SchemaObject:
        api = ctx.api
        tools = [
            {
                "@type": "HowToTool",
                "name": f"{api.auth} Authentication" if api.requires_auth else "No API Key Required",
            }
        ]
        if api.https:
            tools.append({"@type": "HowToTool", "name": "HTTPS Connection"})

        return {
            "@context": SCHEMA_CONTEXT,
            "@type": self.schema_type,
            "name": f"How to use {api.name} API",
            "description": f"Step-by-step guide to integrate and use the {api.name} API in your application",
            "step": self.steps(api),
            "totalTime": "PT10M",
            "tool": tools,
        }

    @staticmethod
    def steps(api: ApiRecord) -> list[dict[str, Any]]:
        steps: list[dict[str, Any]] = []
        link = valid_url(api.link)
        if api.requires_auth:
            register: dict[str, Any] = {
                "@type": "HowToStep",
                "name": "Register for API Access",
                "text": (
                    f"Visit {link or 'the provider website'} and sign up to obtain your API "
                    f"credentials ({api.auth})."
                ),
            }
            if link:
                register["url"] = link
            steps.append(register)

        docs_url = _documentation_url(api)
        review: dict[str, Any] = {
            "@type": "HowToStep",
            "name": "Review API Documentation",
            "text": (
                f"Read the official documentation{f' at {docs_url}' if docs_url else ''} to "
                "understand available endpoints and parameters."
            ),
        }
        if docs_url:
            review["url"] = docs_url
        steps.append(review)

        base_url = extract_base_url(api.link)
        credentials = ", including your authentication credentials" if api.requires_auth else ""
        steps.append(
            {
                "@type": "HowToStep",
                "name": "Make Your First API Request",
                "text": (
                    f"Send a test request to {base_url or 'the API'} using your preferred "
                    f"HTTP client{credentials}."
                ),
            }
        )
        steps.append(
            {
                "@type": "HowToStep",
                "name": "Process the API Response",
                "text": "Parse the JSON response and handle any errors appropriately. Implement retry logic for production use.",
            }
        )

        metadata = api.seo_metadata
        if metadata and metadata.has_code_examples:
            languages = metadata.language_names()
            in_languages = f" in {', '.join(languages)}" if languages else ""
            steps.append(
                {
                    "@type": "HowToStep",
                    "name": "Integrate into Your Application",
                    "text": f"Use the provided code examples{in_languages} to integrate the API into your application.",
                }
            )

        for position, step in enumerate(steps, start=1):
            step["position"] = position
        return steps


class ArticleSchema:
    schema_type: SchemaType = "Article"

    def __init__(self, site: SiteConfig) -> None:
        self.site = site

    def generate(self, ctx: TemplateContext) -> SchemaObject:
        api = ctx.api
        generated = api.generated_content
        headline = generated.seo_title if generated and has_text(generated.seo_title) else None
        timestamp = (
            generated.last_generated_at if generated and has_text(generated.last_generated_at) else None
        )

        schema: SchemaObject = {
            "@context": SCHEMA_CONTEXT,
            "@type": self.schema_type,
            "headline": headline or f"{api.name} API Guide",
            "description": _description(api),
            "author": {"@type": "Organization", "name": self.site.name, "url": self.site.url},
            "publisher": {
                "@type": "Organization",
                "name": self.site.name,
                "logo": {"@type": "ImageObject", "url": f"{self.site.url}/logo.png"},
            },
        }
        # Undated content stays undated so output is reproducible.
        if timestamp:
            schema["datePublished"] = timestamp
            schema["dateModified"] = timestamp
        schema["mainEntityOfPage"] = {"@type": "WebPage", "@id": self.site.api_page_url(api)}
        screenshot = _screenshot_url(api)
        if screenshot:
            schema["image"] = [screenshot]
        return schema


class BreadcrumbListSchema:
    schema_type: SchemaType = "BreadcrumbList"

    def __init__(self, site: SiteConfig) -> None:
        self.site = site

    def generate(self, ctx: TemplateContext) -> SchemaObject:
        api = ctx.api
        trail = [("Home", self.site.url)]
        if api.category is not None:
            trail.append((api.category.name, f"{self.site.url}/category/{api.category.slug}"))
        trail.append((api.name, self.site.api_page_url(api)))

        return {
            "@context": SCHEMA_CONTEXT,
            "@type": self.schema_type,
            "itemListElement": [
                {"@type": "ListItem", "position": position, "name": name, "item": url}
                for position, (name, url) in enumerate(trail, start=1)
            ],
        }


def has_article_content(ctx: TemplateContext) -> bool:
    generated = ctx.api.generated_content
    return bool(generated and has_text(generated.blog_post))


class SchemaManager:
    """Registry of the schema builders plus the page-level selection rules."""

    def __init__(self, site_url: str | None = None, site_name: str | None = None) -> None:
        site = SiteConfig.from_env(site_url, site_name)
        self.site = site
        self.generators = {
            generator.schema_type: generator
            for generator in (
                WebAPISchema(site),
                SoftwareApplicationSchema(site),
                FAQSchema(site),
                HowToSchema(site),
                ArticleSchema(site),
                BreadcrumbListSchema(site),
                ProductSchema(site),
            )
        }

    def generate(
        self,
        schema_type: SchemaType,
        ctx: TemplateContext,
        faq_items: Sequence[FAQItem] | None = None,
    ) -> SchemaObject:
        generator = self.generators.get(schema_type)
        if generator is None:
            raise KeyError(f"Schema generator not found for type: {schema_type}")
        if schema_type == "FAQPage":
            return generator.generate(ctx, faq_items or ())
        return generator.generate(ctx)

    def generate_all(
        self, ctx: TemplateContext, faq_items: Sequence[FAQItem] | None = None
    ) -> list[SchemaObject]:
        schemas = [
            self.generate("WebAPI", ctx),
            self.generate("BreadcrumbList", ctx),
            self.generate("SoftwareApplication", ctx),
            self.generate("Product", ctx),
            self.generate("HowTo", ctx),
        ]
        if faq_items:
            schemas.append(self.generate("FAQPage", ctx, faq_items))
        if has_article_content(ctx):
            schemas.append(self.generate("Article", ctx))

        logger.debug(
            "Generated %d schemas for API %s: %s",
            len(schemas),
            ctx.api.id,
            [schema["@type"] for schema in schemas],
        )
        return schemas


def to_json_ld(schema: SchemaObject) -> str:
    """Serialise one schema for an embedded ``application/ld+json`` script tag."""
    return json.dumps(schema, ensure_ascii=False).replace("</", "<\\/")
