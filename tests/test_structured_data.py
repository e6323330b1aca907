import json

import pytest

from pseo.schemas import FAQItem, TemplateContext
from pseo.structured_data import SchemaManager, to_json_ld

SITE = "https://catalog.test"


def _context(**api_overrides) -> TemplateContext:
    api = {
        "id": 42,
        "name": "Cat Facts",
        "description": "Random cat facts",
        "link": "https://api.catfacts.example.com/v2",
        "auth": "apiKey",
        "cors": "Yes",
        "https": True,
    }
    health_summary = api_overrides.pop("health_summary", None)
    api.update(api_overrides)
    return TemplateContext(api=api, health_summary=health_summary)


def _manager() -> SchemaManager:
    return SchemaManager(site_url=SITE, site_name="Catalog")


def _types(schemas) -> list[str]:
    return [schema["@type"] for schema in schemas]


def _has_none(value) -> bool:
    if value is None:
        return True
    if isinstance(value, dict):
        return any(_has_none(item) for item in value.values())
    if isinstance(value, list):
        return any(_has_none(item) for item in value)
    return False


def test_generate_all_minimal_context_skips_article_and_faq():
    schemas = _manager().generate_all(_context())

    types = _types(schemas)
    assert "WebAPI" in types
    assert "BreadcrumbList" in types
    assert "Article" not in types
    assert "FAQPage" not in types
    assert all(schema["@context"] == "https://schema.org" for schema in schemas)


def test_generate_all_includes_faq_and_article_when_available():
    ctx = _context(
        generated_content={
            "seo_title": "Cat Facts API: The Complete Guide",
            "blog_post": "Long form content about cats.",
            "last_generated_at": "2024-05-01T10:00:00.000Z",
        }
    )
    faq = [FAQItem(question="Is it free?", answer="Yes.", category="pricing")]

    schemas = _manager().generate_all(ctx, faq)

    assert _types(schemas) == [
        "WebAPI",
        "BreadcrumbList",
        "SoftwareApplication",
        "Product",
        "HowTo",
        "FAQPage",
        "Article",
    ]
    assert _manager().generate_all(ctx, faq) == schemas


def test_empty_faq_list_is_not_emitted():
    assert "FAQPage" not in _types(_manager().generate_all(_context(), []))


def test_web_api_schema_fields():
    ctx = _context(
        openapi_url="https://api.catfacts.example.com/openapi.json",
        seo_metadata={"languages": ["Python", "Go"], "doc_quality_score": 7.5},
        health_summary={"uptime_pct": 99.123, "avg_latency_ms": 87},
    )

    schema = _manager().generate("WebAPI", ctx)

    assert schema["url"] == f"{SITE}/api/42/cat-facts"
    assert schema["documentation"] == "https://api.catfacts.example.com/openapi.json"
    assert schema["provider"] == {
        "@type": "Organization",
        "name": "example",
        "url": "https://api.catfacts.example.com",
    }
    assert schema["programmingLanguage"] == ["Python", "Go"]
    assert "keywords" not in schema
    assert "applicationCategory" not in schema
    properties = {prop["name"]: prop["value"] for prop in schema["additionalProperty"]}
    assert properties["Authentication"] == "apiKey"
    assert properties["HTTPS"] == "Yes"
    assert properties["Documentation Quality"] == "7.5/10"
    assert properties["Uptime (30d)"] == "99.12%"
    assert properties["Average Latency"] == "87ms"
    assert not _has_none(schema)


def test_web_api_prefers_ai_summary_and_falls_back_to_link():
    ctx = _context(ai_analysis={"summary": "Facts about felines", "use_cases": ["trivia"]})
    schema = _manager().generate("WebAPI", ctx)
    assert schema["description"] == "Facts about felines"
    assert schema["documentation"] == "https://api.catfacts.example.com/v2"
    assert schema["applicationCategory"] == "trivia"


@pytest.mark.parametrize("link", ["", "not a url"])
def test_unusable_link_is_left_out_of_every_schema(link):
    schemas = _manager().generate_all(_context(link=link))
    by_type = {schema["@type"]: schema for schema in schemas}

    web_api = by_type["WebAPI"]
    assert web_api["provider"] == {"@type": "Organization", "name": "API Provider"}
    assert "documentation" not in web_api
    assert "termsOfService" not in web_api
    assert "url" not in by_type["SoftwareApplication"]
    assert "url" not in by_type["Product"]["offers"]
    assert all("url" not in step for step in by_type["HowTo"]["step"])
    payload = json.dumps(schemas)
    assert "not a url" not in payload
    assert '""' not in payload
    assert not _has_none(schemas)


def test_documentation_falls_back_from_bad_openapi_url_to_link():
    schema = _manager().generate("WebAPI", _context(openapi_url="openapi.json"))
    assert schema["documentation"] == "https://api.catfacts.example.com/v2"


def test_software_application_is_always_free_and_rated_when_scored():
    unrated = _manager().generate("SoftwareApplication", _context())
    rated = _manager().generate(
        "SoftwareApplication", _context(seo_metadata={"doc_quality_score": 9})
    )

    assert unrated["offers"]["price"] == "0"
    assert "aggregateRating" not in unrated
    assert rated["aggregateRating"]["ratingValue"] == 9
    assert not _has_none(unrated)


def test_faq_schema_maps_items_in_order():
    items = [
        FAQItem(question="First?", answer="One."),
        FAQItem(question="Second?", answer="Two.", category="support"),
    ]

    schema = _manager().generate("FAQPage", _context(), items)

    assert schema["mainEntity"] == [
        {"@type": "Question", "name": "First?", "acceptedAnswer": {"@type": "Answer", "text": "One."}},
        {"@type": "Question", "name": "Second?", "acceptedAnswer": {"@type": "Answer", "text": "Two."}},
    ]


def test_how_to_register_step_depends_on_auth():
    secured = _manager().generate("HowTo", _context())
    public = _manager().generate("HowTo", _context(auth="No"))

    secured_names = [step["name"] for step in secured["step"]]
    public_names = [step["name"] for step in public["step"]]
    assert secured_names[0] == "Register for API Access"
    assert "Register for API Access" not in public_names
    assert [step["position"] for step in public["step"]] == list(range(1, len(public_names) + 1))
    assert public["tool"][0]["name"] == "No API Key Required"


def test_article_uses_generated_title_and_timestamp():
    ctx = _context(
        generated_content={
            "seo_title": "Everything about Cat Facts",
            "blog_post": "Body",
            "last_generated_at": "2024-05-01T10:00:00.000Z",
        },
        screenshot={"thumbnail_url": "https://img.test/t.png", "full_url": "https://img.test/f.png"},
    )

    schema = _manager().generate("Article", ctx)

    assert schema["headline"] == "Everything about Cat Facts"
    assert schema["datePublished"] == "2024-05-01T10:00:00.000Z"
    assert schema["dateModified"] == "2024-05-01T10:00:00.000Z"
    assert schema["image"] == ["https://img.test/f.png"]
    assert schema["publisher"]["name"] == "Catalog"


def test_breadcrumbs_with_and_without_category():
    with_category = _manager().generate(
        "BreadcrumbList", _context(category={"id": 1, "name": "Animals", "slug": "animals"})
    )
    without_category = _manager().generate("BreadcrumbList", _context())

    assert with_category["itemListElement"] == [
        {"@type": "ListItem", "position": 1, "name": "Home", "item": SITE},
        {"@type": "ListItem", "position": 2, "name": "Animals", "item": f"{SITE}/category/animals"},
        {"@type": "ListItem", "position": 3, "name": "Cat Facts", "item": f"{SITE}/api/42/cat-facts"},
    ]
    names = [entry["name"] for entry in without_category["itemListElement"]]
    positions = [entry["position"] for entry in without_category["itemListElement"]]
    assert names == ["Home", "Cat Facts"]
    assert positions == [1, 2]


def test_product_offer_price_only_for_public_apis():
    secured = _manager().generate("Product", _context())
    public = _manager().generate("Product", _context(auth="No"))
    assert "price" not in secured["offers"]
    assert public["offers"]["price"] == "0"


def test_site_url_comes_from_environment(monkeypatch):
    monkeypatch.setenv("PSEO_SITE_URL", "https://example.org/")
    monkeypatch.setenv("PSEO_SITE_NAME", "Example Catalog")

    manager = SchemaManager()
    breadcrumb = manager.generate("BreadcrumbList", _context())

    assert breadcrumb["itemListElement"][0]["item"] == "https://example.org"
    assert manager.site.name == "Example Catalog"


def test_unregistered_schema_type_raises():
    with pytest.raises(KeyError):
        _manager().generate("Review", _context())


def test_to_json_ld_escapes_script_terminators():
    payload = to_json_ld({"@type": "FAQPage", "text": "</script><b>"})
    assert "</script>" not in payload
    assert json.loads(payload)["text"] == "</script><b>"


def test_undated_article_omits_dates_and_is_reproducible():
    ctx = _context(generated_content={"blog_post": "Body without a timestamp"})

    first = _manager().generate_all(ctx)
    second = _manager().generate_all(ctx)

    article = next(schema for schema in first if schema["@type"] == "Article")
    assert "datePublished" not in article
    assert "dateModified" not in article
    assert first == second
