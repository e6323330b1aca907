import pytest

from pseo.conditions import BlockType
from pseo.generators import (
    CONTENT_GENERATORS,
    CodeExamplesGenerator,
    FAQGenerator,
    GettingStartedGenerator,
    language_display_name,
    wrap_in_section,
)
from pseo.nodes import CodeBlockNode, HeadingNode, ListNode, ParagraphNode
from pseo.schemas import TemplateContext


def _context(health_summary=None, **api_overrides) -> TemplateContext:
    api = {
        "id": 1,
        "name": "Test API",
        "description": "A comprehensive test API for developers",
        "link": "https://api.example.com/v1/items",
        "auth": "apiKey",
        "cors": "Yes",
        "https": True,
        "health_status": "live",
        "latency_ms": 120,
    }
    api.update(api_overrides)
    return TemplateContext(api=api, health_summary=health_summary)


def _rich_context(**api_overrides) -> TemplateContext:
    overrides = {
        "latency_ms": 250,
        "openapi_url": "https://api.example.com/openapi.json",
        "seo_metadata": {
            "doc_quality_score": 8,
            "has_code_examples": True,
            "languages": ["JavaScript", "Python"],
        },
        "ai_analysis": {
            "summary": "A powerful API for testing purposes",
            "use_cases": ["testing", "development", "automation"],
        },
    }
    overrides.update(api_overrides)
    return _context(health_summary={"uptime_pct": 99.5, "avg_latency_ms": 200}, **overrides)


def _headings(nodes, level=None) -> list[str]:
    return [
        node.text
        for node in nodes
        if isinstance(node, HeadingNode) and (level is None or node.level == level)
    ]


def _code(nodes) -> list[str]:
    return [node.code for node in nodes if isinstance(node, CodeBlockNode)]


def test_wrap_in_section_prefixes_level_two_heading():
    body = [ParagraphNode(text="Hello")]
    wrapped = wrap_in_section("Overview", body, anchor="overview")
    assert wrapped[0] == HeadingNode(level=2, text="Overview", id="overview")
    assert wrapped[1:] == body


def test_getting_started_intro_mentions_name_and_description():
    content = GettingStartedGenerator().generate(_context())
    first = content[0]
    assert isinstance(first, ParagraphNode)
    assert "Test API" in first.text
    assert "A comprehensive test API for developers" in first.text


def test_getting_started_quick_info_lists_flags_and_category():
    content = GettingStartedGenerator().generate(
        _context(category={"id": 3, "name": "Weather", "slug": "weather"})
    )
    quick_info = next(node for node in content if isinstance(node, ListNode))
    assert "**Base URL**: https://api.example.com" in quick_info.items
    assert "**CORS**: Yes" in quick_info.items
    assert "**Authentication**: apiKey" in quick_info.items
    assert "**Category**: Weather" in quick_info.items
    assert "**Average Response Time**: 120ms" in quick_info.items


def test_getting_started_omits_optional_quick_info():
    content = GettingStartedGenerator().generate(_context(latency_ms=None))
    quick_info = next(node for node in content if isinstance(node, ListNode))
    assert not any(item.startswith("**Category**") for item in quick_info.items)
    assert not any(item.startswith("**Average Response Time**") for item in quick_info.items)


def test_getting_started_curl_example_for_authenticated_api():
    content = GettingStartedGenerator().generate(_context())
    block = next(node for node in content if isinstance(node, CodeBlockNode))
    assert block.language == "bash"
    assert block.code.startswith("curl -X GET 'https://api.example.com'")
    assert "Authorization: Bearer YOUR_API_KEY" in block.code
    assert "Authentication" in _headings(content)


@pytest.mark.parametrize("auth", ["apiKey", "OAuth", "X-Mashape-Key", "User-Agent", "token"])
def test_every_auth_type_gets_credentials_and_auth_section(auth):
    ctx = _context(auth=auth)
    started = GettingStartedGenerator().generate(ctx)
    examples = CodeExamplesGenerator().generate(ctx)

    assert "Authentication" in _headings(started)
    assert all("Authorization" in code for code in _code(started))
    assert _code(examples)
    assert all("Authorization" in code for code in _code(examples))


def test_public_api_has_no_auth_heading_or_credentials():
    ctx = _context(auth="No")
    started = GettingStartedGenerator().generate(ctx)
    examples = CodeExamplesGenerator().generate(ctx)

    assert "Authentication" not in _headings(started)
    for code in _code(started) + _code(examples):
        assert "Authorization" not in code
        assert "YOUR_API_KEY" not in code
    assert "No authentication required" in started[0].text


def test_oauth_curl_uses_access_token_placeholder():
    content = GettingStartedGenerator().generate(_context(auth="OAuth"))
    block = next(node for node in content if isinstance(node, CodeBlockNode))
    assert "Bearer YOUR_ACCESS_TOKEN" in block.code


def test_mashape_curl_adds_vendor_header_and_guide():
    content = GettingStartedGenerator().generate(_context(auth="X-Mashape-Key"))
    block = next(node for node in content if isinstance(node, CodeBlockNode))
    assert "X-Mashape-Key: YOUR_API_KEY" in block.code
    assert any("RapidAPI" in node.text for node in content if isinstance(node, ParagraphNode))


def test_code_examples_follow_documented_language_order():
    ctx = _context(seo_metadata={"languages": ["Python", "Go", "JavaScript", "python"]})
    content = CodeExamplesGenerator().generate(ctx)

    assert _headings(content, level=3) == ["Python", "Go", "JavaScript"]
    languages = [node.language for node in content if isinstance(node, CodeBlockNode)]
    assert languages == ["python", "go", "javascript"]


def test_code_examples_heading_is_followed_by_code_block():
    content = CodeExamplesGenerator().generate(_rich_context())
    for index, node in enumerate(content):
        if isinstance(node, HeadingNode):
            assert isinstance(content[index + 1], CodeBlockNode)


def test_code_examples_fall_back_to_default_languages():
    content = CodeExamplesGenerator().generate(_context())
    assert _headings(content, level=3) == ["cURL", "JavaScript", "Python"]


def test_unknown_language_uses_curl_template():
    content = CodeExamplesGenerator().generate(_context(seo_metadata={"languages": ["elixir"]}))
    assert _headings(content, level=3) == ["Elixir"]
    block = next(node for node in content if isinstance(node, CodeBlockNode))
    assert block.language == "bash"
    assert "curl -X GET 'https://api.example.com'" in block.code


def test_code_examples_target_base_url_and_include_filename():
    content = CodeExamplesGenerator().generate(_rich_context())
    python_block = next(
        node for node in content if isinstance(node, CodeBlockNode) and node.language == "python"
    )
    assert "api_url = 'https://api.example.com'" in python_block.code
    assert python_block.filename == "test_api.py"
    assert "def fetch_test_api_data():" in python_block.code


def test_language_display_names():
    assert language_display_name("nodejs") == "Node.js"
    assert language_display_name("PHP") == "PHP"
    assert language_display_name("kotlin") == "Kotlin"


def test_faq_includes_all_conditional_questions_for_rich_record():
    questions = [text.lower() for text in _headings(FAQGenerator().generate(_rich_context()), level=4)]

    assert any("authenticate" in q for q in questions)
    assert any("browser" in q for q in questions)
    assert any("response time" in q for q in questions)
    assert any("reliable" in q for q in questions)
    assert any("documentation" in q for q in questions)
    assert any("openapi" in q for q in questions)
    assert any("build" in q for q in questions)


def test_faq_omits_conditional_questions_without_signal():
    ctx = _context(auth="No", cors="No", latency_ms=None)
    questions = [text.lower() for text in _headings(FAQGenerator().generate(ctx), level=4)]

    assert any("require authentication" in q for q in questions)
    assert not any("browser" in q for q in questions)
    assert not any("response time" in q for q in questions)
    assert not any("reliable" in q for q in questions)
    assert not any("documentation" in q for q in questions)
    assert not any("openapi" in q for q in questions)
    assert not any("build" in q for q in questions)


def test_documentation_faq_requires_high_quality_score():
    ctx = _rich_context(seo_metadata={"doc_quality_score": 5.5})
    questions = _headings(FAQGenerator().generate(ctx), level=4)
    assert not any("documentation" in q.lower() for q in questions)


def test_use_case_faq_lists_top_three_tags():
    ctx = _rich_context(ai_analysis={"use_cases": ["a", "b", "c", "d"], "summary": "Handy."})
    items = FAQGenerator.items(ctx)
    use_case = next(item for item in items if "build" in item.question)
    assert use_case.answer == "The Test API API is commonly used for: a, b, c. Handy."
    assert use_case.category == "general"


def test_faq_answers_reflect_latency_and_uptime_tiers():
    ctx = _context(latency_ms=1500, health_summary={"uptime_pct": 93.456})
    items = FAQGenerator.items(ctx)
    latency = next(item for item in items if "response time" in item.question)
    uptime = next(item for item in items if "reliable" in item.question)
    assert "1500ms" in latency.answer
    assert "caching" in latency.answer
    assert "93.46% uptime" in uptime.answer
    assert "retry logic" in uptime.answer


def test_faq_category_headings_precede_their_questions():
    content = FAQGenerator().generate(_rich_context())
    levels = [node.level for node in content if isinstance(node, HeadingNode)]

    assert levels[0] == 3
    assert _headings(content, level=3) == [
        "Technical Questions",
        "Security & Privacy",
        "Support & Documentation",
        "Pricing & Plans",
        "General Questions",
    ]
    for index, node in enumerate(content):
        if isinstance(node, HeadingNode) and node.level == 4:
            assert isinstance(content[index + 1], ParagraphNode)


def test_generators_are_total_for_minimal_record():
    ctx = TemplateContext(api={"name": "Bare"})
    for generator_cls in CONTENT_GENERATORS.values():
        assert generator_cls().generate(ctx)
    assert set(CONTENT_GENERATORS) == {
        BlockType.GETTING_STARTED,
        BlockType.CODE_EXAMPLES,
        BlockType.FAQ,
    }


@pytest.mark.parametrize("link", ["", "not a url"])
def test_unusable_link_never_reaches_generated_content(link):
    ctx = _context(link=link, seo_metadata={"doc_quality_score": 9})
    started = GettingStartedGenerator().generate(ctx)
    examples = CodeExamplesGenerator().generate(ctx)
    faq = FAQGenerator.items(ctx)

    quick_info = next(node for node in started if isinstance(node, ListNode))
    assert not any(item.startswith("**Base URL**") for item in quick_info.items)
    for code in _code(started) + _code(examples):
        assert "YOUR_API_BASE_URL" in code
        assert "not a url" not in code
        assert "''" not in code
    assert not any("not a url" in item.answer for item in faq)
    documentation = next(item for item in faq if "documentation" in item.question)
    assert "available from the provider" in documentation.answer


def test_typescript_block_is_labelled_typescript():
    content = CodeExamplesGenerator().generate(_context(seo_metadata={"languages": ["TypeScript"]}))
    block = next(node for node in content if isinstance(node, CodeBlockNode))

    assert _headings(content, level=3) == ["TypeScript"]
    assert block.language == "typescript"
    assert block.filename == "test-api.ts"
