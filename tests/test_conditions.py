from pseo.conditions import (
    MISSING,
    BlockType,
    ContentBlock,
    RenderCondition,
    evaluate,
    evaluate_all,
    resolve_path,
    should_render,
)
from pseo.schemas import TemplateContext


def _context(**api_overrides) -> TemplateContext:
    api = {
        "id": 7,
        "name": "Weather API",
        "description": "Forecasts for any city",
        "link": "https://api.weather.test/v1",
        "auth": "apiKey",
        "cors": "Yes",
        "https": True,
        "latency_ms": 180,
        "seo_metadata": {"languages": ["Python", "Go"], "doc_quality_score": 8},
    }
    api.update(api_overrides)
    return TemplateContext(api=api)


def _cond(field: str, operator: str, value=None) -> RenderCondition:
    return RenderCondition(field=field, operator=operator, value=value)


def test_resolve_path_returns_missing_for_absent_intermediate():
    ctx = _context(seo_metadata=None)
    assert resolve_path(ctx, "api.seo_metadata.doc_quality_score") is MISSING
    assert resolve_path(ctx, "api.nope") is MISSING
    assert resolve_path(ctx, "health_summary.uptime_pct") is MISSING


def test_resolve_path_accepts_camel_case_aliases_and_list_steps():
    ctx = _context()
    assert resolve_path(ctx, "api.seoMetadata.docQualityScore") == 8
    assert resolve_path(ctx, "api.seo_metadata.languages.length") == 2
    assert resolve_path(ctx, "api.seo_metadata.languages.1.language") == "Go"
    assert resolve_path(ctx, "api.seo_metadata.languages.5") is MISSING


def test_exists_rejects_missing_none_and_empty_string():
    ctx = _context(description="", openapi_url=None)
    assert evaluate(_cond("api.name", "exists"), ctx)
    assert not evaluate(_cond("api.description", "exists"), ctx)
    assert not evaluate(_cond("api.openapi_url", "exists"), ctx)
    assert not evaluate(_cond("api.ai_analysis.summary", "exists"), ctx)


def test_equals_is_type_strict():
    ctx = _context()
    assert evaluate(_cond("api.cors", "equals", "Yes"), ctx)
    assert not evaluate(_cond("api.cors", "equals", "yes"), ctx)
    assert not evaluate(_cond("api.https", "equals", 1), ctx)
    assert evaluate(_cond("api.https", "equals", True), ctx)
    assert evaluate(_cond("api.latency_ms", "equals", 180), ctx)


def test_gt_and_lt_require_numbers_on_both_sides():
    ctx = _context()
    assert evaluate(_cond("api.latency_ms", "gt", 100), ctx)
    assert not evaluate(_cond("api.latency_ms", "gt", 180), ctx)
    assert evaluate(_cond("api.latency_ms", "lt", 500), ctx)
    assert not evaluate(_cond("api.latency_ms", "lt", "500"), ctx)
    assert not evaluate(_cond("api.name", "gt", 1), ctx)
    assert not evaluate(_cond("api.https", "gt", 0), ctx)
    assert not evaluate(_cond("api.openapi_url", "lt", 10), ctx)


def test_contains_supports_strings_and_lists():
    ctx = _context()
    assert evaluate(_cond("api.description", "contains", "city"), ctx)
    assert not evaluate(_cond("api.description", "contains", "country"), ctx)

    record = {"tags": ["weather", "geo"], "count": 3}
    assert evaluate(_cond("tags", "contains", "geo"), record)
    assert not evaluate(_cond("tags", "contains", "news"), record)
    assert not evaluate(_cond("count", "contains", 3), record)


def test_in_requires_a_list_value():
    ctx = _context()
    assert evaluate(_cond("api.auth", "in", ["apiKey", "OAuth"]), ctx)
    assert not evaluate(_cond("api.auth", "in", ["OAuth"]), ctx)
    assert not evaluate(_cond("api.auth", "in", "apiKey"), ctx)
    assert not evaluate(_cond("api.openapi_url", "in", ["x"]), ctx)


def test_unknown_operator_is_false():
    condition = RenderCondition.model_construct(field="api.name", operator="matches", value="x")
    assert evaluate(condition, _context()) is False


def test_evaluate_all_is_a_conjunction():
    ctx = _context()
    assert evaluate_all([], ctx)
    assert evaluate_all([_cond("api.name", "exists"), _cond("api.cors", "equals", "Yes")], ctx)
    assert not evaluate_all([_cond("api.name", "exists"), _cond("api.openapi_url", "exists")], ctx)


def test_should_render_checks_enabled_flag_and_conditions():
    ctx = _context(openapi_url="https://api.weather.test/openapi.json")
    block = ContentBlock(
        id="reference",
        type=BlockType.API_REFERENCE,
        priority=8,
        conditions=[_cond("api.openapi_url", "exists")],
        seo_weight=6,
    )
    assert should_render(block, ctx)
    assert not should_render(block.model_copy(update={"enabled": False}), ctx)
    assert not should_render(block, _context())
