"""Render-condition evaluation against a template context.

A condition names a dot-delimited path into the context, an operator and an
optional comparison value. Paths walk mappings, model fields (by field name
or by camelCase alias), list indexes and a list's ``length``. Any missing
step resolves to :data:`MISSING` instead of raising.
"""
from __future__ import annotations

import enum
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Iterable, List, Literal

from pydantic import BaseModel, Field

from .schemas import FrozenModel

logger = logging.getLogger(__name__)

ConditionOperator = Literal["exists", "equals", "gt", "lt", "contains", "in"]


class _Missing:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class BlockType(str, enum.Enum):
    HERO = "hero"
    QUICK_STATS = "quick_stats"
    GETTING_STARTED = "getting_started"
    CODE_EXAMPLES = "code_examples"
    API_REFERENCE = "api_reference"
    AUTHENTICATION_GUIDE = "auth_guide"
    ALTERNATIVES = "alternatives"
    PRICING_COMPARISON = "pricing_comparison"
    FEATURE_MATRIX = "feature_matrix"
    USE_CASES = "use_cases"
    INDUSTRY_EXAMPLES = "industry_examples"
    SUCCESS_STORIES = "success_stories"
    RATE_LIMITS = "rate_limits"
    DATA_FORMATS = "data_formats"
    SUPPORTED_REGIONS = "supported_regions"
    COMMUNITY_RESOURCES = "community"
    CHANGELOG = "changelog"
    ROADMAP = "roadmap"
    FAQ = "faq"
    GLOSSARY = "glossary"
    RELATED_APIS = "related_apis"
    CATEGORY_OVERVIEW = "category_overview"


class RenderCondition(FrozenModel):
    field: str
    operator: ConditionOperator
    value: Any = None


class ContentBlock(FrozenModel):
    id: str
    type: BlockType
    priority: int = Field(default=5, ge=1, le=10)
    conditions: List[RenderCondition] = Field(default_factory=list)
    seo_weight: float = Field(default=5, ge=0, le=10)
    enabled: bool = True


def _step(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        return current[key] if key in current else MISSING
    if isinstance(current, BaseModel):
        fields = type(current).model_fields
        if key in fields:
            return getattr(current, key)
        for name, info in fields.items():
            if info.alias == key:
                return getattr(current, name)
        return MISSING
    if isinstance(current, Sequence) and not isinstance(current, str):
        if key == "length":
            return len(current)
        if key.isdigit() and int(key) < len(current):
            return current[int(key)]
    return MISSING


def resolve_path(obj: Any, path: str) -> Any:
    current = obj
    for key in path.split("."):
        if current is None or current is MISSING:
            return MISSING
        current = _step(current, key)
    return current


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _strict_equals(left: Any, right: Any) -> bool:
    if left is MISSING or right is MISSING:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if _is_number(left) and _is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def _exists(value: Any, expected: Any) -> bool:
    return value is not MISSING and value is not None and value != ""


def _greater(value: Any, expected: Any) -> bool:
    return _is_number(value) and _is_number(expected) and value > expected


def _less(value: Any, expected: Any) -> bool:
    return _is_number(value) and _is_number(expected) and value < expected


def _contains(value: Any, expected: Any) -> bool:
    if isinstance(value, str) and isinstance(expected, str):
        return expected in value
    if isinstance(value, (list, tuple)):
        return any(_strict_equals(item, expected) for item in value)
    return False


def _member_of(value: Any, expected: Any) -> bool:
    if not isinstance(expected, (list, tuple)):
        return False
    return any(_strict_equals(value, item) for item in expected)


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "exists": _exists,
    "equals": _strict_equals,
    "gt": _greater,
    "lt": _less,
    "contains": _contains,
    "in": _member_of,
}


def evaluate(condition: RenderCondition, ctx: Any) -> bool:
    operator = _OPERATORS.get(condition.operator)
    if operator is None:
        logger.debug("Unknown condition operator %r; treating as false", condition.operator)
        return False
    return operator(resolve_path(ctx, condition.field), condition.value)


def evaluate_all(conditions: Iterable[RenderCondition], ctx: Any) -> bool:
    """Logical AND over ``conditions``, stopping at the first failure."""
    return all(evaluate(condition, ctx) for condition in conditions)


def should_render(block: ContentBlock, ctx: Any) -> bool:
    return block.enabled and evaluate_all(block.conditions, ctx)
