"""Rebuild a flat FAQ list from generated heading/paragraph nodes.

Level-3 headings switch the running category, level-4 headings open a
question and paragraphs accumulate its answer. A finished question is
emitted with the category in effect when it is flushed, so a category
heading placed between a question and the next one relabels the earlier
question. Page markup and structured data already depend on that timing.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, NamedTuple

from .schemas import FAQCategory, FAQItem

logger = logging.getLogger(__name__)

CATEGORY_KEYWORDS: tuple[tuple[str, FAQCategory], ...] = (
    ("technical", "technical"),
    ("security", "security"),
    ("support", "support"),
    ("pricing", "pricing"),
)


class _ScanState(NamedTuple):
    category: FAQCategory
    question: str
    answer: str
    items: tuple[FAQItem, ...]


_INITIAL_STATE = _ScanState(category="general", question="", answer="", items=())


def classify_category(text: str) -> FAQCategory:
    lowered = text.lower()
    for keyword, category in CATEGORY_KEYWORDS:
        if keyword in lowered:
            return category
    return "general"


def _attr(node: Any, name: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(name)
    return getattr(node, name, None)


def _flush(state: _ScanState) -> tuple[FAQItem, ...]:
    if state.question and state.answer:
        item = FAQItem(question=state.question, answer=state.answer, category=state.category)
        return (*state.items, item)
    return state.items


def _advance(state: _ScanState, node: Any) -> _ScanState:
    node_type = _attr(node, "type")
    text = _attr(node, "text") or ""

    if node_type == "heading":
        level = _attr(node, "level")
        if level == 3:
            return state._replace(category=classify_category(text))
        if level == 4:
            return _ScanState(
                category=state.category, question=text, answer="", items=_flush(state)
            )
        return state

    if node_type == "paragraph" and state.question:
        answer = f"{state.answer} {text}" if state.answer else text
        return state._replace(answer=answer)

    return state


def extract_faq_items(nodes: Iterable[Any]) -> list[FAQItem]:
    """Return FAQ items found in ``nodes`` (node models or renderer dicts)."""
    state = _INITIAL_STATE
    for node in nodes:
        state = _advance(state, node)
    items = list(_flush(state))
    logger.debug("Extracted %d FAQ items", len(items))
    return items
