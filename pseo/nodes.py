"""Renderable content nodes produced by the generators.

The vocabulary is closed: every node carries a ``type`` tag and the
``ContentNode`` union dispatches on it, so a renderer can match
exhaustively. ``to_dicts`` produces the camelCase shape the UI layer reads.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import Field, TypeAdapter

from .schemas import FrozenModel


class HeadingNode(FrozenModel):
    type: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    text: str
    id: Optional[str] = None


class ParagraphNode(FrozenModel):
    type: Literal["paragraph"] = "paragraph"
    text: str
    class_name: Optional[str] = None


class CodeBlockNode(FrozenModel):
    type: Literal["code_block"] = "code_block"
    language: str
    code: str
    filename: Optional[str] = None
    highlight_lines: Optional[List[int]] = None


class ListNode(FrozenModel):
    type: Literal["list"] = "list"
    ordered: bool = False
    # Each item is plain text or a nested node.
    items: List[Union[str, "ContentNode"]]


class TableNode(FrozenModel):
    type: Literal["table"] = "table"
    headers: List[str]
    rows: List[List[str]]
    class_name: Optional[str] = None


class QuoteNode(FrozenModel):
    type: Literal["quote"] = "quote"
    text: str
    author: Optional[str] = None
    source: Optional[str] = None


class ImageNode(FrozenModel):
    type: Literal["image"] = "image"
    src: str
    alt: str
    caption: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class LinkNode(FrozenModel):
    type: Literal["link"] = "link"
    text: str
    url: str
    external: bool = False


class ComponentNode(FrozenModel):
    type: Literal["component"] = "component"
    name: str
    props: Dict[str, Any] = Field(default_factory=dict)


ContentNode = Annotated[
    Union[
        HeadingNode,
        ParagraphNode,
        CodeBlockNode,
        ListNode,
        TableNode,
        QuoteNode,
        ImageNode,
        LinkNode,
        ComponentNode,
    ],
    Field(discriminator="type"),
]

ListNode.model_rebuild()

_NODE_LIST = TypeAdapter(List[ContentNode])


def parse_nodes(raw: Sequence[Any]) -> list[ContentNode]:
    """Validate renderer-shaped dicts (or node models) into typed nodes."""
    return _NODE_LIST.validate_python(list(raw))


def to_dicts(nodes: Sequence[ContentNode]) -> list[dict[str, Any]]:
    return [node.model_dump(by_alias=True, exclude_none=True) for node in nodes]
