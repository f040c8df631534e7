"""
上下文精简 - 子节点挂载后对单个节点执行

1. remove_redundant_properties 开启时：空列表、空字典、全空子模型置空（序列化时省略）
2. 文本长度超过 limit_text_length 时截断并追加 "..."（始终执行）

标识字段（id/name/type）不参与精简。
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from ..interfaces import IContextReducer
from ..models import IDENTITY_FIELDS, AnnotatedNode, ContextReduction

TRUNCATION_SUFFIX = "..."


def _is_empty(value: Any) -> bool:
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, BaseModel):
        return not value.model_dump(exclude_none=True)
    return False


class ContextReducer(IContextReducer):
    """上下文精简器"""

    def __init__(self, settings: ContextReduction):
        self.settings = settings

    def reduce(self, node: AnnotatedNode) -> AnnotatedNode:
        if self.settings.remove_redundant_properties:
            self._strip_empty(node)
        self._limit_text(node)
        return node

    @staticmethod
    def _strip_empty(node: AnnotatedNode) -> None:
        for name in type(node).model_fields:
            if name in IDENTITY_FIELDS:
                continue
            if _is_empty(getattr(node, name)):
                setattr(node, name, None)

        extra = node.__pydantic_extra__
        if extra:
            for key in [k for k, v in extra.items() if _is_empty(v)]:
                del extra[key]

    def _limit_text(self, node: AnnotatedNode) -> None:
        limit = self.settings.limit_text_length
        if node.characters is not None and len(node.characters) > limit:
            node.characters = node.characters[:limit] + TRUNCATION_SUFFIX
