"""
评论模型 - 设计评论、坐标索引条目、匹配结果
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from .node import Rect

MatchType = Literal["direct", "contained", "proximity", "unassigned"]
InstructionCategory = Literal["interaction", "animation", "behavior", "general"]


class CommentRecord(BaseModel):
    """设计评论"""
    id: str | None = None
    message: str
    author: str = "Designer"
    x: float | None = None
    y: float | None = None
    node_id: str | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.x is not None and self.y is not None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> CommentRecord:
        """从远端评论结构构建（client_meta.node_offset / node_id / user.handle）"""
        meta = payload.get("client_meta") or {}
        offset = meta.get("node_offset") or {}
        x = offset.get("x", meta.get("x"))
        y = offset.get("y", meta.get("y"))
        user = payload.get("user") or {}
        return cls(
            id=payload.get("id"),
            message=payload.get("message", ""),
            author=user.get("handle") or payload.get("author") or "Designer",
            x=x,
            y=y,
            node_id=meta.get("node_id"),
        )


class BoundsEntry(BaseModel):
    """坐标索引条目（每次匹配调用重建，不缓存）"""
    id: str
    name: str
    type: str
    bounds: Rect
    path: str


class CommentInstruction(BaseModel):
    """评论匹配结果"""
    instruction: str
    target_element: str
    target_node_id: str | None = None
    author: str = "Designer"
    coordinates: dict[str, float] | None = None
    match_type: MatchType = "unassigned"
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    category: InstructionCategory = "general"
    path: str | None = None
