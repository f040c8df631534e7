"""
评论匹配器 - 把设计评论关联到几何上最相关的节点

匹配优先级：
1. 评论直接引用节点 id → 该节点（置信度 1.0）
2. 坐标落在包围盒内（边界包含）的候选
3. 无包含候选时，中心点在邻近阈值内的候选
候选中取到中心点欧氏距离最小者，平局取索引中靠前者。
未匹配的评论以占位目标输出，不丢弃；输出顺序与输入一致。

测试要点：
- test_proximity_prefers_nearer: 邻近候选取最近
- test_direct_reference_wins: 直接引用优先于坐标
- test_unassigned_kept: 未匹配评论仍在输出中
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..config.runtime_config import CommentMatchConfig
from ..interfaces import ICommentMatcher
from ..models import BoundsEntry, CommentInstruction, CommentRecord

logger = logging.getLogger(__name__)

# 面积阈值 -> 置信度（越小的元素越具体）
AREA_CONFIDENCE: tuple[tuple[float, float], ...] = (
    (10000, 0.95),
    (50000, 0.85),
)
LARGE_AREA_CONFIDENCE = 0.7
PROXIMITY_CONFIDENCE = 0.5

CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("interaction", ("hover", "click", "tap", "focus")),
    ("animation", ("animate", "animation", "transition", "fade", "slide", "bounce")),
    ("behavior", ("show", "hide", "toggle", "enable", "disable")),
)


def categorize_instruction(message: str) -> str:
    """按关键词归类评论"""
    text = message.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in text for k in keywords):
            return category
    return "general"


def _area_confidence(entry: BoundsEntry) -> float:
    area = entry.bounds.area
    for limit, confidence in AREA_CONFIDENCE:
        if area < limit:
            return confidence
    return LARGE_AREA_CONFIDENCE


class CommentMatcher(ICommentMatcher):
    """评论匹配器"""

    def __init__(self, config: CommentMatchConfig | None = None):
        self.config = config or CommentMatchConfig()

    def match(
        self,
        index: list[BoundsEntry],
        comments: Iterable[CommentRecord],
    ) -> list[CommentInstruction]:
        """逐条匹配评论（每条评论恰好输出一次）"""
        by_id = {}
        for entry in index:
            by_id.setdefault(entry.id, entry)

        results = [self._match_one(comment, index, by_id) for comment in comments]
        unassigned = sum(1 for r in results if r.match_type == "unassigned")
        logger.info(f"评论匹配完成: 共{len(results)}条, 未匹配{unassigned}条")
        return results

    def _match_one(
        self,
        comment: CommentRecord,
        index: list[BoundsEntry],
        by_id: dict[str, BoundsEntry],
    ) -> CommentInstruction:
        coordinates = {"x": comment.x, "y": comment.y} if comment.has_coordinates else None
        base = {
            "instruction": comment.message,
            "author": comment.author,
            "coordinates": coordinates,
            "category": categorize_instruction(comment.message),
        }

        if comment.node_id:
            entry = by_id.get(comment.node_id)
            logger.debug(f"评论直接引用节点: {comment.node_id}")
            return CommentInstruction(
                **base,
                target_element=entry.name if entry else comment.node_id,
                target_node_id=comment.node_id,
                match_type="direct",
                confidence=1.0,
                path=entry.path if entry else None,
            )

        if comment.has_coordinates:
            x, y = comment.x, comment.y
            contained = [e for e in index if e.bounds.contains(x, y)]
            if contained:
                best = self._nearest(contained, x, y)
                return self._assigned(base, best, "contained", _area_confidence(best))

            threshold = self.config.proximity_threshold
            nearby = [e for e in index if e.bounds.distance_to_center(x, y) <= threshold]
            if nearby:
                best = self._nearest(nearby, x, y)
                return self._assigned(base, best, "proximity", PROXIMITY_CONFIDENCE)

        logger.debug(f"评论未匹配到节点: {comment.message[:40]}")
        return CommentInstruction(
            **base,
            target_element=self.config.placeholder,
            match_type="unassigned",
            confidence=0.0,
        )

    @staticmethod
    def _nearest(candidates: list[BoundsEntry], x: float, y: float) -> BoundsEntry:
        # min 在平局时返回第一个，即索引中靠前者
        return min(candidates, key=lambda e: e.bounds.distance_to_center(x, y))

    @staticmethod
    def _assigned(base: dict, entry: BoundsEntry, match_type: str, confidence: float) -> CommentInstruction:
        logger.debug(f"评论匹配到 {entry.path} ({match_type}, {confidence})")
        return CommentInstruction(
            **base,
            target_element=entry.name,
            target_node_id=entry.id,
            match_type=match_type,
            confidence=confidence,
            path=entry.path,
        )
