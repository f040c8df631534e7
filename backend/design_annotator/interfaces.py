"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 模块间通过接口通信，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from design_annotator.interfaces import IRuleEngine

    class MyRuleEngine(IRuleEngine):
        def apply(self, annotated, source, context, stats) -> AnnotatedNode:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import (
        AnnotatedNode,
        BoundsEntry,
        CommentInstruction,
        CommentRecord,
        DesignNode,
        ProcessingStats,
        TraversalContext,
    )


# ============================================================================
# 注解模块接口
# ============================================================================

class IRuleEngine(ABC):
    """规则引擎接口 - 对注解节点应用自定义规则"""

    @abstractmethod
    def apply(
        self,
        annotated: AnnotatedNode,
        source: DesignNode,
        context: TraversalContext,
        stats: ProcessingStats,
    ) -> AnnotatedNode:
        """
        按优先级应用命中规则

        Args:
            annotated: 已完成生成器阶段的注解节点（尚未挂载子节点）
            source: 源节点（结构谓词读取此节点）
            context: 遍历上下文
            stats: 统计（记录应用次数与规则错误）

        Returns:
            注解节点（custom 回调可能返回新对象）
        """
        ...


class IContextReducer(ABC):
    """上下文精简接口"""

    @abstractmethod
    def reduce(self, node: AnnotatedNode) -> AnnotatedNode:
        """
        精简单个节点（子节点已挂载）

        Args:
            node: 注解节点

        Returns:
            精简后的节点
        """
        ...


# ============================================================================
# 遍历与匹配接口
# ============================================================================

class ITreeWalker(ABC):
    """树遍历接口"""

    @abstractmethod
    def walk(self, root: DesignNode, context: TraversalContext | None = None):
        """
        注解整棵树

        流程：
        1. 为本次调用新建统计记录
        2. 逐节点：过滤 → 生成器 → 规则 → 子节点 → 精简
        3. 节点失败以占位子树替代

        Args:
            root: 源树根节点
            context: 根上下文（默认深度0）

        Returns:
            WalkResult(root, stats)
        """
        ...


class ICommentMatcher(ABC):
    """评论匹配接口"""

    @abstractmethod
    def match(
        self,
        index: list[BoundsEntry],
        comments: list[CommentRecord],
    ) -> list[CommentInstruction]:
        """
        匹配评论到节点

        Args:
            index: 坐标索引（深度优先前序）
            comments: 评论列表

        Returns:
            与输入等长、同序的匹配结果
        """
        ...
