"""
设计处理器 - 注解引擎对外入口

职责：
1. 持有只读规则快照（更新时整体替换）
2. 驱动树遍历并汇总统计
3. 评论匹配路径：注解树 → 坐标索引 → 评论匹配
4. 紧凑输出与节点 id 提取

使用方式：
    processor = DesignProcessor({"max_depth": 5}, environment="production")
    annotated = processor.process(raw_tree)
    instructions = processor.process_comments(annotated, comments)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..config import build_rule_configuration, get_config, merge_rules, validate_rules
from ..config.runtime_config import RuntimeConfig
from ..errors import RuleConfigurationError
from ..models import (
    AnnotatedNode,
    CommentInstruction,
    CommentRecord,
    DesignNode,
    ProcessingStats,
    RuleConfiguration,
    TraversalContext,
)
from ..spatial import CommentMatcher, build_bounds_index
from .compact import compact_node
from .walker import TreeWalker, WalkResult

logger = logging.getLogger(__name__)


def _to_comment(raw: CommentRecord | Mapping[str, Any]) -> CommentRecord:
    if isinstance(raw, CommentRecord):
        return raw
    if "client_meta" in raw or "user" in raw:
        return CommentRecord.from_api(dict(raw))
    return CommentRecord.model_validate(raw)


class DesignProcessor:
    """设计处理器"""

    def __init__(
        self,
        rules: RuleConfiguration | Mapping[str, Any] | None = None,
        *,
        environment: str | None = None,
        runtime: RuntimeConfig | None = None,
    ):
        self.runtime = runtime or get_config()
        self.rules = build_rule_configuration(rules, environment=environment, runtime=self.runtime)
        self.stats = ProcessingStats()
        self.matcher = CommentMatcher(self.runtime.comments)

    def process(
        self,
        tree: DesignNode | Mapping[str, Any],
        context: TraversalContext | None = None,
    ) -> AnnotatedNode:
        """
        注解整棵设计树

        Args:
            tree: 原始节点树（字典或 DesignNode）
            context: 遍历上下文（文件 key、目标框架等）

        Returns:
            与源树同形的注解树（失败节点以占位节点替代）

        Raises:
            pydantic.ValidationError: 原始输入无法解析为节点
        """
        return self.process_with_stats(tree, context).root

    def process_with_stats(
        self,
        tree: DesignNode | Mapping[str, Any],
        context: TraversalContext | None = None,
    ) -> WalkResult:
        """注解整棵设计树，同时返回本次调用的统计记录"""
        root = tree if isinstance(tree, DesignNode) else DesignNode.model_validate(tree)
        result = TreeWalker(self.rules).walk(root, context)
        # 整体替换，get_stats 只会看到某次完整遍历的结果
        self.stats = result.stats.model_copy(deep=True)
        logger.info(
            f"注解完成: {root.id} 处理={result.stats.nodes_processed} "
            f"增强={result.stats.nodes_enhanced} 规则={result.stats.rules_applied} "
            f"耗时={result.stats.processing_time_ms:.1f}ms"
        )
        return result

    def update_rules(self, overrides: RuleConfiguration | Mapping[str, Any]) -> RuleConfiguration:
        """合并覆盖项并整体替换规则快照"""
        rules = merge_rules(self.rules, overrides)
        problems = validate_rules(rules)
        if problems:
            raise RuleConfigurationError(problems)
        self.rules = rules
        return rules

    def get_stats(self) -> ProcessingStats:
        """最近一次完成遍历的统计快照（副本）"""
        return self.stats.model_copy(deep=True)

    def reset_stats(self) -> None:
        self.stats = ProcessingStats()

    def process_comments(
        self,
        annotated: AnnotatedNode,
        comments: Iterable[CommentRecord | Mapping[str, Any]],
    ) -> list[CommentInstruction]:
        """把评论匹配到注解树节点（输出顺序与输入一致）"""
        records = [_to_comment(c) for c in comments]
        index = build_bounds_index(annotated)
        logger.debug(f"坐标索引: {len(index)} 个节点, 评论 {len(records)} 条")
        return self.matcher.match(index, records)

    def optimize_for_ai(
        self,
        annotated: AnnotatedNode,
        instructions: Iterable[CommentInstruction] | None = None,
    ) -> dict[str, Any]:
        """紧凑输出（评论指令按目标节点挂载）"""
        by_node: dict[str, list[CommentInstruction]] = {}
        for instruction in instructions or []:
            if instruction.target_node_id:
                by_node.setdefault(instruction.target_node_id, []).append(instruction)
        return compact_node(annotated, by_node)

    @staticmethod
    def extract_all_node_ids(node: DesignNode) -> list[str]:
        """前序提取所有节点 id（含自身）"""
        return [node.id] + [d.id for d in node.iter_descendants()]
