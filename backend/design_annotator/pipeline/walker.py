"""
树遍历器 - 递归注解整棵设计树

单节点流程：
1. 深度超限 → 占位子树 + 一条告警
2. 过滤未通过 → 占位子树
3. 构建注解外壳 → 生成器阶段（固定顺序）→ 自定义规则
4. 按顺序递归子节点 → 上下文精简

失败隔离：节点边界上的异常记录为错误并以占位子树替代，
调用方总能拿到与源树同形的结果（子节点数一致）。

测试要点：
- test_shape_preserved: 同形输出
- test_depth_limit: 深度超限只告警一次
- test_node_failure_isolation: 单节点失败不影响兄弟节点
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from ..annotate import ContextReducer, CustomRuleEngine, build_layout_context, include, infer_semantic_role
from ..interfaces import ITreeWalker
from ..models import (
    AnnotatedNode,
    DesignNode,
    ProcessingStats,
    RuleConfiguration,
    TraversalContext,
)
from .stages import GENERATOR_STAGES, GeneratorStage

logger = logging.getLogger(__name__)


@dataclass
class WalkResult:
    """遍历结果"""
    root: AnnotatedNode
    stats: ProcessingStats


def build_stub_tree(node: DesignNode) -> AnnotatedNode:
    """同形占位子树（仅标识字段），迭代构建"""
    root = AnnotatedNode.stub(node, [] if node.children is not None else None)
    stack = [(node, root)]
    while stack:
        source, target = stack.pop()
        for child in source.children or []:
            stub = AnnotatedNode.stub(child, [] if child.children is not None else None)
            target.children.append(stub)
            stack.append((child, stub))
    return root


class TreeWalker(ITreeWalker):
    """树遍历器"""

    def __init__(
        self,
        rules: RuleConfiguration,
        stages: list[GeneratorStage] | None = None,
    ):
        self.rules = rules
        self.stages = stages if stages is not None else GENERATOR_STAGES
        self.rule_engine = CustomRuleEngine(rules.custom_rules)
        self.reducer = ContextReducer(rules.context_reduction)

    def walk(self, root: DesignNode, context: TraversalContext | None = None) -> WalkResult:
        """遍历整棵树（统计记录按调用独立创建，并发遍历互不干扰）"""
        stats = ProcessingStats()
        start = time.perf_counter()
        try:
            annotated = self._visit(root, context or TraversalContext(), stats)
        finally:
            stats.processing_time_ms = (time.perf_counter() - start) * 1000

        if stats.degraded:
            logger.info(
                f"遍历完成（降级）: 节点={stats.nodes_processed}, "
                f"错误={len(stats.errors)}, 告警={len(stats.warnings)}"
            )
        return WalkResult(root=annotated, stats=stats)

    def _visit(
        self, node: DesignNode, context: TraversalContext, stats: ProcessingStats
    ) -> AnnotatedNode:
        stats.nodes_processed += 1
        try:
            if context.depth > self.rules.max_depth:
                message = f"Max depth exceeded for node {node.id}"
                stats.add_warning(message)
                logger.warning(message)
                return build_stub_tree(node)

            if not include(node, self.rules):
                return build_stub_tree(node)

            annotated = self._annotate(node, context, stats)

            if node.children is not None:
                total = len(node.children)
                annotated.children = [
                    self._visit(
                        child,
                        context.child(index, total, node.type, node.name, node.has_auto_layout),
                        stats,
                    )
                    for index, child in enumerate(node.children)
                ]

            annotated = self.reducer.reduce(annotated)
            stats.nodes_enhanced += 1
            return annotated

        except Exception as e:
            message = f"Error processing node {node.id}: {e}"
            stats.add_error(message)
            logger.warning(message)
            return build_stub_tree(node)

    def _annotate(
        self, node: DesignNode, context: TraversalContext, stats: ProcessingStats
    ) -> AnnotatedNode:
        """外壳 + 生成器阶段 + 自定义规则（不含子节点）"""
        annotated = AnnotatedNode.shell(node, build_layout_context(node, context))
        role = infer_semantic_role(node, context)

        for stage in self.stages:
            if stage.enabled(self.rules.ai_optimization):
                setattr(annotated, stage.field, stage.execute(node, context, role))

        return self.rule_engine.apply(annotated, node, context, stats)
