"""
自定义规则引擎 - 按优先级对注解节点应用规则

流程：
1. 选出启用且条件命中的规则（谓词隐式 AND，custom_condition 最后求值）
2. 按优先级降序稳定排序（同优先级保持声明顺序）
3. 逐条执行动作，单条失败只记录错误，不影响后续规则

结构谓词（has_children / has_text）读取源节点：规则执行时注解节点尚未挂载子节点。
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from ..interfaces import IRuleEngine
from ..models import (
    AnnotatedNode,
    CustomAction,
    CustomRule,
    DesignNode,
    EnhanceAction,
    NodeType,
    ProcessingStats,
    RuleCondition,
    TransformAction,
    TraversalContext,
)

logger = logging.getLogger(__name__)


def _has_text(node: DesignNode) -> bool:
    if node.type == NodeType.TEXT.value:
        return True
    return any(d.type == NodeType.TEXT.value for d in node.iter_descendants())


def condition_matches(condition: RuleCondition, node: DesignNode) -> bool:
    """判断源节点是否满足规则条件"""
    types = condition.node_types()
    if types and node.type not in types:
        return False

    if condition.node_name is not None:
        name = node.name or ""
        if isinstance(condition.node_name, re.Pattern):
            if not condition.node_name.search(name):
                return False
        elif condition.node_name.lower() not in name.lower():
            return False

    if condition.has_children is not None and condition.has_children != node.has_children:
        return False

    if condition.has_text is not None and condition.has_text != _has_text(node):
        return False

    if condition.is_component is not None and condition.is_component != node.is_component:
        return False

    if condition.has_auto_layout is not None and condition.has_auto_layout != node.has_auto_layout:
        return False

    if condition.custom_condition is not None and not condition.custom_condition(node):
        return False

    return True


class CustomRuleEngine(IRuleEngine):
    """自定义规则引擎"""

    def __init__(self, rules: Iterable[CustomRule]):
        self.rules = tuple(rules)

    def matching_rules(self, node: DesignNode, stats: ProcessingStats | None = None) -> list[CustomRule]:
        """命中的规则（优先级降序，稳定排序）；条件求值失败的规则视为未命中"""
        matched = []
        for rule in self.rules:
            if not rule.enabled:
                continue
            try:
                hit = condition_matches(rule.condition, node)
            except Exception as e:
                message = f'Error evaluating rule "{rule.name}": {e}'
                if stats is not None:
                    stats.add_error(message)
                logger.warning(f"规则条件求值失败 [{node.id}]: {message}")
                continue
            if hit:
                matched.append(rule)
        return sorted(matched, key=lambda r: r.priority, reverse=True)

    def apply(
        self,
        annotated: AnnotatedNode,
        source: DesignNode,
        context: TraversalContext,
        stats: ProcessingStats,
    ) -> AnnotatedNode:
        """依次应用命中规则，返回（可能被回调替换的）注解节点"""
        for rule in self.matching_rules(source, stats):
            try:
                annotated = self._apply_action(rule, annotated, context)
                stats.rules_applied += 1
            except Exception as e:
                message = f'Error applying rule "{rule.name}": {e}'
                stats.add_error(message)
                logger.warning(f"规则执行失败 [{annotated.id}]: {message}")
        return annotated

    def _apply_action(
        self,
        rule: CustomRule,
        annotated: AnnotatedNode,
        context: TraversalContext,
    ) -> AnnotatedNode:
        action = rule.action
        if isinstance(action, EnhanceAction):
            self._enhance(annotated, action.parameters)
        elif isinstance(action, TransformAction):
            # 预留扩展点
            logger.debug(f"变换规则 {rule.name} 未做修改")
        elif isinstance(action, CustomAction):
            result = action.callback(annotated, context)
            if isinstance(result, AnnotatedNode):
                return result
        return annotated

    @staticmethod
    def _enhance(annotated: AnnotatedNode, parameters: dict[str, Any]) -> None:
        """浅合并：已知字段经校验赋值，未知键作为附加字段保存"""
        for key, value in parameters.items():
            field = annotated.resolve_field(key)
            setattr(annotated, field or key, value)
