"""
节点过滤器 - 判定节点是否参与注解

规则（任一命中即排除）：
1. 不可见且配置不允许隐藏节点
2. 已锁定且配置不允许锁定节点
3. 类型在排除集合内
4. 包含集合非空且类型不在其中

纯函数，无副作用，不抛异常。
"""

from __future__ import annotations

from ..models import DesignNode, RuleConfiguration


def include(node: DesignNode, config: RuleConfiguration) -> bool:
    """判断节点是否通过过滤"""
    if not config.include_hidden_nodes and node.visible is False:
        return False

    if not config.include_locked_nodes and node.locked is True:
        return False

    filters = config.node_type_filters
    if node.type in filters.exclude:
        return False

    if filters.include and node.type not in filters.include:
        return False

    return True


def filter_tree(node: DesignNode, config: RuleConfiguration) -> DesignNode | None:
    """剪除未通过过滤的子树，返回新树（根被排除时返回None）"""
    if not include(node, config):
        return None
    if node.children is None:
        return node.model_copy()
    kept = [c for c in (filter_tree(child, config) for child in node.children) if c is not None]
    return node.model_copy(update={"children": kept})
