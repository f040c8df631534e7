"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- DesignNode: 设计工具导出的原始节点
- AnnotatedNode: 附加派生字段的注解节点
- RuleConfiguration: 规则配置快照（只读）
- ProcessingStats / TraversalContext: 遍历统计与上下文
- CommentRecord / BoundsEntry / CommentInstruction: 评论匹配
"""

from .annotated import (
    IDENTITY_FIELDS,
    AccessibilityInfo,
    AnnotatedNode,
    Animation,
    ComponentVariant,
    DesignToken,
    InteractionState,
    LayoutContext,
    SemanticRole,
)
from .comment import BoundsEntry, CommentInstruction, CommentRecord
from .node import (
    COMPONENT_TYPES,
    Color,
    DesignNode,
    Effect,
    NodeType,
    Paint,
    Rect,
    StrokeWeights,
    TypeStyle,
    Vector,
)
from .rules import (
    AIOptimization,
    ContentEnhancement,
    ContextReduction,
    CustomAction,
    CustomRule,
    EnhanceAction,
    FrameworkOptimizations,
    NodeTypeFilters,
    RuleAction,
    RuleCondition,
    RuleConfiguration,
    TransformAction,
)
from .stats import ProcessingStats, TraversalContext

__all__ = [
    "IDENTITY_FIELDS",
    "COMPONENT_TYPES",
    "NodeType",
    "Color",
    "Vector",
    "Rect",
    "Paint",
    "Effect",
    "TypeStyle",
    "StrokeWeights",
    "DesignNode",
    "AnnotatedNode",
    "SemanticRole",
    "AccessibilityInfo",
    "DesignToken",
    "ComponentVariant",
    "Animation",
    "InteractionState",
    "LayoutContext",
    "RuleConfiguration",
    "RuleCondition",
    "RuleAction",
    "EnhanceAction",
    "TransformAction",
    "CustomAction",
    "CustomRule",
    "NodeTypeFilters",
    "AIOptimization",
    "ContentEnhancement",
    "ContextReduction",
    "FrameworkOptimizations",
    "ProcessingStats",
    "TraversalContext",
    "CommentRecord",
    "BoundsEntry",
    "CommentInstruction",
]
