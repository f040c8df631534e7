"""
生成器阶段定义

职责：
1. 定义单节点注解时各生成器的名称、写入字段与开关
2. 固定执行顺序：样式 → 语义 → 无障碍 → 令牌 → 变体 → 交互

语义角色在阶段执行前统一推断一次，无障碍与交互阶段复用该结果
（即使语义阶段被关闭，也只是不写入 semantic_role 字段）。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from ..annotate import (
    detect_component_variants,
    extract_design_tokens,
    generate_accessibility_info,
    generate_css_properties,
    generate_interaction_states,
)
from ..models import AIOptimization, DesignNode, SemanticRole, TraversalContext

StageHandler = Callable[[DesignNode, TraversalContext, "SemanticRole | None"], Any]


class StageEnum(str, Enum):
    """生成器阶段枚举"""
    STYLE = "STYLE"
    SEMANTIC_ROLE = "SEMANTIC_ROLE"
    ACCESSIBILITY = "ACCESSIBILITY"
    DESIGN_TOKENS = "DESIGN_TOKENS"
    COMPONENT_VARIANTS = "COMPONENT_VARIANTS"
    INTERACTION_STATES = "INTERACTION_STATES"


@dataclass
class GeneratorStage:
    """生成器阶段"""
    name: str
    field: str   # 写入的注解字段
    toggle: str  # AIOptimization 开关名
    handler: StageHandler

    def enabled(self, flags: AIOptimization) -> bool:
        return bool(getattr(flags, self.toggle, False))

    def execute(self, node: DesignNode, context: TraversalContext, role: SemanticRole | None) -> Any:
        """执行阶段，返回写入字段的值"""
        return self.handler(node, context, role)


GENERATOR_STAGES: list[GeneratorStage] = [
    GeneratorStage(
        StageEnum.STYLE.value, "css_properties", "enable_css_generation",
        lambda node, ctx, role: generate_css_properties(node, ctx),
    ),
    GeneratorStage(
        StageEnum.SEMANTIC_ROLE.value, "semantic_role", "enable_semantic_analysis",
        lambda node, ctx, role: role,
    ),
    GeneratorStage(
        StageEnum.ACCESSIBILITY.value, "accessibility_info", "enable_accessibility_info",
        lambda node, ctx, role: generate_accessibility_info(node, role),
    ),
    GeneratorStage(
        StageEnum.DESIGN_TOKENS.value, "design_tokens", "enable_design_tokens",
        lambda node, ctx, role: extract_design_tokens(node, ctx),
    ),
    GeneratorStage(
        StageEnum.COMPONENT_VARIANTS.value, "component_variants", "enable_component_variants",
        lambda node, ctx, role: detect_component_variants(node, ctx),
    ),
    GeneratorStage(
        StageEnum.INTERACTION_STATES.value, "interaction_states", "enable_interaction_states",
        lambda node, ctx, role: generate_interaction_states(role),
    ),
]
