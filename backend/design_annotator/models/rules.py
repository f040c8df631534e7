"""
规则配置模型 - 遍历期间只读的配置快照

RuleConfiguration 为冻结模型：更新配置只能生成新快照，
进行中的遍历不会观察到部分修改。
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FrozenModel(BaseModel):
    """只读配置基类（接受 snake_case 与 camelCase 键，拒绝未知键）"""
    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# ============================================================================
# 自定义规则
# ============================================================================

class RuleCondition(FrozenModel):
    """规则条件（所有字段可选，隐式 AND；custom_condition 最后求值）"""
    node_type: str | tuple[str, ...] | None = None
    node_name: str | re.Pattern | None = None
    has_children: bool | None = None
    has_text: bool | None = None
    is_component: bool | None = None
    has_auto_layout: bool | None = None
    custom_condition: Callable[[Any], bool] | None = None

    def node_types(self) -> tuple[str, ...]:
        if self.node_type is None:
            return ()
        if isinstance(self.node_type, str):
            return (self.node_type,)
        return self.node_type


class EnhanceAction(FrozenModel):
    """字段合并：参数浅合并到注解节点"""
    kind: Literal["enhance"] = "enhance"
    parameters: dict[str, Any] = Field(default_factory=dict)


class TransformAction(FrozenModel):
    """变换：预留扩展点，当前不做任何修改"""
    kind: Literal["transform"] = "transform"
    parameters: dict[str, Any] = Field(default_factory=dict)


class CustomAction(FrozenModel):
    """外部回调：callback(node, context)"""
    kind: Literal["custom"] = "custom"
    callback: Callable[[Any, Any], Any]


RuleAction = Annotated[
    Union[EnhanceAction, TransformAction, CustomAction],
    Field(discriminator="kind"),
]


class CustomRule(FrozenModel):
    """自定义规则"""
    name: str
    description: str = ""
    condition: RuleCondition = Field(default_factory=RuleCondition)
    action: RuleAction
    priority: float = 0
    enabled: bool = True


# ============================================================================
# 子配置
# ============================================================================

class NodeTypeFilters(FrozenModel):
    """节点类型过滤"""
    include: frozenset[str] = frozenset()
    exclude: frozenset[str] = frozenset()
    prioritize: frozenset[str] = frozenset()


class AIOptimization(FrozenModel):
    """生成器开关"""
    enable_css_generation: bool = True
    enable_semantic_analysis: bool = True
    enable_accessibility_info: bool = True
    enable_responsive_breakpoints: bool = True
    enable_design_tokens: bool = True
    enable_component_variants: bool = True
    enable_interaction_states: bool = True
    simplify_complex_paths: bool = True
    optimize_for_code_generation: bool = True


class ContentEnhancement(FrozenModel):
    """内容增强（建议性开关，供下游消费）"""
    extract_text_content: bool = True
    analyze_image_content: bool = False
    detect_ui_patterns: bool = True
    identify_component_hierarchy: bool = True
    extract_layout_constraints: bool = True
    analyze_color_palettes: bool = True
    extract_typography_styles: bool = True
    detect_spacing_patterns: bool = True


class ContextReduction(FrozenModel):
    """上下文精简策略"""
    remove_redundant_properties: bool = True
    simplify_nested_structures: bool = True
    aggregate_similar_nodes: bool = False
    remove_empty_containers: bool = True
    limit_text_length: int = 1000
    compress_large_arrays: bool = True


class ReactOptimizations(FrozenModel):
    generate_jsx: bool = True
    use_styled_components: bool = False
    use_tailwind_css: bool = True
    generate_hooks: bool = True
    generate_prop_types: bool = False
    use_typescript: bool = True
    component_naming_convention: Literal["PascalCase", "camelCase"] = "PascalCase"
    generate_storybook: bool = False


class VueOptimizations(FrozenModel):
    generate_sfc: bool = True
    use_composition_api: bool = True
    use_scoped: bool = True
    generate_props: bool = True
    use_typescript: bool = True
    component_naming_convention: Literal["PascalCase", "kebab-case"] = "PascalCase"


class AngularOptimizations(FrozenModel):
    generate_component: bool = True
    use_standalone: bool = True
    generate_module: bool = False
    use_signals: bool = True
    use_typescript: bool = True
    component_naming_convention: Literal["PascalCase", "kebab-case"] = "PascalCase"


class SvelteOptimizations(FrozenModel):
    generate_svelte_component: bool = True
    use_typescript: bool = True
    use_stores: bool = False
    component_naming_convention: Literal["PascalCase", "kebab-case"] = "PascalCase"


class HTMLOptimizations(FrozenModel):
    generate_semantic_html: bool = True
    use_css: bool = True
    use_tailwind_css: bool = True
    generate_accessible_markup: bool = True
    use_modern_css: bool = True


class FrameworkOptimizations(FrozenModel):
    """各框架偏好（建议性，供代码生成方读取）"""
    react: ReactOptimizations = Field(default_factory=ReactOptimizations)
    vue: VueOptimizations = Field(default_factory=VueOptimizations)
    angular: AngularOptimizations = Field(default_factory=AngularOptimizations)
    svelte: SvelteOptimizations = Field(default_factory=SvelteOptimizations)
    html: HTMLOptimizations = Field(default_factory=HTMLOptimizations)


class RuleConfiguration(FrozenModel):
    """规则配置快照（默认值 ⊕ 环境 ⊕ 调用方覆盖）"""
    max_depth: int = 10
    include_hidden_nodes: bool = False
    include_locked_nodes: bool = True

    node_type_filters: NodeTypeFilters = Field(default_factory=NodeTypeFilters)
    ai_optimization: AIOptimization = Field(default_factory=AIOptimization)
    content_enhancement: ContentEnhancement = Field(default_factory=ContentEnhancement)
    context_reduction: ContextReduction = Field(default_factory=ContextReduction)
    framework_optimizations: FrameworkOptimizations = Field(
        default_factory=FrameworkOptimizations
    )

    custom_rules: tuple[CustomRule, ...] = ()
