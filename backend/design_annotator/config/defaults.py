"""
默认规则 - 内置规则配置与环境档位

DEFAULT_RULES 为所有配置合并的起点；get_environment_rules 按运行环境
返回覆盖项（production 收紧深度与文本长度，development 放宽并关闭精简）。
"""

from __future__ import annotations

from typing import Any

from ..models import (
    CustomRule,
    DesignNode,
    EnhanceAction,
    NodeTypeFilters,
    RuleCondition,
    RuleConfiguration,
)


def _name_contains(node: DesignNode, *keywords: str) -> bool:
    name = (node.name or "").lower()
    return any(k in name for k in keywords)


def _looks_like_button(node: DesignNode) -> bool:
    if _name_contains(node, "button", "btn"):
        return True
    has_text_child = any(child.type == "TEXT" for child in node.children or [])
    return has_text_child and bool(node.fills)


def _looks_like_input(node: DesignNode) -> bool:
    return _name_contains(node, "input", "field", "textbox", "search")


def _looks_like_navigation(node: DesignNode) -> bool:
    return _name_contains(node, "nav", "menu", "header", "sidebar")


def _looks_like_card(node: DesignNode) -> bool:
    if _name_contains(node, "card"):
        return True
    has_background = bool(node.fills)
    has_rounded_corners = bool(node.corner_radius and node.corner_radius > 0)
    has_shadow = any(e.type == "DROP_SHADOW" for e in node.effects or [])
    return has_background and has_rounded_corners and has_shadow


def _looks_like_icon(node: DesignNode) -> bool:
    if _name_contains(node, "icon", "ico"):
        return True
    box = node.absolute_bounding_box
    return box is not None and box.width <= 32 and box.height <= 32


DEFAULT_CUSTOM_RULES: tuple[CustomRule, ...] = (
    CustomRule(
        name="Button Detection",
        description="Detect and enhance button-like components",
        condition=RuleCondition(
            node_type=("FRAME", "COMPONENT", "INSTANCE"),
            custom_condition=_looks_like_button,
        ),
        action=EnhanceAction(
            parameters={
                "semanticRole": {"type": "button", "purpose": "interactive"},
                "accessibilityInfo": {"ariaRole": "button", "focusable": True},
                "interactionStates": [
                    {"trigger": "hover", "changes": {"opacity": "0.8"}},
                    {"trigger": "active", "changes": {"transform": "scale(0.95)"}},
                ],
            }
        ),
        priority=10,
    ),
    CustomRule(
        name="Input Field Detection",
        description="Detect and enhance input field components",
        condition=RuleCondition(
            node_type=("FRAME", "COMPONENT", "INSTANCE"),
            custom_condition=_looks_like_input,
        ),
        action=EnhanceAction(
            parameters={
                "semanticRole": {"type": "input", "purpose": "data-entry"},
                "accessibilityInfo": {"ariaRole": "textbox", "focusable": True},
                "interactionStates": [
                    {
                        "trigger": "focus",
                        "changes": {
                            "borderColor": "#007AFF",
                            "boxShadow": "0 0 0 2px rgba(0, 122, 255, 0.2)",
                        },
                    }
                ],
            }
        ),
        priority=9,
    ),
    CustomRule(
        name="Navigation Detection",
        description="Detect and enhance navigation components",
        condition=RuleCondition(
            node_type=("FRAME", "GROUP"),
            custom_condition=_looks_like_navigation,
        ),
        action=EnhanceAction(
            parameters={
                "semanticRole": {"type": "navigation", "purpose": "navigation"},
                "accessibilityInfo": {"ariaRole": "navigation"},
            }
        ),
        priority=8,
    ),
    CustomRule(
        name="Card Component Detection",
        description="Detect and enhance card-like components",
        condition=RuleCondition(
            node_type=("FRAME", "COMPONENT", "INSTANCE"),
            custom_condition=_looks_like_card,
        ),
        action=EnhanceAction(
            parameters={
                "semanticRole": {"type": "container", "purpose": "card"},
                "cssProperties": {
                    "display": "block",
                    "borderRadius": "var(--border-radius-md)",
                    "boxShadow": "var(--shadow-sm)",
                    "backgroundColor": "var(--color-surface)",
                    "padding": "var(--spacing-md)",
                },
            }
        ),
        priority=7,
    ),
    CustomRule(
        name="Icon Detection",
        description="Detect and enhance icon components",
        condition=RuleCondition(
            node_type=("VECTOR", "GROUP", "BOOLEAN_OPERATION"),
            custom_condition=_looks_like_icon,
        ),
        action=EnhanceAction(
            parameters={
                "semanticRole": {"type": "image", "purpose": "icon"},
                "accessibilityInfo": {"ariaRole": "img"},
                "cssProperties": {
                    "display": "inline-block",
                    "width": "1em",
                    "height": "1em",
                    "fill": "currentColor",
                },
            }
        ),
        priority=6,
    ),
)


DEFAULT_RULES = RuleConfiguration(
    max_depth=10,
    include_hidden_nodes=False,
    include_locked_nodes=True,
    node_type_filters=NodeTypeFilters(
        include=frozenset({
            "DOCUMENT", "CANVAS", "FRAME", "GROUP", "TEXT", "RECTANGLE",
            "ELLIPSE", "VECTOR", "COMPONENT", "INSTANCE", "BOOLEAN_OPERATION",
            "STAR", "LINE", "REGULAR_POLYGON",
        }),
        exclude=frozenset({"SLICE", "STICKY"}),
        prioritize=frozenset({
            "DOCUMENT", "CANVAS", "FRAME", "COMPONENT", "INSTANCE", "TEXT",
        }),
    ),
    custom_rules=DEFAULT_CUSTOM_RULES,
)


# 环境档位覆盖项
_ENVIRONMENT_PROFILES: dict[str, dict[str, Any]] = {
    "production": {
        "max_depth": 8,
        "context_reduction": {
            "remove_redundant_properties": True,
            "simplify_nested_structures": True,
            "aggregate_similar_nodes": True,
            "remove_empty_containers": True,
            "limit_text_length": 500,
            "compress_large_arrays": True,
        },
    },
    "development": {
        "max_depth": 15,
        "include_hidden_nodes": True,
        "context_reduction": {
            "remove_redundant_properties": False,
            "simplify_nested_structures": False,
            "aggregate_similar_nodes": False,
            "remove_empty_containers": False,
            "limit_text_length": 2000,
            "compress_large_arrays": False,
        },
    },
}


def get_environment_rules(environment: str | None) -> dict[str, Any]:
    """按运行环境获取覆盖项（未知环境返回空覆盖）"""
    profile = _ENVIRONMENT_PROFILES.get((environment or "").lower(), {})
    return {k: (dict(v) if isinstance(v, dict) else v) for k, v in profile.items()}
