"""
注解层 - 单节点的过滤、属性推导、规则应用与精简
"""

from .generators import (
    build_layout_context,
    color_to_css,
    detect_component_variants,
    detect_text_hierarchy,
    extract_design_tokens,
    generate_accessibility_info,
    generate_css_properties,
    generate_interaction_states,
    infer_semantic_role,
    map_axis_align,
)
from .node_filter import filter_tree, include
from .reducer import ContextReducer
from .rule_engine import CustomRuleEngine, condition_matches

__all__ = [
    "include",
    "filter_tree",
    "color_to_css",
    "map_axis_align",
    "generate_css_properties",
    "infer_semantic_role",
    "detect_text_hierarchy",
    "generate_accessibility_info",
    "extract_design_tokens",
    "detect_component_variants",
    "generate_interaction_states",
    "build_layout_context",
    "CustomRuleEngine",
    "condition_matches",
    "ContextReducer",
]
