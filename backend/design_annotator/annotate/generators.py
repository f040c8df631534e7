"""
属性生成器 - 从单个节点 + 上下文推导注解字段

职责：
1. 样式推导（尺寸/自动布局/内边距/背景/圆角/描边/文本/阴影）
2. 语义角色推断（关键词表，先命中先得）
3. 无障碍信息（依赖语义角色）
4. 设计令牌提取（颜色/字体/间距/阴影/边框）
5. 组件变体识别
6. 交互状态合成（按语义角色给出示例默认值）

所有生成器为纯函数，缺少可选字段时返回空结果而非报错。
语义角色与令牌均为启发式匹配，不保证分类正确；误判通过自定义规则修正。

测试要点：
- test_color_to_css: 颜色转换
- test_text_hierarchy_boundaries: 字号阈值边界
- test_role_case_insensitive: 角色推断大小写无关
"""

from __future__ import annotations

import re

from ..models import (
    AccessibilityInfo,
    Animation,
    Color,
    ComponentVariant,
    DesignNode,
    DesignToken,
    Effect,
    InteractionState,
    LayoutContext,
    NodeType,
    SemanticRole,
    TraversalContext,
)

DEFAULT_SHADOW_COLOR = "rgba(0,0,0,0.25)"

# 主轴/交叉轴对齐映射
AXIS_ALIGN_MAP: dict[str, str] = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
    "SPACE_BETWEEN": "space-between",
}

# 名称关键词 -> (角色, 用途)，按顺序匹配，先命中先得
ROLE_KEYWORD_TABLE: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (("button", "btn"), "button", "interactive"),
    (("input", "field", "textbox"), "input", "data-entry"),
    (("nav", "menu", "header"), "navigation", "navigation"),
)

# 字号下限 -> 文本层级
TEXT_HIERARCHY_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (32, 1),
    (24, 2),
    (20, 3),
    (18, 4),
    (16, 5),
)

CONTAINER_TYPES = frozenset({NodeType.FRAME.value, NodeType.GROUP.value})

# 设计工具自动命名（如 "Rectangle 12"），这类名称不作为无障碍标签
AUTO_NAME_PATTERN = re.compile(
    r"(Rectangle|Ellipse|Vector|Line|Polygon|Star|Frame|Group)( \d+)?"
)

ARIA_ROLE_MAP: dict[str, str] = {
    "button": "button",
    "input": "textbox",
    "navigation": "navigation",
    "image": "img",
}


# ============================================================================
# 工具函数
# ============================================================================

def format_number(value: float) -> str:
    """整数值不带小数部分（100.0 -> "100"）"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def px(value: float) -> str:
    return f"{format_number(value)}px"


def color_to_css(color: Color) -> str:
    """颜色转CSS：a==1 输出 rgb，否则 rgba（alpha 不取整）"""
    r = round(color.r * 255)
    g = round(color.g * 255)
    b = round(color.b * 255)
    if color.a == 1:
        return f"rgb({r}, {g}, {b})"
    return f"rgba({r}, {g}, {b}, {format_number(color.a)})"


def map_axis_align(align: str | None) -> str:
    return AXIS_ALIGN_MAP.get(align or "", "flex-start")


def _first_solid(paints) -> Color | None:
    for paint in paints or []:
        if paint.type == "SOLID" and paint.color is not None:
            return paint.color
    return None


def _shadow_value(effect: Effect) -> str:
    x = effect.offset.x if effect.offset else 0
    y = effect.offset.y if effect.offset else 0
    blur = effect.radius or 0
    spread = effect.spread or 0
    color = color_to_css(effect.color) if effect.color else DEFAULT_SHADOW_COLOR
    return f"{px(x)} {px(y)} {px(blur)} {px(spread)} {color}"


def _visible_effects(node: DesignNode, effect_type: str) -> list[Effect]:
    return [e for e in node.effects or [] if e.type == effect_type and e.visible is not False]


# ============================================================================
# 样式推导
# ============================================================================

def generate_css_properties(node: DesignNode, context: TraversalContext | None = None) -> dict[str, str]:
    """推导样式映射（键顺序即插入顺序）"""
    css: dict[str, str] = {}

    box = node.absolute_bounding_box
    if box is not None:
        css["width"] = px(box.width)
        css["height"] = px(box.height)

    if node.has_auto_layout:
        css["display"] = "flex"
        css["flexDirection"] = "row" if node.layout_mode == "HORIZONTAL" else "column"
        if node.primary_axis_align_items:
            css["justifyContent"] = map_axis_align(node.primary_axis_align_items)
        if node.counter_axis_align_items:
            css["alignItems"] = map_axis_align(node.counter_axis_align_items)
        if node.item_spacing:
            css["gap"] = px(node.item_spacing)

    if node.has_padding():
        css["padding"] = " ".join(px(side) for side in node.padding_sides())

    background = _first_solid(node.fills)
    if background is not None:
        css["backgroundColor"] = color_to_css(background)

    if node.corner_radius is not None:
        css["borderRadius"] = px(node.corner_radius)
    elif node.rectangle_corner_radii and len(node.rectangle_corner_radii) == 4:
        css["borderRadius"] = " ".join(px(r) for r in node.rectangle_corner_radii)

    _apply_strokes(node, css)

    if node.opacity is not None and node.opacity < 1:
        css["opacity"] = format_number(node.opacity)

    if node.type == NodeType.TEXT.value and node.style is not None:
        style = node.style
        if style.font_size is not None:
            css["fontSize"] = px(style.font_size)
        if style.font_family:
            css["fontFamily"] = style.font_family
        if style.line_height_px is not None:
            css["lineHeight"] = px(style.line_height_px)
        if style.letter_spacing is not None:
            css["letterSpacing"] = px(style.letter_spacing)
        text_color = _first_solid(style.fills)
        if text_color is not None:
            css["color"] = color_to_css(text_color)

    _apply_effects(node, css)
    return css


def _apply_strokes(node: DesignNode, css: dict[str, str]) -> None:
    stroke = node.strokes[0] if node.strokes else None
    if stroke is None or stroke.type != "SOLID" or stroke.color is None:
        return

    weight = node.stroke_weight or 1
    color = color_to_css(stroke.color)
    if node.stroke_align == "INSIDE":
        css["boxShadow"] = f"inset 0 0 0 {px(weight)} {color}"
    elif node.stroke_align == "OUTSIDE":
        css["boxShadow"] = f"0 0 0 {px(weight)} {color}"
    else:
        css["border"] = f"{px(weight)} solid {color}"

    sides = node.individual_stroke_weights
    if sides is not None:
        for key, value in (
            ("borderTop", sides.top),
            ("borderRight", sides.right),
            ("borderBottom", sides.bottom),
            ("borderLeft", sides.left),
        ):
            css[key] = f"{px(value)} solid {color}" if value > 0 else "none"

    if node.stroke_dashes:
        css["borderStyle"] = "dashed"


def _apply_effects(node: DesignNode, css: dict[str, str]) -> None:
    inner = [f"inset {_shadow_value(e)}" for e in _visible_effects(node, "INNER_SHADOW")]
    drop = [_shadow_value(e) for e in _visible_effects(node, "DROP_SHADOW")]
    shadows = inner + drop
    if shadows:
        joined = ", ".join(shadows)
        css["boxShadow"] = f"{css['boxShadow']}, {joined}" if "boxShadow" in css else joined

    layer_blur = _visible_effects(node, "LAYER_BLUR")
    if layer_blur:
        css["filter"] = f"blur({px(layer_blur[-1].radius or 0)})"
    background_blur = _visible_effects(node, "BACKGROUND_BLUR")
    if background_blur:
        css["backdropFilter"] = f"blur({px(background_blur[-1].radius or 0)})"


# ============================================================================
# 语义角色
# ============================================================================

def detect_text_hierarchy(node: DesignNode) -> int | None:
    """按字号推断文本层级（1-6），非文本或无字号返回None"""
    if node.type != NodeType.TEXT.value or node.style is None or node.style.font_size is None:
        return None
    font_size = node.style.font_size
    for threshold, level in TEXT_HIERARCHY_THRESHOLDS:
        if font_size >= threshold:
            return level
    return 6


def infer_semantic_role(node: DesignNode, context: TraversalContext | None = None) -> SemanticRole | None:
    """推断语义角色（尽力而为的启发式分类）"""
    name = (node.name or "").lower()

    for keywords, role, purpose in ROLE_KEYWORD_TABLE:
        if any(k in name for k in keywords):
            return SemanticRole(type=role, purpose=purpose)

    if node.type == NodeType.TEXT.value:
        return SemanticRole(type="text", hierarchy=detect_text_hierarchy(node) or 6)

    if node.type in CONTAINER_TYPES and node.has_children:
        return SemanticRole(type="container", purpose="layout")

    return None


# ============================================================================
# 无障碍
# ============================================================================

def generate_accessibility_info(node: DesignNode, role: SemanticRole | None) -> AccessibilityInfo:
    """根据名称与已推断的语义角色生成无障碍信息"""
    info = AccessibilityInfo()

    if node.name and not AUTO_NAME_PATTERN.fullmatch(node.name):
        info.aria_label = node.name

    role_type = role.type if role is not None else None
    if role_type in ("button", "input"):
        info.focusable = True
        info.tab_index = 0

    aria_role = ARIA_ROLE_MAP.get(role_type or "")
    if aria_role:
        info.aria_role = aria_role
        if role_type == "image":
            info.alt_text = node.name

    return info


# ============================================================================
# 设计令牌
# ============================================================================

def extract_design_tokens(node: DesignNode, context: TraversalContext | None = None) -> list[DesignToken]:
    """提取设计令牌（跨节点不去重）"""
    tokens: list[DesignToken] = []
    name = node.name

    for index, fill in enumerate(node.fills or []):
        if fill.type == "SOLID" and fill.color is not None:
            tokens.append(DesignToken(
                name=f"{name}-fill-{index}",
                value=color_to_css(fill.color),
                type="color",
                category="background",
            ))

    if node.type == NodeType.TEXT.value and node.style is not None:
        if node.style.font_size is not None:
            tokens.append(DesignToken(
                name=f"{name}-font-size",
                value=px(node.style.font_size),
                type="typography",
                category="font-size",
            ))
        if node.style.line_height_px is not None:
            tokens.append(DesignToken(
                name=f"{name}-line-height",
                value=px(node.style.line_height_px),
                type="typography",
                category="line-height",
            ))

    if node.has_padding():
        tokens.append(DesignToken(
            name=f"{name}-padding",
            value=" ".join(px(side) for side in node.padding_sides()),
            type="spacing",
            category="padding",
        ))

    for index, shadow in enumerate(_visible_effects(node, "DROP_SHADOW")):
        tokens.append(DesignToken(
            name=f"{name}-drop-shadow-{index}",
            value=_shadow_value(shadow),
            type="shadow",
            category="drop-shadow",
        ))
    for index, shadow in enumerate(_visible_effects(node, "INNER_SHADOW")):
        tokens.append(DesignToken(
            name=f"{name}-inner-shadow-{index}",
            value=f"inset {_shadow_value(shadow)}",
            type="shadow",
            category="inner-shadow",
        ))

    stroke = node.strokes[0] if node.strokes else None
    if stroke is not None and node.stroke_weight and stroke.type == "SOLID" and stroke.color:
        tokens.append(DesignToken(
            name=f"{name}-border",
            value=f"{px(node.stroke_weight)} solid {color_to_css(stroke.color)}",
            type="border",
            category="stroke",
        ))

    if node.corner_radius is not None:
        tokens.append(DesignToken(
            name=f"{name}-border-radius",
            value=px(node.corner_radius),
            type="border",
            category="radius",
        ))

    return tokens


# ============================================================================
# 组件变体与交互状态
# ============================================================================

def detect_component_variants(node: DesignNode, context: TraversalContext | None = None) -> list[ComponentVariant]:
    """组件/实例：默认变体 + 名称包含 hover/disabled 时追加"""
    if not node.is_component:
        return []

    variants = [ComponentVariant(name="default", properties={}, state="default")]
    name = (node.name or "").lower()
    for state in ("hover", "disabled"):
        if state in name:
            variants.append(ComponentVariant(name=state, properties={"state": state}, state=state))
    return variants


def generate_interaction_states(role: SemanticRole | None) -> list[InteractionState]:
    """按语义角色给出示例交互状态（非从源节点推断）"""
    if role is None:
        return []

    if role.type == "button":
        return [
            InteractionState(
                trigger="hover",
                changes={"opacity": "0.8"},
                animation=Animation(duration="0.2s", easing="ease-in-out"),
            ),
            InteractionState(
                trigger="click",
                changes={"transform": "scale(0.95)"},
                animation=Animation(duration="0.1s", easing="ease-in-out"),
            ),
        ]

    if role.type == "input":
        return [
            InteractionState(
                trigger="focus",
                changes={
                    "borderColor": "#007AFF",
                    "boxShadow": "0 0 0 2px rgba(0, 122, 255, 0.2)",
                },
                animation=Animation(duration="0.2s", easing="ease-in-out"),
            )
        ]

    return []


# ============================================================================
# 布局上下文
# ============================================================================

def build_layout_context(node: DesignNode, context: TraversalContext) -> LayoutContext:
    """父类型、兄弟数与位置标记；父节点为自动布局时记录 flex 顺序"""
    total = context.total_siblings
    index = context.sibling_index
    if total <= 1:
        position = "only"
    elif index == 0:
        position = "first"
    elif index == total - 1:
        position = "last"
    else:
        position = "middle"

    return LayoutContext(
        parent_type=context.parent_type or NodeType.DOCUMENT.value,
        sibling_count=total,
        position=position,
        grid_area=None,
        flex_order=index if context.parent_has_auto_layout else None,
    )
