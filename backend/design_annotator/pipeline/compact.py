"""
精简输出 - 面向代码生成的紧凑结构

只保留开发相关信息：标识、包围盒、核心样式、可导出图片、语义、
无障碍、令牌、交互、文本与文本样式、布局摘要、评论指令。
"""

from __future__ import annotations

from typing import Any

from ..models import AnnotatedNode, CommentInstruction, NodeType

ESSENTIAL_CSS = (
    "width", "height", "padding", "margin", "gap",
    "backgroundColor", "color", "fontSize", "fontFamily",
    "borderRadius", "border", "boxShadow", "display",
    "flexDirection", "justifyContent", "alignItems",
)

SMALL_SQUARE_MAX = 100
SQUARE_TOLERANCE = 10


def clean_css(css: dict[str, str] | None) -> dict[str, str] | None:
    """只保留核心样式，去掉 0px / none"""
    if not css:
        return None
    cleaned = {
        prop: css[prop]
        for prop in ESSENTIAL_CSS
        if css.get(prop) and css[prop] not in ("0px", "none")
    }
    return cleaned or None


def simplify_padding(node: AnnotatedNode) -> str | None:
    if not node.has_padding():
        return None
    top, right, bottom, left = (int(v) if float(v).is_integer() else v for v in node.padding_sides())
    if top == right == bottom == left:
        return f"{top}px"
    return f"{top}px {right}px {bottom}px {left}px"


def detect_exportable_image(node: AnnotatedNode) -> dict[str, Any] | None:
    """识别可导出的图片/图标/Logo"""
    has_image_fill = any(f.type == "IMAGE" and f.image_ref for f in node.fills or [])

    box = node.absolute_bounding_box
    is_small_square = (
        box is not None
        and box.width <= SMALL_SQUARE_MAX
        and box.height <= SMALL_SQUARE_MAX
        and abs(box.width - box.height) <= SQUARE_TOLERANCE
    )

    name = (node.name or "").lower()
    is_icon = any(k in name for k in ("icon", "logo", "svg")) or is_small_square
    is_image = has_image_fill or "image" in name or "photo" in name
    has_export_settings = bool(node.export_settings)
    is_visual = has_image_fill or node.is_component or len(node.children or []) <= 1

    if not (is_icon or is_image or (node.is_component and is_visual) or has_export_settings):
        return None

    if has_image_fill:
        category, formats = "image", ["png", "jpg"]
    elif "logo" in name:
        category, formats = "logo", ["svg", "png"]
    else:
        category, formats = "icon", ["svg", "png"]

    return {"category": category, "formats": formats, "isExportable": True}


def compact_node(
    node: AnnotatedNode,
    instructions: dict[str, list[CommentInstruction]] | None = None,
) -> dict[str, Any]:
    """递归生成紧凑结构"""
    out: dict[str, Any] = {"id": node.id, "name": node.name, "type": node.type}

    if node.visible is False:
        out["visible"] = False
    if node.children:
        out["children"] = [compact_node(child, instructions) for child in node.children]

    box = node.absolute_bounding_box
    if box is not None:
        out["bounds"] = box.model_dump()

    css = clean_css(node.css_properties)
    if css:
        out["css"] = css

    image = detect_exportable_image(node)
    if image:
        out["image"] = image
        out["type"] = "IMAGE" if image["category"] == "image" else "ICON"

    if node.semantic_role is not None:
        out["role"] = node.semantic_role.model_dump(by_alias=True, exclude_none=True)

    if node.accessibility_info is not None:
        accessibility = node.accessibility_info.model_dump(by_alias=True, exclude_none=True)
        if accessibility:
            out["accessibility"] = accessibility

    if node.design_tokens:
        out["tokens"] = [{"name": t.name, "value": t.value, "type": t.type} for t in node.design_tokens]

    if node.interaction_states:
        out["interactions"] = [s.model_dump(by_alias=True, exclude_none=True) for s in node.interaction_states]

    if node.type == NodeType.TEXT.value and node.characters:
        out["text"] = node.characters
        if node.style is not None:
            out["textStyle"] = {
                "fontFamily": node.style.font_family,
                "fontSize": node.style.font_size,
                "lineHeight": node.style.line_height_px,
            }

    if node.has_auto_layout:
        out["layout"] = {
            "mode": node.layout_mode,
            "direction": "row" if node.layout_mode == "HORIZONTAL" else "column",
            "gap": node.item_spacing,
            "padding": simplify_padding(node),
        }

    matched = (instructions or {}).get(node.id)
    if matched:
        out["instructions"] = [
            {"type": i.category, "instruction": i.instruction, "confidence": i.confidence}
            for i in matched
        ]

    return out
