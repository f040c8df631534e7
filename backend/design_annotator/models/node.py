"""
设计节点模型 - 设计工具导出的原始节点树

对应远端文件接口返回的 document 结构（camelCase 字段名），
未建模的字段通过 extra 原样保留。
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NodeType(str, Enum):
    """节点类型枚举（已知类型，未知类型按字符串保留）"""
    DOCUMENT = "DOCUMENT"
    CANVAS = "CANVAS"
    FRAME = "FRAME"
    GROUP = "GROUP"
    SECTION = "SECTION"
    TEXT = "TEXT"
    VECTOR = "VECTOR"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    LINE = "LINE"
    STAR = "STAR"
    REGULAR_POLYGON = "REGULAR_POLYGON"
    BOOLEAN_OPERATION = "BOOLEAN_OPERATION"
    COMPONENT = "COMPONENT"
    COMPONENT_SET = "COMPONENT_SET"
    INSTANCE = "INSTANCE"
    SLICE = "SLICE"
    STICKY = "STICKY"


COMPONENT_TYPES = frozenset({NodeType.COMPONENT.value, NodeType.INSTANCE.value})


class FigmaModel(BaseModel):
    """设计工具数据基类（camelCase 别名，保留未知字段）"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class Color(FigmaModel):
    """颜色（各通道 0-1 浮点）"""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


class Vector(FigmaModel):
    x: float = 0.0
    y: float = 0.0


class Rect(FigmaModel):
    """文档坐标系下的边界框"""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, x: float, y: float) -> bool:
        """判断点是否落在框内（含边界）"""
        return (
            self.x <= x <= self.x + self.width
            and self.y <= y <= self.y + self.height
        )

    def distance_to_center(self, x: float, y: float) -> float:
        """点到框中心的欧氏距离"""
        cx, cy = self.center
        return math.hypot(x - cx, y - cy)


class Paint(FigmaModel):
    """填充/描边"""
    type: str = "SOLID"
    visible: bool = True
    opacity: float | None = None
    color: Color | None = None
    image_ref: str | None = None


class Effect(FigmaModel):
    """阴影/模糊效果"""
    type: str
    visible: bool = True
    radius: float | None = None
    color: Color | None = None
    offset: Vector | None = None
    spread: float | None = None


class TypeStyle(FigmaModel):
    """文本样式"""
    font_family: str | None = None
    font_size: float | None = None
    font_weight: float | None = None
    line_height_px: float | None = None
    letter_spacing: float | None = None
    fills: list[Paint] | None = None


class StrokeWeights(FigmaModel):
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


class DesignNode(FigmaModel):
    """设计树节点（只持有子节点，不持有父节点引用）"""

    # === 标识 ===
    id: str
    name: str = ""
    type: str = NodeType.FRAME.value
    visible: bool = True
    locked: bool = False

    # === 几何 ===
    absolute_bounding_box: Rect | None = None

    # === 自动布局 ===
    layout_mode: str | None = None
    primary_axis_align_items: str | None = None
    counter_axis_align_items: str | None = None
    item_spacing: float | None = None
    padding_top: float | None = None
    padding_right: float | None = None
    padding_bottom: float | None = None
    padding_left: float | None = None

    # === 样式 ===
    fills: list[Paint] | None = None
    strokes: list[Paint] | None = None
    stroke_weight: float | None = None
    stroke_align: str | None = None
    individual_stroke_weights: StrokeWeights | None = None
    stroke_dashes: list[float] | None = None
    effects: list[Effect] | None = None
    corner_radius: float | None = None
    rectangle_corner_radii: list[float] | None = None
    opacity: float | None = None

    # === 文本 ===
    characters: str | None = None
    style: TypeStyle | None = None

    # === 导出 ===
    export_settings: list[dict[str, Any]] | None = None

    children: list[DesignNode] | None = Field(default=None)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def is_component(self) -> bool:
        return self.type in COMPONENT_TYPES

    @property
    def has_auto_layout(self) -> bool:
        return self.layout_mode is not None and self.layout_mode != "NONE"

    def has_padding(self) -> bool:
        return any(
            (self.padding_top, self.padding_right, self.padding_bottom, self.padding_left)
        )

    def padding_sides(self) -> tuple[float, float, float, float]:
        """上右下左"""
        return (
            self.padding_top or 0,
            self.padding_right or 0,
            self.padding_bottom or 0,
            self.padding_left or 0,
        )

    def iter_descendants(self):
        """深度优先前序遍历所有后代（不含自身）"""
        stack = list(reversed(self.children or []))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children or []))
