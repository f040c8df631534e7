"""
注解节点模型 - 遍历产出的增强节点

AnnotatedNode 在 DesignNode 基础上附加派生字段：
样式映射、语义角色、无障碍信息、设计令牌、组件变体、交互状态、布局上下文。
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel

from .node import DesignNode, FigmaModel

RoleType = Literal["button", "input", "navigation", "text", "container", "image"]
TokenType = Literal["color", "typography", "spacing", "shadow", "border"]
SiblingPosition = Literal["first", "last", "only", "middle"]

# 最小占位节点保留的标识字段
IDENTITY_FIELDS = ("id", "name", "type", "visible", "locked")


class SemanticRole(FigmaModel):
    """语义角色（启发式推断，尽力而为）"""
    type: RoleType
    purpose: str | None = None
    hierarchy: int | None = Field(None, ge=1, le=6, description="文本层级 1-6")


class AccessibilityInfo(FigmaModel):
    """无障碍信息"""
    aria_label: str | None = None
    aria_role: str | None = None
    focusable: bool | None = None
    tab_index: int | None = None
    alt_text: str | None = None


class DesignToken(FigmaModel):
    """设计令牌（不跨节点去重）"""
    name: str
    value: str
    type: TokenType
    category: str | None = None


class ComponentVariant(FigmaModel):
    """组件变体"""
    name: str
    properties: dict[str, Any] = Field(default_factory=dict)
    state: str = "default"


class Animation(FigmaModel):
    duration: str
    easing: str = "ease-in-out"


class InteractionState(FigmaModel):
    """交互状态"""
    trigger: str
    changes: dict[str, str] = Field(default_factory=dict)
    animation: Animation | None = None


class LayoutContext(FigmaModel):
    """布局上下文（父类型、兄弟数、位置）"""
    parent_type: str = "DOCUMENT"
    sibling_count: int = 1
    position: SiblingPosition = "only"
    grid_area: str | None = None
    flex_order: int | None = None


class AnnotatedNode(DesignNode):
    """注解节点"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        validate_assignment=True,
    )

    css_properties: dict[str, str] | None = None
    semantic_role: SemanticRole | None = None
    accessibility_info: AccessibilityInfo | None = None
    design_tokens: list[DesignToken] | None = None
    component_variants: list[ComponentVariant] | None = None
    interaction_states: list[InteractionState] | None = None
    layout_context: LayoutContext | None = None

    children: list[AnnotatedNode] | None = None

    _stub: bool = PrivateAttr(default=False)

    @classmethod
    def stub(cls, node: DesignNode, children: list[AnnotatedNode] | None = None) -> AnnotatedNode:
        """最小占位节点（仅标识字段）"""
        result = cls(
            id=node.id,
            name=node.name,
            type=node.type,
            visible=node.visible,
            locked=node.locked,
            children=children,
        )
        result._stub = True
        return result

    @classmethod
    def shell(cls, node: DesignNode, layout_context: LayoutContext) -> AnnotatedNode:
        """注解外壳：复制源节点字段（不含子节点），派生字段置空"""
        data = node.model_dump(exclude={"children"}, exclude_none=True)
        return cls(
            **data,
            css_properties={},
            accessibility_info=AccessibilityInfo(),
            design_tokens=[],
            component_variants=[],
            interaction_states=[],
            layout_context=layout_context,
        )

    @property
    def is_stub(self) -> bool:
        return self._stub

    def resolve_field(self, key: str) -> str | None:
        """把 camelCase/snake_case 键解析为字段名"""
        fields = type(self).model_fields
        if key in fields:
            return key
        for name, info in fields.items():
            if info.alias == key:
                return name
        return None

    def iter_nodes(self):
        """深度优先前序遍历（含自身）"""
        stack: list[AnnotatedNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children or []))

    def count_nodes(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def to_dict(self) -> dict[str, Any]:
        """JSON 可序列化输出（camelCase，省略空值）"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
