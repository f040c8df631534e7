"""
坐标索引 - 将注解树展平为带路径的包围盒列表

顺序为深度优先前序（与树中出现顺序一致），匹配时用于平局裁决。
无包围盒、缺少 id 或名称的节点跳过，但其子节点照常索引。
"""

from __future__ import annotations

from ..models import AnnotatedNode, BoundsEntry

PATH_SEPARATOR = " > "


def build_bounds_index(root: AnnotatedNode) -> list[BoundsEntry]:
    """展平注解树（每次匹配调用重建，不缓存）"""
    entries: list[BoundsEntry] = []
    stack: list[tuple[AnnotatedNode, tuple[str, ...]]] = [(root, ())]

    while stack:
        node, ancestors = stack.pop()
        names = ancestors + (node.name,) if node.name else ancestors

        box = node.absolute_bounding_box
        if box is not None and node.id and node.name:
            entries.append(BoundsEntry(
                id=node.id,
                name=node.name,
                type=node.type,
                bounds=box,
                path=PATH_SEPARATOR.join(names),
            ))

        for child in reversed(node.children or []):
            stack.append((child, names))

    return entries
