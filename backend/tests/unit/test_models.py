"""
数据模型单元测试

每个模块完成后必须运行：pytest tests/unit/test_models.py -v
"""

import pytest
from pydantic import ValidationError

from design_annotator.models import (
    AnnotatedNode,
    CommentRecord,
    DesignNode,
    LayoutContext,
    ProcessingStats,
    Rect,
    TraversalContext,
)


class TestRect:
    """包围盒测试"""

    def test_contains_edges_inclusive(self):
        """测试边界包含"""
        rect = Rect(x=100, y=50, width=20, height=20)
        assert rect.contains(100, 50)
        assert rect.contains(120, 70)
        assert not rect.contains(121, 70)

    def test_center_and_area(self):
        """测试中心点与面积"""
        rect = Rect(x=0, y=0, width=100, height=40)
        assert rect.center == (50, 20)
        assert rect.area == 4000
        assert rect.distance_to_center(50, 50) == 30


class TestDesignNode:
    """设计节点测试"""

    def test_parse_camel_case(self):
        """测试解析 camelCase 原始数据"""
        node = DesignNode.model_validate({
            "id": "1:1",
            "name": "Card",
            "type": "FRAME",
            "layoutMode": "HORIZONTAL",
            "paddingLeft": 8,
            "absoluteBoundingBox": {"x": 0, "y": 0, "width": 10, "height": 10},
        })
        assert node.layout_mode == "HORIZONTAL"
        assert node.has_auto_layout
        assert node.has_padding()
        assert node.padding_sides() == (0, 0, 0, 8)

    def test_unknown_keys_preserved(self):
        """测试保留未知字段"""
        node = DesignNode.model_validate({"id": "1", "blendMode": "NORMAL"})
        assert node.model_dump(by_alias=True)["blendMode"] == "NORMAL"

    def test_layout_mode_none(self):
        """测试 NONE 不视为自动布局"""
        node = DesignNode(id="1", layout_mode="NONE")
        assert not node.has_auto_layout

    def test_missing_id_rejected(self):
        """测试缺少 id"""
        with pytest.raises(ValidationError):
            DesignNode.model_validate({"name": "No Id"})

    def test_iter_descendants_preorder(self, make_node):
        """测试后代前序遍历"""
        tree = make_node("a", children=[
            make_node("b", children=[make_node("c")]),
            make_node("d"),
        ])
        assert [n.id for n in tree.iter_descendants()] == ["b", "c", "d"]


class TestAnnotatedNode:
    """注解节点测试"""

    def test_stub_identity_only(self, make_node):
        """测试占位节点只含标识字段"""
        source = make_node("1:1", "Box", "RECTANGLE", box=(0, 0, 10, 10), cornerRadius=4)
        stub = AnnotatedNode.stub(source)
        assert stub.is_stub
        assert stub.to_dict() == {
            "id": "1:1", "name": "Box", "type": "RECTANGLE", "visible": True, "locked": False,
        }

    def test_shell_copies_fields(self, make_node):
        """测试外壳复制源字段但不含子节点"""
        source = make_node("1:1", "Box", children=[make_node("1:2")], cornerRadius=4)
        shell = AnnotatedNode.shell(source, LayoutContext())
        assert shell.corner_radius == 4
        assert shell.children is None
        assert shell.css_properties == {}
        assert not shell.is_stub

    def test_resolve_field(self):
        """测试字段名解析（camelCase / snake_case）"""
        node = AnnotatedNode(id="1")
        assert node.resolve_field("semanticRole") == "semantic_role"
        assert node.resolve_field("semantic_role") == "semantic_role"
        assert node.resolve_field("unknownKey") is None

    def test_assignment_validated(self):
        """测试赋值时校验"""
        node = AnnotatedNode(id="1")
        node.semantic_role = {"type": "button", "purpose": "interactive"}
        assert node.semantic_role.type == "button"
        with pytest.raises(ValidationError):
            node.semantic_role = {"type": "banner"}

    def test_to_dict_camel_case(self):
        """测试序列化为 camelCase 并省略空值"""
        node = AnnotatedNode(id="1", css_properties={"width": "10px"})
        data = node.to_dict()
        assert data["cssProperties"] == {"width": "10px"}
        assert "semanticRole" not in data


class TestProcessingStats:
    """处理统计测试"""

    def test_reset(self):
        """测试重置"""
        stats = ProcessingStats(nodes_processed=3)
        stats.add_error("boom")
        stats.add_warning("deep")
        assert stats.degraded
        stats.reset()
        assert stats.nodes_processed == 0
        assert stats.errors == []
        assert not stats.degraded


class TestTraversalContext:
    """遍历上下文测试"""

    def test_child_context(self):
        """测试子上下文深度+1且不修改原对象"""
        root = TraversalContext(file_key="abc")
        child = root.child(2, 5, "FRAME", "Page", parent_has_auto_layout=True)
        assert child.depth == 1
        assert child.sibling_index == 2
        assert child.file_key == "abc"
        assert root.depth == 0


class TestCommentRecord:
    """评论模型测试"""

    def test_from_api(self):
        """测试解析远端评论结构"""
        record = CommentRecord.from_api({
            "id": "c1",
            "message": "Fade in on load",
            "user": {"handle": "alice"},
            "client_meta": {"node_id": "1:2", "node_offset": {"x": 10, "y": 20}},
        })
        assert record.author == "alice"
        assert record.node_id == "1:2"
        assert (record.x, record.y) == (10, 20)
        assert record.has_coordinates

    def test_from_api_without_meta(self):
        """测试无坐标评论"""
        record = CommentRecord.from_api({"message": "General note"})
        assert record.author == "Designer"
        assert not record.has_coordinates
