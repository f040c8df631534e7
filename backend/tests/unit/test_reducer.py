"""
上下文精简单元测试

每个模块完成后必须运行：pytest tests/unit/test_reducer.py -v
"""

from design_annotator.annotate import ContextReducer
from design_annotator.models import AccessibilityInfo, AnnotatedNode, ContextReduction


class TestContextReducer:
    """上下文精简测试"""

    def test_strip_empty_values(self):
        """测试空列表、空字典、空子模型被移除"""
        node = AnnotatedNode(
            id="1",
            name="Box",
            css_properties={},
            accessibility_info=AccessibilityInfo(),
            design_tokens=[],
            interaction_states=[],
        )
        reduced = ContextReducer(ContextReduction()).reduce(node)
        data = reduced.to_dict()
        for key in ("cssProperties", "accessibilityInfo", "designTokens", "interactionStates"):
            assert key not in data
        assert data["id"] == "1"
        assert data["name"] == "Box"
        assert data["type"] == "FRAME"

    def test_identity_fields_kept(self):
        """测试标识字段不被移除（即使为空字符串）"""
        reduced = ContextReducer(ContextReduction()).reduce(AnnotatedNode(id="1", name=""))
        assert reduced.to_dict()["name"] == ""

    def test_non_empty_kept(self):
        """测试非空值保留"""
        node = AnnotatedNode(id="1", css_properties={"width": "10px"})
        assert ContextReducer(ContextReduction()).reduce(node).css_properties == {"width": "10px"}

    def test_stripping_disabled(self):
        """测试关闭精简时保留空值"""
        node = AnnotatedNode(id="1", design_tokens=[])
        reducer = ContextReducer(ContextReduction(remove_redundant_properties=False))
        assert reducer.reduce(node).design_tokens == []

    def test_text_truncated(self):
        """测试文本截断为 limit + '...'"""
        node = AnnotatedNode(id="1", type="TEXT", characters="x" * 50)
        reduced = ContextReducer(ContextReduction(limit_text_length=10)).reduce(node)
        assert reduced.characters == "x" * 10 + "..."
        assert len(reduced.characters) == 13

    def test_text_within_limit(self):
        """测试未超长文本不变"""
        node = AnnotatedNode(id="1", type="TEXT", characters="x" * 10)
        reduced = ContextReducer(ContextReduction(limit_text_length=10)).reduce(node)
        assert reduced.characters == "x" * 10

    def test_truncation_independent_of_stripping(self):
        """测试关闭精简时仍截断文本"""
        node = AnnotatedNode(id="1", type="TEXT", characters="abcdef")
        settings = ContextReduction(remove_redundant_properties=False, limit_text_length=3)
        assert ContextReducer(settings).reduce(node).characters == "abc..."
