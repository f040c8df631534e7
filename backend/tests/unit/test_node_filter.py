"""
节点过滤单元测试

每个模块完成后必须运行：pytest tests/unit/test_node_filter.py -v
"""

from design_annotator.annotate import filter_tree, include
from design_annotator.config import merge_rules


class TestInclude:
    """过滤判定测试"""

    def test_visible_frame_included(self, plain_rules, make_node):
        """测试普通节点通过"""
        assert include(make_node("1", "Page"), plain_rules)

    def test_hidden_excluded(self, plain_rules, make_node):
        """测试隐藏节点默认排除"""
        node = make_node("1", visible=False)
        assert not include(node, plain_rules)
        assert include(node, merge_rules(plain_rules, {"include_hidden_nodes": True}))

    def test_locked(self, plain_rules, make_node):
        """测试锁定节点"""
        node = make_node("1", locked=True)
        assert include(node, plain_rules)
        assert not include(node, merge_rules(plain_rules, {"include_locked_nodes": False}))

    def test_exclude_set(self, plain_rules, make_node):
        """测试排除类型"""
        assert not include(make_node("1", node_type="SLICE"), plain_rules)

    def test_include_set(self, plain_rules, make_node):
        """测试包含集合非空时未列出类型被排除"""
        assert not include(make_node("1", node_type="SECTION"), plain_rules)
        empty = merge_rules(plain_rules, {"node_type_filters": {"include": []}})
        assert include(make_node("1", node_type="SECTION"), empty)

    def test_pure(self, plain_rules, make_node):
        """测试判定无副作用且结果稳定"""
        node = make_node("1", "Page", visible=False)
        before = node.model_dump()
        results = {include(node, plain_rules) for _ in range(3)}
        assert results == {False}
        assert node.model_dump() == before


class TestFilterTree:
    """子树剪除测试"""

    def test_prune_children(self, plain_rules, make_node):
        """测试剪除未通过的子树"""
        tree = make_node("1", children=[
            make_node("2", node_type="SLICE"),
            make_node("3", "Text", "TEXT"),
        ])
        pruned = filter_tree(tree, plain_rules)
        assert [c.id for c in pruned.children] == ["3"]
        assert len(tree.children) == 2

    def test_root_excluded(self, plain_rules, make_node):
        """测试根节点被排除"""
        assert filter_tree(make_node("1", node_type="STICKY"), plain_rules) is None

    def test_idempotent(self, plain_rules, make_node):
        """测试对已过滤的树再次过滤结果不变"""
        tree = make_node("1", "Page", children=[
            make_node("2", "Hidden", visible=False, children=[make_node("5", "Inner")]),
            make_node("3", "Card", children=[
                make_node("6", "Slice", node_type="SLICE"),
                make_node("7", "Label", "TEXT"),
            ]),
            make_node("4", "Note", node_type="STICKY"),
        ])
        once = filter_tree(tree, plain_rules)
        twice = filter_tree(once, plain_rules)
        assert twice.model_dump() == once.model_dump()
        assert [c.id for c in once.children] == ["3"]
        assert [c.id for c in once.children[0].children] == ["7"]
