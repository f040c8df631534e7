"""
设计处理器单元测试

每个模块完成后必须运行：pytest tests/unit/test_processor.py -v
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from design_annotator.errors import RuleConfigurationError
from design_annotator.models import CustomAction, CustomRule, ProcessingStats, RuleCondition
from design_annotator.pipeline import DesignProcessor


class TestProcess:
    """注解入口测试"""

    def test_process_dict(self, processor: DesignProcessor, sample_tree):
        """测试处理原始字典"""
        annotated = processor.process(sample_tree)
        assert annotated.id == "0:1"
        assert len(annotated.children) == 4
        data = annotated.to_dict()
        assert data["cssProperties"]["display"] == "flex"
        assert data["cssProperties"]["padding"] == "32px 32px 32px 32px"

    def test_invalid_input_raises(self, processor: DesignProcessor):
        """测试无法解析的输入抛出校验异常"""
        with pytest.raises(ValidationError):
            processor.process({"name": "missing id", "children": "oops"})

    def test_stats(self, processor: DesignProcessor, sample_tree):
        """测试统计快照与重置"""
        processor.process(sample_tree)
        stats = processor.get_stats()
        assert isinstance(stats, ProcessingStats)
        assert stats.nodes_processed == 6
        assert stats.nodes_enhanced == 5
        stats.nodes_processed = 99
        assert processor.get_stats().nodes_processed == 6

        processor.reset_stats()
        assert processor.get_stats().nodes_processed == 0

    def test_environment_profile(self, runtime_config, sample_tree):
        """测试开发档位包含隐藏节点"""
        processor = DesignProcessor({"custom_rules": []}, environment="development", runtime=runtime_config)
        annotated = processor.process(sample_tree)
        assert not annotated.children[2].is_stub


class TestStatsIsolation:
    """统计隔离测试"""

    def test_per_call_stats(self, processor: DesignProcessor, sample_tree, make_chain):
        """测试每次调用返回各自的统计记录"""
        first = processor.process_with_stats(sample_tree)
        second = processor.process_with_stats(make_chain(2))
        assert first.stats.nodes_processed == 6
        assert second.stats.nodes_processed == 3
        assert processor.get_stats().nodes_processed == 3

    def test_nested_call_does_not_corrupt_outer(self, runtime_config, sample_tree):
        """测试遍历进行中发起的另一次处理不影响外层统计"""
        inner_counts = []

        def reenter(node, context):
            inner_counts.append(processor.process_with_stats({"id": "x", "name": "Inner"}).stats.nodes_processed)

        rule = CustomRule(
            name="Reenter",
            condition=RuleCondition(node_name="Submit"),
            action=CustomAction(callback=reenter),
        )
        processor = DesignProcessor({"custom_rules": [rule]}, environment="test", runtime=runtime_config)
        result = processor.process_with_stats(sample_tree)

        assert inner_counts == [1]
        assert result.stats.nodes_processed == 6
        assert result.stats.nodes_enhanced == 5
        assert result.stats.rules_applied == 1
        assert result.stats.errors == []
        assert processor.get_stats().nodes_processed == 6

    def test_concurrent_calls(self, processor: DesignProcessor, sample_tree, make_chain):
        """测试多线程并发处理时统计互不串扰"""
        trees = [sample_tree, make_chain(4)] * 8
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(processor.process_with_stats, trees))
        counts = [r.stats.nodes_processed for r in results]
        assert counts == [6, 5] * 8
        assert processor.get_stats().nodes_processed in (6, 5)


class TestUpdateRules:
    """规则更新测试"""

    def test_update_replaces_snapshot(self, processor: DesignProcessor):
        """测试更新生成新快照"""
        before = processor.rules
        after = processor.update_rules({"max_depth": 2})
        assert processor.rules is after
        assert after.max_depth == 2
        assert before.max_depth == 10

    def test_invalid_update_rejected(self, processor: DesignProcessor):
        """测试非法更新被拒绝且不替换快照"""
        before = processor.rules
        with pytest.raises(RuleConfigurationError):
            processor.update_rules({"max_depth": 0})
        assert processor.rules is before


class TestComments:
    """评论路径测试"""

    def test_process_comments(self, processor: DesignProcessor, sample_tree):
        """测试原始评论结构匹配到节点"""
        annotated = processor.process(sample_tree)
        comments = [
            {
                "id": "c1",
                "message": "On click submit the form",
                "user": {"handle": "dana"},
                "client_meta": {"node_offset": {"x": 140, "y": 215}},
            },
            {"message": "Check spacing", "x": 9000, "y": 9000},
        ]
        results = processor.process_comments(annotated, comments)
        assert len(results) == 2
        assert results[0].target_element == "Label"
        assert results[0].author == "dana"
        assert results[0].category == "interaction"
        assert results[1].match_type == "unassigned"


class TestCompactOutput:
    """紧凑输出测试"""

    def test_optimize_for_ai(self, processor: DesignProcessor, sample_tree):
        """测试紧凑输出"""
        annotated = processor.process(sample_tree)
        instructions = processor.process_comments(
            annotated, [{"message": "Fade on hover", "node_id": "1:2"}]
        )
        compact = processor.optimize_for_ai(annotated, instructions)

        assert compact["id"] == "0:1"
        assert compact["layout"] == {
            "mode": "VERTICAL", "direction": "column", "gap": 24, "padding": "32px",
        }
        assert "children" in compact

        button = compact["children"][1]
        assert button["instructions"] == [
            {"type": "interaction", "instruction": "Fade on hover", "confidence": 1.0}
        ]
        assert button["role"] == {"type": "button", "purpose": "interactive"}

        title = compact["children"][3]
        assert title["text"] == "Welcome"
        assert title["textStyle"]["fontSize"] == 40

    def test_exportable_image(self, processor: DesignProcessor):
        """测试识别图片填充"""
        annotated = processor.process({
            "id": "1",
            "name": "Hero Photo",
            "type": "RECTANGLE",
            "fills": [{"type": "IMAGE", "imageRef": "img-1"}],
        })
        compact = processor.optimize_for_ai(annotated)
        assert compact["type"] == "IMAGE"
        assert compact["image"] == {"category": "image", "formats": ["png", "jpg"], "isExportable": True}

    def test_extract_all_node_ids(self, processor: DesignProcessor, sample_tree):
        """测试前序提取节点 id"""
        annotated = processor.process(sample_tree)
        assert DesignProcessor.extract_all_node_ids(annotated) == ["0:1", "1:1", "1:2", "2:1", "1:3", "1:4"]
