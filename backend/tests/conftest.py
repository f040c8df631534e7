"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(plain_rules, make_node):
        node = make_node("1:1", "Submit Button")
        assert include(node, plain_rules)
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from design_annotator.config import RuntimeConfig, build_rule_configuration
from design_annotator.models import DesignNode, RuleConfiguration
from design_annotator.pipeline import DesignProcessor


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（不读取规则文件）"""
    return RuntimeConfig()


@pytest.fixture
def plain_rules(runtime_config: RuntimeConfig) -> RuleConfiguration:
    """内置默认值（未知环境不叠加档位），不含自定义规则"""
    return build_rule_configuration(
        {"custom_rules": []},
        environment="test",
        runtime=runtime_config,
    )


@pytest.fixture
def default_rules(runtime_config: RuntimeConfig) -> RuleConfiguration:
    """内置默认值 + 默认自定义规则"""
    return build_rule_configuration(environment="test", runtime=runtime_config)


@pytest.fixture
def processor(runtime_config: RuntimeConfig) -> DesignProcessor:
    """不含自定义规则的处理器"""
    return DesignProcessor(
        {"custom_rules": []},
        environment="test",
        runtime=runtime_config,
    )


# ============================================================================
# 节点 Fixtures
# ============================================================================

@pytest.fixture
def make_node() -> Callable[..., DesignNode]:
    """节点工厂（camelCase 键与原始数据一致）"""

    def _make(
        node_id: str,
        name: str = "",
        node_type: str = "FRAME",
        box: tuple[float, float, float, float] | None = None,
        children: list[DesignNode] | None = None,
        **fields: Any,
    ) -> DesignNode:
        data: dict[str, Any] = {"id": node_id, "name": name, "type": node_type, **fields}
        if box is not None:
            x, y, w, h = box
            data["absoluteBoundingBox"] = {"x": x, "y": y, "width": w, "height": h}
        if children is not None:
            data["children"] = children
        return DesignNode.model_validate(data)

    return _make


@pytest.fixture
def sample_tree() -> dict[str, Any]:
    """示例设计树（原始 JSON 结构）"""
    return {
        "id": "0:1",
        "name": "Landing Page",
        "type": "FRAME",
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 1440, "height": 900},
        "layoutMode": "VERTICAL",
        "itemSpacing": 24,
        "paddingTop": 32,
        "paddingRight": 32,
        "paddingBottom": 32,
        "paddingLeft": 32,
        "fills": [{"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1, "a": 1}}],
        "blendMode": "PASS_THROUGH",
        "children": [
            {
                "id": "1:1",
                "name": "Top Nav",
                "type": "FRAME",
                "absoluteBoundingBox": {"x": 0, "y": 0, "width": 1440, "height": 80},
                "children": [],
            },
            {
                "id": "1:2",
                "name": "Submit Button",
                "type": "COMPONENT",
                "absoluteBoundingBox": {"x": 100, "y": 200, "width": 120, "height": 40},
                "cornerRadius": 8,
                "fills": [{"type": "SOLID", "color": {"r": 0, "g": 0.478, "b": 1, "a": 1}}],
                "children": [
                    {
                        "id": "2:1",
                        "name": "Label",
                        "type": "TEXT",
                        "characters": "Submit",
                        "absoluteBoundingBox": {"x": 110, "y": 205, "width": 60, "height": 20},
                        "style": {"fontFamily": "Inter", "fontSize": 16, "lineHeightPx": 20},
                    }
                ],
            },
            {
                "id": "1:3",
                "name": "Hidden Rect",
                "type": "RECTANGLE",
                "visible": False,
            },
            {
                "id": "1:4",
                "name": "Title",
                "type": "TEXT",
                "characters": "Welcome",
                "absoluteBoundingBox": {"x": 100, "y": 120, "width": 400, "height": 48},
                "style": {"fontFamily": "Inter", "fontSize": 40, "lineHeightPx": 48},
            },
        ],
    }


@pytest.fixture
def make_chain() -> Callable[[int], dict[str, Any]]:
    """单链嵌套工厂：make_chain(5) 生成第 0..5 层共 6 个节点"""

    def _make(depth: int) -> dict[str, Any]:
        node: dict[str, Any] = {"id": f"n{depth}", "name": f"Level {depth}", "type": "FRAME"}
        for level in range(depth - 1, -1, -1):
            node = {"id": f"n{level}", "name": f"Level {level}", "type": "FRAME", "children": [node]}
        return node

    return _make
