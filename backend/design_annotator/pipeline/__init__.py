"""
流水线层 - 树遍历编排与对外入口
"""

from .compact import compact_node
from .processor import DesignProcessor
from .stages import GENERATOR_STAGES, GeneratorStage, StageEnum
from .walker import TreeWalker, WalkResult, build_stub_tree

__all__ = [
    "StageEnum",
    "GeneratorStage",
    "GENERATOR_STAGES",
    "TreeWalker",
    "WalkResult",
    "build_stub_tree",
    "compact_node",
    "DesignProcessor",
]
