"""
异常定义

核心遍历不向调用方抛出单节点错误（记录到 ProcessingStats），
只有配置非法时在入口处抛出。
"""

from __future__ import annotations


class AnnotatorError(Exception):
    """注解引擎基础异常"""


class RuleConfigurationError(AnnotatorError):
    """规则配置校验失败"""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("; ".join(problems))
