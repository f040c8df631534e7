"""
配置层 - 规则配置与运行期配置

职责：
- 提供内置默认规则与环境档位
- 加载规则文件（YAML）与运行期配置（YAML + 环境变量）
- 合并、校验并产出只读的规则配置快照
"""

from .defaults import DEFAULT_CUSTOM_RULES, DEFAULT_RULES, get_environment_rules
from .rules_loader import (
    RuleLoader,
    build_rule_configuration,
    merge_rules,
    validate_rules,
)
from .runtime_config import RuntimeConfig, configure_logging, get_config, reload_config

__all__ = [
    "DEFAULT_RULES",
    "DEFAULT_CUSTOM_RULES",
    "get_environment_rules",
    "RuleLoader",
    "merge_rules",
    "validate_rules",
    "build_rule_configuration",
    "RuntimeConfig",
    "configure_logging",
    "get_config",
    "reload_config",
]
