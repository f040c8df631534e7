"""
规则加载器 - 读取规则文件并合并为配置快照

职责：
- 解析YAML规则文件（声明式规则：条件不含回调，动作为 enhance/transform）
- 合并 默认值 ⊕ 环境档位 ⊕ 规则文件 ⊕ 环境变量覆盖 ⊕ 调用方覆盖
  （覆盖值优先；嵌套对象深合并，数组整体替换）
- 校验合并结果

使用方式：
    overrides = RuleLoader.load("config/rules.yaml")
    rules = build_rule_configuration({"max_depth": 5})
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from ..errors import RuleConfigurationError
from ..models import CustomRule, RuleConfiguration
from .defaults import DEFAULT_RULES, get_environment_rules
from .runtime_config import RuntimeConfig, get_config

logger = logging.getLogger(__name__)


class RuleLoader:
    """规则文件加载器（缓存）"""

    @classmethod
    @lru_cache(maxsize=8)
    def load(cls, rules_path: str | Path) -> dict[str, Any]:
        """加载并缓存规则文件，返回覆盖项字典"""
        path = Path(rules_path)
        if not path.exists():
            raise FileNotFoundError(f"规则文件不存在: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        rules = data.get("rules", data)
        if not isinstance(rules, dict):
            raise RuleConfigurationError([f"规则文件格式错误: {path}"])
        return rules

    @classmethod
    def reload(cls, rules_path: str | Path) -> dict[str, Any]:
        """强制重新加载（清除缓存）"""
        cls.load.cache_clear()
        return cls.load(rules_path)


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """深合并：映射递归合并，其余类型（含数组）整体替换"""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, BaseModel):
            value = value.model_dump(exclude_unset=True)
        if isinstance(value, Mapping) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _normalize_keys(model: type[BaseModel], data: Mapping[str, Any]) -> dict[str, Any]:
    """把 camelCase 键（大小写不敏感，如 enableCSSGeneration）统一为字段名；未知键原样保留交给校验"""
    lookup: dict[str, str] = {}
    for name, info in model.model_fields.items():
        lookup[name.lower()] = name
        if info.alias:
            lookup[info.alias.lower()] = name

    result: dict[str, Any] = {}
    for key, value in data.items():
        name = lookup.get(str(key).lower(), key)
        info = model.model_fields.get(name)
        annotation = info.annotation if info is not None else None
        if (
            isinstance(value, Mapping)
            and isinstance(annotation, type)
            and issubclass(annotation, BaseModel)
        ):
            value = _normalize_keys(annotation, value)
        result[name] = value
    return result


def _coerce_rule(raw: CustomRule | Mapping[str, Any]) -> CustomRule:
    """规则对象或声明式字典 -> CustomRule"""
    if isinstance(raw, CustomRule):
        return raw
    data = dict(raw)
    action = dict(data.get("action") or {})
    # 兼容 type 写法
    if "kind" not in action and "type" in action:
        action["kind"] = action.pop("type")
    data["action"] = action
    return CustomRule.model_validate(data)


def merge_rules(
    base: RuleConfiguration,
    override: RuleConfiguration | Mapping[str, Any] | None,
) -> RuleConfiguration:
    """合并规则，返回新快照（base 不被修改）"""
    if override is None:
        return base
    if isinstance(override, RuleConfiguration):
        return override

    override = _normalize_keys(RuleConfiguration, override)
    custom_rules: Iterable[Any] | None = override.pop("custom_rules", None)

    merged = _deep_merge(base.model_dump(exclude={"custom_rules"}), override)
    merged["custom_rules"] = (
        base.custom_rules
        if custom_rules is None
        else tuple(_coerce_rule(r) for r in custom_rules)
    )
    return RuleConfiguration.model_validate(merged)


def validate_rules(rules: RuleConfiguration) -> list[str]:
    """校验规则配置，返回问题列表（空列表表示合法）"""
    errors: list[str] = []

    if rules.max_depth < 1 or rules.max_depth > 50:
        errors.append("maxDepth must be between 1 and 50")

    if rules.context_reduction.limit_text_length < 0:
        errors.append("limitTextLength must be non-negative")

    for index, rule in enumerate(rules.custom_rules):
        if not rule.name or not rule.name.strip():
            errors.append(f"Custom rule at index {index} must have a name")
        if rule.priority < 0 or rule.priority > 100:
            errors.append(f'Custom rule "{rule.name}" priority must be between 0 and 100')

    return errors


def build_rule_configuration(
    overrides: RuleConfiguration | Mapping[str, Any] | None = None,
    *,
    environment: str | None = None,
    runtime: RuntimeConfig | None = None,
) -> RuleConfiguration:
    """构建配置快照：默认值 ⊕ 环境档位 ⊕ 规则文件 ⊕ 环境变量覆盖 ⊕ 调用方覆盖"""
    runtime = runtime or get_config()
    env = environment if environment is not None else runtime.environment

    rules = merge_rules(DEFAULT_RULES, get_environment_rules(env))
    if runtime.rules_path:
        rules = merge_rules(rules, RuleLoader.load(str(runtime.rules_path)))
    if runtime.rule_overrides:
        rules = merge_rules(rules, runtime.rule_overrides)
    rules = merge_rules(rules, overrides)

    problems = validate_rules(rules)
    if problems:
        logger.error(f"规则配置校验失败: {problems}")
        raise RuleConfigurationError(problems)
    return rules
