"""
运行期配置 - 读取 config/annotator_runtime.yaml

职责：
- 选择规则环境档位（development / production）
- 指定可选的规则文件与环境变量覆盖
- 评论匹配与日志参数
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class CommentMatchConfig(BaseModel):
    """评论匹配配置"""

    proximity_threshold: float = 100.0
    placeholder: str = "Apply to relevant design element"


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    environment: str = "development"
    rules_path: Path | None = None
    rule_overrides: dict[str, Any] = Field(default_factory=dict)

    comments: CommentMatchConfig = Field(default_factory=CommentMatchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "DESIGN_ANNOTATOR_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        kwargs: dict[str, Any] = {
            "comments": CommentMatchConfig(**cls._extract(runtime_opts, "comments")),
            "logging": LoggingConfig(**cls._extract(runtime_opts, "logging")),
        }
        if "environment" in runtime_opts:
            kwargs["environment"] = runtime_opts["environment"]
        if runtime_opts.get("rules_path"):
            kwargs["rules_path"] = runtime_opts["rules_path"]
        if runtime_opts.get("rule_overrides"):
            kwargs["rule_overrides"] = runtime_opts["rule_overrides"]

        config = cls(**kwargs)
        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key, {}) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        if self.rules_path and not self.rules_path.is_absolute():
            self.rules_path = (base_dir / self.rules_path).resolve()


def configure_logging(config: RuntimeConfig | None = None) -> None:
    """按运行期配置初始化根日志"""
    cfg = config or get_config()
    logging.basicConfig(
        level=getattr(logging, cfg.logging.log_level.upper(), logging.INFO),
        format=cfg.logging.log_format,
    )


# 全局配置实例
_config: RuntimeConfig | None = None

DEFAULT_RUNTIME_PATH = Path("config/annotator_runtime.yaml")


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_RUNTIME_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_RUNTIME_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
