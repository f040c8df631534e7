"""
处理统计与遍历上下文

ProcessingStats 仅用于观测：每次遍历新建一份，单次遍历内累加。
TraversalContext 为显式传递的不可变上下文，节点本身不保存父引用。
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProcessingStats(BaseModel):
    """处理统计"""
    nodes_processed: int = 0
    nodes_enhanced: int = 0
    rules_applied: int = 0
    processing_time_ms: float = 0.0
    errors: list[str] = Field(default_factory=list, description="错误信息")
    warnings: list[str] = Field(default_factory=list, description="告警信息")

    def add_error(self, error: str) -> None:
        """记录错误（不中断）"""
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        """记录告警（不中断）"""
        self.warnings.append(warning)

    def reset(self) -> None:
        """重置所有计数"""
        self.nodes_processed = 0
        self.nodes_enhanced = 0
        self.rules_applied = 0
        self.processing_time_ms = 0.0
        self.errors = []
        self.warnings = []

    @property
    def degraded(self) -> bool:
        """存在错误或告警即视为降级结果（不代表调用失败）"""
        return bool(self.errors or self.warnings)


class TraversalContext(BaseModel):
    """遍历上下文"""

    model_config = ConfigDict(frozen=True)

    file_key: str = ""
    file_name: str | None = None
    depth: int = 0
    sibling_index: int = 0
    total_siblings: int = 1
    parent_type: str | None = None
    parent_name: str | None = None
    parent_has_auto_layout: bool = False
    framework: str | None = None

    def child(
        self,
        index: int,
        total: int,
        parent_type: str,
        parent_name: str,
        parent_has_auto_layout: bool = False,
    ) -> TraversalContext:
        """生成子节点上下文（深度+1）"""
        return self.model_copy(
            update={
                "depth": self.depth + 1,
                "sibling_index": index,
                "total_siblings": total,
                "parent_type": parent_type,
                "parent_name": parent_name,
                "parent_has_auto_layout": parent_has_auto_layout,
            }
        )
