"""
处理结果模型 - 区分"成功/降级/失败"

宿主操作失败不再静默吞掉，而是落到这些结构里，
由编排器汇总为 RunSummary 交给调用方展示。
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ..interfaces import IPathItem
from .geometry import Point


class StepStatus(str, Enum):
    """步骤状态"""
    SUCCEEDED = "succeeded"
    DEGRADED = "degraded"     # 已就地降级
    FAILED = "failed"         # 已放弃，不影响后续页
    SKIPPED = "skipped"


class PlacementResult(BaseModel):
    """网格落位结果"""
    centers: dict[int, Point] = Field(default_factory=dict)
    placed: int = 0
    warnings: list[str] = Field(default_factory=list)

    @property
    def status(self) -> StepStatus:
        if self.warnings:
            return StepStatus.DEGRADED
        return StepStatus.SUCCEEDED


class NumberingResult(BaseModel):
    """流序编号结果"""
    status: StepStatus = StepStatus.SUCCEEDED
    list_name: str | None = None
    numbered: int = 0
    converted_to_text: int = 0
    error: str | None = None


class PathResult(BaseModel):
    """连线结果"""
    status: StepStatus = StepStatus.SKIPPED
    paths: list[IPathItem] = Field(default_factory=list)
    point_count: int = 0
    segment_fallback: bool = False
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None

    model_config = {"arbitrary_types_allowed": True}


class PageReport(BaseModel):
    """单页处理报告"""
    batch_index: int
    page_offset: int
    pattern_id: int
    pattern_name: str
    element_count: int
    placement: PlacementResult = Field(default_factory=PlacementResult)
    numbering: NumberingResult = Field(default_factory=NumberingResult)
    path: PathResult = Field(default_factory=PathResult)

    @property
    def page_number(self) -> int:
        """页码（从1开始）"""
        return self.page_offset + 1


class RunSummary(BaseModel):
    """整次运行汇总"""
    total_objects: int = 0
    pages_used: int = 0
    start_page_number: int = 1
    pages: list[PageReport] = Field(default_factory=list)
    layers: StepStatus = StepStatus.SKIPPED
    curve_conversion: StepStatus = StepStatus.SKIPPED
    aborted: bool = False
    flags: list[str] = Field(default_factory=list, description="告警标记")

    @property
    def pattern_names(self) -> list[str]:
        return [p.pattern_name for p in self.pages]

    @property
    def batch_sizes(self) -> list[int]:
        return [p.element_count for p in self.pages]

    @property
    def path_count(self) -> int:
        return sum(len(p.path.paths) for p in self.pages)

    def add_flag(self, flag: str) -> None:
        """添加告警标记（不中断）"""
        if flag not in self.flags:
            self.flags.append(flag)
