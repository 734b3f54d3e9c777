"""
流水线模块 - 分页编排

子模块：
- stages: 流水线各阶段定义
- selection: 每页图案选择
- layers: 背景图层准备
- orchestrator: 分页编排器
- report: 汇总文本
"""

from .layers import LayerArranger
from .orchestrator import BatchOrchestrator, split_batches
from .report import format_summary
from .selection import FixedPatternSelector, resolve_patterns
from .stages import SNAKE_STAGES, PipelineStage, StageEnum

__all__ = [
    "PipelineStage",
    "StageEnum",
    "SNAKE_STAGES",
    "LayerArranger",
    "FixedPatternSelector",
    "resolve_patterns",
    "BatchOrchestrator",
    "split_batches",
    "format_summary",
]
