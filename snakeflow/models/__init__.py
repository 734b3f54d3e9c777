"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- Pattern: 排版图案（网格+流序）
- PageBatch: 单页元素批次
- Point/Bounds/PathStyle: 几何与样式
- DocumentContext: 单次运行的文档上下文
- *Result/PageReport/RunSummary: 处理结果
"""

from .batch import CenterTable, PageBatch
from .context import DocumentContext
from .geometry import Bounds, PathStyle, Point
from .pattern import GRID_COLS, GRID_ROWS, SLOTS_PER_PAGE, Pattern
from .results import (
    NumberingResult,
    PageReport,
    PathResult,
    PlacementResult,
    RunSummary,
    StepStatus,
)

__all__ = [
    "Pattern",
    "GRID_ROWS",
    "GRID_COLS",
    "SLOTS_PER_PAGE",
    "PageBatch",
    "CenterTable",
    "Point",
    "Bounds",
    "PathStyle",
    "DocumentContext",
    "StepStatus",
    "PlacementResult",
    "NumberingResult",
    "PathResult",
    "PageReport",
    "RunSummary",
]
