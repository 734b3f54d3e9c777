"""
流水线阶段定义

职责：
1. 定义各阶段的名称和进度区间
2. 提供进度回调钩子

单页阶段（PLACE/RENUMBER/BUILD_PATH）按页重复执行，
进度在 PAGES 区间内按页线性推进。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class StageEnum(str, Enum):
    """流水线阶段枚举"""
    VALIDATE = "VALIDATE"
    SELECT_PATTERNS = "SELECT_PATTERNS"
    PREPARE_LAYERS = "PREPARE_LAYERS"
    PAGES = "PAGES"
    SMOOTH_PATHS = "SMOOTH_PATHS"
    DONE = "DONE"


# 进度回调: (阶段名, 百分比, 说明)
ProgressCallback = Callable[[str, int, str], None]


@dataclass
class PipelineStage:
    """流水线阶段"""
    name: str
    progress_start: int  # 进度起点（0-100）
    progress_end: int    # 进度终点

    def percent_at(self, done: int, total: int) -> int:
        """阶段内进度换算为总进度"""
        if total <= 0:
            return self.progress_end
        span = self.progress_end - self.progress_start
        return self.progress_start + span * done // total


# 蛇形排版流水线各阶段配置
SNAKE_STAGES: dict[str, PipelineStage] = {
    StageEnum.VALIDATE.value: PipelineStage(StageEnum.VALIDATE.value, 0, 5),
    StageEnum.SELECT_PATTERNS.value: PipelineStage(StageEnum.SELECT_PATTERNS.value, 5, 10),
    StageEnum.PREPARE_LAYERS.value: PipelineStage(StageEnum.PREPARE_LAYERS.value, 10, 15),
    StageEnum.PAGES.value: PipelineStage(StageEnum.PAGES.value, 15, 90),
    StageEnum.SMOOTH_PATHS.value: PipelineStage(StageEnum.SMOOTH_PATHS.value, 90, 100),
    StageEnum.DONE.value: PipelineStage(StageEnum.DONE.value, 100, 100),
}
