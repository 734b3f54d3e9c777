"""
排版图案模型 - 4×3网格的槽位映射与流序

对应 config/patterns.yaml 的单个条目
"""

from __future__ import annotations

from pydantic import BaseModel, Field

GRID_ROWS = 4
GRID_COLS = 3
SLOTS_PER_PAGE = GRID_ROWS * GRID_COLS


class Pattern(BaseModel):
    """蛇形排版图案（不可变）"""
    id: int = Field(..., ge=1, description="图案ID(1..10)")
    name: str = Field(..., description="图案名称(对话框显示)")
    grid: tuple[tuple[int, ...], ...] = Field(..., description="4行×3列槽位矩阵")
    flow: tuple[int, ...] = Field(..., description="编号遍历顺序")

    model_config = {"frozen": True}

    def slot_at(self, row: int, col: int) -> int:
        return self.grid[row][col]

    def row_major(self) -> list[int]:
        """按行优先展开网格"""
        return [slot for row in self.grid for slot in row]

    def cells(self) -> list[tuple[int, int, int]]:
        """所有格子 (row, col, slot)，行优先"""
        return [
            (row, col, slot)
            for row, values in enumerate(self.grid)
            for col, slot in enumerate(values)
        ]

    def step_number_of(self, slot: int, batch_size: int = SLOTS_PER_PAGE) -> int | None:
        """槽位在流序中的步号（从1开始，只计入 < batch_size 的槽位）"""
        step = 0
        for flow_slot in self.flow:
            if flow_slot >= batch_size:
                continue
            step += 1
            if flow_slot == slot:
                return step
        return None
