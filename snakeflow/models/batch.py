"""
分页批次模型 - 单页的元素批次与中心表
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..interfaces import IElement, IPage
from .geometry import Point
from .pattern import SLOTS_PER_PAGE, Pattern

# 槽位 -> 格子中心（短批次时稀疏）
CenterTable = dict[int, Point]


class PageBatch(BaseModel):
    """单页批次（≤12个元素）"""
    index: int = Field(..., ge=0, description="批次序号，同时作为页序号")
    elements: list[IElement] = Field(..., max_length=SLOTS_PER_PAGE)
    pattern: Pattern
    page: IPage

    model_config = {"arbitrary_types_allowed": True}

    @property
    def size(self) -> int:
        return len(self.elements)

    def element_at(self, slot: int) -> IElement | None:
        """按槽位取元素（超出批次时为None）"""
        if 0 <= slot < self.size:
            return self.elements[slot]
        return None

    def populated_slots(self) -> set[int]:
        """本批次实际落位的槽位"""
        return {slot for slot in self.pattern.row_major() if slot < self.size}
