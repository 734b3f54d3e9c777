"""
网格落位引擎 - 按图案把批次元素放进格子

职责：
1. 行优先遍历格子，slot = pattern.grid[row][col]
2. slot >= 批次大小时跳过（末页不足12个，空格保持空白，不压缩）
3. 记录中心表，迁移元素到目标页，按格子中心居中（保持宽高）
4. 平移失败时改写边界框重试，仍失败则原地保留并继续

测试要点：
- test_populated_slots: 各批次大小下落位槽位集合
- test_centers_inside_margin: 中心点位于边距以内
- test_move_to_page: 跨页迁移
- test_reposition_fallback: 平移失败回退
"""

from __future__ import annotations

import logging

from ..interfaces import IElement
from ..models import DocumentContext, PageBatch, PlacementResult, Point
from .grid_geometry import GridGeometry

logger = logging.getLogger(__name__)


class GridPlacementEngine:
    """网格落位引擎"""

    def place(self, batch: PageBatch, geometry: GridGeometry, ctx: DocumentContext) -> PlacementResult:
        """落位单页批次，返回中心表及告警"""
        result = PlacementResult()

        for row, col, slot in batch.pattern.cells():
            if slot >= batch.size:
                continue

            center = geometry.cell_center(row, col)
            result.centers[slot] = center

            element = batch.elements[slot]
            if not self._ensure_on_page(element, batch, slot, result):
                continue
            if self._center_element(element, center, slot, result):
                result.placed += 1

        if result.warnings:
            ctx.add_flag(f"落位告警:第{batch.index + 1}批")
        return result

    def _ensure_on_page(
        self, element: IElement, batch: PageBatch, slot: int, result: PlacementResult
    ) -> bool:
        """迁移到目标页（已在则跳过）"""
        if element.page == batch.page:
            return True
        try:
            element.move_to_page(batch.page)
            return True
        except Exception as e:
            logger.warning(f"元素迁移失败: 批次{batch.index} 槽位{slot}: {e}")
            result.warnings.append(f"槽位{slot}:迁移失败")
            return False

    def _center_element(
        self, element: IElement, center: Point, slot: int, result: PlacementResult
    ) -> bool:
        """按格子中心居中，保持宽高"""
        try:
            bounds = element.get_bounds()
        except Exception as e:
            logger.warning(f"读取边界失败: 槽位{slot}: {e}")
            result.warnings.append(f"槽位{slot}:边界不可读")
            return False

        target = bounds.centered_at(center)
        try:
            element.move_to(Point(x=target.left, y=target.top))
            return True
        except Exception as e:
            logger.debug(f"平移失败，改写边界重试: 槽位{slot}: {e}")

        try:
            element.set_bounds(target)
            return True
        except Exception as e:
            logger.warning(f"元素定位失败，保持原位: 槽位{slot}: {e}")
            result.warnings.append(f"槽位{slot}:定位失败")
            return False
