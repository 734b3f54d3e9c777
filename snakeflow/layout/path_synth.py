"""
连线生成器 - 穿过格子中心的折线及平滑点转换

职责：
1. 按槽位升序（不是流序）收集中心点，跳过缺失槽位
2. 少于2个点不生成；否则一次调用生成整条折线
3. 整条失败时退化为相邻点两两成段；仍失败则本页无连线
4. 固定样式（描边黑色20%、20pt、无填充），移到背景图层
5. 所有页处理完后统一把锚点转为平滑点（需要一起选中）

测试要点：
- test_points_in_slot_order: 点序为槽位升序
- test_single_point_no_path: 不足2点不生成
- test_segment_fallback: 整条失败退化为分段
- test_convert_to_smooth: 平滑点转换及手柄回退
"""

from __future__ import annotations

import logging
import time
from typing import Sequence

from ..interfaces import ILayer, IPage, IPathItem, IPathPoint
from ..models import CenterTable, DocumentContext, PathResult, Point, StepStatus
from ..models.pattern import SLOTS_PER_PAGE

logger = logging.getLogger(__name__)


def ordered_points(centers: CenterTable) -> list[Point]:
    """槽位 0..11 升序取点，跳过缺失槽位"""
    return [centers[slot] for slot in range(SLOTS_PER_PAGE) if slot in centers]


class PathSynthesizer:
    """连线生成器"""

    def build_path(
        self,
        centers: CenterTable,
        page: IPage,
        layer: ILayer | None,
        ctx: DocumentContext,
    ) -> PathResult:
        """生成本页连线"""
        points = ordered_points(centers)
        result = PathResult(point_count=len(points))
        if len(points) < 2:
            return result

        try:
            result.paths = [ctx.document.create_polyline(page, points)]
            result.status = StepStatus.SUCCEEDED
        except Exception as e:
            logger.warning(f"整条折线创建失败，改为分段: 第{page.offset + 1}页: {e}")
            result.segment_fallback = True
            self._build_segments(points, page, ctx, result)
            if not result.paths:
                ctx.add_flag(f"连线失败:第{page.offset + 1}页")
                return result

        for item in result.paths:
            self._finish(item, layer, ctx, result)
        return result

    def _build_segments(
        self, points: list[Point], page: IPage, ctx: DocumentContext, result: PathResult
    ) -> None:
        """相邻点两两成段，中途失败时保留已建成的段"""
        try:
            for start, end in zip(points, points[1:]):
                result.paths.append(ctx.document.create_polyline(page, [start, end]))
        except Exception as e:
            logger.warning(f"分段创建失败: 第{page.offset + 1}页: {e}")
            result.error = str(e)
            if not result.paths:
                result.status = StepStatus.FAILED
                return
        result.status = StepStatus.DEGRADED

    def _finish(
        self, item: IPathItem, layer: ILayer | None, ctx: DocumentContext, result: PathResult
    ) -> None:
        """样式与图层（尽力而为）"""
        try:
            item.apply_style(ctx.config.path_style.to_style())
        except Exception as e:
            logger.warning(f"连线样式设置失败: {e}")
            result.warnings.append("样式设置失败")

        if layer is None or not layer.is_valid:
            return
        try:
            item.move_to_layer(layer)
        except Exception as e:
            logger.warning(f"连线移层失败: {layer.name}: {e}")
            result.warnings.append(f"移层失败:{layer.name}")

    def convert_to_smooth(self, paths: Sequence[IPathItem], ctx: DocumentContext) -> StepStatus:
        """
        所有锚点转为平滑点

        先整体选中并短暂等待选中生效；点类型不可直接赋值时，
        把左右方向手柄都设为锚点本身。
        """
        if not paths:
            return StepStatus.SKIPPED

        status = StepStatus.SUCCEEDED
        try:
            ctx.document.select(paths)
        except Exception as e:
            logger.warning(f"选中连线失败: {e}")
            status = StepStatus.DEGRADED

        delay_ms = ctx.config.curve.settle_delay_ms
        if delay_ms > 0:
            time.sleep(delay_ms / 1000.0)

        for item in paths:
            if not item.is_valid:
                continue
            try:
                points = item.points()
            except Exception as e:
                logger.warning(f"读取锚点失败: {e}")
                status = StepStatus.DEGRADED
                continue
            for point in points:
                if not self._smooth_point(point):
                    status = StepStatus.DEGRADED

        if status != StepStatus.SUCCEEDED:
            ctx.add_flag("平滑点转换不完整")
        return status

    @staticmethod
    def _smooth_point(point: IPathPoint) -> bool:
        try:
            point.set_smooth()
            return True
        except Exception as e:
            logger.debug(f"点类型不可直接赋值，改设方向手柄: {e}")
        try:
            anchor = point.anchor
            point.set_direction_handles(anchor, anchor)
            return True
        except Exception as e:
            logger.warning(f"锚点平滑失败: {e}")
            return False
