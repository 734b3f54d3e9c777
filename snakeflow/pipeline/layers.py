"""
图层准备 - 创建 BG / BG PATH 并压到最底层

职责：
1. 获取或创建两个命名图层，失败时使用默认图层
2. 一次性重排：自底向上 [BG PATH, BG, 其余图层...]（BG 紧贴在 BG PATH 之上）
3. 确定连线所在图层（写入 DocumentContext.path_layer）

图层不可用只降级，不中断排版。
"""

from __future__ import annotations

import logging

from ..interfaces import ILayer
from ..models import DocumentContext, StepStatus

logger = logging.getLogger(__name__)


class LayerArranger:
    """图层准备"""

    def prepare(self, ctx: DocumentContext) -> StepStatus:
        """准备背景图层，返回状态"""
        cfg = ctx.config.layers
        status = StepStatus.SUCCEEDED

        bg_layer, ok_bg = self._get_or_default(ctx, cfg.bg_layer)
        bg_path_layer, ok_path = self._get_or_default(ctx, cfg.bg_path_layer)
        if not (ok_bg and ok_path):
            status = StepStatus.DEGRADED

        if ok_bg and ok_path:
            try:
                others = [
                    layer for layer in ctx.document.layers()
                    if layer is not bg_layer and layer is not bg_path_layer
                ]
                ctx.document.position_layers([bg_path_layer, bg_layer, *others])
            except Exception as e:
                logger.warning(f"图层重排失败，保持当前顺序: {e}")
                ctx.add_flag("图层重排失败")
                status = StepStatus.DEGRADED

        ctx.path_layer = bg_path_layer if cfg.path_layer == cfg.bg_path_layer else bg_layer
        return status

    def _get_or_default(self, ctx: DocumentContext, name: str) -> tuple[ILayer | None, bool]:
        """获取命名图层；失败时退回默认图层"""
        try:
            layer = ctx.document.get_or_create_layer(name)
            if layer.is_valid:
                return layer, True
            logger.warning(f"图层无效: {name}")
        except Exception as e:
            logger.warning(f"图层创建失败: {name}: {e}")

        ctx.add_flag(f"图层不可用:{name}")
        try:
            return ctx.document.default_layer(), False
        except Exception as e:
            logger.warning(f"默认图层不可用: {e}")
            return None, False
