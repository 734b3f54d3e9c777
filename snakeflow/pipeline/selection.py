"""
图案选择 - 每页一个图案ID

规则：
- 页数超过 selection.max_dialog_pages 时不弹选择，全部使用默认图案
- 选择器返回None视为取消（SelectionAbort）
- 显式给出的图案列表必须与页数一致
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..config import RuntimeConfig
from ..interfaces import ConfigurationError, IPatternSelector, SelectionAbort
from ..layout import PatternCatalog
from ..models import Pattern

logger = logging.getLogger(__name__)


class FixedPatternSelector(IPatternSelector):
    """固定图案选择（无交互）"""

    def __init__(self, pattern_ids: Sequence[int] | int = 1):
        self.pattern_ids = pattern_ids

    def select_patterns(self, total_pages: int, pattern_names: list[str]) -> list[int] | None:
        if isinstance(self.pattern_ids, int):
            return [self.pattern_ids] * total_pages
        ids = list(self.pattern_ids)
        if not ids:
            return None
        # 不足的页沿用最后一个
        return [ids[min(i, len(ids) - 1)] for i in range(total_pages)]


def resolve_patterns(
    total_pages: int,
    selection: Sequence[int] | IPatternSelector,
    catalog: PatternCatalog,
    config: RuntimeConfig,
) -> list[Pattern]:
    """
    确定每页图案

    Raises:
        SelectionAbort: 选择被取消
        UnknownPatternError: 图案ID越界
        ConfigurationError: 图案数与页数不一致
    """
    if isinstance(selection, IPatternSelector):
        if total_pages > config.selection.max_dialog_pages:
            logger.info(f"页数{total_pages}超过{config.selection.max_dialog_pages}，全部使用默认图案")
            pattern_ids = [config.selection.default_pattern_id] * total_pages
        else:
            answer = selection.select_patterns(total_pages, catalog.names())
            if answer is None:
                raise SelectionAbort("图案选择已取消")
            pattern_ids = list(answer)
    else:
        pattern_ids = list(selection)

    if len(pattern_ids) != total_pages:
        raise ConfigurationError(f"图案数({len(pattern_ids)})与页数({total_pages})不一致")

    return [catalog.get_pattern(pid) for pid in pattern_ids]
