"""
文档上下文 - 单次运行内显式传递的宿主文档与配置

替代"当前活动文档"这种隐式全局状态，作用域为一次 BatchOrchestrator.run。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import RuntimeConfig
    from ..interfaces import IDocument, ILayer
    from ..layout.catalog import PatternCatalog


@dataclass
class DocumentContext:
    """文档上下文"""
    document: IDocument
    config: RuntimeConfig
    catalog: PatternCatalog
    path_layer: ILayer | None = None
    flags: list[str] = field(default_factory=list)

    def add_flag(self, flag: str) -> None:
        """添加告警标记（不中断）"""
        if flag not in self.flags:
            self.flags.append(flag)
