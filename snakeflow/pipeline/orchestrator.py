"""
分页编排器 - 把元素按12个一页分批并逐页排版

职责：
1. 输入校验（在任何修改之前，含已存在目标页的几何）
2. 每页选择图案（取消则整次运行不做任何修改）
3. 准备背景图层
4. 按批次升序：定位/追加页面 -> 落位 -> 编号 -> 连线（页面不可用时跳过该批并标记）
5. 全部页完成后统一做平滑点转换
6. 返回结构化汇总（不做任何界面输出）

测试要点：
- test_batches_split: 25个元素 -> [12, 12, 1]
- test_pages_appended: 目标页不存在时追加
- test_selection_abort_no_mutation: 取消选择不修改文档
- test_degradation_isolated: 单页降级不影响后续页
- test_page_append_failure_isolated: 追加页失败只跳过该批
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ..config import RuntimeConfig, get_config
from ..interfaces import IDocument, IElement, IPage, IPatternSelector, NoElementsError, SelectionAbort
from ..layout import (
    FlowRenumberer,
    GridGeometry,
    GridPlacementEngine,
    PathSynthesizer,
    PatternCatalog,
    get_catalog,
)
from ..models import DocumentContext, PageBatch, PageReport, Pattern, RunSummary
from .layers import LayerArranger
from .selection import resolve_patterns
from .stages import SNAKE_STAGES, ProgressCallback, StageEnum

logger = logging.getLogger(__name__)


def split_batches(elements: Sequence[IElement], per_page: int) -> list[list[IElement]]:
    """按每页数量连续切分"""
    return [list(elements[i:i + per_page]) for i in range(0, len(elements), per_page)]


class BatchOrchestrator:
    """分页编排器"""

    def __init__(
        self,
        document: IDocument,
        config: RuntimeConfig | None = None,
        catalog: PatternCatalog | None = None,
        progress_cb: ProgressCallback | None = None,
    ):
        self.document = document
        self.config = config or get_config()
        self.catalog = catalog or (
            PatternCatalog.load(self.config.patterns_path) if self.config.patterns_path else get_catalog()
        )
        self.progress_cb = progress_cb

        self.layer_arranger = LayerArranger()
        self.placement = GridPlacementEngine()
        self.renumberer = FlowRenumberer()
        self.synthesizer = PathSynthesizer()

    def run(
        self,
        elements: Sequence[IElement],
        patterns: Sequence[int] | IPatternSelector,
        start_page: IPage,
    ) -> RunSummary:
        """
        执行整次排版

        Args:
            elements: 按原顺序排列的元素
            patterns: 每页图案ID，或图案选择器
            start_page: 起始页

        Returns:
            运行汇总（取消时 aborted=True，文档未被修改）

        Raises:
            NoElementsError: 没有元素
            ConfigurationError: 图案/页面配置错误（在任何修改之前）
        """
        grid_cfg = self.config.grid
        ctx = DocumentContext(document=self.document, config=self.config, catalog=self.catalog)
        summary = RunSummary(total_objects=len(elements), start_page_number=start_page.offset + 1)

        # 1. 校验
        self._progress(StageEnum.VALIDATE, message="校验输入")
        if not elements:
            raise NoElementsError("没有可排版的元素")

        batches = split_batches(elements, grid_cfg.objects_per_page)
        total_pages = math.ceil(len(elements) / grid_cfg.objects_per_page)
        self._check_target_pages(start_page, total_pages)

        # 2. 选择图案
        self._progress(StageEnum.SELECT_PATTERNS, message=f"选择图案（{total_pages}页）")
        try:
            page_patterns = resolve_patterns(total_pages, patterns, self.catalog, self.config)
        except SelectionAbort:
            logger.info("图案选择已取消，未做任何修改")
            summary.aborted = True
            return summary

        # 3. 图层
        self._progress(StageEnum.PREPARE_LAYERS, message="准备背景图层")
        summary.layers = self.layer_arranger.prepare(ctx)

        # 4. 逐页排版
        all_paths = []
        for index, (batch_elements, pattern) in enumerate(zip(batches, page_patterns)):
            try:
                current_page = self._resolve_page(start_page, index)
                geometry = self._geometry_for(current_page)
            except Exception as e:
                logger.warning(f"第{index + 1}批页面不可用，跳过: {e}")
                ctx.add_flag(f"页面不可用:第{index + 1}批")
                continue

            self._progress(
                StageEnum.PAGES,
                done=index,
                total=total_pages,
                message=f"第{current_page.offset + 1}页: {pattern.name}",
            )
            report = self._process_page(ctx, index, batch_elements, pattern, current_page, geometry)
            summary.pages.append(report)
            all_paths.extend(report.path.paths)

        summary.pages_used = len(summary.pages)

        # 5. 平滑点
        self._progress(StageEnum.SMOOTH_PATHS, message=f"平滑点转换（{len(all_paths)}条）")
        summary.curve_conversion = self.synthesizer.convert_to_smooth(all_paths, ctx)

        for flag in ctx.flags:
            summary.add_flag(flag)
        self._progress(StageEnum.DONE, message="完成")
        logger.info(
            f"排版完成: {summary.total_objects}个对象, {summary.pages_used}页, "
            f"起始第{summary.start_page_number}页"
        )
        return summary

    def _check_target_pages(self, start_page: IPage, total_pages: int) -> None:
        """已存在的目标页在修改前逐页校验几何（追加的页在排版时再校验）"""
        last_target = min(start_page.offset + total_pages, self.document.page_count())
        self._geometry_for(start_page)
        for offset in range(start_page.offset + 1, last_target):
            self._geometry_for(self.document.page_at(offset))

    def _geometry_for(self, page: IPage) -> GridGeometry:
        grid_cfg = self.config.grid
        return GridGeometry.from_page(page.bounds, grid_cfg.margin, grid_cfg.gap)

    def _resolve_page(self, start_page: IPage, index: int) -> IPage:
        """批次i对应起始页偏移+i，不存在时在末页后追加"""
        if index == 0:
            return start_page

        target = start_page.offset + index
        if target < self.document.page_count():
            return self.document.page_at(target)

        last_page = self.document.page_at(self.document.page_count() - 1)
        page = self.document.append_page_after(last_page)
        logger.info(f"追加页面: 第{page.offset + 1}页")
        return page

    def _process_page(
        self,
        ctx: DocumentContext,
        index: int,
        elements: list[IElement],
        pattern: Pattern,
        page: IPage,
        geometry: GridGeometry,
    ) -> PageReport:
        """单页：落位 -> 编号 -> 连线"""
        batch = PageBatch(index=index, elements=elements, pattern=pattern, page=page)

        placement = self.placement.place(batch, geometry, ctx)
        numbering = self.renumberer.renumber(batch, pattern, index, ctx)
        path = self.synthesizer.build_path(placement.centers, page, ctx.path_layer, ctx)

        logger.info(
            f"第{page.offset + 1}页完成: 图案{pattern.id}({pattern.name}), "
            f"{batch.size}个对象, 编号{numbering.status.value}, 连线{path.status.value}"
        )
        return PageReport(
            batch_index=index,
            page_offset=page.offset,
            pattern_id=pattern.id,
            pattern_name=pattern.name,
            element_count=batch.size,
            placement=placement,
            numbering=numbering,
            path=path,
        )

    def _progress(
        self, stage: StageEnum, *, done: int = 0, total: int = 0, message: str = ""
    ) -> None:
        if self.progress_cb is None:
            return
        stage_cfg = SNAKE_STAGES[stage.value]
        percent = stage_cfg.percent_at(done, total) if total else stage_cfg.progress_start
        self.progress_cb(stage.value, percent, message)
