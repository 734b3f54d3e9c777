"""
流序编号器 - 按图案流序为元素分配连续编号

职责：
1. 获取或创建本页编号列表 SnakeList_Page_<页序+1>（各页独立编号）
2. 清除批次内所有编号（保证重复执行不累加偏移）
3. 沿 pattern.flow 遍历，计数器从1开始，只有可编号元素消耗编号
4. 任一元素编号失败：放弃整批列表编号，已带编号的元素固化为静态文本

测试要点：
- test_step_numbers_follow_flow: 编号遵循流序
- test_idempotent: 连续执行两次结果一致
- test_skip_non_numberable: 无编号能力的元素不消耗编号
- test_fallback_to_static_text: 降级为静态文本
- test_list_unavailable_keeps_numbers: 列表不可用时保留原编号
"""

from __future__ import annotations

import logging

from ..interfaces import IElement
from ..models import DocumentContext, NumberingResult, PageBatch, Pattern, StepStatus

logger = logging.getLogger(__name__)


def list_name_for(page_ordinal: int, template: str = "SnakeList_Page_{page}") -> str:
    """本页编号列表名"""
    return template.format(page=page_ordinal + 1)


class FlowRenumberer:
    """流序编号器"""

    def renumber(
        self,
        batch: PageBatch,
        pattern: Pattern,
        page_ordinal: int,
        ctx: DocumentContext,
    ) -> NumberingResult:
        """按流序重新编号"""
        list_name = list_name_for(page_ordinal, ctx.config.numbering.list_name_template)
        result = NumberingResult(list_name=list_name)

        numberable = [e for e in batch.elements if self._is_numberable(e)]
        if not numberable:
            result.status = StepStatus.SKIPPED
            return result

        try:
            # 先取列表再清除：列表不可用时旧编号仍可固化
            numbering_list = ctx.document.get_or_create_list(list_name)
            self._clear(numberable, result)

            step_number = 1
            for slot in pattern.flow:
                element = batch.element_at(slot)
                if element is None or not self._is_numberable(element):
                    continue
                element.set_numbering_list(numbering_list, step_number)
                step_number += 1

            result.numbered = step_number - 1

        except Exception as e:
            logger.warning(f"动态编号失败，转为静态文本: {list_name}: {e}")
            result.status = StepStatus.DEGRADED
            result.error = str(e)
            result.numbered = 0
            result.converted_to_text = self._convert_to_static_text(numberable)
            ctx.add_flag(f"编号降级:{list_name}")

        return result

    @staticmethod
    def _is_numberable(element: IElement) -> bool:
        """具备编号能力且有承载文本的容器"""
        return element.has_numbering_capability() and element.get_parent_text_container() is not None

    def _clear(self, elements: list[IElement], result: NumberingResult) -> None:
        """清除旧编号"""
        for element in elements:
            try:
                element.clear_numbering()
            except Exception as e:
                logger.warning(f"清除编号失败: {e}")
                result.status = StepStatus.DEGRADED

    def _convert_to_static_text(self, elements: list[IElement]) -> int:
        """已带编号的元素固化为静态文本（尽力而为）"""
        converted = 0
        for element in elements:
            if element.applied_list is None:
                continue
            try:
                element.convert_numbering_to_static_text()
                converted += 1
            except Exception as e:
                logger.warning(f"编号固化失败: {e}")
        return converted
