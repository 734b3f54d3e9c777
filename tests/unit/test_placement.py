"""
网格落位单元测试
"""

import pytest

from conftest import NoMoveElement, StuckElement
from snakeflow.layout import GridGeometry, GridPlacementEngine
from snakeflow.models import DocumentContext, PageBatch, StepStatus


@pytest.fixture
def engine() -> GridPlacementEngine:
    return GridPlacementEngine()


class TestGridPlacement:
    """落位引擎测试"""

    @pytest.mark.parametrize("pattern_id", range(1, 11))
    @pytest.mark.parametrize("n", range(1, 13))
    def test_populated_slots(
        self, engine, make_elements, make_batch, geometry: GridGeometry, ctx: DocumentContext,
        pattern_id: int, n: int,
    ):
        """测试各批次大小下只落位 < n 的槽位，且中心在边距内"""
        batch = make_batch(make_elements(n), pattern_id)
        result = engine.place(batch, geometry, ctx)

        expected = {s for s in batch.pattern.row_major() if s < n}
        assert set(result.centers) == expected
        assert len(result.centers) == n

        inner = geometry.inner_bounds()
        assert all(inner.contains(c) for c in result.centers.values())

    def test_element_centered_in_cell(self, engine, make_elements, make_batch, geometry, ctx):
        """测试元素居中且保持宽高"""
        elements = make_elements(12)
        batch = make_batch(elements, 1)
        result = engine.place(batch, geometry, ctx)

        # 图案1: grid[0][1] == 7
        element = elements[7]
        bounds = element.get_bounds()
        assert bounds.center.x == pytest.approx(geometry.cell_center(0, 1).x)
        assert bounds.center.y == pytest.approx(geometry.cell_center(0, 1).y)
        assert bounds.width == pytest.approx(100)
        assert bounds.height == pytest.approx(60)
        assert result.centers[7] == geometry.cell_center(0, 1)
        assert result.placed == 12
        assert result.status == StepStatus.SUCCEEDED

    def test_partial_batch_no_compaction(self, engine, make_elements, make_batch, geometry, ctx):
        """测试短批次不压缩：空格保持空白"""
        # 图案1，3个元素：槽位0,1,2都在第一列
        batch = make_batch(make_elements(3), 1)
        result = engine.place(batch, geometry, ctx)
        assert result.centers[0] == geometry.cell_center(0, 0)
        assert result.centers[1] == geometry.cell_center(1, 0)
        assert result.centers[2] == geometry.cell_center(2, 0)

    def test_move_to_page(self, engine, make_elements, catalog, document, geometry, ctx):
        """测试跨页迁移"""
        second = document.append_page_after(document.pages[0])
        elements = make_elements(4)
        batch = PageBatch(index=1, elements=elements, pattern=catalog.get_pattern(2), page=second)
        engine.place(batch, geometry, ctx)
        assert all(e.page is second for e in elements)

    def test_reposition_fallback(self, engine, make_elements, make_batch, geometry, ctx):
        """测试平移失败时改写边界"""
        elements = make_elements(2, cls=NoMoveElement)
        result = engine.place(make_batch(elements, 1), geometry, ctx)
        assert result.warnings == []
        center = elements[1].get_bounds().center
        assert center.x == pytest.approx(geometry.cell_center(1, 0).x)
        assert center.y == pytest.approx(geometry.cell_center(1, 0).y)

    def test_stuck_element_left_in_place(self, engine, make_elements, make_batch, geometry, ctx):
        """测试定位彻底失败：原地保留，其余继续"""
        stuck = make_elements(1, cls=StuckElement)[0]
        others = make_elements(3)
        elements = [others[0], stuck, others[1], others[2]]
        original = stuck.get_bounds()

        result = engine.place(make_batch(elements, 1), geometry, ctx)

        assert stuck.get_bounds() == original
        assert result.placed == 3
        assert result.status == StepStatus.DEGRADED
        assert "槽位1:定位失败" in result.warnings
        assert len(result.centers) == 4
        assert ctx.flags
